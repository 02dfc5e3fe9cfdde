"""Source layers feeding the composer.

Each source exposes ``collect()`` returning a plain nested dict and
``describe()`` returning a one-line label used in diagnostics. Sources raise
:class:`~envlayer.errors.SourceError` when they cannot produce data.
"""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Mapping, Tuple

import yaml
from loguru import logger

from .errors import SourceError
from .utils import lower_keys, set_path


def _load_toml(path: Path) -> Any:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _load_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def _load_yaml(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


# Tried in this order when the file stem carries no extension.
FILE_LOADERS: Dict[str, Callable[[Path], Any]] = {
    ".toml": _load_toml,
    ".json": _load_json,
    ".yaml": _load_yaml,
    ".yml": _load_yaml,
}

_PARSE_ERRORS: Tuple[type, ...] = (tomllib.TOMLDecodeError, json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError)


class FileSource:
    """Optional configuration file located by an extensionless path stem.

    Keys are lowercased so they line up with :class:`EnvironmentSource` keys.
    """

    def __init__(self, stem: str | Path, required: bool = False):
        self.stem = Path(stem)
        self.required = required
        self.resolved: Path | None = None

    def candidates(self) -> Iterator[Path]:
        if self.stem.suffix in FILE_LOADERS:
            yield self.stem
        for suffix in FILE_LOADERS:
            yield self.stem.with_name(self.stem.name + suffix)

    def collect(self) -> Dict[str, Any]:
        self.resolved = None
        path = next((candidate for candidate in self.candidates() if candidate.is_file()), None)
        if path is None:
            if self.required:
                raise SourceError(self.describe(), "configuration file not found")
            logger.debug(f"No configuration file found for {self.stem}")
            return {}

        loader = FILE_LOADERS[path.suffix]
        try:
            data = loader(path)
        except _PARSE_ERRORS as exc:
            raise SourceError(str(path), f"malformed content ({exc})") from exc
        except OSError as exc:
            raise SourceError(str(path), f"cannot read file ({exc})") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise SourceError(str(path), f"top-level value must be a mapping, got {type(data).__name__}")
        try:
            data = lower_keys(data)
        except ValueError as exc:
            raise SourceError(str(path), str(exc)) from exc
        self.resolved = path
        logger.debug(f"Loaded configuration file {path} ({len(data)} top-level keys)")
        return data

    def describe(self) -> str:
        if self.resolved is not None:
            return f"file: {self.resolved}"
        return f"file: {self.stem}.{{{','.join(s.lstrip('.') for s in FILE_LOADERS)}}}"


class EnvironmentSource:
    """Override layer built from prefixed process environment variables.

    With prefix ``APP``, prefix separator ``_`` and separator ``__`` the
    variable ``APP_BAR__BAZ=777`` becomes ``{"bar": {"baz": "777"}}``.
    Matching is case-insensitive and keys are lowercased; values stay strings.
    """

    def __init__(
        self,
        prefix: str,
        prefix_separator: str = "_",
        separator: str = "__",
        environ: Mapping[str, str] | None = None,
    ):
        self.prefix = prefix
        self.prefix_separator = prefix_separator
        self.separator = separator
        self.environ = environ
        self.matched = 0

    @property
    def pattern(self) -> str:
        return f"{self.prefix}{self.prefix_separator}".lower()

    def collect(self) -> Dict[str, Any]:
        environ = os.environ if self.environ is None else self.environ
        pattern = self.pattern
        separator = self.separator.lower()
        result: Dict[str, Any] = {}
        self.matched = 0

        for name, value in sorted(dict(environ).items()):
            lowered = name.lower()
            if not lowered.startswith(pattern):
                continue
            remainder = lowered[len(pattern):]
            path = tuple(remainder.split(separator))
            if not remainder or any(part == "" for part in path):
                raise SourceError(self.describe(), f"variable '{name}' does not name a valid key")
            try:
                set_path(result, path, value)
            except ValueError as exc:
                raise SourceError(self.describe(), f"variable '{name}' conflicts with another override: {exc}") from exc
            self.matched += 1

        logger.debug(f"Collected {self.matched} override variables matching '{pattern}'")
        return result

    def describe(self) -> str:
        return f"environment: {self.prefix}{self.prefix_separator}* (nested by '{self.separator}')"
