from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple, Type, TypeVar

from loguru import logger
from pydantic import PydanticUserError, TypeAdapter, ValidationError

from .environment import Environment, resolve_environment
from .errors import (
    ComposeSchemaError,
    DeserializationError,
    PreparationError,
    SourceError,
    WorkingDirectoryAccessError,
)
from .freeze import FrozenConfig
from .options import ComposeOptions, ComposeOptionsBuilder
from .sources import EnvironmentSource, FileSource
from .utils import merge_sources

T = TypeVar("T")

OptionsLike = ComposeOptions | ComposeOptionsBuilder | None


def compose(target: Type[T], options: OptionsLike = None) -> T:
    """Compose the file and environment layers and validate them into ``target``.

    ``target`` can be anything pydantic validates: a ``BaseModel`` subclass,
    a dataclass, a ``TypedDict`` or a plain ``dict`` annotation.

    Raises:
        PreparationError: options are invalid.
        EnvironmentVariableParsingError: the selector names an unknown environment.
        WorkingDirectoryAccessError: the working directory cannot be read.
        ComposeSchemaError: a source layer failed.
        DeserializationError: the merged values do not fit ``target``.
    """
    merged, _ = load_layers(options)
    try:
        adapter = TypeAdapter(target)
    except PydanticUserError as exc:
        raise DeserializationError(target, str(exc)) from exc
    try:
        return adapter.validate_python(merged)
    except ValidationError as exc:
        raise DeserializationError(target, str(exc)) from exc


def compose_tree(options: OptionsLike = None) -> FrozenConfig:
    """Return the merged layers as a read-only mapping, skipping validation."""
    merged, _ = load_layers(options)
    return FrozenConfig(merged)


def load_layers(options: OptionsLike = None) -> Tuple[Dict[str, Any], List[str]]:
    """Merge all layers and return ``(merged, resolved_layers)``.

    ``resolved_layers`` lists, lowest precedence first, the layers that
    actually contributed values.
    """
    opts = _finalize(options)
    # One snapshot serves both the selector and the overrides.
    environ = dict(os.environ)
    environment = resolve_environment(opts.environment_variable_name, environ)
    logger.debug(f"Resolved environment '{environment}' from {opts.environment_variable_name}")

    try:
        working_directory = Path(os.getcwd())
    except OSError as exc:
        raise WorkingDirectoryAccessError() from exc

    file_source, env_source = build_sources(opts, environment, working_directory, environ)
    try:
        merged = merge_sources([file_source, env_source])
    except SourceError as exc:
        raise ComposeSchemaError(str(exc)) from exc

    resolved_layers: List[str] = []
    if file_source.resolved is not None:
        resolved_layers.append(file_source.describe())
    if env_source.matched:
        resolved_layers.append(env_source.describe())
    logger.debug(f"Composed {len(merged)} top-level keys from layers {resolved_layers}")
    return merged, resolved_layers


def build_sources(
    options: ComposeOptions,
    environment: Environment,
    working_directory: Path,
    environ: Mapping[str, str] | None = None,
) -> Tuple[FileSource, EnvironmentSource]:
    """Build the layers in precedence order: file first, environment overrides second."""
    stem = working_directory / options.config_directory / str(environment)
    file_source = FileSource(stem, required=options.file_required)
    env_source = EnvironmentSource(
        options.env_prefix,
        prefix_separator=options.prefix_separator,
        separator=options.key_separator,
        environ=environ,
    )
    return file_source, env_source


def _finalize(options: OptionsLike) -> ComposeOptions:
    if options is None:
        return ComposeOptions()
    if isinstance(options, ComposeOptionsBuilder):
        return options.build()
    if not isinstance(options, ComposeOptions):
        raise PreparationError(f"expected ComposeOptions or ComposeOptionsBuilder, got {type(options).__name__}")
    return options
