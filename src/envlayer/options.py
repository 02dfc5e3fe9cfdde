from __future__ import annotations

from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import PreparationError

T = TypeVar("T")

DEFAULT_OPTIONS: Dict[str, Any] = {
    "environment_variable_name": "APP_ENV",
    "config_directory": "config",
    "env_prefix": "APP",
    "prefix_separator": "_",
    "key_separator": "__",
    "file_required": False,
}


class ComposeOptions(BaseModel):
    """Naming and path options for one composition call."""

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    environment_variable_name: str = Field(default=DEFAULT_OPTIONS["environment_variable_name"], min_length=1)
    config_directory: str = DEFAULT_OPTIONS["config_directory"]
    env_prefix: str = Field(default=DEFAULT_OPTIONS["env_prefix"], min_length=1)
    prefix_separator: str = Field(default=DEFAULT_OPTIONS["prefix_separator"], min_length=1)
    key_separator: str = Field(default=DEFAULT_OPTIONS["key_separator"], min_length=1)
    file_required: bool = DEFAULT_OPTIONS["file_required"]


class ComposeOptionsBuilder:
    """Fluent builder for :class:`ComposeOptions`.

    Every setter may be called at most once. ``build`` applies defaults to
    the remaining fields and validates the result.

    >>> options = ComposeOptionsBuilder().config_directory("settings").env_prefix("SVC").build()
    >>> options.config_directory, options.key_separator
    ('settings', '__')
    """

    def __init__(self) -> None:
        self._values: Dict[str, Any] = {}

    def environment_variable_name(self, value: str) -> "ComposeOptionsBuilder":
        return self._set("environment_variable_name", value)

    def config_directory(self, value: str) -> "ComposeOptionsBuilder":
        return self._set("config_directory", value)

    def env_prefix(self, value: str) -> "ComposeOptionsBuilder":
        return self._set("env_prefix", value)

    def prefix_separator(self, value: str) -> "ComposeOptionsBuilder":
        return self._set("prefix_separator", value)

    def key_separator(self, value: str) -> "ComposeOptionsBuilder":
        return self._set("key_separator", value)

    def file_required(self, value: bool = True) -> "ComposeOptionsBuilder":
        return self._set("file_required", value)

    def _set(self, field: str, value: Any) -> "ComposeOptionsBuilder":
        if field in self._values:
            raise PreparationError(f"option '{field}' was already set")
        self._values[field] = value
        return self

    def build(self) -> ComposeOptions:
        try:
            return ComposeOptions.model_validate(dict(self._values))
        except ValidationError as exc:
            raise PreparationError(str(exc)) from exc

    def compose(self, target: Type[T]) -> T:
        from .loader import compose

        return compose(target, self.build())

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"ComposeOptionsBuilder({self._values!r})"
