from __future__ import annotations

from typing import Any


class ComposeError(Exception):
    """Base class for every failure raised while composing configuration."""
    pass


class EnvironmentVariableParsingError(ComposeError):
    """The environment selector variable holds a value outside the known set."""

    def __init__(self, value: str, variable_name: str | None = None):
        self.value = value
        self.variable_name = variable_name
        super().__init__(f"Failed to parse development environment from value `{value}`")


class WorkingDirectoryAccessError(ComposeError):
    def __init__(self, message: str = "Failed to get access to working directory"):
        super().__init__(message)


class PreparationError(ComposeError):
    """Composition options were set twice or hold invalid values."""

    def __init__(self, detail: str | None = None):
        self.detail = detail
        message = "Failed to set config's specifications"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ComposeSchemaError(ComposeError):
    """A source layer could not be collected or merged."""

    def __init__(self, detail: str | None = None):
        self.detail = detail
        message = "Failed to compose config schema from sources"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class DeserializationError(ComposeError):
    """The merged schema does not fit the requested target type."""

    def __init__(self, target: Any, detail: str | None = None):
        self.target = target
        self.detail = detail
        name = getattr(target, "__name__", repr(target))
        message = f"Failed to deserialize config from schema into {name}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class SourceError(Exception):
    """Raised by a source layer when it cannot produce key-value data."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")
