from __future__ import annotations

import os
from enum import Enum
from typing import Dict, Mapping

from .errors import EnvironmentVariableParsingError


class Environment(Enum):
    """Deployment environment selecting which configuration file is loaded."""

    LOCAL = "local"
    PRODUCTION = "production"

    @classmethod
    def default(cls) -> "Environment":
        return cls.LOCAL

    @classmethod
    def parse(cls, text: str) -> "Environment":
        try:
            return _BY_TOKEN[text]
        except KeyError:
            raise ValueError(f"Unknown environment '{text}', expected one of {sorted(_BY_TOKEN)}") from None

    def __str__(self) -> str:
        return _TOKENS[self]


# Canonical lowercase tokens; lookups are exact and case-sensitive.
_TOKENS: Dict[Environment, str] = {
    Environment.LOCAL: "local",
    Environment.PRODUCTION: "production",
}
_BY_TOKEN: Dict[str, Environment] = {token: env for env, token in _TOKENS.items()}


def resolve_environment(variable_name: str, environ: Mapping[str, str] | None = None) -> Environment:
    """Return the environment named by ``variable_name``, or the default when unset."""
    source = os.environ if environ is None else environ
    raw = source.get(variable_name)
    if raw is None:
        return Environment.default()
    try:
        return Environment.parse(raw)
    except ValueError as exc:
        raise EnvironmentVariableParsingError(raw, variable_name) from exc
