"""Environment-aware layered configuration: file layer plus environment overrides."""

from loguru import logger

from .environment import Environment, resolve_environment  # noqa: F401
from .errors import (  # noqa: F401
    ComposeError,
    ComposeSchemaError,
    DeserializationError,
    EnvironmentVariableParsingError,
    PreparationError,
    SourceError,
    WorkingDirectoryAccessError,
)
from .freeze import FrozenConfig  # noqa: F401
from .loader import compose, compose_tree, load_layers  # noqa: F401
from .options import ComposeOptions, ComposeOptionsBuilder  # noqa: F401
from .printer import format_layers  # noqa: F401
from .sources import EnvironmentSource, FileSource  # noqa: F401

# Silent unless the application calls logger.enable("envlayer").
logger.disable("envlayer")
