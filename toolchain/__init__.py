"""Configuration provider for the smart-contract compile/deploy toolchain."""

from . import config
from .errors import ConfigurationError, MissingEnvironmentVariable
from .loader import LoadResult, load, try_load
from .models import NetworkProfile, ToolchainConfiguration

__all__ = [
    "ConfigurationError",
    "LoadResult",
    "MissingEnvironmentVariable",
    "NetworkProfile",
    "ToolchainConfiguration",
    "config",
    "load",
    "try_load",
]
