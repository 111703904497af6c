"""Errors raised while assembling the toolchain configuration."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Base class for configuration problems."""


class MissingEnvironmentVariable(ConfigurationError):
    """A variable required by a network profile is unset or blank."""

    def __init__(self, variable: str, network: str | None = None) -> None:
        self.variable = variable
        self.network = network
        if network:
            message = f"Environment variable {variable} is required for network '{network}'"
        else:
            message = f"Environment variable {variable} is required"
        super().__init__(message)

    def as_dict(self) -> dict[str, str | None]:
        return {"variable": self.variable, "network": self.network}


__all__ = ["ConfigurationError", "MissingEnvironmentVariable"]
