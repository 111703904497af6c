"""Assemble :class:`ToolchainConfiguration` from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

from dotenv import load_dotenv

from . import config
from .errors import MissingEnvironmentVariable
from .models import NetworkProfile, ToolchainConfiguration
from .networks import NetworkSpec, network_specs

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LoadResult:
    """Outcome of a load: the configuration and every missing variable."""

    config: Optional[ToolchainConfiguration]
    errors: List[MissingEnvironmentVariable] = field(default_factory=list)
    partial: bool = False

    @property
    def ok(self) -> bool:
        return not self.errors

    def missing(self) -> List[dict]:
        return [error.as_dict() for error in self.errors]

    def unwrap(self) -> ToolchainConfiguration:
        """Return the configuration or raise the first missing variable.

        Partial loads hand back the degraded configuration even when
        variables were missing.
        """

        if self.config is not None and (self.ok or self.partial):
            return self.config
        raise self.errors[0]


def read_environment(
    environ: Optional[Mapping[str, str]] = None,
    dotenv_path: Optional[str] = None,
) -> Dict[str, str]:
    """Snapshot the variables a load reads from.

    An injected mapping is used as-is. Otherwise ``dotenv_path`` (if given)
    is loaded into the process environment first, without overriding
    variables that are already set.
    """

    if environ is not None:
        return dict(environ)
    if dotenv_path:
        found = load_dotenv(dotenv_path, override=False)
        logger.debug("dotenv file %s %s", dotenv_path, "loaded" if found else "not found")
    return dict(os.environ)


def _lookup(values: Mapping[str, str], name: str) -> Optional[str]:
    value = values.get(name)
    if value is None or not value.strip():
        return None
    return value


def try_load(
    environ: Optional[Mapping[str, str]] = None,
    *,
    strict: Optional[bool] = None,
    networks: Optional[Iterable[NetworkSpec]] = None,
    dotenv_path: Optional[str] = None,
) -> LoadResult:
    """Build the configuration, collecting missing variables instead of raising."""

    if strict is None:
        strict = not config.ALLOW_PARTIAL
    values = read_environment(environ, dotenv_path)
    specs = list(networks) if networks is not None else network_specs()

    errors: List[MissingEnvironmentVariable] = []
    profiles: Dict[str, NetworkProfile] = {}
    for spec in specs:
        url = _lookup(values, spec.url_variable)
        if url is None:
            errors.append(MissingEnvironmentVariable(spec.url_variable, spec.name))

        credentials: List[str] = []
        for variable in spec.key_variables:
            key = _lookup(values, variable)
            if key is None:
                errors.append(MissingEnvironmentVariable(variable, spec.name))
                key = config.UNSET_VALUE
            credentials.append(f"{config.CREDENTIAL_PREFIX}{key}")

        profiles[spec.name] = NetworkProfile(endpoint_url=url, credentials=tuple(credentials))

    if errors and strict:
        return LoadResult(config=None, errors=errors)

    for error in errors:
        logger.warning("%s; continuing with a placeholder value.", error)

    configuration = ToolchainConfiguration(
        compiler_version=config.COMPILER_VERSION,
        networks=profiles,
    )
    logger.info(
        "Loaded toolchain configuration (solc %s) for networks: %s",
        configuration.compiler_version,
        ", ".join(profiles) or "(none)",
    )
    return LoadResult(config=configuration, errors=errors, partial=not strict)


def load(
    environ: Optional[Mapping[str, str]] = None,
    *,
    strict: Optional[bool] = None,
    networks: Optional[Iterable[NetworkSpec]] = None,
    dotenv_path: Optional[str] = None,
) -> ToolchainConfiguration:
    """Return the configuration, raising :class:`MissingEnvironmentVariable` when incomplete."""

    return try_load(environ, strict=strict, networks=networks, dotenv_path=dotenv_path).unwrap()


__all__ = ["LoadResult", "load", "read_environment", "try_load"]
