from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .config import env_json


@dataclass(frozen=True, slots=True)
class NetworkSpec:
    """Names the environment variables that feed one network profile."""

    name: str
    url_variable: str
    key_variables: Tuple[str, ...]

    def variables(self) -> Tuple[str, ...]:
        return (self.url_variable, *self.key_variables)

    def for_client(self, environ: Mapping[str, str]) -> Dict[str, Any]:
        return {
            "name": self.name,
            "urlVariable": self.url_variable,
            "keyVariables": list(self.key_variables),
            "configured": all((environ.get(var) or "").strip() for var in self.variables()),
        }


DEFAULT_NETWORKS: Tuple[NetworkSpec, ...] = (
    NetworkSpec(name="polygon", url_variable="POLYGON_RPC_URL", key_variables=("PRIVATE_KEY",)),
)


def _parse_spec(name: str, raw: Any) -> NetworkSpec:
    if not isinstance(raw, dict):
        raise ValueError(f"Network '{name}' must be a JSON object")
    url_variable = raw.get("url")
    if not isinstance(url_variable, str) or not url_variable.strip():
        raise ValueError(f"Network '{name}' needs a 'url' variable name")
    keys = raw.get("keys", [])
    if isinstance(keys, str):
        keys = [keys]
    if not isinstance(keys, list) or not keys:
        raise ValueError(f"Network '{name}' needs at least one entry in 'keys'")
    cleaned: List[str] = []
    for key in keys:
        if not isinstance(key, str) or not key.strip():
            raise ValueError(f"Network '{name}' has an invalid key variable name: {key!r}")
        cleaned.append(key.strip())
    return NetworkSpec(name=name, url_variable=url_variable.strip(), key_variables=tuple(cleaned))


def network_specs(extra: Optional[Mapping[str, Any]] = None) -> List[NetworkSpec]:
    """Return the ordered registry, defaults first.

    ``extra`` uses the ``TOOLCHAIN_EXTRA_NETWORKS`` layout and defaults to it;
    an entry named like a default replaces that default in place.
    """

    if extra is None:
        extra = env_json("TOOLCHAIN_EXTRA_NETWORKS")
    registry: Dict[str, NetworkSpec] = {spec.name: spec for spec in DEFAULT_NETWORKS}
    for name, raw in extra.items():
        name = str(name).strip()
        if not name:
            raise ValueError("Network names must not be empty")
        registry[name] = _parse_spec(name, raw)
    return list(registry.values())


def required_variables(specs: Iterable[NetworkSpec]) -> List[str]:
    seen: set[str] = set()
    ordered: List[str] = []
    for spec in specs:
        for variable in spec.variables():
            if variable not in seen:
                seen.add(variable)
                ordered.append(variable)
    return ordered


__all__ = ["DEFAULT_NETWORKS", "NetworkSpec", "network_specs", "required_variables"]
