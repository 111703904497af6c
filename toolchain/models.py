"""Pydantic models describing the configuration handed to the contract toolchain."""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_serializer,
    field_validator,
)

from .config import CREDENTIAL_PREFIX, UNSET_VALUE

_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)
_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")
_URL_SCHEMES = {"http", "https", "ws", "wss"}
_KEY_HEX_LENGTH = 64
_MASK = "…"

_url_adapter = TypeAdapter(AnyUrl)


def mask_credential(credential: str) -> str:
    """Return a display-safe form of a credential, keeping only its tail."""

    body = credential[len(CREDENTIAL_PREFIX):] if credential.startswith(CREDENTIAL_PREFIX) else credential
    if len(body) <= 8:
        return f"{CREDENTIAL_PREFIX}{'*' * len(body)}"
    return f"{CREDENTIAL_PREFIX}{_MASK}{body[-4:]}"


class NetworkProfile(BaseModel):
    """Connection parameters for one target network."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    endpoint_url: Optional[str] = Field(
        ...,
        alias="endpointUrl",
        description="RPC endpoint. None only for partial loads with the variable missing.",
    )
    credentials: Tuple[str, ...] = Field(
        default=(),
        repr=False,
        description="Signing keys, each carrying the 0x prefix.",
    )

    def masked_credentials(self) -> List[str]:
        return [mask_credential(value) for value in self.credentials]

    def problems(self, name: str) -> List[str]:
        """Describe what is wrong with this profile without exposing secrets."""

        found: List[str] = []
        if not self.endpoint_url:
            found.append(f"network '{name}': endpoint URL is not set")
        else:
            try:
                parsed = _url_adapter.validate_python(self.endpoint_url)
            except ValidationError:
                found.append(f"network '{name}': endpoint URL is not a well-formed URL")
            else:
                if parsed.scheme not in _URL_SCHEMES:
                    found.append(
                        f"network '{name}': endpoint URL scheme '{parsed.scheme}' is not one of "
                        + ", ".join(sorted(_URL_SCHEMES))
                    )

        if not self.credentials:
            found.append(f"network '{name}': no credentials configured")

        for position, credential in enumerate(self.credentials, start=1):
            label = f"network '{name}': credential #{position}"
            body = credential[len(CREDENTIAL_PREFIX):]
            if body == UNSET_VALUE:
                found.append(f"{label} was never set")
            elif body.startswith(CREDENTIAL_PREFIX):
                found.append(f"{label} carries a duplicated 0x prefix")
            elif not _HEX_RE.match(body):
                found.append(f"{label} is not hexadecimal")
            elif len(body) != _KEY_HEX_LENGTH:
                found.append(f"{label} should be {_KEY_HEX_LENGTH} hex digits, got {len(body)}")
        return found

    def for_toolchain(self, reveal_secrets: bool = False) -> Dict[str, Any]:
        accounts = list(self.credentials) if reveal_secrets else self.masked_credentials()
        return {"url": self.endpoint_url, "accounts": accounts}


class ToolchainConfiguration(BaseModel):
    """Compiler selection plus network profiles, immutable once built."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    compiler_version: str = Field(..., alias="compilerVersion")
    networks: Mapping[str, NetworkProfile] = Field(default_factory=dict, validate_default=True)

    @field_validator("compiler_version")
    @classmethod
    def _check_semver(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("compiler version must not be empty")
        if not _SEMVER_RE.match(value):
            raise ValueError(f"compiler version '{value}' is not a semantic version")
        return value

    @field_validator("networks")
    @classmethod
    def _freeze_networks(cls, value: Mapping[str, NetworkProfile]) -> Mapping[str, NetworkProfile]:
        return MappingProxyType(dict(value))

    @field_serializer("networks")
    def _dump_networks(self, value: Mapping[str, NetworkProfile]) -> Dict[str, NetworkProfile]:
        return dict(value)

    def validate_profiles(self) -> List[str]:
        """Return a list of problems found in the network profiles."""

        found: List[str] = []
        for name, profile in self.networks.items():
            found.extend(profile.problems(name))
        return found

    def to_toolchain_dict(self, reveal_secrets: bool = False) -> Dict[str, Any]:
        """Render in the toolchain's own layout (``solidity``/``url``/``accounts``)."""

        return {
            "solidity": self.compiler_version,
            "networks": {
                name: profile.for_toolchain(reveal_secrets=reveal_secrets)
                for name, profile in self.networks.items()
            },
        }


__all__ = ["NetworkProfile", "ToolchainConfiguration", "mask_credential"]
