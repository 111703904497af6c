from __future__ import annotations

import json
import os
from typing import Any

from dotenv import load_dotenv

ENV_FILE = os.getenv("TOOLCHAIN_ENV_FILE", ".env")

# Variables already present in the process environment win over the file.
load_dotenv(ENV_FILE, override=False)


def env(key: str, default: str | None = None) -> str | None:
    return os.getenv(key, default)


def env_bool(key: str, default: str = "0") -> bool:
    value = os.getenv(key, default)
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def env_json(key: str, default: str | None = None) -> dict[str, Any]:
    raw = os.getenv(key, default) or ""
    if not raw:
        return {}
    try:
        loaded = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON for {key}: {exc}") from exc
    if isinstance(loaded, dict):
        return loaded
    raise ValueError(f"Environment variable {key} must contain a JSON object")


COMPILER_VERSION = "0.8.9"
CREDENTIAL_PREFIX = "0x"
# Stand-in for a key that was never set, kept for partial-mode loading.
UNSET_VALUE = "undefined"

ALLOW_PARTIAL = env_bool("TOOLCHAIN_ALLOW_PARTIAL", "0")

HOST = env("HOST", "127.0.0.1")
PORT = int(env("PORT", "8090"))
