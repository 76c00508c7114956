from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

DEFAULT_SOURCE_URL = "http://localhost:8080/saved.json"

_TRUTHY = {"1", "true", "yes", "on"}

def env_flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name, "").strip().lower() in _TRUTHY

@dataclass(frozen=True)
class HarnessConfig:
    """Settings shared by the sandbox, services and the CLI."""

    legacy_key_count: bool = False
    source_url: str = DEFAULT_SOURCE_URL
    log_level: str = "WARNING"
    debug_py_trace: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "HarnessConfig":
        env = os.environ if environ is None else environ

        return cls(
            legacy_key_count=env_flag(env, "EYG_HARNESS_LEGACY_KEYS"),
            source_url=env.get("EYG_HARNESS_SOURCE_URL", DEFAULT_SOURCE_URL),
            log_level=env.get("EYG_HARNESS_LOG_LEVEL", "WARNING").upper(),
            debug_py_trace=env_flag(env, "EYG_HARNESS_DEBUG_PY_TRACE"),
        )

    def with_overrides(self, **changes: object) -> "HarnessConfig":
        return replace(self, **changes)  # type: ignore[arg-type]
