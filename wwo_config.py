"""
Runtime configuration helpers.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    api_key: str
    insecure: bool
    timeout: Optional[float]

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls) -> "Settings":
        """Read WWO_API_KEY, WWO_INSECURE and WWO_TIMEOUT from the environment."""
        timeout_env = os.getenv("WWO_TIMEOUT", "").strip()
        return cls(
            api_key=os.getenv("WWO_API_KEY", ""),
            insecure=os.getenv("WWO_INSECURE", "").strip().lower() in _TRUE_VALUES,
            timeout=float(timeout_env) if timeout_env else None,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
