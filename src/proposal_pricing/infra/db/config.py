from __future__ import annotations

import os
from dataclasses import dataclass


def database_url() -> str:
    url = os.getenv("DATABASE_URL")

    if not url:
        raise RuntimeError("DATABASE_URL environment variable is not set")

    return url


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True, slots=True)
class DatabaseSettings:
    url: str
    pool_size: int = 10
    max_overflow: int = 20
    pool_recycle: int = 3600
    echo: bool = False

    @classmethod
    def from_env(cls) -> "DatabaseSettings":
        return cls(
            url=database_url(),
            pool_size=_int_env("DB_POOL_SIZE", 10),
            max_overflow=_int_env("DB_MAX_OVERFLOW", 20),
            pool_recycle=_int_env("DB_POOL_RECYCLE_SECONDS", 3600),
            echo=os.getenv("DB_ECHO", "").lower() in {"1", "true", "yes"},
        )
