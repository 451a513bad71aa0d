from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

STORAGE_BACKENDS = ("sqlalchemy", "memory")


@dataclass(frozen=True)
class Settings:
    database_url: str
    storage_backend: str
    log_level: str


@lru_cache
def get_settings() -> Settings:
    storage_backend = os.getenv("POKERNIGHT_STORAGE", "sqlalchemy").lower()
    if storage_backend not in STORAGE_BACKENDS:
        raise ValueError(f"Unsupported storage backend: {storage_backend}")
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./pokernight.db"),
        storage_backend=storage_backend,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger; called once on application start-up."""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
