from __future__ import annotations

from functools import lru_cache

from pokernight.config import Settings, get_settings
from pokernight.repository import GameRepository, InMemoryGameRepository
from pokernight.service import LedgerService
from pokernight.storage.database import make_engine, make_session_factory
from pokernight.storage.repository import SqlAlchemyGameRepository


def build_repository(settings: Settings) -> GameRepository:
    if settings.storage_backend == "memory":
        return InMemoryGameRepository()
    return SqlAlchemyGameRepository(make_session_factory(make_engine(settings.database_url)))


@lru_cache
def get_service() -> LedgerService:
    return LedgerService(build_repository(get_settings()))
