from __future__ import annotations

from collections.abc import Sequence
from typing import Optional, Protocol

from pokernight.domain import Game


class GameRepository(Protocol):
    """
    Storage collaborator for the game list and the active game pointer.

    Implementations persist whole collections: ``save_games`` replaces
    everything previously stored. Games come back in the order they were
    saved.
    """

    def load_games(self) -> list[Game]:
        ...

    def save_games(self, games: Sequence[Game]) -> None:
        ...

    def load_active_game_id(self) -> Optional[str]:
        ...

    def save_active_game_id(self, game_id: Optional[str]) -> None:
        ...


class InMemoryGameRepository:
    """Process-local storage, used for tests and ``POKERNIGHT_STORAGE=memory``."""

    def __init__(self) -> None:
        self._games: list[Game] = []
        self._active_game_id: Optional[str] = None

    def load_games(self) -> list[Game]:
        return list(self._games)

    def save_games(self, games: Sequence[Game]) -> None:
        self._games = list(games)

    def load_active_game_id(self) -> Optional[str]:
        return self._active_game_id

    def save_active_game_id(self, game_id: Optional[str]) -> None:
        self._active_game_id = game_id
