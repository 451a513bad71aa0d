from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pokernight.domain import (
    DomainValidationError,
    Game,
    GameStateError,
    GameStatus,
    GameSummary,
    Player,
    PlayerBalance,
    Transaction,
    TransactionType,
    Validation,
    add_player,
    add_transaction,
    calculate_balances,
    complete_game,
    create_game,
    generate_game_summary,
    validate_balances,
)
from pokernight.repository import GameRepository

logger = logging.getLogger("pokernight.service")


class GameNotFoundError(DomainValidationError):
    """Raised when no stored game has the requested id."""


@dataclass(frozen=True)
class CompletionResult:
    completed: bool
    game: Game
    validation: Validation


class LedgerService:
    """Owns the stored game list; every mutation is load, replace by id, save."""

    def __init__(self, repo: GameRepository) -> None:
        self.repo = repo

    def list_games(self, status: GameStatus | str | None = None) -> list[Game]:
        games = self.repo.load_games()
        if status is None:
            return games
        wanted = GameStatus(status)
        return [game for game in games if game.status == wanted]

    def get_game(self, game_id: str) -> Game:
        for game in self.repo.load_games():
            if game.id == game_id:
                return game
        raise GameNotFoundError(f"game not found: {game_id}")

    def create_game(self, name: str) -> Game:
        game = create_game(name)
        self.repo.save_games([*self.repo.load_games(), game])
        self.repo.save_active_game_id(game.id)
        logger.info("created game %s (%s)", game.id, game.name)
        return game

    def get_active_game(self) -> Game | None:
        game_id = self.repo.load_active_game_id()
        if game_id is None:
            return None
        try:
            return self.get_game(game_id)
        except GameNotFoundError:
            logger.warning("active game pointer %s has no stored game", game_id)
            return None

    def set_active_game(self, game_id: str | None) -> Game | None:
        game = self.get_game(game_id) if game_id is not None else None
        self.repo.save_active_game_id(game_id)
        return game

    def delete_game(self, game_id: str) -> None:
        games = self.repo.load_games()
        remaining = [game for game in games if game.id != game_id]
        if len(remaining) == len(games):
            raise GameNotFoundError(f"game not found: {game_id}")
        self.repo.save_games(remaining)
        if self.repo.load_active_game_id() == game_id:
            self.repo.save_active_game_id(None)
        logger.info("deleted game %s", game_id)

    def add_player(self, game_id: str, name: str) -> Player:
        game, player = add_player(self.get_game(game_id), name)
        self._store(game)
        logger.debug("game %s: added player %s (%s)", game_id, player.id, player.name)
        return player

    def add_transaction(
        self,
        game_id: str,
        player_id: str,
        transaction_type: TransactionType | str,
        amount: Any,
    ) -> Transaction:
        game, transaction = add_transaction(self.get_game(game_id), player_id, transaction_type, amount)
        self._store(game)
        logger.debug(
            "game %s: %s %s for player %s",
            game_id,
            transaction.type.value,
            transaction.amount,
            player_id,
        )
        return transaction

    def get_balances(self, game_id: str) -> list[PlayerBalance]:
        return calculate_balances(self.get_game(game_id))

    def validate_game(self, game_id: str) -> Validation:
        return validate_balances(self.get_balances(game_id))

    def get_summary(self, game_id: str) -> GameSummary:
        return generate_game_summary(self.get_game(game_id))

    def complete_game(self, game_id: str, *, allow_warnings: bool = False) -> CompletionResult:
        """Validate the ledger and complete the game when it passes.

        Hard errors always block. Warnings block unless ``allow_warnings`` is
        set. A blocked completion returns the unchanged game.
        """
        game = self.get_game(game_id)
        if not game.is_active:
            raise GameStateError(f"game {game_id} is already completed")
        validation = validate_balances(calculate_balances(game))

        if not validation.is_valid or (validation.warnings and not allow_warnings):
            issues = validation.errors or validation.warnings
            logger.warning(
                "game %s: completion blocked by %s",
                game_id,
                ", ".join(issue.code.value for issue in issues),
            )
            return CompletionResult(completed=False, game=game, validation=validation)

        completed = complete_game(game)
        self._store(completed)
        logger.info("completed game %s", game_id)
        return CompletionResult(completed=True, game=completed, validation=validation)

    def _store(self, updated: Game) -> None:
        games = self.repo.load_games()
        if not any(game.id == updated.id for game in games):
            raise GameNotFoundError(f"game not found: {updated.id}")
        self.repo.save_games([updated if game.id == updated.id else game for game in games])
