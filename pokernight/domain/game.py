from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from .balances import calculate_balances, total_pot
from .ledger import (
    DomainValidationError,
    Game,
    GameStateError,
    GameStatus,
    GameSummary,
    Player,
    Transaction,
    TransactionType,
    UnknownPlayerError,
    normalize_name,
    to_money,
)
from .settlement import build_settlements


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid4())


def create_game(name: str, *, now: datetime | None = None) -> Game:
    created_at = now or utcnow()
    return Game(
        id=new_id(),
        name=normalize_name(name, label="game name"),
        date=created_at,
        status=GameStatus.ACTIVE,
        created_at=created_at,
    )


def add_player(game: Game, name: str, *, now: datetime | None = None) -> tuple[Game, Player]:
    """Return a new game version with the player appended, and the player."""
    _ensure_active(game)
    player = Player(id=new_id(), name=normalize_name(name), created_at=now or utcnow())
    return replace(game, players=game.players + (player,)), player


def add_transaction(
    game: Game,
    player_id: str,
    transaction_type: TransactionType | str,
    amount: Any,
    *,
    now: datetime | None = None,
) -> tuple[Game, Transaction]:
    """Return a new game version with the transaction appended, and the transaction.

    The amount must be a finite, positive value with at most two decimal
    places, and ``player_id`` must belong to ``game``.
    """
    _ensure_active(game)
    if game.find_player(player_id) is None:
        raise UnknownPlayerError(f"unknown player: {player_id}")

    try:
        kind = TransactionType(transaction_type)
    except ValueError as exc:
        raise DomainValidationError(f"unsupported transaction type: {transaction_type}") from exc

    value = to_money(amount)
    if value <= 0:
        raise DomainValidationError("amount must be greater than zero")

    transaction = Transaction(
        id=new_id(),
        player_id=player_id,
        type=kind,
        amount=value,
        timestamp=now or utcnow(),
    )
    return replace(game, transactions=game.transactions + (transaction,)), transaction


def complete_game(game: Game, *, now: datetime | None = None) -> Game:
    """Mark the game completed.

    No validation happens here; callers run ``validate_balances`` first and
    decide whether to proceed.
    """
    _ensure_active(game)
    return replace(game, status=GameStatus.COMPLETED, completed_at=now or utcnow())


def generate_game_summary(game: Game) -> GameSummary:
    balances = calculate_balances(game)
    return GameSummary(
        game=game,
        balances=tuple(balances),
        settlements=tuple(build_settlements(balances)),
        total_pot=total_pot(balances),
    )


def _ensure_active(game: Game) -> None:
    if game.status != GameStatus.ACTIVE:
        raise GameStateError(f"game {game.id} is already completed")
