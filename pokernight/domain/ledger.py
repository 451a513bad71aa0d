from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Tuple

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
MAX_AMOUNT = Decimal("1000000000.00")


class DomainValidationError(ValueError):
    """Raised when a ledger rule is violated."""


class UnknownPlayerError(DomainValidationError):
    """Raised when a transaction references a player outside its game."""


class GameStateError(DomainValidationError):
    """Raised when a game is mutated in a status that does not allow it."""


class TransactionType(str, Enum):
    BUYIN = "buyin"
    CASHOUT = "cashout"


class GameStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


def normalize_name(name: str, *, label: str = "player name") -> str:
    value = name.strip() if isinstance(name, str) else ""
    if not value:
        raise DomainValidationError(f"{label} must be non-empty")
    return value


def to_money(value: Any) -> Decimal:
    """Convert a user supplied amount into a cent-precision ``Decimal``.

    Floats go through ``str`` so ``10.1`` becomes ``Decimal("10.1")`` rather
    than its binary expansion. Booleans, non-numeric strings, NaN, infinities
    values with sub-cent digits and values above ``MAX_AMOUNT`` are rejected.
    """
    if isinstance(value, bool):
        raise DomainValidationError("amount must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise DomainValidationError("amount must be finite")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise DomainValidationError(f"amount is not a number: {value!r}") from exc
    if not amount.is_finite():
        raise DomainValidationError("amount must be finite")
    try:
        quantized = amount.quantize(CENT)
    except InvalidOperation as exc:
        raise DomainValidationError(f"amount is out of range: {value!r}") from exc
    if quantized != amount:
        raise DomainValidationError("amount must not have more than two decimal places")
    if abs(quantized) > MAX_AMOUNT:
        raise DomainValidationError(f"amount must not exceed {MAX_AMOUNT}")
    return quantized


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    id: str
    player_id: str
    type: TransactionType
    amount: Decimal
    timestamp: datetime

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "type", TransactionType(self.type))
        except ValueError as exc:
            raise DomainValidationError(f"unsupported transaction type: {self.type}") from exc
        amount = to_money(self.amount)
        if amount < 0:
            raise DomainValidationError("transaction amount must be non-negative")
        object.__setattr__(self, "amount", amount)


@dataclass(frozen=True)
class Game:
    id: str
    name: str
    date: datetime
    status: GameStatus
    created_at: datetime
    players: Tuple[Player, ...] = field(default_factory=tuple)
    transactions: Tuple[Transaction, ...] = field(default_factory=tuple)
    completed_at: datetime | None = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "status", GameStatus(self.status))
        except ValueError as exc:
            raise DomainValidationError(f"unsupported game status: {self.status}") from exc
        object.__setattr__(self, "players", tuple(self.players))
        object.__setattr__(self, "transactions", tuple(self.transactions))

        if (self.status == GameStatus.COMPLETED) != (self.completed_at is not None):
            raise GameStateError("completed_at must be set exactly when the game is completed")

        player_ids = [player.id for player in self.players]
        if len(set(player_ids)) != len(player_ids):
            raise DomainValidationError("player ids must be unique within a game")

        known = set(player_ids)
        dangling = [txn.id for txn in self.transactions if txn.player_id not in known]
        if dangling:
            raise UnknownPlayerError(f"transactions reference unknown players: {', '.join(dangling)}")

    @property
    def is_active(self) -> bool:
        return self.status == GameStatus.ACTIVE

    def find_player(self, player_id: str) -> Player | None:
        for player in self.players:
            if player.id == player_id:
                return player
        return None


@dataclass(frozen=True)
class PlayerBalance:
    player_id: str
    player_name: str
    total_buyins: Decimal = ZERO
    total_cashouts: Decimal = ZERO
    net_balance: Decimal = ZERO

    @property
    def has_activity(self) -> bool:
        return self.total_buyins != 0 or self.total_cashouts != 0


@dataclass(frozen=True)
class Settlement:
    payer: str
    payee: str
    amount: Decimal
    payer_id: str | None = None
    payee_id: str | None = None


class IssueCode(str, Enum):
    NO_BALANCES = "no_balances"
    TOO_FEW_PLAYERS = "too_few_players"
    PLAYERS_WITHOUT_ACTIVITY = "players_without_activity"
    TOTALS_MISMATCH = "totals_mismatch"


@dataclass(frozen=True)
class ValidationIssue:
    code: IssueCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Validation:
    is_valid: bool
    errors: Tuple[ValidationIssue, ...] = ()
    warnings: Tuple[ValidationIssue, ...] = ()
    total_buyins: Decimal = ZERO
    total_cashouts: Decimal = ZERO
    net_difference: Decimal = ZERO


@dataclass(frozen=True)
class GameSummary:
    game: Game
    balances: Tuple[PlayerBalance, ...]
    settlements: Tuple[Settlement, ...]
    total_pot: Decimal
