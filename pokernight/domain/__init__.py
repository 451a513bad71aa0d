from .balances import calculate_balances, total_pot
from .game import (
    add_player,
    add_transaction,
    complete_game,
    create_game,
    generate_game_summary,
)
from .ledger import (
    DomainValidationError,
    Game,
    GameStateError,
    GameStatus,
    GameSummary,
    MAX_AMOUNT,
    IssueCode,
    Player,
    PlayerBalance,
    Settlement,
    Transaction,
    TransactionType,
    UnknownPlayerError,
    Validation,
    ValidationIssue,
    normalize_name,
    to_money,
)
from .settlement import build_settlements
from .validation import SETTLEMENT_TOLERANCE, validate_balances

__all__ = [
    "DomainValidationError",
    "Game",
    "GameStateError",
    "GameStatus",
    "GameSummary",
    "IssueCode",
    "MAX_AMOUNT",
    "Player",
    "PlayerBalance",
    "SETTLEMENT_TOLERANCE",
    "Settlement",
    "Transaction",
    "TransactionType",
    "UnknownPlayerError",
    "Validation",
    "ValidationIssue",
    "add_player",
    "add_transaction",
    "build_settlements",
    "calculate_balances",
    "complete_game",
    "create_game",
    "generate_game_summary",
    "normalize_name",
    "to_money",
    "total_pot",
    "validate_balances",
]
