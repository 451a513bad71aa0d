from datetime import datetime, timezone
from decimal import Decimal

import pytest

from pokernight.domain import (
    DomainValidationError,
    GameStateError,
    GameStatus,
    TransactionType,
    UnknownPlayerError,
    add_player,
    add_transaction,
    complete_game,
    create_game,
    generate_game_summary,
)
from pokernight.domain.ledger import MAX_AMOUNT, Game, Transaction

NOW = datetime(2025, 1, 1, 20, 0, tzinfo=timezone.utc)
LATER = datetime(2025, 1, 2, 1, 30, tzinfo=timezone.utc)


def test_create_game_starts_active_and_empty() -> None:
    game = create_game("  Friday poker ", now=NOW)

    assert game.name == "Friday poker"
    assert game.status == GameStatus.ACTIVE
    assert game.players == ()
    assert game.transactions == ()
    assert game.date == NOW
    assert game.created_at == NOW
    assert game.completed_at is None
    assert create_game("Friday poker").id != game.id


def test_create_game_requires_name() -> None:
    with pytest.raises(DomainValidationError):
        create_game("   ")


def test_mutations_return_new_versions() -> None:
    game = create_game("Friday poker", now=NOW)

    with_player, player = add_player(game, "alice", now=NOW)
    with_txn, transaction = add_transaction(with_player, player.id, "buyin", 100, now=NOW)

    assert game.players == ()
    assert with_player.players == (player,)
    assert with_player.transactions == ()
    assert with_txn.transactions == (transaction,)
    assert transaction.type == TransactionType.BUYIN
    assert transaction.amount == Decimal("100.00")
    assert transaction.timestamp == NOW


def test_duplicate_player_names_are_allowed() -> None:
    game = create_game("Friday poker")
    game, first = add_player(game, "alice")
    game, second = add_player(game, "alice")

    assert first.id != second.id
    assert [p.name for p in game.players] == ["alice", "alice"]


def test_blank_player_name_rejected() -> None:
    with pytest.raises(DomainValidationError):
        add_player(create_game("Friday poker"), "  ")


@pytest.mark.parametrize(
    "amount",
    [0, -5, "0.00", "abc", None, True, float("nan"), float("inf"), "Infinity", "10.001"],
)
def test_invalid_amounts_rejected(amount) -> None:
    game, player = add_player(create_game("Friday poker"), "alice")

    with pytest.raises(DomainValidationError):
        add_transaction(game, player.id, "buyin", amount)


def test_unknown_player_rejected() -> None:
    game, _ = add_player(create_game("Friday poker"), "alice")

    with pytest.raises(UnknownPlayerError):
        add_transaction(game, "ghost", "buyin", 10)


def test_unknown_transaction_type_rejected() -> None:
    game, player = add_player(create_game("Friday poker"), "alice")

    with pytest.raises(DomainValidationError):
        add_transaction(game, player.id, "rebuy", 10)


@pytest.mark.parametrize("amount", ["1000000000.01", "100000000000000000", -MAX_AMOUNT - 1])
def test_amounts_above_limit_rejected(amount) -> None:
    game, player = add_player(create_game("Friday poker"), "alice")

    with pytest.raises(DomainValidationError):
        add_transaction(game, player.id, "buyin", amount)


def test_amount_at_limit_accepted() -> None:
    game, player = add_player(create_game("Friday poker"), "alice")

    game, txn = add_transaction(game, player.id, "buyin", MAX_AMOUNT)

    assert txn.amount == Decimal("1000000000.00")


def test_unknown_enum_values_in_loaded_data_rejected() -> None:
    with pytest.raises(DomainValidationError):
        Transaction(id="t-1", player_id="p-1", type="rebuy", amount=Decimal("10.00"), timestamp=NOW)

    with pytest.raises(DomainValidationError):
        Game(
            id="g-1",
            name="Friday poker",
            date=NOW,
            status="paused",
            players=(),
            transactions=(),
            created_at=NOW,
        )


def test_complete_stamps_time_and_is_one_way() -> None:
    game, player = add_player(create_game("Friday poker", now=NOW), "alice")

    completed = complete_game(game, now=LATER)

    assert completed.status == GameStatus.COMPLETED
    assert completed.completed_at == LATER
    assert game.status == GameStatus.ACTIVE

    with pytest.raises(GameStateError):
        complete_game(completed)
    with pytest.raises(GameStateError):
        add_player(completed, "bob")
    with pytest.raises(GameStateError):
        add_transaction(completed, player.id, "buyin", 10)


def test_complete_does_not_validate() -> None:
    completed = complete_game(create_game("Empty night"))

    assert completed.status == GameStatus.COMPLETED


def test_summary_bundles_balances_settlements_and_pot() -> None:
    game = create_game("Friday poker")
    ids = {}
    for name in ("A", "B", "C"):
        game, player = add_player(game, name)
        ids[name] = player.id
    for name in ("A", "B", "C"):
        game, _ = add_transaction(game, ids[name], "buyin", 100)
    for name, amount in (("A", 150), ("B", 90), ("C", 60)):
        game, _ = add_transaction(game, ids[name], "cashout", amount)

    summary = generate_game_summary(game)

    assert summary.game is game
    assert summary.total_pot == Decimal("300")
    assert [b.net_balance for b in summary.balances] == [Decimal("50"), Decimal("-10"), Decimal("-40")]
    assert [(s.payer, s.payee, s.amount) for s in summary.settlements] == [
        ("C", "A", Decimal("40.00")),
        ("B", "A", Decimal("10.00")),
    ]
