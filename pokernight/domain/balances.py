"""Per-player net positions derived from a game's buy-in/cash-out ledger."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from .ledger import ZERO, Game, PlayerBalance, TransactionType, UnknownPlayerError


def calculate_balances(game: Game) -> list[PlayerBalance]:
    """Return one balance per player, in the game's player order.

    Players without transactions get zero totals. The result is recomputed
    from the ledger on every call.
    """
    buyins: dict[str, Decimal] = {player.id: ZERO for player in game.players}
    cashouts: dict[str, Decimal] = {player.id: ZERO for player in game.players}

    for transaction in game.transactions:
        if transaction.player_id not in buyins:
            raise UnknownPlayerError(
                f"transaction {transaction.id} references unknown player: {transaction.player_id}"
            )
        if transaction.type == TransactionType.BUYIN:
            buyins[transaction.player_id] += transaction.amount
        else:
            cashouts[transaction.player_id] += transaction.amount

    return [
        PlayerBalance(
            player_id=player.id,
            player_name=player.name,
            total_buyins=buyins[player.id],
            total_cashouts=cashouts[player.id],
            net_balance=cashouts[player.id] - buyins[player.id],
        )
        for player in game.players
    ]


def total_pot(balances: Sequence[PlayerBalance]) -> Decimal:
    return sum((balance.total_buyins for balance in balances), ZERO)
