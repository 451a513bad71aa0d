"""Debt simplification: turning net balances into peer-to-peer payments."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from .ledger import CENT, PlayerBalance, Settlement


def _magnitude(amount: Decimal) -> Decimal:
    return abs(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def build_settlements(balances: Sequence[PlayerBalance]) -> list[Settlement]:
    """Match debtors to creditors, largest amounts first.

    Both sides are ordered by descending magnitude; equal magnitudes keep the
    order of ``balances``. Each step pays the smaller of the two outstanding
    amounts and moves past whichever side reached zero. When the balances do
    not sum to zero the leftover on the larger side stays unmatched.
    """
    debtors = sorted(
        ([balance, _magnitude(balance.net_balance)] for balance in balances if balance.net_balance < 0),
        key=lambda entry: entry[1],
        reverse=True,
    )
    creditors = sorted(
        ([balance, _magnitude(balance.net_balance)] for balance in balances if balance.net_balance > 0),
        key=lambda entry: entry[1],
        reverse=True,
    )

    settlements: list[Settlement] = []
    debtor_idx = 0
    creditor_idx = 0
    while debtor_idx < len(debtors) and creditor_idx < len(creditors):
        debtor, debtor_amount = debtors[debtor_idx]
        creditor, creditor_amount = creditors[creditor_idx]

        amount = min(debtor_amount, creditor_amount)
        if amount > 0:
            settlements.append(
                Settlement(
                    payer=debtor.player_name,
                    payee=creditor.player_name,
                    amount=amount,
                    payer_id=debtor.player_id,
                    payee_id=creditor.player_id,
                )
            )

        debtor_amount -= amount
        creditor_amount -= amount
        debtors[debtor_idx][1] = debtor_amount
        creditors[creditor_idx][1] = creditor_amount

        if debtor_amount == 0:
            debtor_idx += 1
        if creditor_amount == 0:
            creditor_idx += 1

    return settlements
