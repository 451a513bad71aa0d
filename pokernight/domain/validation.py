from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from .ledger import ZERO, IssueCode, PlayerBalance, Validation, ValidationIssue

SETTLEMENT_TOLERANCE = Decimal("0.01")


def _blocked(issue: ValidationIssue) -> Validation:
    return Validation(is_valid=False, errors=(issue,))


def validate_balances(balances: Sequence[PlayerBalance]) -> Validation:
    """Decide whether a ledger can be settled.

    Hard errors are checked in a fixed order and the first one found is the
    only one reported: no balances, fewer than two players, players who never
    bought in or cashed out. Totals are computed only once those pass, and a
    buy-in/cash-out gap above ``SETTLEMENT_TOLERANCE`` is reported as a
    warning.
    """
    if not balances:
        return _blocked(
            ValidationIssue(
                code=IssueCode.NO_BALANCES,
                message="No player balances available for validation.",
            )
        )

    if len(balances) < 2:
        return _blocked(
            ValidationIssue(
                code=IssueCode.TOO_FEW_PLAYERS,
                message="At least two players are required to validate settlements.",
                details={"players_count": len(balances)},
            )
        )

    idle = [balance for balance in balances if not balance.has_activity]
    if idle:
        names = [balance.player_name for balance in idle]
        return _blocked(
            ValidationIssue(
                code=IssueCode.PLAYERS_WITHOUT_ACTIVITY,
                message=f"Players with no activity: {', '.join(names)}.",
                details={"players": names, "player_ids": [balance.player_id for balance in idle]},
            )
        )

    total_buyins = sum((balance.total_buyins for balance in balances), ZERO)
    total_cashouts = sum((balance.total_cashouts for balance in balances), ZERO)
    net_difference = abs(total_buyins - total_cashouts)

    warnings: list[ValidationIssue] = []
    if net_difference > SETTLEMENT_TOLERANCE:
        warnings.append(
            ValidationIssue(
                code=IssueCode.TOTALS_MISMATCH,
                message=(
                    f"Total buy-ins (${total_buyins:.2f}) and cash-outs (${total_cashouts:.2f}) "
                    f"differ by ${net_difference:.2f}, which exceeds the tolerance of "
                    f"${SETTLEMENT_TOLERANCE:.2f}."
                ),
                details={
                    "total_buyins": total_buyins,
                    "total_cashouts": total_cashouts,
                    "net_difference": net_difference,
                    "tolerance": SETTLEMENT_TOLERANCE,
                },
            )
        )

    return Validation(
        is_valid=True,
        warnings=tuple(warnings),
        total_buyins=total_buyins,
        total_cashouts=total_cashouts,
        net_difference=net_difference,
    )
