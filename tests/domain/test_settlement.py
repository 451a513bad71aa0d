from collections import defaultdict
from decimal import Decimal

import pytest

from pokernight.domain import PlayerBalance, Settlement, build_settlements


def _balance(name: str, net: str | int) -> PlayerBalance:
    net = Decimal(net)
    buyins = Decimal("100")
    return PlayerBalance(
        player_id=f"id-{name}",
        player_name=name,
        total_buyins=buyins,
        total_cashouts=buyins + net,
        net_balance=net,
    )


def test_three_player_example_pays_largest_debtor_first() -> None:
    balances = [_balance("A", 50), _balance("B", -10), _balance("C", -40)]

    settlements = build_settlements(balances)

    assert settlements == [
        Settlement(payer="C", payee="A", amount=Decimal("40.00"), payer_id="id-C", payee_id="id-A"),
        Settlement(payer="B", payee="A", amount=Decimal("10.00"), payer_id="id-B", payee_id="id-A"),
    ]


def test_equal_magnitudes_keep_player_order() -> None:
    balances = [_balance("A", -20), _balance("B", -20), _balance("C", 40)]

    settlements = build_settlements(balances)

    assert [(s.payer, s.payee, s.amount) for s in settlements] == [
        ("A", "C", Decimal("20.00")),
        ("B", "C", Decimal("20.00")),
    ]


def test_empty_and_all_zero_balances_need_no_payments() -> None:
    assert build_settlements([]) == []
    assert build_settlements([_balance("A", 0), _balance("B", 0)]) == []


def test_imbalanced_ledger_leaves_unmatched_residue() -> None:
    settlements = build_settlements([_balance("A", -30), _balance("B", 20)])

    assert [(s.payer, s.payee, s.amount) for s in settlements] == [("A", "B", Decimal("20.00"))]


def test_sub_cent_balances_are_rounded_to_cents() -> None:
    balances = [_balance("A", "-10.004"), _balance("B", "10.004")]

    settlements = build_settlements(balances)

    assert [s.amount for s in settlements] == [Decimal("10.00")]


@pytest.mark.parametrize(
    "nets",
    [
        ["50", "-10", "-40"],
        ["25.50", "-12.25", "-13.25"],
        ["-70", "30", "20", "20"],
        ["10", "20", "30", "-15", "-45"],
        ["33.33", "33.33", "-66.66", "0"],
        ["-1", "-1", "-1", "-1", "4"],
    ],
)
def test_settlements_conserve_balances_and_stay_minimal(nets: list[str]) -> None:
    balances = [_balance(f"P{idx}", net) for idx, net in enumerate(nets)]

    settlements = build_settlements(balances)

    paid: dict[str, Decimal] = defaultdict(Decimal)
    received: dict[str, Decimal] = defaultdict(Decimal)
    for settlement in settlements:
        assert settlement.amount > 0
        paid[settlement.payer] += settlement.amount
        received[settlement.payee] += settlement.amount

    for balance in balances:
        if balance.net_balance < 0:
            assert abs(paid[balance.player_name] + balance.net_balance) <= Decimal("0.01")
        elif balance.net_balance > 0:
            assert abs(received[balance.player_name] - balance.net_balance) <= Decimal("0.01")
        else:
            assert balance.player_name not in paid
            assert balance.player_name not in received

    debtors = sum(1 for b in balances if b.net_balance < 0)
    creditors = sum(1 for b in balances if b.net_balance > 0)
    assert len(settlements) <= debtors + creditors - 1
    assert sum(paid.values()) == sum(received.values())
