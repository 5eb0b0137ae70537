import random

import pytest

from billsplit.services.balance_aggregator import compute_net_balances
from billsplit.services.errors import SettlementInvariantViolation, UnassignedShortfall
from billsplit.services.settlement_calculator import EPSILON, compute_settlements, summarize


def _as_tuples(settlements):
    return [(s.from_participant, s.to_participant, round(s.amount, 2)) for s in settlements]


def _apply(balances, settlements):
    after = dict(balances)
    for s in settlements:
        after[s.from_participant] += s.amount
        after[s.to_participant] -= s.amount
    return after


def test_one_creditor_two_debtors_ties_by_name():
    out = compute_settlements({"A": 60.0, "C": -30.0, "B": -30.0})
    assert _as_tuples(out) == [("B", "A", 30.0), ("C", "A", 30.0)]


def test_largest_first_matching():
    out = compute_settlements({"A": 25.0, "B": -5.0, "C": -20.0})
    assert _as_tuples(out) == [("C", "A", 20.0), ("B", "A", 5.0)]


def test_debtor_split_across_creditors():
    out = compute_settlements({"A": 30.0, "B": 10.0, "C": -40.0})
    assert _as_tuples(out) == [("C", "A", 30.0), ("C", "B", 10.0)]


def test_all_zero_gives_no_transfers():
    assert compute_settlements({"A": 0.0, "B": 0.0}) == []


def test_drift_within_epsilon_is_ignored():
    assert compute_settlements({"A": 0.004, "B": -0.004}) == []
    out = compute_settlements({"A": 10.0 + 1e-9, "B": -10.0})
    assert _as_tuples(out) == [("B", "A", 10.0)]


def test_imbalance_is_an_invariant_violation():
    with pytest.raises(SettlementInvariantViolation) as exc:
        compute_settlements({"A": 10.0, "B": -5.0})
    assert exc.value.remaining == pytest.approx({"A": 5.0})


def test_does_not_modify_input():
    balances = {"A": 25.0, "B": -5.0, "C": -20.0}
    compute_settlements(balances)
    assert balances == {"A": 25.0, "B": -5.0, "C": -20.0}


def test_two_bills_settle_to_zero(make_bill):
    bills = [make_bill(60.0, "A", ["A", "B", "C"]), make_bill(30.0, "B", ["A", "B"])]
    net = compute_net_balances(bills, ["A", "B", "C"])
    out = compute_settlements(net)
    assert all(abs(b) < EPSILON for b in _apply(net, out).values())


def test_random_collections_settle(make_bill):
    rng = random.Random(42)
    universe = ["Jacqueline", "Kevin", "Kimberly", "Silvia", "Verana"]
    for _ in range(20):
        bills = []
        for _ in range(rng.randint(1, 15)):
            participants = rng.sample(universe, rng.randint(1, len(universe)))
            bills.append(make_bill(round(rng.uniform(0.5, 300), 2), rng.choice(participants), participants))
        net = compute_net_balances(bills, universe)
        out = compute_settlements(net)

        assert all(s.amount > 0 for s in out)
        assert all(s.from_participant != s.to_participant for s in out)
        assert len(out) < len(universe)
        assert all(abs(b) < EPSILON for b in _apply(net, out).values())


def test_summarize_rounds_to_cents(make_bill):
    summary = summarize([make_bill(100.0, "A", ["A", "B", "C"])], ["A", "B", "C"])
    assert summary.participants == ["A", "B", "C"]
    assert [(b.participant, b.balance) for b in summary.balances] == [("A", 66.67), ("B", -33.33), ("C", -33.33)]
    assert _as_tuples(summary.settlements) == [("B", "A", 33.33), ("C", "A", 33.33)]


def test_summarize_empty():
    summary = summarize([], ["A", "B"])
    assert [b.balance for b in summary.balances] == [0.0, 0.0]
    assert summary.settlements == []


def test_summarize_propagates_shortfall(make_bill):
    bill = make_bill(100.0, "A", ["A", "B"], {"A": 10.0, "B": 10.0})
    with pytest.raises(UnassignedShortfall):
        summarize([bill], ["A", "B"])
    summary = summarize([bill], ["A", "B"], shortfall_policy="payer")
    assert _as_tuples(summary.settlements) == [("B", "A", 10.0)]


def test_many_dust_balances_against_one_creditor():
    balances = {"A": 0.045, "B": -0.009, "C": -0.009, "D": -0.009, "E": -0.009, "F": -0.009}
    assert compute_settlements(balances) == []


def test_dust_left_after_matching_is_tolerated():
    balances = {"A": 10.04, "B": -10.0, "C": -0.008, "D": -0.008, "E": -0.008, "F": -0.008, "G": -0.008}
    out = compute_settlements(balances)
    assert _as_tuples(out) == [("B", "A", 10.0)]


def test_tiny_caps_leave_payer_with_dust(make_bill):
    bills = [
        make_bill(1.0, "C", ["C", "A"], {"A": 0.009}),
        make_bill(1.0, "C", ["C", "B"], {"B": 0.009}),
    ]
    net = compute_net_balances(bills, ["A", "B", "C"])
    assert net["C"] == pytest.approx(0.018)
    assert compute_settlements(net) == []
