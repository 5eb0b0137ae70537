"""Minimize number of transfers so everyone is settled (who owes whom)."""
from typing import Iterable

from billsplit.schemas import BalanceItem, SettlementItem, SettlementSummary
from billsplit.services.balance_aggregator import compute_net_balances
from billsplit.services.errors import SettlementInvariantViolation

EPSILON = 0.01


def compute_settlements(balances: dict[str, float], epsilon: float = EPSILON) -> list[SettlementItem]:
    """
    balances: participant -> net balance (positive = is owed money, negative = owes money).
    Returns a greedy, largest-first list of transfers that settles everyone.
    Balances within epsilon of zero count as settled. Dust skipped that way may
    leave one side short; a leftover is only an error when the dust cannot cover it.
    """
    debtors = []  # [name, amount_owed]
    creditors = []
    dust = 0.0
    for name, bal in balances.items():
        if bal < -epsilon:
            debtors.append([name, -bal])
        elif bal > epsilon:
            creditors.append([name, bal])
        else:
            dust += abs(bal)
    debtors.sort(key=lambda x: (-x[1], x[0]))
    creditors.sort(key=lambda x: (-x[1], x[0]))

    out: list[SettlementItem] = []
    i, j = 0, 0
    while i < len(debtors) and j < len(creditors):
        debtor, creditor = debtors[i], creditors[j]
        transfer = min(debtor[1], creditor[1])
        out.append(SettlementItem(from_participant=debtor[0], to_participant=creditor[0], amount=transfer))
        debtor[1] -= transfer
        creditor[1] -= transfer
        if debtor[1] < epsilon:
            dust += debtor[1]
            i += 1
        if creditor[1] < epsilon:
            dust += creditor[1]
            j += 1

    leftover = {name: -amount for name, amount in debtors[i:]}
    leftover.update({name: amount for name, amount in creditors[j:]})
    if sum(abs(v) for v in leftover.values()) > dust + epsilon:
        raise SettlementInvariantViolation(leftover)
    return out


def summarize(
    bills: Iterable,
    participants: list[str],
    shortfall_policy: str = "raise",
    epsilon: float = EPSILON,
) -> SettlementSummary:
    """Net balances and settlements for a bill collection, rounded to cents."""
    balances = compute_net_balances(bills, participants, shortfall_policy=shortfall_policy)
    settlements = compute_settlements(balances, epsilon=epsilon)
    return SettlementSummary(
        participants=list(participants),
        balances=[BalanceItem(participant=name, balance=round(bal, 2)) for name, bal in balances.items()],
        settlements=[
            SettlementItem(from_participant=s.from_participant, to_participant=s.to_participant, amount=round(s.amount, 2))
            for s in settlements
        ],
    )
