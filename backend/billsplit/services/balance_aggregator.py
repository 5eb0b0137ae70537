"""Fold bills into one net balance per participant."""
from typing import Iterable

from billsplit.services.bill_splitter import split_bill
from billsplit.services.errors import MalformedBill


def compute_net_balances(
    bills: Iterable,
    participants: Iterable[str],
    shortfall_policy: str = "raise",
) -> dict[str, float]:
    """
    participants: the configured universe; everyone in it gets an entry, even at 0.
    Returns participant -> net balance (positive = is owed money, negative = owes money).
    Names that only appear on bills are appended after the universe.
    """
    balances: dict[str, float] = {name: 0.0 for name in participants}
    universe = set(balances)
    for bill in bills:
        if bill.paid_by not in universe and bill.paid_by not in (bill.participants or []):
            raise MalformedBill(getattr(bill, "id", None), f"unknown payer {bill.paid_by}")
        shares = split_bill(bill, shortfall_policy=shortfall_policy)
        balances[bill.paid_by] = balances.get(bill.paid_by, 0.0) + bill.amount
        for name, share in shares.items():
            balances[name] = balances.get(name, 0.0) - share
    return balances
