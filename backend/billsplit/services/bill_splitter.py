"""Split one bill into per-participant shares, honoring maximum contributions."""
import math

from billsplit.services.errors import MalformedBill, UnassignedShortfall

SHORTFALL_POLICIES = ("raise", "payer")
TOLERANCE = 1e-9


def _is_amount(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def validate_bill(bill) -> None:
    """Raise MalformedBill unless the bill can be split into well-defined shares."""
    bill_id = getattr(bill, "id", None)
    participants = list(bill.participants or [])
    caps = bill.max_contributions or {}

    if not participants:
        raise MalformedBill(bill_id, "participants must not be empty")
    if len(set(participants)) != len(participants):
        raise MalformedBill(bill_id, "participants must be unique")
    if not _is_amount(bill.amount) or bill.amount <= 0:
        raise MalformedBill(bill_id, "amount must be a positive number")
    if not bill.paid_by:
        raise MalformedBill(bill_id, "paid_by is required")

    for name, cap in caps.items():
        if name not in participants:
            raise MalformedBill(bill_id, f"cap for {name} who is not a participant")
        if not _is_amount(cap) or cap < 0:
            raise MalformedBill(bill_id, f"cap for {name} must be a non-negative number")
    if sum(caps.values()) > bill.amount + TOLERANCE:
        raise MalformedBill(bill_id, "caps exceed the bill amount")


def split_bill(bill, shortfall_policy: str = "raise") -> dict[str, float]:
    """
    Return participant -> share for one bill; shares sum to bill.amount.

    Capped participants (those with a max_contributions entry) owe exactly their
    cap; the rest split what is left equally. When everyone is capped and the caps
    fall short of the amount, shortfall_policy decides: "raise" signals
    UnassignedShortfall, "payer" puts the shortfall on paid_by.
    """
    if shortfall_policy not in SHORTFALL_POLICIES:
        raise ValueError(f"Unknown shortfall policy: {shortfall_policy!r}")
    validate_bill(bill)

    caps = bill.max_contributions or {}
    shares: dict[str, float] = {}
    uncapped: list[str] = []
    fixed_total = 0.0
    for name in bill.participants:
        if name in caps:
            shares[name] = float(caps[name])
            fixed_total += caps[name]
        else:
            uncapped.append(name)

    remaining = bill.amount - fixed_total
    if uncapped:
        share = remaining / len(uncapped)
        for name in uncapped:
            shares[name] = share
    elif remaining > TOLERANCE:
        if shortfall_policy == "raise":
            raise UnassignedShortfall(getattr(bill, "id", None), remaining)
        shares[bill.paid_by] = shares.get(bill.paid_by, 0.0) + remaining
    return shares
