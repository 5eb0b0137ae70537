"""Errors raised by the settlement engine."""


class SettlementError(ValueError):
    """Base class for engine errors."""


class MalformedBill(SettlementError):
    def __init__(self, bill_id, reason: str):
        self.bill_id = bill_id
        self.reason = reason
        super().__init__(f"Bill {bill_id or '<new>'}: {reason}")


class UnassignedShortfall(SettlementError):
    """Every participant is capped and the caps do not cover the amount."""

    def __init__(self, bill_id, shortfall: float):
        self.bill_id = bill_id
        self.shortfall = shortfall
        super().__init__(
            f"Bill {bill_id or '<new>'}: caps leave {shortfall:.2f} unassigned"
        )


class SettlementInvariantViolation(SettlementError):
    """Creditors and debtors did not run out together."""

    def __init__(self, remaining: dict[str, float]):
        self.remaining = remaining
        super().__init__(f"Unsettled balances left after matching: {remaining}")
