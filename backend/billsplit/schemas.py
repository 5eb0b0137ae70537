"""Pydantic schemas for request/response."""
from typing import Optional

from pydantic import BaseModel


# ----- Bill -----
class BillBase(BaseModel):
    description: str
    amount: float
    paid_by: str
    participants: list[str]
    max_contributions: Optional[dict[str, float]] = None


class BillCreate(BaseModel):
    # All optional: the router answers missing fields with 400.
    id: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[float] = None
    paid_by: Optional[str] = None
    participants: list[str] = []
    max_contributions: Optional[dict[str, float]] = None


class BillUpdate(BillCreate):
    pass


class BillDelete(BaseModel):
    id: Optional[str] = None


class BillResponse(BillBase):
    id: str

    class Config:
        from_attributes = True


class BillUpdated(BaseModel):
    success: bool = True
    bill: BillResponse


class BillSplit(BaseModel):
    bill_id: str
    shares: dict[str, float]


# ----- Settlement -----
class SettlementItem(BaseModel):
    from_participant: str
    to_participant: str
    amount: float


class BalanceItem(BaseModel):
    participant: str
    balance: float


class SettlementSummary(BaseModel):
    participants: list[str] = []
    balances: list[BalanceItem]
    settlements: list[SettlementItem]
