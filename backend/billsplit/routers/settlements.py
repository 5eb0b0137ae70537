"""Settlements: net balances and who owes whom across all bills."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from billsplit import config
from billsplit.database import get_db
from billsplit.models import Bill
from billsplit.schemas import SettlementSummary
from billsplit.services.errors import MalformedBill, UnassignedShortfall
from billsplit.services.settlement_calculator import summarize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settlements", tags=["settlements"])


@router.get("", response_model=SettlementSummary)
def get_settlements(db: Session = Depends(get_db)):
    bills = db.query(Bill).order_by(Bill.pk).all()
    try:
        return summarize(
            bills,
            config.PARTICIPANTS,
            shortfall_policy=config.SHORTFALL_POLICY,
            epsilon=config.SETTLEMENT_EPSILON,
        )
    except (MalformedBill, UnassignedShortfall) as e:
        logger.warning("Cannot settle stored bills: %s", e)
        raise HTTPException(status_code=422, detail=str(e))
