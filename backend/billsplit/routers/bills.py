"""Bills: create, list, get, update, delete, per-bill split."""
import logging
import time

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from billsplit import config
from billsplit.database import get_db
from billsplit.models import MAX_BILL_ID_LENGTH, Bill
from billsplit.schemas import BillCreate, BillDelete, BillResponse, BillSplit, BillUpdate, BillUpdated
from billsplit.services.bill_splitter import split_bill
from billsplit.services.errors import MalformedBill, UnassignedShortfall

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bills", tags=["bills"])


def _bill_response(bill: Bill) -> BillResponse:
    return BillResponse.model_validate(bill)


def _get_bill(db: Session, bill_id: str) -> Bill:
    bill = db.query(Bill).filter(Bill.id == bill_id).first()
    if not bill:
        raise HTTPException(status_code=404, detail="Bill not found")
    return bill


def _new_bill_id(db: Session) -> str:
    base = f"bill-{int(time.time() * 1000)}"
    bill_id, n = base, 1
    while db.query(Bill).filter(Bill.id == bill_id).first():
        bill_id = f"{base}-{n}"
        n += 1
    return bill_id


def _checked_bill(bill_id: str, data: BillCreate) -> BillResponse:
    """Validate a submitted bill against the participant universe and the splitter."""
    if not data.description or data.amount is None or not data.paid_by or not data.participants:
        raise HTTPException(status_code=400, detail="Missing required fields")
    if data.amount <= 0:
        raise HTTPException(status_code=400, detail="Amount must be a positive number")
    for name in [data.paid_by, *data.participants]:
        if name not in config.PARTICIPANTS:
            raise HTTPException(status_code=400, detail=f"Unknown participant: {name}")

    bill = BillResponse(
        id=bill_id,
        description=data.description,
        amount=data.amount,
        paid_by=data.paid_by,
        participants=data.participants,
        max_contributions=data.max_contributions or None,
    )
    try:
        split_bill(bill, shortfall_policy=config.SHORTFALL_POLICY)
    except (MalformedBill, UnassignedShortfall) as e:
        logger.warning("Rejected bill %s: %s", bill_id, e)
        raise HTTPException(status_code=422, detail=str(e))
    return bill


def _apply(bill: Bill, data: BillResponse) -> None:
    bill.description = data.description
    bill.amount = data.amount
    bill.paid_by = data.paid_by
    bill.participants = list(data.participants)
    bill.max_contributions = dict(data.max_contributions) if data.max_contributions else None


@router.get("", response_model=list[BillResponse])
def list_bills(db: Session = Depends(get_db)):
    bills = db.query(Bill).order_by(Bill.pk).all()
    return [_bill_response(b) for b in bills]


@router.post("", response_model=BillResponse)
def create_bill(data: BillCreate, db: Session = Depends(get_db)):
    bill_id = data.id or _new_bill_id(db)
    if len(bill_id) > MAX_BILL_ID_LENGTH:
        raise HTTPException(status_code=400, detail=f"Bill ID must be at most {MAX_BILL_ID_LENGTH} characters")
    checked = _checked_bill(bill_id, data)
    if db.query(Bill).filter(Bill.id == bill_id).first():
        raise HTTPException(status_code=409, detail="Bill already exists")

    bill = Bill(id=bill_id)
    _apply(bill, checked)
    db.add(bill)
    db.commit()
    db.refresh(bill)
    logger.info("Bill %s added: %.2f paid by %s", bill.id, bill.amount, bill.paid_by)
    return _bill_response(bill)


@router.put("", response_model=BillResponse)
def update_bill_from_body(data: BillUpdate, db: Session = Depends(get_db)):
    if not data.id:
        raise HTTPException(status_code=400, detail="Bill ID is required")
    bill = _get_bill(db, data.id)
    _apply(bill, _checked_bill(bill.id, data))
    db.commit()
    db.refresh(bill)
    logger.info("Bill %s updated", bill.id)
    return _bill_response(bill)


@router.delete("")
def delete_bill_from_body(data: BillDelete, db: Session = Depends(get_db)):
    if not data.id:
        raise HTTPException(status_code=400, detail="Bill ID is required")
    bill = _get_bill(db, data.id)
    db.delete(bill)
    db.commit()
    logger.info("Bill %s deleted", data.id)
    return {"success": True}


@router.get("/{bill_id}", response_model=BillResponse)
def get_bill(bill_id: str, db: Session = Depends(get_db)):
    return _bill_response(_get_bill(db, bill_id))


@router.put("/{bill_id}", response_model=BillUpdated)
def update_bill(bill_id: str, data: BillUpdate, db: Session = Depends(get_db)):
    bill = _get_bill(db, bill_id)
    # The id in the URL wins over any id in the body.
    _apply(bill, _checked_bill(bill_id, data))
    db.commit()
    db.refresh(bill)
    logger.info("Bill %s updated", bill.id)
    return BillUpdated(bill=_bill_response(bill))


@router.delete("/{bill_id}")
def delete_bill(bill_id: str, db: Session = Depends(get_db)):
    bill = _get_bill(db, bill_id)
    db.delete(bill)
    db.commit()
    logger.info("Bill %s deleted", bill_id)
    return {"success": True}


@router.get("/{bill_id}/split", response_model=BillSplit)
def get_bill_split(bill_id: str, db: Session = Depends(get_db)):
    bill = _get_bill(db, bill_id)
    try:
        shares = split_bill(bill, shortfall_policy=config.SHORTFALL_POLICY)
    except (MalformedBill, UnassignedShortfall) as e:
        raise HTTPException(status_code=422, detail=str(e))
    return BillSplit(bill_id=bill.id, shares={name: round(s, 2) for name, s in shares.items()})
