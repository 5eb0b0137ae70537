"""SQLAlchemy models."""
from sqlalchemy import JSON, Column, DateTime, Float, Integer, String, Text
from sqlalchemy.sql import func

from billsplit.database import Base

MAX_BILL_ID_LENGTH = 64


class Bill(Base):
    __tablename__ = "bills"

    # Surrogate key keeps insertion order; `id` is the public identifier.
    pk = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(MAX_BILL_ID_LENGTH), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False)
    amount = Column(Float, nullable=False)
    paid_by = Column(String(255), nullable=False)
    participants = Column(JSON, nullable=False, default=list)
    max_contributions = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
