"""Settings read from the environment."""
import os

DEFAULT_PARTICIPANTS = ["Jacqueline", "Kevin", "Kimberly", "Silvia", "Verana"]

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./bills.db")

_participants_env = os.getenv("BILL_PARTICIPANTS", "")
PARTICIPANTS = (
    [p.strip() for p in _participants_env.split(",") if p.strip()]
    if _participants_env
    else list(DEFAULT_PARTICIPANTS)
)

# "raise" or "payer"; see services.bill_splitter.split_bill
SHORTFALL_POLICY = os.getenv("SHORTFALL_POLICY", "raise")
SETTLEMENT_EPSILON = float(os.getenv("SETTLEMENT_EPSILON", "0.01"))

_origins_env = os.getenv("ALLOWED_ORIGINS", "")
ALLOWED_ORIGINS = [o.strip() for o in _origins_env.split(",") if o.strip()] if _origins_env else ["*"]
