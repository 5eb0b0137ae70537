"""Participants: the configured universe bills are drawn from."""
from fastapi import APIRouter

from billsplit import config

router = APIRouter(prefix="/participants", tags=["participants"])


@router.get("", response_model=list[str])
def list_participants():
    return config.PARTICIPANTS
