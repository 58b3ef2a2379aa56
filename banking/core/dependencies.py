from fastapi import Depends
from sqlmodel import Session

from ..services import AccountStore, TransferService
from .db import get_session


def get_transfer_service(session: Session = Depends(get_session)) -> TransferService:
    store = AccountStore(session)
    return TransferService(session, store)
