from .db import Account as AccountModel
from .schemas import AccountResponse, TransferRequest, TransferResponse

__all__ = [
    "AccountResponse",
    "TransferRequest",
    "TransferResponse",
    "AccountModel",
]
