from .repository import AccountStore
from .transfer import TransferOutcome, TransferReceipt, TransferService, TransferStatus

__all__ = [
    "AccountStore",
    "TransferOutcome",
    "TransferReceipt",
    "TransferService",
    "TransferStatus",
]
