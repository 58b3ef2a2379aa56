from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sqlmodel import Session

from ..core.errors import InsufficientFundsError, InvalidTransferError, TransferError
from .repository import AccountStore


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransferReceipt:
    from_id: int
    to_id: int
    amount: float
    from_balance: float
    to_balance: float


class TransferStatus(str, Enum):
    COMMITTED = "committed"
    ABORTED = "aborted"


@dataclass(frozen=True)
class TransferOutcome:
    """Explicit result of a transfer attempt.

    Exactly one of ``receipt`` (committed) or ``error`` (aborted) is set.
    """

    status: TransferStatus
    receipt: Optional[TransferReceipt] = None
    error: Optional[TransferError] = None

    @property
    def committed(self) -> bool:
        return self.status is TransferStatus.COMMITTED


class TransferService:
    def __init__(
        self,
        session: Session,
        store: Optional[AccountStore] = None,
    ) -> None:
        self.session = session
        self.store = store or AccountStore(session)

    def _validate(self, from_id: int, to_id: int, amount: float) -> None:
        if not math.isfinite(amount):
            raise InvalidTransferError("Transfer amount must be a finite number")
        if amount < 0:
            raise InvalidTransferError("Transfer amount must not be negative")
        if from_id == to_id:
            raise InvalidTransferError("Cannot transfer to the same account")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def balance_for_customer(self, account_id: int) -> float:
        with self.store.transaction():
            return self.store.get_balance(account_id)

    def transfer_funds(self, from_id: int, to_id: int, amount: float) -> TransferReceipt:
        self._validate(from_id, to_id, amount)

        with self.store.transaction():
            # Lock in id order so opposing transfers cannot deadlock.
            self.store.lock_accounts(from_id, to_id)

            from_balance = self.store.get_balance(from_id)
            new_from_balance = from_balance - amount
            if new_from_balance < 0:
                raise InsufficientFundsError(from_id, requested=amount, available=from_balance)

            # The credited account must exist before anything is written.
            to_balance = self.store.get_balance(to_id)
            new_to_balance = to_balance + amount

            self.store.set_balance(from_id, new_from_balance)
            self.store.set_balance(to_id, new_to_balance)

        logger.info(
            "account.transfer",
            extra={
                "from_id": from_id,
                "to_id": to_id,
                "amount": amount,
                "from_balance": new_from_balance,
                "to_balance": new_to_balance,
            },
        )
        return TransferReceipt(
            from_id=from_id,
            to_id=to_id,
            amount=amount,
            from_balance=new_from_balance,
            to_balance=new_to_balance,
        )

    def try_transfer_funds(self, from_id: int, to_id: int, amount: float) -> TransferOutcome:
        try:
            receipt = self.transfer_funds(from_id, to_id, amount)
        except TransferError as exc:
            logger.info(
                "account.transfer.rejected",
                extra={
                    "from_id": from_id,
                    "to_id": to_id,
                    "amount": amount,
                    "reason": type(exc).__name__,
                },
            )
            return TransferOutcome(status=TransferStatus.ABORTED, error=exc)
        return TransferOutcome(status=TransferStatus.COMMITTED, receipt=receipt)
