from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

from sqlalchemy.exc import DBAPIError, OperationalError
from sqlmodel import Session, select

from ..core.errors import AccountNotFoundError, StoreUnavailableError
from ..models import AccountModel


logger = logging.getLogger(__name__)

# Primary keys are stored as signed 64-bit integers.
MIN_ACCOUNT_ID = -(2**63)
MAX_ACCOUNT_ID = 2**63 - 1


def _storable(account_id: int) -> bool:
    return MIN_ACCOUNT_ID <= account_id <= MAX_ACCOUNT_ID


class AccountStore:
    """Balance-per-account view over a SQLModel session.

    Every read and write must happen inside ``transaction()``, which commits
    on a clean exit and rolls back on any exception.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self._operation = "begin"

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        self._operation = "begin"
        try:
            with self.session.begin():
                yield self.session
                self._operation = "commit"
        except OperationalError as exc:
            logger.error(
                "store.operational_error",
                extra={"operation": self._operation, "error": str(exc)},
            )
            raise StoreUnavailableError("Connection or operational error", self._operation) from exc
        except DBAPIError as exc:
            logger.error(
                "store.driver_error",
                extra={"operation": self._operation, "error": str(exc)},
            )
            raise StoreUnavailableError("Database driver error", self._operation) from exc

    # Account operations -------------------------------------------------
    def _find_account(self, account_id: int) -> Optional[AccountModel]:
        if not _storable(account_id):
            return None
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        return self.session.exec(stmt).first()

    def _get_account(self, account_id: int) -> AccountModel:
        account = self._find_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def lock_accounts(self, *account_ids: int) -> list[AccountModel]:
        """Row-lock the given accounts in ascending id order.

        Missing ids are skipped; callers still resolve each account through
        ``get_balance`` to report which one is absent.
        """
        self._operation = "lock_accounts"
        ids = sorted({account_id for account_id in account_ids if _storable(account_id)})
        if not ids:
            return []
        stmt = (
            select(AccountModel)
            .where(AccountModel.id.in_(ids))
            .order_by(AccountModel.id)
            .with_for_update()
        )
        return list(self.session.exec(stmt))

    def get_balance(self, account_id: int) -> float:
        self._operation = "get_balance"
        return self._get_account(account_id).balance

    def set_balance(self, account_id: int, balance: float) -> None:
        self._operation = "set_balance"
        account = self._get_account(account_id)
        account.balance = balance
        self.session.add(account)
        self.session.flush()
