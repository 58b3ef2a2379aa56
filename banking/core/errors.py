from __future__ import annotations


class BankingError(Exception):
    """Base class for every error raised by the banking service."""


class TransferError(BankingError):
    """Deterministic validation failure; the store is left untouched."""


class AccountNotFoundError(TransferError):
    """Raised when an account id is missing from the store."""

    def __init__(self, account_id: int) -> None:
        super().__init__(f"Account {account_id} not found")
        self.account_id = account_id


class InsufficientFundsError(TransferError):
    """Raised when a transfer would drop the debited balance below zero."""

    def __init__(self, account_id: int, requested: float, available: float) -> None:
        super().__init__(
            f"Insufficient funds in account {account_id}: "
            f"requested {requested}, available {available}"
        )
        self.account_id = account_id
        self.requested = requested
        self.available = available


class InvalidTransferError(TransferError, ValueError):
    """Raised for negative or non-finite amounts and same-account transfers."""


class StoreUnavailableError(BankingError):
    """Raised when the balance store cannot be reached or fails mid-operation."""

    def __init__(self, message: str, operation: str) -> None:
        super().__init__(message)
        self.operation = operation
