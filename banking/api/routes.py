from fastapi import APIRouter, Depends

from ..core.dependencies import get_transfer_service
from ..models import AccountResponse, TransferRequest, TransferResponse
from ..services import TransferService


router = APIRouter(prefix="/accounts", tags=["accounts"])

@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    service: TransferService = Depends(get_transfer_service),
) -> AccountResponse:
    balance = service.balance_for_customer(account_id)
    return AccountResponse(id=account_id, balance=balance)

transfer_router = APIRouter(prefix="/transfers", tags=["transfers"])

@transfer_router.post("", response_model=TransferResponse)
def create_transfer(
    payload: TransferRequest,
    service: TransferService = Depends(get_transfer_service),
) -> TransferResponse:
    receipt = service.transfer_funds(payload.from_id, payload.to_id, payload.amount)
    return TransferResponse(
        from_id=receipt.from_id,
        to_id=receipt.to_id,
        amount=receipt.amount,
        from_balance=receipt.from_balance,
        to_balance=receipt.to_balance,
    )

__all__ = ["router", "transfer_router"]
