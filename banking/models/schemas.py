from pydantic import BaseModel, Field


class AccountResponse(BaseModel):
    id: int
    balance: float = Field(..., ge=0)


class TransferRequest(BaseModel):
    from_id: int = Field(..., description="Account to debit")
    to_id: int = Field(..., description="Account to credit")
    amount: float = Field(..., ge=0, allow_inf_nan=False)


class TransferResponse(BaseModel):
    from_id: int
    to_id: int
    amount: float
    from_balance: float = Field(..., description="Debited account balance after the transfer")
    to_balance: float = Field(..., description="Credited account balance after the transfer")
