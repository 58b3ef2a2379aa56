from __future__ import annotations

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel


class Account(SQLModel, table=True):
    __table_args__ = (CheckConstraint("balance >= 0", name="ck_account_balance_non_negative"),)

    id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    balance: float = Field(default=0.0, ge=0)
