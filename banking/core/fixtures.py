"""Bootstrap loader for initial account balances.

The fixture is a JSON document of the form::

    {"accounts": [{"id": 0, "balance": 100.0}, {"id": 1, "balance": 50.0}]}

By default loading only inserts accounts that do not exist yet, so seeding a
live database never touches balances moved by transfers. ``overwrite=True``
resets the listed accounts to their seeded balances and is meant for test
setup.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field
from sqlmodel import Session

from ..models import AccountModel


logger = logging.getLogger(__name__)


class AccountSeed(BaseModel):
    id: int
    balance: float = Field(..., ge=0, allow_inf_nan=False)


class Fixture(BaseModel):
    accounts: list[AccountSeed]


def read_fixture(path: Union[str, Path]) -> Fixture:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    try:
        return Fixture.model_validate(data)
    except ValueError as exc:
        raise ValueError(f"Invalid fixture file {path}: {exc}") from exc


def load_fixture(engine, path: Union[str, Path], overwrite: bool = False) -> int:
    """Seed accounts from ``path`` and return how many were written."""
    fixture = read_fixture(path)
    written = 0
    with Session(engine) as session:
        with session.begin():
            for seed in fixture.accounts:
                if overwrite:
                    session.merge(AccountModel(id=seed.id, balance=seed.balance))
                elif session.get(AccountModel, seed.id) is None:
                    session.add(AccountModel(id=seed.id, balance=seed.balance))
                else:
                    continue
                written += 1
    logger.info(
        "fixture.loaded",
        extra={
            "path": str(path),
            "accounts": len(fixture.accounts),
            "written": written,
            "overwrite": overwrite,
        },
    )
    return written
