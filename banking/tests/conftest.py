from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from ..core.config import get_settings
from ..core.db import create_engine_for_url, get_session, init_db, set_engine
from ..core.fixtures import load_fixture
from ..main import app
from ..services import TransferService

TESTDATA = Path(__file__).with_name("testdata.json")


@pytest.fixture
def engine(tmp_path):
    test_db = tmp_path / "test.db"
    engine = create_engine_for_url(f"sqlite:///{test_db}", busy_timeout=10.0)
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    load_fixture(engine, TESTDATA, overwrite=True)
    yield engine
    engine.dispose()


@pytest.fixture
def service(engine):
    with Session(engine) as session:
        yield TransferService(session)


@pytest.fixture
def client(engine) -> TestClient:
    original_engine = create_engine_for_url(get_settings().database_url)
    set_engine(engine)

    def _get_session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session_override
    init_db()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    set_engine(original_engine)
