import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from .. import main
from ..core.dependencies import get_transfer_service
from ..services import TransferService
from .conftest import TESTDATA


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_get_account_balance(client: TestClient) -> None:
    response = client.get("/accounts/0")
    assert response.status_code == 200
    assert response.json() == {"id": 0, "balance": 100.0}


def test_get_unknown_account_returns_404(client: TestClient) -> None:
    response = client.get("/accounts/5")
    assert response.status_code == 404
    assert response.json()["detail"] == "Account 5 not found"


def test_transfer_updates_both_balances(client: TestClient) -> None:
    transfer = client.post("/transfers", json={"from_id": 0, "to_id": 1, "amount": 10.0})
    assert transfer.status_code == 200
    payload = transfer.json()
    assert payload["from_balance"] == 90.0
    assert payload["to_balance"] == 60.0

    assert client.get("/accounts/0").json()["balance"] == 90.0
    assert client.get("/accounts/1").json()["balance"] == 60.0


def test_transfer_insufficient_funds(client: TestClient) -> None:
    response = client.post("/transfers", json={"from_id": 0, "to_id": 1, "amount": 101.0})
    assert response.status_code == 409
    body = response.json()
    assert body["account_id"] == 0
    assert body["requested"] == 101.0
    assert body["available"] == 100.0
    assert client.get("/accounts/0").json()["balance"] == 100.0
    assert client.get("/accounts/1").json()["balance"] == 50.0


def test_transfer_to_unknown_account_returns_404(client: TestClient) -> None:
    response = client.post("/transfers", json={"from_id": 0, "to_id": 5, "amount": 1.0})
    assert response.status_code == 404
    assert client.get("/accounts/0").json()["balance"] == 100.0


def test_transfer_rejects_self_transfer(client: TestClient) -> None:
    response = client.post("/transfers", json={"from_id": 1, "to_id": 1, "amount": 5.0})

    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot transfer to the same account"


def test_transfer_rejects_negative_amount(client: TestClient) -> None:
    response = client.post("/transfers", json={"from_id": 0, "to_id": 1, "amount": -5.0})

    assert response.status_code == 422
    assert client.get("/accounts/1").json()["balance"] == 50.0


def test_get_out_of_range_account_returns_404(client: TestClient) -> None:
    response = client.get(f"/accounts/{2**63}")

    assert response.status_code == 404
    assert response.json()["detail"] == f"Account {2**63} not found"


def test_store_failure_returns_503(client: TestClient, engine, monkeypatch) -> None:
    def _boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    def _unavailable_service():
        with Session(engine) as session:
            monkeypatch.setattr(session, "exec", _boom)
            yield TransferService(session)

    main.app.dependency_overrides[get_transfer_service] = _unavailable_service

    response = client.post("/transfers", json={"from_id": 0, "to_id": 1, "amount": 10.0})

    assert response.status_code == 503
    assert response.json()["detail"] == "Connection or operational error"


def test_restart_with_seed_file_keeps_committed_transfers(
    client: TestClient, monkeypatch
) -> None:
    monkeypatch.setattr(main.settings, "seed_file", str(TESTDATA))

    transfer = client.post("/transfers", json={"from_id": 0, "to_id": 1, "amount": 30.0})
    assert transfer.status_code == 200

    with TestClient(main.app) as restarted:
        assert restarted.get("/accounts/0").json()["balance"] == pytest.approx(70.0)
        assert restarted.get("/accounts/1").json()["balance"] == pytest.approx(80.0)
