from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from spending_dashboard.core import settings
from spending_dashboard.main import app
from spending_dashboard.manager import DashboardService
from spending_dashboard.storage.repository import DashboardRepository
from spending_dashboard.storage.store import InMemoryStore

client = TestClient(app)

CSV = (
    "Date,Original Date,Account Name,Name,Amount,Category\r\n"
    "2024-02-03,2024-02-02,Checking,Grocer,$10.00,Food\r\n"
    "2024-01-01,,Checking,Landlord,\"$1,500.00\",Rent\r\n"
    "2024-01-15,,Card,Refund,-$5.00,Food\r\n"
)


@pytest.fixture
def service() -> Generator[DashboardService, None, None]:
    had_service = hasattr(app.state, "service")
    original_service = getattr(app.state, "service", None)
    svc = DashboardService(repository=DashboardRepository(InMemoryStore()))
    app.state.service = svc
    yield svc
    if had_service:
        app.state.service = original_service
    else:
        delattr(app.state, "service")


def _upload(text: str, filename: str = "export.csv") -> dict:
    response = client.post("/api/import", files={"file": (filename, text.encode("utf-8"), "text/csv")})
    return {"status_code": response.status_code, "json": response.json()}


def test_import_and_dashboard(service: DashboardService) -> None:
    result = _upload(CSV)
    assert result["status_code"] == 200
    assert result["json"]["imported"] == 3
    assert result["json"]["totalAmount"] == "$1505.00"

    response = client.get("/api/dashboard")
    assert response.status_code == 200
    data = response.json()
    assert [t["name"] for t in data["filteredTransactions"]] == ["Grocer", "Refund", "Landlord"]
    assert data["filteredTransactions"][0]["amount"] == "-$10.00"
    assert data["filteredTransactions"][0]["originalDate"] == "2024-02-02"
    assert data["categoryData"] == [{"name": "Rent", "value": 1500.0}, {"name": "Food", "value": 15.0}]
    assert data["timeData"] == [{"date": "1/2024", "value": 1495.0}, {"date": "2/2024", "value": 10.0}]
    assert data["colorMap"] == {"Food": "#8884d8", "Rent": "#82ca9d"}
    assert data["allCategories"] == ["Food", "Rent"]
    assert data["filteredTotalAmount"] == "$-1505.00"


def test_import_rejects_header_only(service: DashboardService) -> None:
    _upload(CSV)
    result = _upload("Date,Amount\r\n")
    assert result["status_code"] == 400
    assert "not enough rows" in result["json"]["detail"]
    assert len(service.state.transactions) == 3


def test_import_accepts_other_extensions(service: DashboardService) -> None:
    result = _upload(CSV, filename="export.txt")
    assert result["status_code"] == 200


def test_ignored_categories_flow(service: DashboardService) -> None:
    _upload(CSV)

    response = client.post("/api/ignored-categories", json={"category": "Rent"})
    assert response.status_code == 200
    assert response.json() == {"ignoredCategories": ["Rent"], "changed": True}

    again = client.post("/api/ignored-categories", json={"category": "Rent"})
    assert again.json()["changed"] is False

    transactions = client.get("/api/transactions").json()
    assert [t["category"] for t in transactions["transactions"]] == ["Food", "Food"]
    assert transactions["filteredTotalAmount"] == "$-5.00"
    assert transactions["hiddenCount"] == 1
    assert transactions["hiddenPercent"] == 33.3

    removed = client.delete("/api/ignored-categories/Rent")
    assert removed.json() == {"ignoredCategories": [], "changed": True}
    assert client.get("/api/ignored-categories").json()["ignoredCategories"] == []


def test_categories_and_clear(service: DashboardService) -> None:
    _upload(CSV)
    assert client.get("/api/categories").json() == ["Food", "Rent"]

    response = client.post("/api/clear")
    assert response.status_code == 200
    dashboard = client.get("/api/dashboard").json()
    assert dashboard["filteredTransactions"] == []
    assert dashboard["totalAmount"] == "$0.00"


def test_missing_service_is_500() -> None:
    had_service = hasattr(app.state, "service")
    original_service = getattr(app.state, "service", None)
    if had_service:
        delattr(app.state, "service")
    try:
        response = client.get("/api/dashboard")
        assert response.status_code == 500
        assert response.json()["detail"] == "Service not initialized"
    finally:
        if had_service:
            app.state.service = original_service


def test_save_config_updates_limit(service: DashboardService, config_path: Path) -> None:
    response = client.post("/api/config", json={"TOP_CATEGORY_LIMIT": "2", "LOG_LEVEL": "warning"})
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "saved"
    assert data["updated"] == ["LOG_LEVEL", "TOP_CATEGORY_LIMIT"]
    assert data["config_path"] == str(config_path)
    assert service.top_categories == 2
    assert settings.read_config_file(str(config_path)) == {
        "TOP_CATEGORY_LIMIT": "2",
        "LOG_LEVEL": "WARNING",
    }

    fields = {f["key"]: f["value"] for f in client.get("/api/config").json()["fields"]}
    assert fields["TOP_CATEGORY_LIMIT"] == "2"


def test_save_config_rejects_invalid_values(service: DashboardService, config_path: Path) -> None:
    response = client.post(
        "/api/config",
        json={"TOP_CATEGORY_LIMIT": "many", "STORE_FILENAME": "it's.json"},
    )
    assert response.status_code == 422
    assert response.json() == {
        "detail": {
            "errors": {
                "TOP_CATEGORY_LIMIT": "Must be a whole number.",
                "STORE_FILENAME": "Value must not contain quotes.",
            }
        }
    }
    assert service.top_categories == 10
    assert not config_path.exists()
