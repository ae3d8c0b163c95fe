"""
API tests for the booking backend using FastAPI's TestClient.

The catalog comes from config/, the store lives in a temporary directory
and the greeting endpoint talks to a stub Anthropic client.
"""

import io
import zipfile
from decimal import Decimal
from urllib.parse import quote

from openpyxl import load_workbook

from services.catalog import CatalogError


def booking_json(booking):
    return booking.model_dump(mode="json")


# =============================================================================
# Service endpoints
# =============================================================================

class TestServiceEndpoints:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["service"] == "Leader Cruises Booking API"

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["catalog"] == "ok"

    def test_health_degraded_without_catalog(self, client, monkeypatch):
        def broken_catalog():
            raise CatalogError("Catalog file not found: config/pricing.yaml")

        monkeypatch.setattr("main.get_catalog", broken_catalog)

        data = client.get("/health").json()
        assert data["status"] == "degraded"
        assert data["catalog"] == "unavailable"

    def test_openapi_lists_routes(self, client):
        paths = client.get("/openapi.json").json()["paths"]

        for path in (
            "/api/catalog/yachts",
            "/api/catalog/extras",
            "/api/pricing/quote",
            "/api/documents/generate",
            "/api/documents/greeting",
            "/api/documents/spreadsheet.xlsx",
            "/api/bookings",
            "/api/bookings/draft",
            "/api/bookings/extras/toggle",
            "/api/bookings/{index}",
            "/api/bookings/{index}/export",
        ):
            assert path in paths


# =============================================================================
# Catalog
# =============================================================================

class TestCatalog:

    def test_list_yachts(self, client):
        data = client.get("/api/catalog/yachts").json()

        assert data["success"] is True
        assert data["yachts"]["קינג"] == {"max": 30, "city": "Haifa"}
        assert "לי-ים" in data["pricing"]

    def test_extras_for_herzliya_yacht(self, client):
        data = client.get("/api/catalog/extras", params={"yacht_name": "לי-ים"}).json()
        extras = {item["value"]: item for item in data["extras"]}

        assert extras["fishing"]["name"] == "דייג בהרצליה"
        assert extras["fishing"]["available"] is True
        assert extras["dinner"]["price"] == 280
        assert len(data["payment_methods"]) == 2

    def test_fishing_unavailable_in_haifa(self, client):
        data = client.get("/api/catalog/extras", params={"yacht_name": "קינג"}).json()
        fishing = next(item for item in data["extras"] if item["value"] == "fishing")

        assert fishing["available"] is False
        assert fishing["name"] == "דייג"

    def test_catalog_unavailable_returns_503(self, client, monkeypatch):
        def broken_catalog():
            raise CatalogError("Catalog file not found: config/yachts.yaml")

        monkeypatch.setattr("api.dependencies.get_catalog", broken_catalog)

        response = client.get("/api/catalog/yachts")
        assert response.status_code == 503
        assert response.json()["detail"]["error"] == "CatalogNotAvailable"


# =============================================================================
# Pricing and documents
# =============================================================================

class TestPricingAndDocuments:

    def test_quote(self, client, agent_booking):
        response = client.post("/api/pricing/quote", json=booking_json(agent_booking))
        assert response.status_code == 200

        data = response.json()
        assert Decimal(str(data["auto_price"])) == Decimal("1100")
        assert Decimal(str(data["quote"]["client_price"])) == Decimal("1220")
        assert data["quote"]["rate_kind"] == "standard"
        assert Decimal(str(data["settlement"]["commission"])) == Decimal("244")

    def test_quote_rejects_bad_time(self, client):
        response = client.post("/api/pricing/quote", json={"start_time": "evening"})
        assert response.status_code == 422

    def test_generate_documents(self, client, agent_booking):
        response = client.post("/api/documents/generate", json=booking_json(agent_booking))
        assert response.status_code == 200

        documents = response.json()["documents"]
        assert documents["file2_blank_supplier"].startswith("2. מפנה : דניאל סוכן\n")
        assert documents["file1_blank_client"].startswith("לכבוד:\nישראל ישראלי\n")
        assert documents["file3_excel_detailed"].count("\t") == 43

    def test_generate_blank_booking_returns_400(self, client):
        response = client.post("/api/documents/generate", json={})
        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "NoDocumentContent"

    def test_greeting(self, client, agent_booking, stub_anthropic):
        response = client.post("/api/documents/greeting", json=booking_json(agent_booking))

        assert response.status_code == 200
        assert response.json()["greeting"] == "שלום ישראל! ההזמנה שלך אושרה 🛥️"
        assert len(stub_anthropic.messages.calls) == 1

    def test_spreadsheet_download(self, client, leader_booking):
        response = client.post("/api/documents/spreadsheet.xlsx", json=booking_json(leader_booking))

        assert response.status_code == 200
        assert response.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        assert quote("הזמנה_30001.xlsx") in response.headers["content-disposition"]

        wb = load_workbook(io.BytesIO(response.content))
        assert wb["סיכום"]["L1"].value == "30001"


# =============================================================================
# Saved bookings
# =============================================================================

class TestBookings:

    def test_draft(self, client):
        data = client.get("/api/bookings/draft").json()

        assert data["start_time"] == "10:00"
        assert data["end_time"] == "12:00"
        assert data["selected_extras"] == ["none"]
        assert data["order_number"] is None

    def test_toggle_extra_prunes_fishing_for_haifa(self, client):
        response = client.post("/api/bookings/extras/toggle", json={
            "selected_extras": ["fishing", "champagne"],
            "option": "dinner",
            "yacht_name": "קינג",
        })

        assert response.status_code == 200
        assert response.json()["selected_extras"] == ["champagne", "dinner"]

    def test_save_list_update_export(self, client, agent_booking, store):
        response = client.post("/api/bookings", json=booking_json(agent_booking))
        assert response.status_code == 201
        saved = response.json()
        assert saved["index"] == 0
        assert saved["booking"]["order_number"] == "30000"

        listing = client.get("/api/bookings").json()
        assert listing["total"] == 1
        assert listing["next_order_number"] == 30001
        assert listing["bookings"][0]["passenger_mode"] == "max"

        updated = dict(saved["booking"], passengers=2)
        response = client.put("/api/bookings/0", json=updated)
        assert response.status_code == 200
        assert response.json()["passenger_mode"] == "couple"
        assert store.get(0).passengers == 2

        response = client.post("/api/bookings/0/export")
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/zip"
        assert response.headers["x-next-index"] == "-1"
        assert quote("הזמנה_30000.zip") in response.headers["content-disposition"]

        with zipfile.ZipFile(io.BytesIO(response.content)) as zf:
            assert "לידר_הזמנה_30000_סופרוויזר.txt" in zf.namelist()

        assert client.get("/api/bookings").json()["total"] == 0

    def test_saving_numbered_booking_returns_409(self, client, leader_booking):
        response = client.post("/api/bookings", json=booking_json(leader_booking))
        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "OrderNumberAlreadyAssigned"

    def test_missing_booking_returns_404(self, client):
        assert client.get("/api/bookings/3").status_code == 404
        assert client.post("/api/bookings/3/export").status_code == 404

        response = client.put("/api/bookings/3", json={"client_name": "א"})
        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "NotFound"

    def test_blank_saved_booking_can_be_exported(self, client, store):
        store.import_bookings([store.new_draft()])

        response = client.post("/api/bookings/0/export")
        assert response.status_code == 200
        assert quote("הזמנה_без_номера.zip") in response.headers["content-disposition"]
        assert response.headers["x-next-index"] == "-1"
        assert store.count() == 0

    def test_export_failure_keeps_booking(self, client, store, agent_booking, block_store_writes):
        store.assign_order_number(agent_booking)
        block_store_writes()

        response = client.post("/api/bookings/0/export")
        assert response.status_code == 500
        assert response.json()["detail"]["error"] == "ExportFailed"
        assert store.count() == 1
