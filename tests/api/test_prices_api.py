"""API tests for price read and update endpoints."""

from datetime import datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from ekram_prices.api.dependencies import get_app_settings, get_store
from ekram_prices.api.main import app
from ekram_prices.core.exceptions import StoreUnavailableError
from ekram_prices.core.services import CURRENT_PRICES, PRICE_HISTORY
from ekram_prices.infrastructure.storage import InMemoryBlobStore


class BrokenStore(InMemoryBlobStore):
    """Store that fails every operation."""

    async def get(self, key):
        raise StoreUnavailableError("memory", "store offline")

    async def put(self, key, value, if_version=None):
        raise StoreUnavailableError("memory", "store offline")


@pytest.fixture
async def broken_client(test_settings):
    app.dependency_overrides[get_store] = lambda: BrokenStore()
    app.dependency_overrides[get_app_settings] = lambda: test_settings
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class TestReadPricesAPI:
    async def test_cold_start(self, api_client: AsyncClient):
        response = await api_client.get("/api/prices")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {"prices": {}, "history": []}

    async def test_store_failure_still_200(self, broken_client: AsyncClient):
        response = await broken_client.get("/api/prices")
        assert response.status_code == 200
        assert response.json() == {"prices": {}, "history": []}

    async def test_post_is_accepted(self, api_client: AsyncClient):
        response = await api_client.post("/api/prices")
        assert response.status_code == 200

    async def test_request_id_header(self, api_client: AsyncClient):
        response = await api_client.get("/api/prices")
        assert response.headers.get("x-request-id")


class TestUpdatePriceAPI:
    async def test_first_update(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/update-price",
            json={"material": "corn", "price": "12500", "supplier": "الأهرام", "user": "tg:42"},
        )
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "material": "yellow_corn",
            "materialName": "ذرة صفراء",
            "price": 12500.0,
            "prevPrice": 12500.0,
            "change": "0.0%",
            "dir": "stable",
        }

    async def test_update_then_read_round_trip(self, api_client: AsyncClient):
        await api_client.post("/api/update-price", json={"material": "barley", "price": 100})
        update = await api_client.post(
            "/api/update-price", json={"material": "barley", "price": 110, "user": "sara"}
        )
        assert update.json()["change"] == "+10.0%"
        assert update.json()["dir"] == "up"

        data = (await api_client.get("/api/prices")).json()
        record = data["prices"]["barley"]
        assert record["price"] == 110
        assert record["prevPrice"] == 100
        assert record["supplier"] == ""
        assert record["updatedBy"] == "sara"
        datetime.fromisoformat(record["updatedAt"])
        assert [entry["price"] for entry in data["history"]] == [110, 100]

    @pytest.mark.parametrize("price", ["abc", 0, -5, None])
    async def test_invalid_price(self, api_client: AsyncClient, memory_store, price):
        response = await api_client.post(
            "/api/update-price", json={"material": "barley", "price": price}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"
        assert response.json()["message"] == "invalid price"
        assert await memory_store.get(CURRENT_PRICES) is None
        assert await memory_store.get(PRICE_HISTORY) is None

    async def test_missing_material(self, api_client: AsyncClient):
        response = await api_client.post("/api/update-price", json={"price": 10})
        assert response.status_code == 400
        assert response.json()["message"] == "material required"

    async def test_unknown_material(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/update-price", json={"material": "gold", "price": 10}
        )
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "UNKNOWN_MATERIAL"
        assert "yellow_corn" in body["valid"]
        assert len(body["valid"]) == 8

    async def test_malformed_json(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/update-price",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    async def test_wrong_method(self, api_client: AsyncClient):
        response = await api_client.get("/api/update-price")
        assert response.status_code == 405
        assert response.json()["error"] == "METHOD_NOT_ALLOWED"

    async def test_store_failure_is_500_with_details(self, broken_client: AsyncClient):
        response = await broken_client.post(
            "/api/update-price", json={"material": "barley", "price": 10}
        )
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "SERVER_ERROR"
        assert "store offline" in body["details"]


class TestUpdatePriceAuth:
    @pytest.fixture
    def secured(self, test_settings):
        test_settings.api.update_key = "s3cret"
        return test_settings

    async def test_no_key_configured_skips_check(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/update-price",
            json={"material": "barley", "price": 10},
            headers={"x-api-key": "anything"},
        )
        assert response.status_code == 200

    async def test_wrong_key(self, secured, api_client: AsyncClient, memory_store):
        response = await api_client.post(
            "/api/update-price",
            json={"material": "barley", "price": 10},
            headers={"x-api-key": "wrong"},
        )
        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHORIZED"
        assert await memory_store.get(CURRENT_PRICES) is None

    async def test_missing_key(self, secured, api_client: AsyncClient):
        response = await api_client.post(
            "/api/update-price", json={"material": "barley", "price": 10}
        )
        assert response.status_code == 401

    async def test_auth_checked_before_validation(self, secured, api_client: AsyncClient):
        response = await api_client.post(
            "/api/update-price", json={"material": "", "price": "abc"}
        )
        assert response.status_code == 401

    async def test_correct_key(self, secured, api_client: AsyncClient):
        response = await api_client.post(
            "/api/update-price",
            json={"material": "barley", "price": 10},
            headers={"x-api-key": "s3cret"},
        )
        assert response.status_code == 200

    async def test_malformed_body_with_wrong_key(self, secured, api_client: AsyncClient):
        response = await api_client.post(
            "/api/update-price",
            content=b"{not json",
            headers={"content-type": "application/json", "x-api-key": "wrong"},
        )
        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHORIZED"

    async def test_malformed_body_without_key(self, secured, api_client: AsyncClient):
        response = await api_client.post(
            "/api/update-price",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 401

    async def test_malformed_body_with_correct_key(self, secured, api_client: AsyncClient):
        response = await api_client.post(
            "/api/update-price",
            content=b"{not json",
            headers={"content-type": "application/json", "x-api-key": "s3cret"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    async def test_non_ascii_header(self, secured, api_client: AsyncClient):
        response = await api_client.post(
            "/api/update-price",
            json={"material": "barley", "price": 10},
            headers={"x-api-key": "كلمة".encode("utf-8")},
        )
        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHORIZED"
        assert "details" not in response.json()


class TestArabicUpdateKey:
    @pytest.fixture(autouse=True)
    def arabic_key(self, test_settings):
        test_settings.api.update_key = "سر"

    async def test_wrong_key(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/update-price",
            json={"material": "barley", "price": 10},
            headers={"x-api-key": "wrong"},
        )
        assert response.status_code == 401

    async def test_correct_key_as_utf8(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/update-price",
            json={"material": "barley", "price": 10},
            headers={"x-api-key": "سر".encode("utf-8")},
        )
        assert response.status_code == 200


class TestUpdatePriceBody:
    @pytest.mark.parametrize("content", [b"[1, 2]", b"null", b""])
    async def test_non_object_body(self, api_client: AsyncClient, content):
        response = await api_client.post(
            "/api/update-price",
            content=content,
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    async def test_error_timestamp_is_utc(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/update-price", json={"material": "barley", "price": "abc"}
        )
        stamp = datetime.fromisoformat(response.json()["timestamp"])
        assert stamp.utcoffset() == timedelta(0)

    async def test_non_string_stored_supplier(self, api_client: AsyncClient, memory_store):
        await memory_store.put(CURRENT_PRICES, {"barley": {"price": 100, "supplier": 7}})

        response = await api_client.post(
            "/api/update-price", json={"material": "barley", "price": 110}
        )

        assert response.status_code == 200
        assert response.json()["prevPrice"] == 100
