"""Unit tests for price and notification API endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.routers.notifications import get_notifier
from api.routers.prices import get_price_client
from services.notification import NotificationError
from services.price_lookup import PriceLookupError, PriceSearchResult


class StubPriceClient:
    def __init__(self, price=None, error=None):
        self.price = price
        self.error = error
        self.searches = []

    async def search(self, model_prefix, carrier=None):
        self.searches.append((model_prefix, carrier))
        if self.error:
            raise self.error
        return PriceSearchResult(
            model_prefix=model_prefix,
            carrier_slug="docomo",
            search_url=f"https://amemoba.example/search/?search-word={model_prefix}",
            first_link="https://amemoba.example/kaitori/detail/aaa111",
        )

    async def fetch_price(self, query):
        if self.error:
            raise self.error
        return self.price


class StubNotifier:
    def __init__(self, error=None):
        self.error = error
        self.bodies = []

    async def post_message(self, body):
        if self.error:
            raise self.error
        self.bodies.append(body)
        return {"message_id": 987}


@pytest.fixture
def price_client(test_app: FastAPI):
    stub = StubPriceClient(price=58000)
    test_app.dependency_overrides[get_price_client] = lambda: stub
    return stub


@pytest.fixture
def notifier(test_app: FastAPI):
    stub = StubNotifier()
    test_app.dependency_overrides[get_notifier] = lambda: stub
    return stub


def test_search_uses_model_prefix(client: TestClient, price_client):
    response = client.post("/api/v1/prices/search", json={"modelPrefix": "MWC62 J/A", "carrier": "ドコモ"})

    assert response.status_code == 200
    data = response.json()
    assert data["model_prefix"] == "MWC62"
    assert data["first_link"].endswith("/kaitori/detail/aaa111")
    assert price_client.searches == [("MWC62", "ドコモ")]


def test_search_upstream_error(client: TestClient, test_app: FastAPI):
    test_app.dependency_overrides[get_price_client] = lambda: StubPriceClient(
        error=PriceLookupError("HTTP 503 Service Unavailable", status_code=503)
    )

    response = client.post("/api/v1/prices/search", json={"model_prefix": "MWC62"})

    assert response.status_code == 502
    assert response.json()["detail"]["error"]["upstream_status"] == 503


def test_search_requires_prefix(client: TestClient, price_client):
    response = client.post("/api/v1/prices/search", json={"model_prefix": ""})

    assert response.status_code == 422


def test_max_price(client: TestClient, price_client):
    response = client.post("/api/v1/prices/max", json={"query": "iPhone 13"})

    assert response.status_code == 200
    assert response.json() == {"price": 58000}


def test_geo_prices_are_placeholders(client: TestClient):
    response = client.post("/api/v1/prices/geo", json={"model_prefix": "MLJH3 J/A", "carrier": "au"})

    assert response.status_code == 200
    data = response.json()
    assert data["geo_url"].endswith("/search/?q=MLJH3")
    assert data["prices"] == {"unused": "—", "used": "—"}
    assert data["carrier"] == "au"


def test_chatwork_with_body(client: TestClient, notifier):
    response = client.post("/api/v1/notifications/chatwork", json={"body": "テスト"})

    assert response.status_code == 200
    assert response.json() == {"ok": True, "message_id": "987"}
    assert notifier.bodies == ["テスト"]


def test_chatwork_from_device_fields(client: TestClient, notifier):
    response = client.post(
        "/api/v1/notifications/chatwork",
        json={"device": {"model_name": "iPhone 13", "capacity": "128GB", "imei": "490154203237518"}},
    )

    assert response.status_code == 200
    assert notifier.bodies[0].startswith("【査定依頼】\niPhone 13 128GB\nIMEI：490154203237518")


def test_chatwork_requires_content(client: TestClient, notifier):
    response = client.post("/api/v1/notifications/chatwork", json={})

    assert response.status_code == 400


def test_chatwork_failure(client: TestClient, test_app: FastAPI):
    test_app.dependency_overrides[get_notifier] = lambda: StubNotifier(error=NotificationError("Chatwork error: 401"))

    response = client.post("/api/v1/notifications/chatwork", json={"body": "x"})

    assert response.status_code == 502
    assert response.json()["detail"]["error"]["code"] == "NOTIFICATION_FAILED"
