"""Shared fixtures for shipping bridge tests."""
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from shipping_bridge.app import create_app, get_carrier, get_order_source
from shipping_bridge.base_client import CarrierClient, OrderSourceClient
from shipping_bridge.config import Settings


@pytest.fixture
def settings():
    return Settings(
        shopify_access_token="shpat_test",
        shop_domain="basiclook.myshopify.com",
        aramex_account_number="20016",
        aramex_account_pin="331421",
        aramex_api_key="testingapi@aramex.com",
        aramex_api_secret="R123456789$r",
        aramex_entity="AMM",
        aramex_country_code="JO",
        aramex_base_url="https://aramex.test/json",
    )


@pytest.fixture
def order_source():
    return MagicMock(spec=OrderSourceClient)


@pytest.fixture
def carrier():
    return MagicMock(spec=CarrierClient)


@pytest.fixture
def app(settings, order_source, carrier):
    app = create_app(settings)
    app.dependency_overrides[get_order_source] = lambda: order_source
    app.dependency_overrides[get_carrier] = lambda: carrier
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def shopify_order():
    return {
        "order": {
            "id": 12345,
            "name": "#1001",
            "shipping_address": {
                "first_name": "Jane",
                "last_name": "Doe",
                "phone": "0790000001",
                "city": "Amman",
                "country_code": "JO",
                "address1": "Street 1",
            },
        }
    }


@pytest.fixture
def make_response():
    """Factory for stand-ins of requests.Response."""

    def _make(status_code=200, json_data=None, text=""):
        resp = MagicMock()
        resp.status_code = status_code
        resp.ok = 200 <= status_code < 400
        resp.text = text
        if json_data is None:
            resp.json.side_effect = ValueError("No JSON object could be decoded")
        else:
            resp.json.return_value = json_data
        return resp

    return _make
