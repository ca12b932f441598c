"""
Tests for the Shopify order client.
"""
from unittest.mock import patch

import requests

from shipping_bridge.errors import DownstreamFailure
from shipping_bridge.models import Ok
from shipping_bridge.shopify_client import ShopifyClient


class TestShopifyClient:
    """Test ShopifyClient.get_order."""

    def test_session_headers(self, settings):
        client = ShopifyClient(settings)

        assert client.base_url == "https://basiclook.myshopify.com/admin/api/2024-01"
        assert client.session.headers["X-Shopify-Access-Token"] == "shpat_test"
        assert client.session.headers["Content-Type"] == "application/json"

    def test_get_order(self, settings, shopify_order, make_response):
        client = ShopifyClient(settings)

        with patch.object(client.session, "get", return_value=make_response(json_data=shopify_order)) as mock_get:
            result = client.get_order("12345")

        mock_get.assert_called_once_with(
            "https://basiclook.myshopify.com/admin/api/2024-01/orders/12345.json"
        )
        assert isinstance(result, Ok)
        order = result.value
        assert order.order_id == "12345"
        assert order.shipping_address.name == "Jane Doe"
        assert order.shipping_address.phone == "0790000001"
        assert order.shipping_address.city == "Amman"
        assert order.shipping_address.country_code == "JO"
        assert order.shipping_address.address1 == "Street 1"
        assert order.raw["name"] == "#1001"

    def test_order_without_shipping_address(self, settings, make_response):
        client = ShopifyClient(settings)
        body = {"order": {"id": 12345, "shipping_address": None}}

        with patch.object(client.session, "get", return_value=make_response(json_data=body)):
            result = client.get_order("12345")

        assert isinstance(result, Ok)
        assert result.value.shipping_address is None

    def test_network_error(self, settings):
        client = ShopifyClient(settings)

        with patch.object(
            client.session, "get", side_effect=requests.ConnectionError("Connection refused")
        ):
            result = client.get_order("12345")

        assert isinstance(result, DownstreamFailure)
        assert result.source == "shopify"
        assert result.details == "Connection refused"
        assert result.status_code is None

    def test_not_found(self, settings, make_response):
        client = ShopifyClient(settings)
        resp = make_response(404, json_data={"errors": "Not Found"})

        with patch.object(client.session, "get", return_value=resp):
            result = client.get_order("999")

        assert isinstance(result, DownstreamFailure)
        assert result.details == {"errors": "Not Found"}
        assert result.status_code == 404

    def test_error_body_not_json(self, settings, make_response):
        client = ShopifyClient(settings)

        with patch.object(client.session, "get", return_value=make_response(502, text="Bad Gateway")):
            result = client.get_order("12345")

        assert isinstance(result, DownstreamFailure)
        assert result.details == "Bad Gateway"

    def test_malformed_body(self, settings, make_response):
        client = ShopifyClient(settings)

        with patch.object(client.session, "get", return_value=make_response(json_data={"orders": []})):
            result = client.get_order("12345")

        assert isinstance(result, DownstreamFailure)
        assert result.details

    def test_non_json_success_body(self, settings, make_response):
        client = ShopifyClient(settings)

        with patch.object(client.session, "get", return_value=make_response(200, text="<html>")):
            result = client.get_order("12345")

        assert isinstance(result, DownstreamFailure)
        assert result.details == "Malformed response body"

    def test_malformed_shipping_address(self, settings, make_response):
        client = ShopifyClient(settings)
        body = {"order": {"id": 12345, "shipping_address": "not-a-dict"}}

        with patch.object(client.session, "get", return_value=make_response(json_data=body)):
            result = client.get_order("12345")

        assert result == DownstreamFailure("shopify", "Malformed shipping address")

    def test_empty_shipping_address(self, settings, make_response):
        client = ShopifyClient(settings)
        body = {"order": {"id": 12345, "shipping_address": {}}}

        with patch.object(client.session, "get", return_value=make_response(json_data=body)):
            result = client.get_order("12345")

        assert isinstance(result, Ok)
        assert result.value.shipping_address is None

    def test_order_id_quoted_in_path(self, settings, make_response):
        client = ShopifyClient(settings)
        resp = make_response(404, json_data={"errors": "Not Found"})

        with patch.object(client.session, "get", return_value=resp) as mock_get:
            client.get_order("1/../2?x=1")

        mock_get.assert_called_once_with(
            "https://basiclook.myshopify.com/admin/api/2024-01/orders/1%2F..%2F2%3Fx%3D1.json"
        )
