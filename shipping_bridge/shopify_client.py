"""Shopify Admin API client for fetching an order and its shipping address."""

import logging

import requests
from requests.utils import quote

from shipping_bridge.base_client import OrderSourceClient, error_details, exception_details
from shipping_bridge.config import Settings
from shipping_bridge.errors import DownstreamFailure
from shipping_bridge.models import Ok, OrderRecord, Result, ShippingAddress

logger = logging.getLogger(__name__)

API_VERSION = "2024-01"
SOURCE = "shopify"


class ShopifyClient(OrderSourceClient):
    """Client for the Shopify Admin REST API."""

    def __init__(self, settings: Settings):
        self.store_url = settings.shop_domain.rstrip("/")
        self.base_url = f"https://{self.store_url}/admin/api/{API_VERSION}"
        self.session = requests.Session()
        self.session.headers.update(
            {
                "X-Shopify-Access-Token": settings.shopify_access_token,
                "Content-Type": "application/json",
            }
        )

    def _get(self, endpoint: str) -> Result[dict]:
        url = f"{self.base_url}/{endpoint}.json"
        logger.info("GET %s", url)
        try:
            resp = self.session.get(url)
        except requests.RequestException as exc:
            logger.error("Shopify request failed: %s", exc)
            return DownstreamFailure(SOURCE, exception_details(exc))

        if not resp.ok:
            details = error_details(resp)
            logger.error("Shopify returned %s: %s", resp.status_code, details)
            return DownstreamFailure(SOURCE, details, resp.status_code)

        try:
            return Ok(resp.json())
        except ValueError:
            logger.error("Shopify returned a non-JSON body for %s", url)
            return DownstreamFailure(SOURCE, "Malformed response body", resp.status_code)

    def get_order(self, order_id: str) -> Result[OrderRecord]:
        """Fetch an order from Shopify.

        Args:
            order_id: Shopify order id.

        Returns:
            Ok wrapping an OrderRecord whose shipping_address is None when
            the order has none, or a DownstreamFailure.
        """
        match self._get(f"orders/{quote(order_id, safe='')}"):
            case DownstreamFailure() as failure:
                return failure
            case Ok(value={"order": dict() as order}):
                match order.get("shipping_address"):
                    case dict() as shipping if shipping:
                        address = ShippingAddress.from_shopify(shipping)
                    case None | dict():
                        address = None
                    case _:
                        logger.error("Shopify order %s has a malformed shipping address", order_id)
                        return DownstreamFailure(SOURCE, "Malformed shipping address")
                return Ok(OrderRecord(order_id=order_id, shipping_address=address, raw=order))
            case _:
                logger.error("Shopify response for order %s has no order object", order_id)
                return DownstreamFailure(SOURCE, "Response has no order object")

    def close(self) -> None:
        self.session.close()
