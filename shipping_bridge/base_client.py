"""Abstract interfaces for the external platforms the bridge talks to."""

from abc import ABC, abstractmethod

import requests

from shipping_bridge.models import OrderRecord, RateRequest, Result


def error_details(resp: requests.Response):
    """Return the provider's error payload: JSON if decodable, else text."""
    try:
        return resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"


def exception_details(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


class OrderSourceClient(ABC):
    """An e-commerce platform that owns order and shipping-address records."""

    @abstractmethod
    def get_order(self, order_id: str) -> Result[OrderRecord]:
        """Fetch a single order by id.

        Args:
            order_id: Platform order identifier.

        Returns:
            Ok wrapping the OrderRecord, or a DownstreamFailure.
        """

    def close(self) -> None:
        """Release any pooled connections."""


class CarrierClient(ABC):
    """A shipping carrier that quotes rates and issues labels."""

    @abstractmethod
    def calculate_rate(self, rate_request: RateRequest) -> Result[dict]:
        """Request a rate quote.

        Returns:
            Ok wrapping the carrier's raw response, or a DownstreamFailure.
        """

    @abstractmethod
    def create_shipment(self, order: OrderRecord) -> Result[dict]:
        """Submit a shipment built from an order.

        Returns:
            Ok wrapping the carrier's raw response, or a DownstreamFailure.
        """

    def close(self) -> None:
        """Release any pooled connections."""
