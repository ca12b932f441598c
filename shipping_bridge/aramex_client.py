"""Aramex shipping API client for rate quotes and label creation."""

import logging

import requests

from shipping_bridge.base_client import CarrierClient, error_details, exception_details
from shipping_bridge.config import Settings
from shipping_bridge.errors import CarrierResponseError, DownstreamFailure
from shipping_bridge.models import (
    LabelResult,
    Ok,
    OrderRecord,
    RateRequest,
    Result,
    ShipperProfile,
)

logger = logging.getLogger(__name__)

SOURCE = "aramex"
API_VERSION = "v1"

# Fixed package details for every shipment.
PRODUCT_GROUP = "EXP"
PRODUCT_TYPE = "PPX"
PAYMENT_TYPE = "P"
GOODS_DESCRIPTION = "Clothes"
PACKAGE_WEIGHT_KG = 1

LABEL_REPORT_ID = 9729
LABEL_REPORT_TYPE = "URL"


def build_client_info(settings: Settings) -> dict:
    """Return the account-credential envelope sent with every request."""
    return {
        "UserName": settings.aramex_api_key,
        "Password": settings.aramex_api_secret,
        "Version": API_VERSION,
        "AccountNumber": settings.aramex_account_number,
        "AccountPin": settings.aramex_account_pin,
        "AccountEntity": settings.aramex_entity,
        "AccountCountryCode": settings.aramex_country_code,
    }


def build_rate_payload(settings: Settings, rate_request: RateRequest) -> dict:
    return {
        "ClientInfo": build_client_info(settings),
        "OriginAddress": {
            "City": rate_request.origin_city,
            "CountryCode": rate_request.origin_country_code,
        },
        "DestinationAddress": {
            "City": rate_request.destination_city,
            "CountryCode": rate_request.destination_country_code,
        },
        "ShipmentDetails": {
            "ActualWeight": {"Value": rate_request.weight, "Unit": "KG"},
            "NumberOfPieces": 1,
            "ProductGroup": PRODUCT_GROUP,
            "ProductType": PRODUCT_TYPE,
        },
    }


def build_shipment_payload(
    settings: Settings,
    order: OrderRecord,
    shipper: ShipperProfile | None = None,
) -> dict:
    """Build a CreateShipments request for a single order.

    Args:
        settings: Carrier credentials.
        order: Order with a shipping address.
        shipper: Sender identity; the BasicLook profile when omitted.

    Returns:
        The request body as a dict.
    """
    shipper = shipper or ShipperProfile()
    address = order.shipping_address
    if address is None:
        raise ValueError(f"Order {order.order_id} has no shipping address")

    return {
        "ClientInfo": build_client_info(settings),
        "Shipments": [
            {
                "Reference1": f"Order-{order.order_id}",
                "Shipper": {
                    "Name": shipper.name,
                    "CellPhone": shipper.cell_phone,
                    "City": shipper.city,
                    "CountryCode": shipper.country_code,
                },
                "Consignee": {
                    "Name": address.name,
                    "PhoneNumber1": address.phone,
                    "City": address.city,
                    "CountryCode": address.country_code,
                    "Line1": address.address1,
                },
                "Details": {
                    "ActualWeight": {"Unit": "KG", "Value": PACKAGE_WEIGHT_KG},
                    "NumberOfPieces": 1,
                    "ProductGroup": PRODUCT_GROUP,
                    "ProductType": PRODUCT_TYPE,
                    "PaymentType": PAYMENT_TYPE,
                    "DescriptionOfGoods": GOODS_DESCRIPTION,
                },
            }
        ],
        "LabelInfo": {
            "ReportID": LABEL_REPORT_ID,
            "ReportType": LABEL_REPORT_TYPE,
        },
    }


def extract_label(response) -> LabelResult:
    """Pull the label URL and airwaybill out of a CreateShipments response.

    Raises:
        CarrierResponseError: If the first shipment has no ShipmentLabelURL.
    """
    shipments = response.get("Shipments") if isinstance(response, dict) else None
    first = shipments[0] if isinstance(shipments, list) and shipments else None
    if not isinstance(first, dict) or not first.get("ShipmentLabelURL"):
        raise CarrierResponseError(response)
    return LabelResult(label_url=first["ShipmentLabelURL"], airwaybill=first.get("ID"))


class AramexClient(CarrierClient):
    """Client for the Aramex JSON shipping services."""

    def __init__(self, settings: Settings, shipper: ShipperProfile | None = None):
        self.settings = settings
        self.base_url = settings.aramex_base_url.rstrip("/")
        self.shipper = shipper or ShipperProfile()
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def _post(self, operation: str, payload: dict) -> Result[dict]:
        url = f"{self.base_url}/{operation}"
        logger.info("POST %s", url)
        try:
            resp = self.session.post(url, json=payload)
        except requests.RequestException as exc:
            logger.error("Aramex %s failed: %s", operation, exc)
            return DownstreamFailure(SOURCE, exception_details(exc))

        if not resp.ok:
            details = error_details(resp)
            logger.error("Aramex %s returned %s: %s", operation, resp.status_code, details)
            return DownstreamFailure(SOURCE, details, resp.status_code)

        try:
            return Ok(resp.json())
        except ValueError:
            logger.error("Aramex %s returned a non-JSON body", operation)
            return DownstreamFailure(SOURCE, "Malformed response body", resp.status_code)

    def calculate_rate(self, rate_request: RateRequest) -> Result[dict]:
        return self._post("CalculateRate", build_rate_payload(self.settings, rate_request))

    def create_shipment(self, order: OrderRecord) -> Result[dict]:
        payload = build_shipment_payload(self.settings, order, self.shipper)
        logger.info("Creating Aramex shipment for order %s", order.order_id)
        return self._post("CreateShipments", payload)

    def close(self) -> None:
        self.session.close()
