"""Transient request and response models shared by the clients and routes."""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from shipping_bridge.errors import DownstreamFailure, ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result of a client call."""

    value: T


Result = Ok[T] | DownstreamFailure


@dataclass
class RateRequest:
    """Origin, destination and weight (kg) of a rate quote."""

    origin_city: str
    destination_city: str
    weight: float
    origin_country_code: str | None = None
    destination_country_code: str | None = None

    @classmethod
    def from_payload(cls, payload: dict) -> "RateRequest":
        """Build a rate request from a decoded JSON body.

        Raises:
            ValidationError: If origin city, destination city or weight is
                missing, empty or zero.
        """
        origin_city = payload.get("origin_city")
        destination_city = payload.get("destination_city")
        weight = payload.get("weight")
        if not origin_city or not destination_city or not weight:
            raise ValidationError("Missing required rate parameters")

        return cls(
            origin_city=origin_city,
            destination_city=destination_city,
            weight=weight,
            origin_country_code=payload.get("origin_country_code"),
            destination_country_code=payload.get("destination_country_code"),
        )


def order_id_from_payload(payload: dict) -> str:
    """Return the order id of a label request as a string.

    Integral floats such as ``12345.0`` become ``"12345"``.

    Raises:
        ValidationError: If order_id is missing, empty or zero, or is not
            a string or whole number.
    """
    order_id = payload.get("order_id")
    if not order_id:
        raise ValidationError("order_id is required")

    match order_id:
        case bool():
            raise ValidationError("order_id must be a string or integer")
        case str() | int():
            return str(order_id)
        case float() if order_id.is_integer():
            return str(int(order_id))
        case _:
            raise ValidationError("order_id must be a string or integer")


@dataclass
class ShippingAddress:
    """The shipping address of a Shopify order."""

    first_name: str
    last_name: str
    phone: str
    city: str
    country_code: str
    address1: str

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_shopify(cls, shipping: dict) -> "ShippingAddress":
        return cls(
            first_name=shipping.get("first_name") or "",
            last_name=shipping.get("last_name") or "",
            phone=shipping.get("phone") or "",
            city=shipping.get("city") or "",
            country_code=shipping.get("country_code") or "",
            address1=shipping.get("address1") or "",
        )


@dataclass
class OrderRecord:
    """An order fetched from the Order-Source. Never stored."""

    order_id: str
    shipping_address: ShippingAddress | None
    raw: dict = field(default_factory=dict, repr=False)


@dataclass(frozen=True)
class ShipperProfile:
    """Sender identity printed on every label."""

    name: str = "BasicLook"
    cell_phone: str = "0790000000"
    city: str = "Amman"
    country_code: str = "JO"


@dataclass
class LabelResult:
    """Label URL and airwaybill of a created shipment."""

    label_url: str
    airwaybill: str | None
    success: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "label_url": self.label_url,
            "airwaybill": self.airwaybill,
        }
