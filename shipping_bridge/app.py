"""HTTP endpoints bridging Shopify orders and Aramex shipments."""

import logging
from typing import Any, Iterator

from fastapi import APIRouter, Body, Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from shipping_bridge.aramex_client import AramexClient, extract_label
from shipping_bridge.base_client import CarrierClient, OrderSourceClient
from shipping_bridge.config import Settings, configure_logging
from shipping_bridge.errors import BridgeError, DownstreamFailure, MissingAddressError
from shipping_bridge.models import Ok, RateRequest, order_id_from_payload
from shipping_bridge.shopify_client import ShopifyClient

logger = logging.getLogger(__name__)

RATE_FAILED = "Rate request failed"
LABEL_FAILED = "Label creation failed"

router = APIRouter()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_order_source(settings: Settings = Depends(get_settings)) -> Iterator[OrderSourceClient]:
    client = ShopifyClient(settings)
    try:
        yield client
    finally:
        client.close()


def get_carrier(settings: Settings = Depends(get_settings)) -> Iterator[CarrierClient]:
    client = AramexClient(settings)
    try:
        yield client
    finally:
        client.close()


def _as_dict(payload: Any) -> dict:
    return payload if isinstance(payload, dict) else {}


def _failure_response(error: str, failure: DownstreamFailure) -> JSONResponse:
    logger.error("%s (%s): %s", error, failure.source, failure.details)
    return JSONResponse(
        status_code=500,
        content=jsonable_encoder({"error": error, "details": failure.details}),
    )


@router.get("/", response_class=PlainTextResponse)
def index() -> str:
    return "BasicLook Shipping App backend is running!"


@router.get("/shipping-rates")
def shipping_rates() -> dict:
    return {
        "message": "Shipping rates endpoint working!",
        "example_route": "POST /aramex/rate",
    }


@router.post("/aramex/rate")
def aramex_rate(
    payload: Any = Body(None),
    carrier: CarrierClient = Depends(get_carrier),
):
    """Forward a rate quote to Aramex and return its response verbatim."""
    rate_request = RateRequest.from_payload(_as_dict(payload))

    match carrier.calculate_rate(rate_request):
        case DownstreamFailure() as failure:
            return _failure_response(RATE_FAILED, failure)
        case Ok(value=body):
            return JSONResponse(content=jsonable_encoder(body))


@router.post("/create-label")
def create_label(
    payload: Any = Body(None),
    order_source: OrderSourceClient = Depends(get_order_source),
    carrier: CarrierClient = Depends(get_carrier),
):
    """Create an Aramex shipment for a Shopify order and return its label.

    Each call creates a new shipment; repeated calls for the same order are
    not deduplicated.
    """
    order_id = order_id_from_payload(_as_dict(payload))

    match order_source.get_order(order_id):
        case DownstreamFailure() as failure:
            return _failure_response(LABEL_FAILED, failure)
        case Ok(value=order) if order.shipping_address is None:
            raise MissingAddressError()
        case Ok(value=order):
            pass

    match carrier.create_shipment(order):
        case DownstreamFailure() as failure:
            return _failure_response(LABEL_FAILED, failure)
        case Ok(value=response):
            label = extract_label(response)
            logger.info("Label created for order %s: %s", order_id, label.airwaybill)
            return label.to_dict()


async def bridge_error_handler(request: Request, exc: BridgeError) -> JSONResponse:
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.error)
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.content()))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder({"error": "Invalid request body", "details": exc.errors()}),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": str(exc) or type(exc).__name__},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Explicit configuration; read from the environment when
            omitted.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings)

    app = FastAPI(title="BasicLook Shipping App", debug=settings.debug)
    app.state.settings = settings
    app.include_router(router)
    app.add_exception_handler(BridgeError, bridge_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    return app
