#!/usr/bin/env python3
"""CLI entry point for the Shopify to Aramex shipping bridge."""

import argparse
import json
import sys

from shipping_bridge.config import Settings, configure_logging
from shipping_bridge.errors import BridgeError, DownstreamFailure, MissingAddressError
from shipping_bridge.models import Ok, RateRequest


def _print_json(data):
    print(json.dumps(data, indent=2, default=str))


def _fail(message: str, details=None):
    print(f"Error: {message}", file=sys.stderr)
    if details is not None:
        print(json.dumps(details, indent=2, default=str), file=sys.stderr)
    sys.exit(1)


def _serve(args, settings: Settings):
    import uvicorn

    from shipping_bridge.app import create_app

    port = args.port or settings.port
    print(f"Server running on port {port}")
    uvicorn.run(create_app(settings), host=args.host, port=port)


def _rate(args, settings: Settings):
    from shipping_bridge.aramex_client import AramexClient

    rate_request = RateRequest.from_payload(vars(args))
    client = AramexClient(settings)
    try:
        result = client.calculate_rate(rate_request)
    finally:
        client.close()

    match result:
        case Ok(value=body):
            _print_json(body)
        case DownstreamFailure(details=details):
            _fail("Rate request failed", details)


def _label(args, settings: Settings):
    from shipping_bridge.aramex_client import AramexClient, extract_label
    from shipping_bridge.shopify_client import ShopifyClient

    shopify = ShopifyClient(settings)
    aramex = AramexClient(settings)
    try:
        print(f"Fetching order {args.order_id} from Shopify...")
        match shopify.get_order(args.order_id):
            case DownstreamFailure(details=details):
                _fail("Label creation failed", details)
            case Ok(value=order) if order.shipping_address is None:
                raise MissingAddressError()
            case Ok(value=order):
                pass

        print(f"Shipping to {order.shipping_address.name}, {order.shipping_address.city}")
        match aramex.create_shipment(order):
            case DownstreamFailure(details=details):
                _fail("Label creation failed", details)
            case Ok(value=response):
                _print_json(extract_label(response).to_dict())
    finally:
        shopify.close()
        aramex.close()


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Create Aramex shipping labels for Shopify orders.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP backend.")
    serve_parser.add_argument(
        "--host",
        default="0.0.0.0",
        help='Interface to bind (default: "0.0.0.0").',
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        help="Port to listen on (overrides PORT env var, default 8080).",
    )
    serve_parser.set_defaults(handler=_serve)

    rate_parser = subparsers.add_parser("rate", help="Request an Aramex rate quote.")
    rate_parser.add_argument("--origin-city", required=True)
    rate_parser.add_argument("--origin-country-code")
    rate_parser.add_argument("--destination-city", required=True)
    rate_parser.add_argument("--destination-country-code")
    rate_parser.add_argument(
        "--weight",
        type=float,
        required=True,
        help="Shipment weight in kilograms.",
    )
    rate_parser.set_defaults(handler=_rate)

    label_parser = subparsers.add_parser("label", help="Create a label for a Shopify order.")
    label_parser.add_argument("order_id", help="Shopify order id.")
    label_parser.set_defaults(handler=_label)

    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as exc:
        _fail(str(exc))

    configure_logging(settings)
    try:
        args.handler(args, settings)
    except BridgeError as exc:
        _fail(exc.error, exc.content().get("aramex_response"))


if __name__ == "__main__":
    main()
