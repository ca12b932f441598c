"""Error types surfaced by the endpoint layer."""

from dataclasses import dataclass
from typing import Any


class BridgeError(Exception):
    """Base class for errors that map onto a JSON error response."""

    status_code = 500
    error = "Internal server error"

    def __init__(self, error: str | None = None):
        super().__init__(error or self.error)
        if error:
            self.error = error

    def content(self) -> dict:
        return {"error": self.error}


class ValidationError(BridgeError):
    """The caller's request is missing required fields."""

    status_code = 400


class MissingAddressError(BridgeError):
    """The fetched order has no shipping address."""

    status_code = 400
    error = "Order has no shipping address"


class CarrierResponseError(BridgeError):
    """The carrier answered but left out the fields we need."""

    error = "Aramex did not return a label URL"

    def __init__(self, response: Any):
        super().__init__()
        self.response = response

    def content(self) -> dict:
        return {"error": self.error, "aramex_response": self.response}


@dataclass(frozen=True)
class DownstreamFailure:
    """A network error, non-2xx status or malformed body from an external API.

    Returned by the clients rather than raised.
    """

    source: str
    details: Any
    status_code: int | None = None
