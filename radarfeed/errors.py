"""Feed client exceptions."""

from __future__ import annotations


class RadarFeedError(Exception):
    """Base exception for all radarfeed errors."""


class ApiError(RadarFeedError):
    """Raised when a feed endpoint cannot be fetched or understood.

    Carries the failing URL plus whatever context the caller had at hand
    (host, zone, flight id).
    """

    def __init__(self, message: str, url: str, **context: str | None):
        self.url = url
        self.context = {k: v for k, v in context.items() if v is not None}
        super().__init__(message)

    def __str__(self) -> str:
        base = f"{self.args[0]} [{self.url}]"
        if self.context:
            extra = ", ".join(f"{k}={v}" for k, v in sorted(self.context.items()))
            return f"{base} ({extra})"
        return base


class TransportError(ApiError):
    """Network, TLS, timeout or HTTP status failure."""


class DecodeError(ApiError):
    """Malformed JSON, unexpected payload shape or field count mismatch."""


class InvalidSelectorError(RadarFeedError, ValueError):
    """Raised when a host selector matches no load balancer."""

    def __init__(self, selector: object, reason: str | None = None):
        self.selector = selector
        message = f"Load balancer {selector!r} is invalid"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class PreconditionError(RadarFeedError):
    """Raised when an aircraft query runs without a host or zone selected."""


class NotFoundError(RadarFeedError):
    """Raised when a requested entity does not exist in the current feed."""


class FlightNotFoundError(NotFoundError):
    """Raised when a flight id is not present in the aircraft snapshot."""

    def __init__(self, flight_id: str):
        self.flight_id = flight_id
        super().__init__(f"Flight {flight_id} not found in current snapshot")
