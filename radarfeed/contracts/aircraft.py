"""Live aircraft positions as decoded from the positional feed.

The feed encodes each flight as an 18-element array. Values are kept as
delivered (the provider mixes strings and numbers between hosts).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Order matters: positional arrays are zipped against this tuple.
AIRCRAFT_FIELDS: tuple[str, ...] = (
    "aircraft_id",
    "latitude",
    "longitude",
    "track",
    "altitude",
    "speed",
    "swquawk",
    "radar_id",
    "type",
    "registration",
    "last_update",
    "origin",
    "destination",
    "flight",
    "onground",
    "vspeed",
    "callsign",
    "reserved",
)

# Top-level payload keys that carry metadata rather than flights.
RESERVED_KEYS = frozenset({"version", "full_count"})

FeedValue = str | int | float | bool | None


class AircraftRecord(BaseModel):
    """One tracked flight, with optional detail enrichment."""

    aircraft_id: FeedValue = None
    latitude: FeedValue = None
    longitude: FeedValue = None
    track: FeedValue = None
    altitude: FeedValue = None
    speed: FeedValue = None
    swquawk: FeedValue = None
    radar_id: FeedValue = None
    type: FeedValue = None
    registration: FeedValue = None
    last_update: FeedValue = None
    origin: FeedValue = None
    destination: FeedValue = None
    flight: FeedValue = None
    onground: FeedValue = None
    vspeed: FeedValue = None
    callsign: FeedValue = None
    reserved: FeedValue = None

    details: dict[str, Any] | None = Field(default=None, description="Per-flight detail payload")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_positional(cls, values: list[Any]) -> "AircraftRecord":
        """Zip a positional feed array against ``AIRCRAFT_FIELDS``.

        Raises ``ValueError`` when the array length does not match, so
        fields are never shifted onto the wrong name.
        """
        if len(values) != len(AIRCRAFT_FIELDS):
            raise ValueError(
                f"expected {len(AIRCRAFT_FIELDS)} fields, got {len(values)}"
            )
        return cls(**dict(zip(AIRCRAFT_FIELDS, values)))

    def field_text(self, name: str) -> str:
        """String form of a feed field, for pattern matching."""
        value = getattr(self, name)
        return "" if value is None else str(value)

    def with_details(self, details: dict[str, Any]) -> "AircraftRecord":
        return self.model_copy(update={"details": details})


class AircraftSnapshot(BaseModel):
    """A decoded feed response and where it came from."""

    host: str
    zone: str
    records: dict[str, AircraftRecord] = Field(default_factory=dict)
    version: int | str | None = None
    full_count: int | None = None

    model_config = ConfigDict(frozen=True)
