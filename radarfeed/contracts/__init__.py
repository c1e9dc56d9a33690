"""radarfeed data contracts — Pydantic v2 models for the live flight feed.

Fetched (cached per session, replaced whole on refresh)
-------------------------------------------------------
- ``SelectedHost``: the load balancer aircraft queries are sent to
- ``ZoneNode``: nested zone tree from ``/js/zones.js.php``
- ``AircraftSnapshot`` / ``AircraftRecord``: positional aircraft feed
- ``AircraftRecord.details``: per-flight detail payload, cached by flight id

Calculated
----------
- Zone name list (pre-order flattening of the tree)
- ``FanOutResult``: partial-success result of detail enrichment
"""

from radarfeed.contracts.enums import SelectorMode
from radarfeed.contracts.host import SelectedHost
from radarfeed.contracts.zone import ALL_ZONES, STRUCTURAL_KEYS, ZoneNode
from radarfeed.contracts.aircraft import (
    AIRCRAFT_FIELDS,
    RESERVED_KEYS,
    AircraftRecord,
    AircraftSnapshot,
)
from radarfeed.contracts.result import FanOutResult, FlightError

__all__ = [
    # Enums
    "SelectorMode",
    # Hosts
    "SelectedHost",
    # Zones
    "ALL_ZONES",
    "STRUCTURAL_KEYS",
    "ZoneNode",
    # Aircraft
    "AIRCRAFT_FIELDS",
    "RESERVED_KEYS",
    "AircraftRecord",
    "AircraftSnapshot",
    # Results
    "FanOutResult",
    "FlightError",
]
