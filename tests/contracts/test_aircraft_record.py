"""Tests for the positional aircraft record contract."""

from __future__ import annotations

import pytest

from radarfeed.contracts import AIRCRAFT_FIELDS, AircraftRecord, SelectedHost, SelectorMode
from tests.fake_feed import RAW_BA123


class TestAircraftRecord:
    def test_eighteen_fields_in_order(self):
        assert len(AIRCRAFT_FIELDS) == 18
        assert AIRCRAFT_FIELDS[0] == "aircraft_id"
        assert AIRCRAFT_FIELDS[13] == "flight"
        assert AIRCRAFT_FIELDS[-1] == "reserved"

    def test_from_positional(self):
        rec = AircraftRecord.from_positional(RAW_BA123)
        assert rec.flight == "BA123"
        assert rec.origin == "LHR"
        assert rec.destination == "JFK"
        assert rec.onground == "0"
        assert rec.callsign == "BAW123"
        assert rec.details is None

    def test_values_kept_as_delivered(self):
        values = list(RAW_BA123)
        values[1] = 51.5
        values[4] = 35000
        rec = AircraftRecord.from_positional(values)
        assert rec.latitude == 51.5
        assert rec.altitude == 35000
        # Strings stay strings, no coercion to numbers
        assert rec.longitude == "-0.1"

    @pytest.mark.parametrize("values", [RAW_BA123[:-1], RAW_BA123 + ["extra"], []])
    def test_wrong_length_rejected(self, values):
        with pytest.raises(ValueError, match="expected 18 fields"):
            AircraftRecord.from_positional(values)

    def test_field_text(self):
        values = list(RAW_BA123)
        values[9] = None
        values[4] = 35000
        rec = AircraftRecord.from_positional(values)
        assert rec.field_text("registration") == ""
        assert rec.field_text("altitude") == "35000"

    def test_with_details_returns_copy(self):
        rec = AircraftRecord.from_positional(RAW_BA123)
        enriched = rec.with_details({"aircraft": "Boeing 737-800"})
        assert enriched.details == {"aircraft": "Boeing 737-800"}
        assert rec.details is None
        assert enriched.flight == rec.flight


class TestSelectedHost:
    def test_mode_serialized_as_value(self):
        host = SelectedHost(index=1, hostname="lb2.feed.test", mode=SelectorMode.INDEX)
        assert host.model_dump()["mode"] == "index"
        assert host.latency_s is None

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            SelectedHost(index=-1, hostname="lb.feed.test", mode=SelectorMode.INDEX)
