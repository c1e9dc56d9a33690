"""Partial-success result for per-flight fan-out."""

from pydantic import BaseModel, Field

from radarfeed.contracts.aircraft import AircraftRecord


class FlightError(BaseModel):
    """A failure scoped to a single flight id."""

    flight_id: str = Field(..., description="Provider flight identifier")
    message: str = Field(..., description="Human-readable error message")
    url: str | None = None


class FanOutResult(BaseModel):
    """Records fetched by a fan-out, plus the flights that failed.

    A failing flight never aborts its siblings; callers decide whether
    partial success is good enough.
    """

    records: list[AircraftRecord] = Field(default_factory=list)
    errors: list[FlightError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def flight_ids_failed(self) -> list[str]:
        return [e.flight_id for e in self.errors]
