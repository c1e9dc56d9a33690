"""Load balancer (edge host) selection."""

from pydantic import BaseModel, ConfigDict, Field

from radarfeed.contracts.enums import SelectorMode


class SelectedHost(BaseModel):
    """The load balancer a session sends aircraft queries to.

    ``index`` is the position in the host list it was resolved against and
    is only meaningful within that fetch generation; ``hostname`` is what
    request URLs are built from.
    """

    index: int = Field(..., ge=0)
    hostname: str = Field(..., min_length=1)
    mode: SelectorMode
    latency_s: float | None = Field(default=None, ge=0, description="Probe latency, latency mode only")

    model_config = ConfigDict(frozen=True, use_enum_values=True)
