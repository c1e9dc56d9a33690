"""Geographic zone tree.

The provider publishes zones as nested JSON objects::

    {"europe": {"tl_y": 72.57, "tl_x": -16.96, "br_y": 33.57, "br_x": 53.05,
                "subzones": {"poland": {...}, "germany": {...}}},
     "version": 4}

Bounding box keys and ``subzones`` are node attributes, every other key is
a zone name.
"""

from pydantic import BaseModel, ConfigDict, Field

# The pseudo-zone selecting the unfiltered global feed.
ALL_ZONES = "all"

STRUCTURAL_KEYS = frozenset({"tl_x", "tl_y", "br_x", "br_y", "subzones"})


class ZoneNode(BaseModel):
    """One zone with its bounding box and nested subzones.

    The root of a parsed tree is an unnamed container (``name == ""``).
    """

    name: str = ""
    tl_x: float | None = None
    tl_y: float | None = None
    br_x: float | None = None
    br_y: float | None = None
    subzones: list["ZoneNode"] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def is_root(self) -> bool:
        return self.name == ""
