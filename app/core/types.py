import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

OK_STATUS = "OK"


def format_coordinate(value: Union[int, float]) -> str:
    """Render a coordinate as plain decimal degrees, dropping trailing zeros (45.0 -> "45")."""
    text = f"{float(value):.7f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


@dataclass(frozen=True)
class Location:
    lat: float
    lng: float

    def as_param(self) -> str:
        return f"{format_coordinate(self.lat)},{format_coordinate(self.lng)}"


@dataclass(frozen=True)
class Candidate:
    """Read-only snapshot of one directory entry."""
    id: Any
    name: str
    location: Location
    attributes: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DistanceResult:
    index: int
    status: str
    distance_m: float = math.inf

    @property
    def usable(self) -> bool:
        return (
            self.status == OK_STATUS
            and math.isfinite(self.distance_m)
            and self.distance_m >= 0
        )


@dataclass(frozen=True)
class RankedResult:
    candidate: Candidate
    distance_m: float
    image_url: Optional[str] = None
