"""Result of a shortest-path query.

``Route`` stores the junction sequence from source to destination inclusive
and the total current cost along it. An empty route with infinite cost is
the engine-internal "unreachable" value; the façade turns it into
:class:`~roadroute.errors.NoRoute` before it reaches callers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Tuple

from roadroute.types import Cost, JunctionID


@dataclass(frozen=True)
class Route:
    """Ordered junction ids with the total travel time in minutes.

    Attributes:
        path: Junction ids from source to destination inclusive.
        total_minutes: Sum of current edge times along ``path``.
        total_km: Sum of physical edge lengths along ``path``.
    """

    path: Tuple[JunctionID, ...]
    total_minutes: Cost
    total_km: float = 0.0

    @classmethod
    def unreachable(cls) -> Route:
        return cls(path=(), total_minutes=math.inf)

    @classmethod
    def trivial(cls, junction: JunctionID) -> Route:
        return cls(path=(junction,), total_minutes=0.0)

    @property
    def reachable(self) -> bool:
        return bool(self.path) and math.isfinite(self.total_minutes)

    @property
    def source(self) -> JunctionID:
        return self.path[0]

    @property
    def destination(self) -> JunctionID:
        return self.path[-1]

    @property
    def hops(self) -> int:
        """Number of roads travelled (0 for a trivial route)."""
        return max(len(self.path) - 1, 0)

    def __iter__(self) -> Iterator[JunctionID]:
        return iter(self.path)

    def __len__(self) -> int:
        return len(self.path)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": list(self.path),
            "totalMinutes": self.total_minutes,
            "totalKm": self.total_km,
        }
