"""Error taxonomy raised by the routing engine.

Every error derives from :class:`RoutingError` and carries a stable ``code``
that transports (CLI, HTTP) map onto their own status representation. The
builtin base classes are kept so callers that only know ``ValueError`` or
``LookupError`` still catch the right thing.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class RoutingError(Exception):
    """Base class for all routing engine errors.

    Attributes:
        code: Machine-readable error kind.
        details: Optional structured context (ids, offending values).
    """

    code: str = "routing_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message, **self.details}


class InvalidWeight(RoutingError, ValueError):
    """Negative or non-finite distance or base time supplied for a road."""

    code = "invalid_weight"


class InvalidMultiplier(RoutingError, ValueError):
    """Traffic multiplier that is not a finite number greater than zero."""

    code = "invalid_multiplier"


class InvalidJunction(RoutingError, TypeError):
    """Junction id that is not a plain integer."""

    code = "invalid_junction"

    def __init__(self, junction: Any):
        super().__init__(
            f"Junction id must be an integer, got {junction!r}.",
            {"junction": junction},
        )
        self.junction = junction


class RoadNotFound(RoutingError, LookupError):
    """Traffic update targets a junction pair with no road between them."""

    code = "road_not_found"

    def __init__(self, from_id: int, to_id: int):
        super().__init__(
            f"No road between junctions {from_id} and {to_id}.",
            {"from": from_id, "to": to_id},
        )
        self.from_id = from_id
        self.to_id = to_id


class UnknownJunction(RoutingError, LookupError):
    """Query references a junction that no road has introduced."""

    code = "unknown_junction"

    def __init__(self, junction: Any):
        super().__init__(f"Unknown junction '{junction}'.", {"junction": junction})
        self.junction = junction


class NoRoute(RoutingError):
    """Both junctions are known but no path connects them."""

    code = "no_route"

    def __init__(self, source: int, destination: int):
        super().__init__(
            f"No route from junction {source} to junction {destination}.",
            {"source": source, "destination": destination},
        )
        self.source = source
        self.destination = destination
