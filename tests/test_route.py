import math

from roadroute.errors import NoRoute, RoadNotFound, UnknownJunction
from roadroute.route import Route
from roadroute.types import Edge


def test_route_properties():
    route = Route(path=(1, 2, 3), total_minutes=20.0, total_km=8.7)
    assert route.reachable
    assert route.source == 1
    assert route.destination == 3
    assert route.hops == 2
    assert list(route) == [1, 2, 3]
    assert len(route) == 3
    assert route.to_dict() == {"path": [1, 2, 3], "totalMinutes": 20.0, "totalKm": 8.7}


def test_trivial_and_unreachable():
    trivial = Route.trivial(4)
    assert trivial.reachable
    assert trivial.hops == 0
    assert trivial.total_minutes == 0

    unreachable = Route.unreachable()
    assert not unreachable.reachable
    assert unreachable.path == ()
    assert math.isinf(unreachable.total_minutes)
    assert unreachable.hops == 0


def test_edge_multiplier():
    assert Edge(to=2, distance=1.0, base_time=8, current_time=20, road=0).multiplier == 2.5
    assert Edge(to=2, distance=1.0, base_time=0, current_time=0, road=0).multiplier == 1.0


def test_error_payloads():
    assert str(UnknownJunction(7)) == "Unknown junction '7'."
    assert UnknownJunction(7).to_dict() == {
        "error": "unknown_junction",
        "message": "Unknown junction '7'.",
        "junction": 7,
    }
    err = RoadNotFound(1, 3)
    assert (err.from_id, err.to_id) == (1, 3)
    assert NoRoute(1, 2).code == "no_route"
