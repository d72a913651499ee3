"""Shared fixtures: small hand-built networks and the bundled sample network."""

from __future__ import annotations

import pytest

from roadroute.graph import RoadGraph
from roadroute.loader import default_network_path, load_network
from roadroute.router import Router


@pytest.fixture
def line_graph():
    """1 <-> 2 <-> 3 with base times 8 and 12."""
    g = RoadGraph()
    g.add_road(1, 2, 3.5, 8)
    g.add_road(2, 3, 5.2, 12)
    return g


@pytest.fixture
def square_graph():
    """Two routes 1->3: via 2 (cost 2) and via 4 (cost 4)."""
    g = RoadGraph()
    g.add_road(1, 2, 1.0, 1)
    g.add_road(2, 3, 1.0, 1)
    g.add_road(1, 4, 1.0, 2)
    g.add_road(4, 3, 1.0, 2)
    return g


@pytest.fixture
def line_router():
    router = Router()
    router.add_road(1, 2, 3.5, 8)
    router.add_road(2, 3, 5.2, 12)
    return router


@pytest.fixture
def split_router():
    """Two components: {1, 2} and {3, 4}."""
    router = Router()
    router.add_road(1, 2, 1.0, 5)
    router.add_road(3, 4, 1.0, 5)
    return router


@pytest.fixture
def lahore():
    """Fresh (router, directory) pair for the bundled Lahore network."""
    return load_network(default_network_path()).build()
