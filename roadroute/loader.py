"""YAML/JSON loader + schema validation for road network files.

Provides a single entrypoint to parse a network document, validate it against
the packaged JSON schema, check cross references, and build a ready
:class:`~roadroute.router.Router` and
:class:`~roadroute.junctions.JunctionDirectory` from it.

Document shape (JSON is accepted too, since it is a subset of YAML)::

    name: lahore
    junctions:
      - {id: 1, name: Liberty Chowk, lat: 31.5096, lng: 74.3442}
    roads:
      - {from: 1, to: 2, distance: 3.5, base_time: 8}
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import jsonschema
import yaml

from roadroute.junctions import Junction, JunctionDirectory
from roadroute.logging import get_logger
from roadroute.router import Router

logger = get_logger(__name__)

_RECOGNIZED_KEYS = {"name", "junctions", "roads"}


@dataclass(frozen=True)
class RoadSpec:
    """One road entry of a network document."""

    from_id: int
    to_id: int
    distance: float
    base_time: float


@dataclass
class NetworkData:
    """Validated contents of a network document.

    Attributes:
        name: Optional network name.
        junctions: Junction records in document order.
        roads: Road entries in document order.
    """

    name: Optional[str] = None
    junctions: List[Junction] = field(default_factory=list)
    roads: List[RoadSpec] = field(default_factory=list)

    def build(self) -> Tuple[Router, JunctionDirectory]:
        """Create a router holding every road and a directory of every junction."""
        directory = JunctionDirectory()
        for junction in self.junctions:
            directory.add(junction)

        router = Router()
        router.add_roads(
            [(r.from_id, r.to_id, r.distance, r.base_time) for r in self.roads]
        )
        logger.info(
            f"Loaded network '{self.name or 'unnamed'}': "
            f"{len(self.junctions)} junctions, {len(self.roads)} roads"
        )
        return router, directory


def _load_schema() -> Dict[str, Any]:
    try:
        with (
            resources.files("roadroute.schemas")
            .joinpath("network.json")
            .open("r", encoding="utf-8")
        ) as f:
            return json.load(f)
    except OSError as exc:  # pragma: no cover
        raise RuntimeError(
            "Failed to locate packaged network schema 'roadroute/schemas/network.json'."
        ) from exc


def load_network_yaml(yaml_str: str) -> NetworkData:
    """Parse, validate and cross-check a network document.

    Raises:
        ValueError: If the document is not a mapping, has unknown top-level
            keys, repeats a junction id or name, or has a road referencing an
            undeclared junction.
        jsonschema.ValidationError: If the document does not match the schema.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided network document must be a mapping at top-level.")

    extra = set(data.keys()) - _RECOGNIZED_KEYS
    if extra:
        raise ValueError(
            f"Unrecognized top-level key(s) in network: {', '.join(sorted(map(str, extra)))}. "
            f"Allowed keys are {sorted(_RECOGNIZED_KEYS)}"
        )

    jsonschema.validate(data, _load_schema())

    junctions: List[Junction] = []
    seen_ids: Dict[int, str] = {}
    seen_names = set()
    for entry in data.get("junctions", []):
        junction = Junction(
            id=entry["id"],
            name=entry["name"],
            lat=float(entry.get("lat", 0.0)),
            lng=float(entry.get("lng", 0.0)),
        )
        if junction.id in seen_ids:
            raise ValueError(
                f"Duplicate junction id {junction.id} "
                f"('{seen_ids[junction.id]}' and '{junction.name}')"
            )
        if junction.name in seen_names:
            raise ValueError(f"Duplicate junction name '{junction.name}'")
        seen_ids[junction.id] = junction.name
        seen_names.add(junction.name)
        junctions.append(junction)

    roads: List[RoadSpec] = []
    for idx, entry in enumerate(data.get("roads", [])):
        road = RoadSpec(
            from_id=entry["from"],
            to_id=entry["to"],
            distance=float(entry["distance"]),
            base_time=float(entry["base_time"]),
        )
        if junctions:
            for end in (road.from_id, road.to_id):
                if end not in seen_ids:
                    raise ValueError(
                        f"Road #{idx} references undeclared junction {end}"
                    )
        roads.append(road)

    return NetworkData(name=data.get("name"), junctions=junctions, roads=roads)


def load_network(path: Union[str, Path]) -> NetworkData:
    """Read and validate a network file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """
    path = Path(path)
    logger.debug(f"Reading network from: {path}")
    return load_network_yaml(path.read_text(encoding="utf-8"))


def default_network_path() -> Path:
    """Path of the bundled Lahore sample network."""
    return Path(str(resources.files("roadroute.data").joinpath("lahore.yaml")))
