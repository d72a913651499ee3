"""Junction directory: name lookup and junction records.

These collaborators live outside the routing core and talk to it only in
junction ids. ``JunctionNameIndex`` is an ordered name -> id map that
supports prefix search; junction records live in a hash-indexed
:class:`~roadroute.datastore.DataStore`. ``JunctionDirectory`` combines the
two and resolves user input (an id or a name) to a junction id.
"""

from __future__ import annotations

from bisect import bisect_left, insort
from dataclasses import dataclass
from typing import ClassVar, Dict, List, Optional, Tuple

from roadroute.datastore import DataStore
from roadroute.errors import UnknownJunction
from roadroute.logging import get_logger
from roadroute.types import JunctionID

logger = get_logger(__name__)


@dataclass
class Junction:
    """A named place in the road network.

    Attributes:
        id: Junction id used by the router.
        name: Display name, unique within a directory.
        lat: Latitude in degrees.
        lng: Longitude in degrees.
    """

    key: ClassVar[str] = "id"

    id: int
    name: str
    lat: float = 0.0
    lng: float = 0.0


class JunctionNameIndex:
    """Ordered mapping of junction names to ids."""

    def __init__(self) -> None:
        self._names: List[str] = []
        self._ids: Dict[str, JunctionID] = {}
        self._folded: Dict[str, str] = {}

    def insert(self, name: str, junction_id: JunctionID) -> None:
        """Map ``name`` to ``junction_id``; an existing name is remapped."""
        if name not in self._ids:
            insort(self._names, name)
        self._ids[name] = junction_id
        self._folded[name.casefold()] = name

    def remove(self, name: str) -> None:
        """Drop ``name`` from the index.

        Raises:
            KeyError: If the name is not indexed.
        """
        del self._ids[name]
        self._names.pop(bisect_left(self._names, name))
        if self._folded.get(name.casefold()) == name:
            del self._folded[name.casefold()]

    def search(self, name: str) -> Optional[JunctionID]:
        """Exact, case-sensitive lookup."""
        return self._ids.get(name)

    def search_casefold(self, name: str) -> Optional[JunctionID]:
        """Exact lookup ignoring case."""
        original = self._folded.get(name.casefold())
        if original is None:
            return None
        return self._ids[original]

    def prefix(self, text: str) -> List[Tuple[str, JunctionID]]:
        """All ``(name, id)`` pairs whose name starts with ``text``, in name order."""
        start = bisect_left(self._names, text)
        matches: List[Tuple[str, JunctionID]] = []
        for name in self._names[start:]:
            if not name.startswith(text):
                break
            matches.append((name, self._ids[name]))
        return matches

    def names(self) -> List[str]:
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._ids

    def __len__(self) -> int:
        return len(self._names)


class JunctionDirectory:
    """Name index plus record store for the junctions of one network."""

    def __init__(self) -> None:
        self.names = JunctionNameIndex()
        self.records: DataStore[Junction] = DataStore(Junction)

    def add(self, junction: Junction) -> None:
        """Insert or replace a junction record and index its name.

        Replacing a junction that changed name drops the old name, unless
        the name has since been taken over by another junction.
        """
        previous = self.records.get(junction.id)
        if (
            previous is not None
            and previous.name != junction.name
            and self.names.search(previous.name) == junction.id
        ):
            self.names.remove(previous.name)
        self.records.add(junction)
        self.names.insert(junction.name, junction.id)
        logger.debug(f"Indexed junction {junction.id}: {junction.name}")

    def get(self, junction_id: JunctionID) -> Optional[Junction]:
        return self.records.get(junction_id)

    def find(self, name: str) -> Optional[Junction]:
        """Record for an exact name, falling back to a case-insensitive match."""
        junction_id = self.names.search(name)
        if junction_id is None:
            junction_id = self.names.search_casefold(name)
        if junction_id is None:
            return None
        return self.records.get(junction_id)

    def search(self, prefix: str) -> List[Junction]:
        """Records whose names start with ``prefix``, in name order."""
        return [self.records[junction_id] for _, junction_id in self.names.prefix(prefix)]

    def resolve(self, token: str) -> JunctionID:
        """Turn user input into a junction id.

        Integer-looking input is taken as an id as-is, so ids without a
        directory record still reach the router. Anything else must name a
        known junction.

        Raises:
            UnknownJunction: If ``token`` is not an integer and names no junction.
        """
        text = str(token).strip()
        try:
            return int(text)
        except ValueError:
            pass
        junction = self.find(text)
        if junction is None:
            raise UnknownJunction(text)
        return junction.id

    def label(self, junction_id: JunctionID) -> str:
        """Display name of a junction, or its id when it has no record."""
        junction = self.records.get(junction_id)
        return junction.name if junction is not None else str(junction_id)

    def all(self) -> List[Junction]:
        """Every junction record in id order."""
        return list(self.records)

    def __contains__(self, junction_id: object) -> bool:
        return junction_id in self.records

    def __len__(self) -> int:
        return len(self.records)
