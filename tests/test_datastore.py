from dataclasses import dataclass
from typing import ClassVar

import pytest

from roadroute.datastore import DataStore
from roadroute.junctions import Junction


@dataclass
class Camera:
    key: ClassVar[str] = "serial"
    serial: str
    junction: int
    active: bool = True


def test_add_item_1():
    ds = DataStore(Junction)
    data = Junction(42, "Liberty Chowk", 31.5, 74.3)

    assert ds.add(data) is True
    assert ds.df.loc[42, "name"] == "Liberty Chowk"
    assert ds.df.index.name == "id"


def test_add_item_replaces_existing():
    ds = DataStore(Junction)
    ds.add(Junction(1, "Old", 1.0, 2.0))

    assert ds.add(Junction(1, "New", 3.0, 4.0)) is False
    assert len(ds) == 1
    assert ds[1] == Junction(1, "New", 3.0, 4.0)


def test_contains_1():
    ds = DataStore(Junction)
    ds.add(Junction(42, "A"))

    assert 42 in ds
    assert 41 not in ds


def test_get_item_1():
    ds = DataStore(Junction)
    data = Junction(42, "A", 1.5, 2.5)

    ds.add(data)
    assert ds[42] == data
    assert type(ds[42].id) is int
    assert type(ds[42].lat) is float


def test_get_item_missing():
    ds = DataStore(Junction)
    with pytest.raises(KeyError):
        ds[7]  # pylint: disable=pointless-statement
    assert ds.get(7) is None


def test_iter_in_key_order():
    ds = DataStore(Junction)
    data_vector = [Junction(3, "C"), Junction(1, "A"), Junction(2, "B")]

    for data in data_vector:
        ds.add(data)

    assert [j.id for j in ds] == [1, 2, 3]
    assert list(ds)[0] == Junction(1, "A")


def test_to_frame_sorted_copy():
    ds = DataStore(Junction)
    ds.add(Junction(2, "B"))
    ds.add(Junction(1, "A"))

    frame = ds.to_frame()
    assert list(frame.index) == [1, 2]
    frame.loc[1, "name"] = "changed"
    assert ds[1].name == "A"


def test_string_keys_and_bools():
    ds = DataStore(Camera)
    ds.add(Camera("cam-b", 2))
    ds.add(Camera("cam-a", 1, active=False))

    assert [c.serial for c in ds] == ["cam-a", "cam-b"]
    assert ds["cam-a"] == Camera("cam-a", 1, active=False)
