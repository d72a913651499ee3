from __future__ import annotations

from dataclasses import asdict, fields
from typing import Any, ClassVar, Dict, Generic, Iterator, Optional, Protocol, Type, TypeVar

import pandas as pd
from dacite import Config, from_dict

# Values read back out of a DataFrame may be numpy scalars; coerce them to the
# builtin types the record dataclasses declare.
_DACITE_CONFIG = Config(type_hooks={int: int, float: float, str: str})


class DataStoreRecord(Protocol):
    __dataclass_fields__: ClassVar[Dict[str, Any]]
    key: ClassVar[str]


R = TypeVar("R", bound=DataStoreRecord)


class DataStore(Generic[R]):
    """Hash-indexed store of dataclass records backed by a pandas DataFrame.

    The frame is indexed by the record field named in ``record_type.key``.
    Adding a record whose key already exists replaces the stored row.
    """

    def __init__(self, record_type: Type[R]) -> None:
        self._record_type: Type[R] = record_type
        self._columns = [field.name for field in fields(record_type)]
        self.df: pd.DataFrame = pd.DataFrame(columns=self._columns)
        self.df.index.name = record_type.key

    def __iter__(self) -> Iterator[R]:
        """
        Iterate over stored records in key order.
        """
        for index in sorted(self.df.index):
            yield self[index]

    def __contains__(self, index: Any) -> bool:
        """
        True if dataframe contains given index and False otherwise.
        """
        return index in self.df.index

    def __len__(self) -> int:
        return len(self.df.index)

    def __getitem__(self, index: Any) -> R:
        row = self.df.loc[index]
        data = {column: _to_builtin(row[column]) for column in self._columns}
        return from_dict(data_class=self._record_type, data=data, config=_DACITE_CONFIG)

    def get(self, index: Any) -> Optional[R]:
        if index not in self:
            return None
        return self[index]

    def add(self, record: R) -> bool:
        """Insert or replace a record.

        Returns:
            True if the record was new, False if it replaced an existing one.
        """
        row = asdict(record)  # type: ignore[call-overload]
        index = row[self._record_type.key]
        is_new = index not in self
        self.df.loc[index] = [row[column] for column in self._columns]
        return is_new

    def to_frame(self) -> pd.DataFrame:
        """Copy of the underlying frame sorted by key."""
        return self.df.sort_index().copy()


def _to_builtin(value: Any) -> Any:
    item = getattr(value, "item", None)
    if callable(item):
        return item()
    return value
