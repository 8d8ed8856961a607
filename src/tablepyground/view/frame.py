"""Frames: a store seen through a permutation.

A :class:`Frame` pairs a :class:`Store` with the :class:`Permutation`
of its rows. Reordering or restricting rows only replaces the
permutation, the store itself is shared and never copied.

>>> from tablepyground.store import Store, dtypes, table
>>> t = table("t", Value=dtypes.INT64)
>>> frame = Frame(Store.from_columns([(t.Value, [10, 20, 30])]))
>>> frame = frame.update_permutation([2, 0])
>>> frame.nrows()
2
>>> frame.field(t.Value).to_pylist()
[30, 10]
"""

from typing import Iterable, Iterator

import pyarrow as pa

from ..errors import DimensionMismatchError, IndexOutOfBoundsError
from ..store.field import DataIndex, FieldData
from ..store.labels import Label
from ..store.store import Store
from ..store.value import Missing, Value
from .permutation import Permutation


class FramedField(DataIndex):
    """A column read through a permutation.

    Reading the logical position ``i`` reads the underlying
    column at the position the permutation maps ``i`` to.
    Positions mapped to ``None`` read as missing.
    """

    def __init__(self, field: FieldData, permutation: Permutation, nrows: int) -> None:
        self.field = field
        self.permutation = permutation
        self.dtype = field.dtype
        self._nrows = nrows

    def __len__(self) -> int:
        return self._nrows

    def __repr__(self) -> str:
        return f"FramedField({self.dtype.name}, {self.to_pylist()!r})"

    def get(self, index: int) -> Value | None:
        if not 0 <= index < self._nrows:
            return None
        source = self.permutation.map_index(index)
        if source is None:
            return Missing
        return self.field.get(source)

    def __iter__(self) -> Iterator[Value]:
        if self.permutation.is_identity:
            yield from self.field
            return
        for source in self.permutation.indices:
            yield Missing if source is None else self.field.get(source)

    def take(self, indices: Iterable[int]) -> "FramedField":
        """The same column restricted to the given logical positions."""
        permutation = self.permutation.update(indices)
        return FramedField(self.field, permutation, permutation.length)

    def to_arrow(self) -> pa.Array:
        """Materialize the column in the order of the permutation.

        Relies on Arrow ``take``, where null indices produce null values.
        """
        if self.permutation.is_identity:
            return self.field.to_arrow()
        indices = pa.array(self.permutation.indices, type=pa.int64())
        return self.field.to_arrow().take(indices)


class Frame:
    """A store together with the permutation of its rows."""

    def __init__(self, store: Store, permutation: Permutation | None = None) -> None:
        """
        :param store: The store providing the data, all its fields
                      must have the same length.
        :param permutation: The order of the rows, identity if omitted.
        """
        if not store.is_uniform():
            raise DimensionMismatchError(
                f"fields of different lengths in store {store.fieldnames()}"
            )
        self.store = store
        self.permutation = permutation if permutation is not None else Permutation()
        if not self.permutation.is_identity:
            self._check_indices(self.permutation.indices, store.nrows())

    def __repr__(self) -> str:
        return f"Frame({self.store!r}, {self.permutation!r})"

    @staticmethod
    def _check_indices(indices: Iterable[int | None], nrows: int) -> None:
        for idx in indices:
            if idx is not None and not 0 <= idx < nrows:
                raise IndexOutOfBoundsError(f"index {idx} exceeds data length {nrows}")

    def nrows(self) -> int:
        length = self.permutation.length
        return self.store.nrows() if length is None else length

    def update_permutation(self, indices: Iterable[int | None]) -> "Frame":
        """A new frame over the same store with the permutation updated."""
        indices = list(indices)
        self._check_indices(indices, self.nrows())
        return Frame(self.store, self.permutation.update(indices))

    def field(self, lbl: Label) -> FramedField:
        """The column of the store for ``lbl``, as seen through the permutation."""
        return FramedField(self.store.select_field(lbl), self.permutation, self.nrows())

    def has_same_store(self, other: "Frame") -> bool:
        return self.store is other.store
