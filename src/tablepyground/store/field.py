"""Columns of typed, possibly missing, values.

A :class:`FieldData` is the storage of a single column.
It keeps two parallel buffers: the dense values and a presence
bitmap that tells which of them actually exist, which is the same
layout Arrow uses for its arrays (values buffer + validity bitmap)::

    data: [10, 0, 30]
    mask: [ 1, 0,  1]   -> [Exists(10), Missing, Exists(30)]

Columns only grow, values are appended one at the time
and can't be replaced once stored:

>>> from tablepyground.store import dtypes
>>> field = FieldData.from_values(dtypes.UINT64, [10, None, 30])
>>> len(field)
3
>>> field.get(1), field.get(2), field.get(3)
(Missing, Exists(30), None)
>>> field.to_pylist()
[10, None, 30]
>>> field.to_arrow()
<pyarrow.lib.UInt64Array object at ...>
[
  10,
  null,
  30
]
"""

import abc
from typing import Any, Iterable, Iterator

import pyarrow as pa

from ..errors import IndexOutOfBoundsError, SealedFieldError
from .dtypes import DType
from .value import Exists, Missing, Value


class DataIndex(abc.ABC):
    """Read access to the values of a column.

    This is the interface that all the operations of the engine
    (sorting, filtering, statistics, ...) rely on to read data.

    It is implemented both by :class:`FieldData`, which
    provides access to the stored data, and by the fields of
    frames, which provide access to the same data as it
    looks after being reordered or restricted by a permutation.

    Subclasses only need to provide ``dtype``, ``__len__``
    and ``get``, everything else is built on top of them.
    """

    dtype: DType

    @abc.abstractmethod
    def __len__(self) -> int: ...

    @abc.abstractmethod
    def get(self, index: int) -> Value | None:
        """The value at ``index`` or ``None`` if out of bounds."""
        ...

    def get_datum(self, index: int) -> Value:
        """The value at ``index``.

        Differently from :meth:`get` an :class:`IndexOutOfBoundsError`
        is raised when the index is out of bounds.
        """
        value = self.get(index)
        if value is None:
            raise IndexOutOfBoundsError(
                f"index {index} exceeds data length {len(self)}"
            )
        return value

    def __iter__(self) -> Iterator[Value]:
        for idx in range(len(self)):
            yield self.get(idx)

    def to_pylist(self) -> list[Any]:
        """The values as a python list, with ``None`` for missing values."""
        return [value.to_optional() for value in self]

    def to_arrow(self) -> pa.Array:
        """The values as an Arrow array, with nulls for missing values."""
        return pa.array(self.to_pylist(), type=self.dtype.arrow_type)


class FieldData(DataIndex):
    """The stored data of a single column.

    Starts empty and grows by appending values with :meth:`push`.
    Once the column is stored it is sealed and can no longer grow,
    as views over the store rely on its length.
    """

    def __init__(self, dtype: DType) -> None:
        """
        :param dtype: The semantic type of the values in the column.
        """
        self.dtype = dtype
        self._data: list[Any] = []
        self._mask = bytearray()
        self._arrow: pa.Array | None = None
        self._sealed = False

    @classmethod
    def from_values(cls, dtype: DType, values: Iterable[Any]) -> "FieldData":
        """Build a column from an iterable of values.

        Each item can be a :class:`Value`, ``None`` for a missing value
        or a plain python value.
        """
        field = cls(dtype)
        for value in values:
            field.push(value)
        return field

    @classmethod
    def from_arrow(cls, array: pa.Array | pa.ChunkedArray) -> "FieldData":
        """Build a column out of an Arrow array, nulls become missing values."""
        field = cls(DType.from_arrow(array.type))
        for value in array.to_pylist():
            field.push(value)
        return field

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"FieldData({self.dtype.name}, {self.to_pylist()!r})"

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        """Prevent any further value from being appended."""
        self._sealed = True

    def push(self, value: Any) -> None:
        """Append a value to the column.

        Missing values store the type placeholder with
        their presence bit cleared.
        """
        if self._sealed:
            raise SealedFieldError("values can't be added to a stored field")
        value = Value.of(value)
        if value.exists():
            self._data.append(self.dtype.validate(value.unwrap()))
            self._mask.append(1)
        else:
            self._data.append(self.dtype.default)
            self._mask.append(0)
        self._arrow = None

    def get(self, index: int) -> Value | None:
        if not 0 <= index < len(self._data):
            return None
        if self._mask[index]:
            return Exists(self._data[index])
        return Missing

    def __iter__(self) -> Iterator[Value]:
        for datum, present in zip(self._data, self._mask):
            yield Exists(datum) if present else Missing

    def to_arrow(self) -> pa.Array:
        """Materialize the column as an Arrow array.

        The array is cached until more values are pushed.
        """
        if self._arrow is None:
            self._arrow = super().to_arrow()
        return self._arrow
