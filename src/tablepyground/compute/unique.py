"""Unique values of fields.

Finding the distinct values of a field walks it in order
and keeps the first occurrence of each value, returning the
positions of those occurrences:

>>> from tablepyground.store import FieldData, dtypes
>>> field = FieldData.from_values(dtypes.FLOAT64, [1.0, None, 1.0, float("nan"), None, float("nan")])
>>> unique_indices(field)
[0, 1, 3]
>>> unique_values(field)
[Exists(1.0), Missing, Exists(nan)]

For the purpose of uniqueness missing values are all equal to
each other, and so are ``NaN`` values.

The same applies to combinations of multiple fields, where
the key of each row is the tuple of its values:

>>> other = FieldData.from_values(dtypes.TEXT, ["a", "b", "b", "a", "b", "b"])
>>> composite_unique_indices([field, other])
[0, 1, 2, 3, 5]
"""

from typing import Sequence

from ..errors import DimensionMismatchError
from ..store.field import DataIndex
from ..store.value import Value


def unique_indices(field: DataIndex) -> list[int]:
    """Positions of the first occurrence of each distinct value."""
    seen: set[Value] = set()
    indices = []
    for idx, value in enumerate(field):
        if value not in seen:
            seen.add(value)
            indices.append(idx)
    return indices


def unique_values(field: DataIndex) -> list[Value]:
    """The distinct values of ``field`` in order of first occurrence."""
    return [field.get_datum(idx) for idx in unique_indices(field)]


def group_rows(
    fields: Sequence[DataIndex], nrows: int
) -> dict[tuple[Value, ...], list[int]]:
    """Group the positions of the rows by the values they have in ``fields``.

    Groups are returned in order of first occurrence, and the positions
    within each group are ascending. Without any field all the rows
    belong to the same group.

    :param fields: The fields providing the key of each row.
    :param nrows: The number of rows, all fields must have this length.
    """
    for field in fields:
        if len(field) != nrows:
            raise DimensionMismatchError(
                f"field of length {len(field)} where {nrows} rows were expected"
            )
    if not fields:
        return {(): list(range(nrows))} if nrows else {}

    groups: dict[tuple[Value, ...], list[int]] = {}
    for idx, key in enumerate(zip(*fields)):
        groups.setdefault(key, []).append(idx)
    return groups


def composite_unique_indices(fields: Sequence[DataIndex]) -> list[int]:
    """Positions of the first occurrence of each distinct combination of values."""
    if not fields:
        return []
    groups = group_rows(fields, len(fields[0]))
    return [rows[0] for rows in groups.values()]
