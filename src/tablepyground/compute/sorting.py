"""Sorting of fields.

Sorting never moves the data, it computes the order in which
the rows of a field should be read, which can then be applied
to a whole view as a permutation.

The order follows the total ordering of values, where missing
values come first and ``NaN`` precedes any other float::

    Missing < NaN < -inf < ... < +inf

>>> from tablepyground.store import FieldData, dtypes
>>> field = FieldData.from_values(dtypes.FLOAT64, [2.0, 5.4, None, 1.1, 8.2])
>>> sort_order(field)
[2, 3, 0, 1, 4]

By default sorting is stable, rows with equal values keep
their relative order.

Custom orders can be provided through a comparison function
receiving two values and returning a negative number, zero or
a positive number like the ``cmp`` functions of Python 2 did:

>>> by_distance_from_five = lambda a, b: (
...     abs(a.unwrap_or(0) - 5) - abs(b.unwrap_or(0) - 5)
... )
>>> sort_order_by(field, by_distance_from_five)
[1, 0, 4, 3, 2]
"""

import functools
from typing import Callable

import pyarrow.compute as pc

from ..store.field import DataIndex
from ..store.value import Value

Comparator = Callable[[Value, Value], int]


def sort_order(field: DataIndex, stable: bool = True) -> list[int]:
    """Positions of the rows of ``field`` in sorted order.

    :param field: The field to sort.
    :param stable: If rows with equal values must keep their
                   relative order, when ``False`` their order is unspecified.
    """
    if not stable:
        return sort_order_unstable(field)
    if field.dtype.is_float:
        # Arrow places NaN after the numbers, while NaN has to precede them.
        values = list(field)
        return sorted(range(len(values)), key=lambda idx: values[idx].sort_key())
    # array_sort_indices is stable and nulls can be placed first.
    indices = pc.array_sort_indices(
        field.to_arrow(), order="ascending", null_placement="at_start"
    )
    return indices.to_pylist()


def sort_order_unstable(field: DataIndex) -> list[int]:
    """Positions of the rows of ``field`` in sorted order, ties in any order."""
    values = list(field)
    return sorted(range(len(values)), key=lambda idx: values[idx].sort_key())


def sort_order_by(field: DataIndex, compare: Comparator) -> list[int]:
    """Positions of the rows of ``field`` sorted according to ``compare``.

    The sort is stable with respect to the provided comparator.
    """
    values = list(field)
    key = functools.cmp_to_key(lambda a, b: compare(values[a], values[b]))
    return sorted(range(len(values)), key=key)
