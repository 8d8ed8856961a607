"""Filtering of fields.

A common request is to pick only the rows that satisfy
some condition, like the ``WHERE`` clause of SQL queries.

Filtering a field returns the positions of the rows for which
a predicate is true, in ascending order. Those positions can then
be applied to a whole view as a permutation to restrict its rows.

Predicates are plain functions receiving a :class:`Value`:

>>> from tablepyground.store import FieldData, dtypes
>>> field = FieldData.from_values(dtypes.INT64, [1, 4, None, 5, 2])
>>> filter_order(field, exists)
[0, 1, 3, 4]
>>> filter_order(field, greater_than(3))
[1, 3]
>>> filter_order(field, any_of(is_missing, less_than(2)))
[0, 2]

Comparisons never match missing values, use :func:`is_missing`
or :func:`negate` to explicitly select them.

Predicates can also be evaluated by Arrow over the whole
column at once, by providing a compute function and the
additional arguments it needs after the column itself:

>>> import pyarrow.compute as pc
>>> filter_order(field, ArrowPredicate(pc.greater_equal, 2))
[1, 3, 4]
"""

from typing import Any, Callable, Iterable

import pyarrow as pa
import pyarrow.compute as pc

from ..store.field import DataIndex
from ..store.value import Value

Predicate = Callable[[Value], bool]


class ArrowPredicate:
    """A predicate computed by an Arrow compute function.

    For example to keep the rows greater than 3 this would be used as::

        ArrowPredicate(pyarrow.compute.greater, 3)

    The function receives the column as its first argument
    and must return a boolean array, null results do not match.
    """

    def __init__(self, func: Callable[..., pa.Array], *args: Any) -> None:
        """
        :param func: The compute function.
        :param *args: The arguments for the function after the column.
        """
        self.func = func
        self.args = args

    def __str__(self) -> str:
        func_name = getattr(self.func, "__name__", repr(self.func))
        return f"{func_name}(<field>{''.join(f', {arg!r}' for arg in self.args)})"

    def mask(self, field: DataIndex) -> pa.Array:
        """Evaluate the function on the column, nulls are replaced by false."""
        return pc.fill_null(self.func(field.to_arrow(), *self.args), False)

    def indices(self, field: DataIndex) -> list[int]:
        return pc.indices_nonzero(self.mask(field)).to_pylist()


def filter_order(field: DataIndex, predicate: Predicate | ArrowPredicate) -> list[int]:
    """Positions of the rows of ``field`` that satisfy ``predicate``."""
    if isinstance(predicate, ArrowPredicate):
        return predicate.indices(field)
    return [idx for idx, value in enumerate(field) if predicate(value)]


def exists(value: Value) -> bool:
    """Match the values that are present."""
    return value.exists()


def is_missing(value: Value) -> bool:
    """Match the missing values."""
    return value.is_missing()


def equal_to(target: Any) -> Predicate:
    return lambda value: value.equals(target)


def not_equal_to(target: Any) -> Predicate:
    return lambda value: value.exists() and not value.equals(target)


def less_than(target: Any) -> Predicate:
    return lambda value: value.exists() and value.unwrap() < target


def less_equal(target: Any) -> Predicate:
    return lambda value: value.exists() and value.unwrap() <= target


def greater_than(target: Any) -> Predicate:
    return lambda value: value.exists() and value.unwrap() > target


def greater_equal(target: Any) -> Predicate:
    return lambda value: value.exists() and value.unwrap() >= target


def one_of(targets: Iterable[Any]) -> Predicate:
    """Match the values equal to any of ``targets``."""
    targets = list(targets)
    return lambda value: any(value.equals(target) for target in targets)


def all_of(*predicates: Predicate) -> Predicate:
    """Match the values satisfying every predicate."""
    return lambda value: all(predicate(value) for predicate in predicates)


def any_of(*predicates: Predicate) -> Predicate:
    """Match the values satisfying at least one predicate."""
    return lambda value: any(predicate(value) for predicate in predicates)


def negate(predicate: Predicate) -> Predicate:
    """Match the values that don't satisfy ``predicate``, missing ones included."""
    return lambda value: not predicate(value)
