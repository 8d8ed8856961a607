"""Aggregations of views.

Frequently when analysing data is necessary
to compute statistics like the min, max, average, etc...
for groups of rows sharing the same values.

Typically the rows are grouped by a set of fields and
then a reduction is computed over another field for each group.

For example, given the following data::

    city, shop, n_employees
    New York, Shop A, 10
    New York, Shop B, 15
    Los Angeles, Shop C, 8
    Los Angeles, Shop D, 12
    New York, Shop E, 20

We could group by city and compute the sum of the employees
to get::

    city, total_employees
    New York, 45
    Los Angeles, 20

Groups are reported in the order their first row appears
in the view, the result is materialized into a new store.

The most general form of aggregation folds a reducer
function over the values of each group:

>>> from tablepyground.store import Store, dtypes, table
>>> shops = table("shops", city=dtypes.TEXT, n_employees=dtypes.UINT64)
>>> totals = table("totals", total_employees=dtypes.UINT64, biggest=dtypes.UINT64)
>>> view = Store.from_columns([
...     (shops.city, ["New York", "New York", "Los Angeles", "Los Angeles", "New York"]),
...     (shops.n_employees, [10, 15, 8, 12, 20]),
... ]).into_view()
>>> print(aggregate(
...     view, [shops.city], shops.n_employees, totals.total_employees,
...     0, lambda acc, value: acc + value.unwrap_or(0),
... ))
city        | total_employees
----------- | ---------------
New York    | 45
Los Angeles | 20

Common reductions are provided as :class:`Aggregation` classes,
which also allow computing multiple reductions at once:

>>> print(aggregate_with(view, [shops.city], {
...     totals.total_employees: SumAggregation(shops.n_employees),
...     totals.biggest: MaxAggregation(shops.n_employees),
... }))
city        | total_employees | biggest
----------- | --------------- | -------
New York    | 45              | 20
Los Angeles | 20              | 12
"""

import abc
import copy
from typing import Any, Callable, Mapping, Sequence

from ..errors import LabelCollisionError
from ..store.field import DataIndex
from ..store.labels import Label
from ..store.store import Store
from ..store.value import Value
from ..view.frame import FramedField
from ..view.permutation import Permutation
from ..view.view import View
from . import stats
from .unique import group_rows

__all__ = (
    "aggregate",
    "aggregate_with",
    "Aggregation",
    "ReduceAggregation",
    "SumAggregation",
    "CountAggregation",
    "MinAggregation",
    "MaxAggregation",
    "MeanAggregation",
)


class Aggregation(abc.ABC):
    """Base class for aggregations.

    Every aggregation is expected to reduce the values
    of its source field for the rows of a single group.
    """

    def __init__(self, source: Label) -> None:
        self.source = source

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.source.name})"

    __repr__ = __str__

    @abc.abstractmethod
    def compute(self, group: DataIndex) -> Any:
        """Reduce the values of the source field for one group."""
        ...


class ReduceAggregation(Aggregation):
    """Fold a reducer function over the values of each group.

    The reducer receives the accumulator and a value and
    returns the new accumulator, starting from ``initial``.
    A reducer returning ``None`` is expected to have updated
    the accumulator in place, which is then kept.
    """

    def __init__(
        self, source: Label, initial: Any, reducer: Callable[[Any, Value], Any]
    ) -> None:
        super().__init__(source)
        self.initial = initial
        self.reducer = reducer

    def compute(self, group: DataIndex) -> Any:
        # Each group starts from its own copy, reducers might mutate it.
        accumulator = copy.deepcopy(self.initial)
        for value in group:
            result = self.reducer(accumulator, value)
            if result is not None:
                accumulator = result
        return accumulator


class SumAggregation(Aggregation):
    """Compute the sum of an aggregated field."""

    def compute(self, group: DataIndex) -> Any:
        return stats.sum(group)


class CountAggregation(Aggregation):
    """Compute how many values are present in an aggregated field."""

    def compute(self, group: DataIndex) -> Any:
        return stats.count_present(group)


class MinAggregation(Aggregation):
    """Compute the min of an aggregated field."""

    def compute(self, group: DataIndex) -> Any:
        return stats.min(group)


class MaxAggregation(Aggregation):
    """Compute the max of an aggregated field."""

    def compute(self, group: DataIndex) -> Any:
        return stats.max(group)


class MeanAggregation(Aggregation):
    """Compute the mean of an aggregated field."""

    def compute(self, group: DataIndex) -> Any:
        return stats.mean(group)


def _group_field(field: DataIndex, rows: list[int]) -> DataIndex:
    if isinstance(field, FramedField):
        return field.take(rows)
    return FramedField(field, Permutation(rows), len(rows))


def aggregate_with(
    view: View, group_by: Sequence[Label], aggregations: Mapping[Label, Aggregation]
) -> View:
    """Group the rows of ``view`` and compute the aggregations for each group.

    :param view: The view with the data to aggregate.
    :param group_by: The fields identifying the groups.
    :param aggregations: The aggregations to compute in the form of
                         ``{result_label: Aggregation}``.
    """
    for result in aggregations:
        if result in group_by:
            raise LabelCollisionError("used both as key and result", label=result.name)

    key_fields = [view.field(lbl) for lbl in group_by]
    groups = group_rows(key_fields, view.nrows())
    representatives = [rows[0] for rows in groups.values()]

    store = Store.empty()
    for lbl, field in zip(group_by, key_fields):
        store = store.push_field_from_iter(
            lbl, (field.get_datum(row) for row in representatives)
        )
    for result, aggregation in aggregations.items():
        source = view.field(aggregation.source)
        store = store.push_field_from_iter(
            result,
            (aggregation.compute(_group_field(source, rows)) for rows in groups.values()),
        )
    return store.into_view()


def aggregate(
    view: View,
    group_by: Sequence[Label],
    source: Label,
    result: Label,
    initial: Any,
    reducer: Callable[[Any, Value], Any],
) -> View:
    """Fold ``reducer`` over the values of ``source`` for each group.

    :param view: The view with the data to aggregate.
    :param group_by: The fields identifying the groups.
    :param source: The field with the values to reduce.
    :param result: The field that will hold the result of each group.
    :param initial: The starting value of the accumulator.
    :param reducer: Function receiving the accumulator and a value
                    and returning the new accumulator, or ``None``
                    when it updated the accumulator in place.
    """
    return aggregate_with(
        view, group_by, {result: ReduceAggregation(source, initial, reducer)}
    )
