"""Statistics of fields.

Frequently when analysing data is necessary to compute
statistics like the min, max, average, etc... of a field.
They are computed by the Arrow compute kernels over the
column materialized as an Arrow array.

All statistics ignore missing values:

>>> from tablepyground.store import FieldData, dtypes
>>> field = FieldData.from_values(dtypes.FLOAT64, [2.0, None, 4.0, 6.0])
>>> count_present(field), count_missing(field)
(3, 1)
>>> sum(field), mean(field)
(12.0, 4.0)
>>> var(field), varp(field)
(4.0, 2.666...)
>>> min(field), max(field)
(2.0, 6.0)

Numeric statistics are defined for numbers and booleans,
where the ``True`` values are counted. Text fields only
support counting and bounds, which compare the length of
the strings:

>>> names = FieldData.from_values(dtypes.TEXT, ["Sally", "Bob", "Louise"])
>>> min(names), max(names)
('Bob', 'Louise')
>>> sum(names)
Traceback (most recent call last):
    ...
tablepyground.errors.TypeMismatchError: sum is not defined for text fields

Differently from Arrow, a ``NaN`` is the smallest float
and only the biggest one when nothing else is present:

>>> with_nan = FieldData.from_values(dtypes.FLOAT64, [1.0, float("nan"), 3.0])
>>> min(with_nan), max(with_nan)
(nan, 3.0)

When there are no values at all, ``sum`` returns the zero
of the type, ``mean`` and the variances return ``0`` while
bounds return ``None``.
"""

import dataclasses
import math
from typing import TYPE_CHECKING, Any, Callable

import pyarrow as pa
import pyarrow.compute as pc

from ..errors import LabelNotFoundError, TypeMismatchError
from ..store import dtypes
from ..store.field import DataIndex
from ..store.labels import Tablespace
from ..store.store import Store

if TYPE_CHECKING:
    from ..view.view import View


def _require_summable(field: DataIndex, operation: str) -> None:
    if not field.dtype.supports_sum:
        raise TypeMismatchError(
            f"{operation} is not defined for {field.dtype.name} fields"
        )


def _numeric_array(field: DataIndex) -> pa.Array:
    """The column as an Arrow array that can be summed, booleans count as 0 or 1."""
    array = field.to_arrow()
    if field.dtype.is_bool:
        return pc.cast(array, pa.int64())
    return array


def count_present(field: DataIndex) -> int:
    return pc.count(field.to_arrow(), mode="only_valid").as_py()


def count_missing(field: DataIndex) -> int:
    return pc.count(field.to_arrow(), mode="only_null").as_py()


def sum(field: DataIndex) -> int | float:
    """Sum of the present values, booleans count the ``True`` values."""
    _require_summable(field, "sum")
    return pc.sum(_numeric_array(field), min_count=0).as_py()


def mean(field: DataIndex) -> float:
    _require_summable(field, "mean")
    if not count_present(field):
        return 0.0
    return pc.mean(_numeric_array(field)).as_py()


def sum_sq(field: DataIndex) -> float:
    """Sum of the squares of the present values."""
    _require_summable(field, "sum of squares")
    values = pc.cast(_numeric_array(field), pa.float64())
    return pc.sum(pc.multiply(values, values), min_count=0).as_py()


def _dispersion(
    field: DataIndex, kernel: Callable[..., pa.Scalar], ddof: int, operation: str
) -> float:
    _require_summable(field, operation)
    count = count_present(field)
    if not count:
        return 0.0
    if count <= ddof:
        return math.nan
    return kernel(_numeric_array(field), ddof=ddof).as_py()


def var(field: DataIndex) -> float:
    """Sample variance, ``NaN`` when a single value is present."""
    return _dispersion(field, pc.variance, 1, "variance")


def varp(field: DataIndex) -> float:
    """Population variance."""
    return _dispersion(field, pc.variance, 0, "variance")


def stdev(field: DataIndex) -> float:
    """Sample standard deviation."""
    return _dispersion(field, pc.stddev, 1, "standard deviation")


def stdevp(field: DataIndex) -> float:
    """Population standard deviation."""
    return _dispersion(field, pc.stddev, 0, "standard deviation")


def _bound(field: DataIndex, which: str) -> Any:
    if not count_present(field):
        return None
    array = field.to_arrow()
    if field.dtype.is_text:
        lengths = pc.utf8_length(array)
        extreme = pc.min_max(lengths)[which]
        return array[pc.index(lengths, extreme).as_py()].as_py()
    if field.dtype.is_float:
        # NaN sorts before any number, Arrow would skip it.
        nans = pc.is_nan(array)
        if pc.any(nans).as_py():
            if which == "min":
                return math.nan
            array = pc.filter(array, pc.invert(nans))
            if not pc.count(array, mode="only_valid").as_py():
                return math.nan
    return pc.min_max(array)[which].as_py()


def min(field: DataIndex) -> Any:
    """The smallest present value, ``None`` if no value is present."""
    return _bound(field, "min")


def max(field: DataIndex) -> Any:
    """The biggest present value, ``None`` if no value is present."""
    return _bound(field, "max")


@dataclasses.dataclass(frozen=True)
class FieldStats:
    """Summary statistics of a field.

    Numeric statistics are ``None`` for fields that don't support them.
    """

    count: int
    missing: int
    min: Any
    max: Any
    sum: int | float | None
    mean: float | None
    stdev: float | None

    @classmethod
    def of(cls, field: DataIndex) -> "FieldStats":
        summable = field.dtype.supports_sum
        return cls(
            count=count_present(field),
            missing=count_missing(field),
            min=min(field),
            max=max(field),
            sum=sum(field) if summable else None,
            mean=mean(field) if summable else None,
            stdev=stdev(field) if summable else None,
        )


_STATS = Tablespace().table(
    "stats",
    Field=dtypes.TEXT,
    Type=dtypes.TEXT,
    Count=dtypes.UINT64,
    Missing=dtypes.UINT64,
    Min=dtypes.TEXT,
    Max=dtypes.TEXT,
    Sum=dtypes.FLOAT64,
    Mean=dtypes.FLOAT64,
    StDev=dtypes.FLOAT64,
)


class ViewStats:
    """Summary statistics of every field of a view.

    >>> from tablepyground.store import Store, dtypes, table
    >>> emp = table("emp", EmpId=dtypes.UINT64, EmpName=dtypes.TEXT)
    >>> view = Store.from_columns([
    ...     (emp.EmpId, [0, 2, None]),
    ...     (emp.EmpName, ["Sally", "Jamie", "Bob"]),
    ... ]).into_view()
    >>> print(ViewStats(view))
    Field   | Type   | Count | Missing | Min | Max   | Sum  | Mean | StDev
    ------- | ------ | ----- | ------- | --- | ----- | ---- | ---- | -----
    EmpId   | uint64 | 2     | 1       | 0   | 2     | 2.00 | 1.00 | 1.41
    EmpName | text   | 3     | 0       | Bob | Sally | NA   | NA   | NA
    Min and Max of text fields compare the length of the strings.
    """

    def __init__(self, view: "View") -> None:
        self.names = view.fieldnames()
        self.types = view.field_types()
        self.stats = [FieldStats.of(view.field(lbl)) for lbl in view.labels()]

    def __getitem__(self, name: str) -> FieldStats:
        for fieldname, stats in zip(self.names, self.stats):
            if fieldname == name:
                return stats
        raise LabelNotFoundError("no statistics for field", label=name)

    def __len__(self) -> int:
        return len(self.stats)

    def to_view(self) -> "View":
        """The statistics as a view with one row per field."""

        def text_or_missing(value: Any) -> str | None:
            return None if value is None else str(value)

        def float_or_missing(value: Any) -> float | None:
            return None if value is None else float(value)

        store = Store.from_columns(
            [
                (_STATS.Field, self.names),
                (_STATS.Type, [dtype.name for dtype in self.types]),
                (_STATS.Count, [stats.count for stats in self.stats]),
                (_STATS.Missing, [stats.missing for stats in self.stats]),
                (_STATS.Min, [text_or_missing(stats.min) for stats in self.stats]),
                (_STATS.Max, [text_or_missing(stats.max) for stats in self.stats]),
                (_STATS.Sum, [float_or_missing(stats.sum) for stats in self.stats]),
                (_STATS.Mean, [stats.mean for stats in self.stats]),
                (_STATS.StDev, [stats.stdev for stats in self.stats]),
            ]
        )
        return store.into_view()

    def __str__(self) -> str:
        text = str(self.to_view())
        if any(dtype.is_text for dtype in self.types):
            text += "\nMin and Max of text fields compare the length of the strings."
        return text
