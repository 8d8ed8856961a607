import math

import pytest

from tablepyground.compute import stats
from tablepyground.compute.stats import FieldStats, ViewStats
from tablepyground.errors import LabelNotFoundError, TypeMismatchError
from tablepyground.store import FieldData, Store, Tablespace, dtypes

HOURS = FieldData.from_values(dtypes.FLOAT64, [47.3, 54.1, None, 98.3, 12.2])
FLAGS = FieldData.from_values(dtypes.BOOL, [True, None, False, True])
NAMES = FieldData.from_values(dtypes.TEXT, ["Sally", None, "Bob", "Louise"])
COUNTS = FieldData.from_values(dtypes.INT64, [4, -2, 10])


def test_counts():
    assert stats.count_present(HOURS) == 4
    assert stats.count_missing(HOURS) == 1
    assert stats.count_present(NAMES) == 3
    assert stats.count_missing(NAMES) == 1


def test_sum_and_mean():
    assert stats.sum(HOURS) == pytest.approx(211.9)
    assert stats.mean(HOURS) == pytest.approx(211.9 / 4)
    assert stats.sum(COUNTS) == 12
    assert isinstance(stats.sum(COUNTS), int)
    assert stats.mean(COUNTS) == 4.0


def test_boolean_sum_counts_true_values():
    assert stats.sum(FLAGS) == 2
    assert stats.mean(FLAGS) == pytest.approx(2 / 3)


def test_variance():
    values = [4, -2, 10]
    mean = sum(values) / 3
    expected_var = sum((v - mean) ** 2 for v in values) / 2
    expected_varp = sum((v - mean) ** 2 for v in values) / 3
    assert stats.sum_sq(COUNTS) == 120.0
    assert stats.var(COUNTS) == pytest.approx(expected_var)
    assert stats.varp(COUNTS) == pytest.approx(expected_varp)
    assert stats.stdev(COUNTS) == pytest.approx(math.sqrt(expected_var))
    assert stats.stdevp(COUNTS) == pytest.approx(math.sqrt(expected_varp))


def test_variance_of_single_value():
    single = FieldData.from_values(dtypes.FLOAT64, [3.0, None])
    assert math.isnan(stats.var(single))
    assert stats.varp(single) == 0.0


def test_bounds():
    assert stats.min(HOURS) == 12.2
    assert stats.max(HOURS) == 98.3
    assert stats.min(COUNTS) == -2
    assert stats.max(FLAGS) is True
    # text compares by length
    assert stats.min(NAMES) == "Bob"
    assert stats.max(NAMES) == "Louise"


def test_float_bounds_with_nan():
    field = FieldData.from_values(dtypes.FLOAT64, [3.0, float("nan"), None, 1.5])
    assert math.isnan(stats.min(field))
    assert stats.max(field) == 3.0
    only_nan = FieldData.from_values(dtypes.FLOAT64, [float("nan"), None])
    assert math.isnan(stats.max(only_nan))


def test_text_bounds_pick_first_of_same_length():
    names = FieldData.from_values(dtypes.TEXT, ["Cara", None, "Anne", "Bob", "Jim"])
    assert stats.min(names) == "Bob"
    assert stats.max(names) == "Cara"


@pytest.mark.parametrize("dtype", [dtypes.FLOAT64, dtypes.UINT32, dtypes.TEXT])
def test_bounds_without_values(dtype):
    field = FieldData.from_values(dtype, [None, None])
    assert stats.min(field) is None
    assert stats.max(field) is None


def test_empty_present_column():
    field = FieldData.from_values(dtypes.INT32, [None, None])
    assert stats.sum(field) == 0
    assert stats.mean(field) == 0
    assert stats.var(field) == 0
    assert stats.stdev(field) == 0
    floats = FieldData.from_values(dtypes.FLOAT64, [None])
    assert stats.sum(floats) == 0.0
    assert isinstance(stats.sum(floats), float)


@pytest.mark.parametrize(
    "reducer", [stats.sum, stats.mean, stats.sum_sq, stats.var, stats.varp, stats.stdev]
)
def test_numeric_reducers_fail_on_text(reducer):
    with pytest.raises(TypeMismatchError) as err:
        reducer(NAMES)
    assert err.value.label is None
    assert str(err.value).endswith("is not defined for text fields")


def test_field_stats():
    assert FieldStats.of(COUNTS) == FieldStats(
        count=3,
        missing=0,
        min=-2,
        max=10,
        sum=12,
        mean=4.0,
        stdev=pytest.approx(6.0),
    )
    text_stats = FieldStats.of(NAMES)
    assert (text_stats.count, text_stats.missing) == (3, 1)
    assert text_stats.sum is None
    assert text_stats.mean is None
    assert text_stats.stdev is None


def test_view_stats():
    space = Tablespace()
    emp = space.table("emp", EmpName=dtypes.TEXT, Hours=dtypes.FLOAT64)
    view = Store.from_columns([(emp.EmpName, NAMES), (emp.Hours, [1.0, 2.0, 3.0, None])]).into_view()
    view_stats = view.view_stats()
    assert len(view_stats) == 2
    assert view_stats["Hours"].sum == 6.0
    assert view.field_stats(emp.Hours) == view_stats["Hours"]
    with pytest.raises(LabelNotFoundError):
        view_stats["Unknown"]

    stats_view = view_stats.to_view()
    assert stats_view.fieldnames() == [
        "Field",
        "Type",
        "Count",
        "Missing",
        "Min",
        "Max",
        "Sum",
        "Mean",
        "StDev",
    ]
    assert stats_view.field(stats_view.label("Sum")).to_pylist() == [None, 6.0]
    text = str(view_stats)
    assert text.splitlines()[0].startswith("Field   | Type")
    assert text.endswith("Min and Max of text fields compare the length of the strings.")
