import pyarrow.compute as pc
import pytest

from tablepyground.compute import filtering
from tablepyground.compute.filtering import ArrowPredicate, filter_order
from tablepyground.store import FieldData, dtypes

REGION = FieldData.from_values(
    dtypes.TEXT, ["North", "South", "East", "West", "North", None, "South"]
)
AMOUNTS = FieldData.from_values(dtypes.FLOAT64, [10.0, None, float("nan"), 3.5, 7.0, 0.0])


def test_filter_exists_omits_missing_rows():
    assert filter_order(REGION, filtering.exists) == [0, 1, 2, 3, 4, 6]


@pytest.mark.parametrize(
    "predicate, expected",
    [
        (filtering.is_missing, [1]),
        (filtering.equal_to(7.0), [4]),
        (filtering.not_equal_to(7.0), [0, 2, 3, 5]),
        (filtering.less_than(7.0), [3, 5]),
        (filtering.less_equal(7.0), [3, 4, 5]),
        (filtering.greater_than(3.5), [0, 4]),
        (filtering.greater_equal(3.5), [0, 3, 4]),
        (filtering.one_of([0.0, 10.0, 99.0]), [0, 5]),
        (filtering.all_of(filtering.exists, filtering.less_than(5)), [3, 5]),
        (filtering.any_of(filtering.is_missing, filtering.equal_to(0.0)), [1, 5]),
        (filtering.negate(filtering.greater_than(5)), [1, 2, 3, 5]),
        (lambda value: value.map_or(False, lambda v: v != v), [2]),
    ],
)
def test_predicates(predicate, expected):
    assert filter_order(AMOUNTS, predicate) == expected


def test_filter_monotonicity():
    p = filtering.greater_than(1.0)
    q = filtering.less_than(8.0)
    first = filter_order(AMOUNTS, p)
    restricted = FieldData.from_values(dtypes.FLOAT64, [AMOUNTS.get(idx) for idx in first])
    second = filter_order(restricted, q)
    assert [first[idx] for idx in second] == filter_order(AMOUNTS, filtering.all_of(p, q))


def test_arrow_predicate():
    predicate = ArrowPredicate(pc.equal, "North")
    assert filter_order(REGION, predicate) == [0, 4]
    assert str(predicate) == "equal(<field>, 'North')"


def test_arrow_predicate_nulls_do_not_match():
    predicate = ArrowPredicate(pc.greater, 5.0)
    assert predicate.mask(AMOUNTS).to_pylist() == [True, False, False, False, True, False]
    assert filter_order(AMOUNTS, predicate) == [0, 4]


def test_filter_empty_field():
    assert filter_order(FieldData(dtypes.INT64), filtering.exists) == []
