import pytest

from tablepyground.compute.aggregate import (
    CountAggregation,
    MaxAggregation,
    MeanAggregation,
    MinAggregation,
    ReduceAggregation,
    SumAggregation,
    aggregate,
    aggregate_with,
)
from tablepyground.errors import LabelCollisionError
from tablepyground.store import Store, Tablespace, dtypes

SPACE = Tablespace()
SHOPS = SPACE.table(
    "shops", city=dtypes.TEXT, shop=dtypes.TEXT, n_employees=dtypes.UINT64
)
RESULTS = SPACE.table(
    "results",
    total=dtypes.UINT64,
    count=dtypes.UINT64,
    smallest=dtypes.UINT64,
    biggest=dtypes.UINT64,
    average=dtypes.FLOAT64,
    names=dtypes.TEXT,
)


@pytest.fixture
def shops():
    return Store.from_columns(
        [
            (SHOPS.city, ["New York", "New York", "Los Angeles", "Los Angeles", "New York", None]),
            (SHOPS.shop, ["Shop A", "Shop B", "Shop C", "Shop D", "Shop E", "Shop F"]),
            (SHOPS.n_employees, [10, 15, 8, None, 20, 3]),
        ]
    ).into_view()


def test_aggregate_with_reducer(shops):
    result = aggregate(
        shops,
        [SHOPS.city],
        SHOPS.n_employees,
        RESULTS.total,
        0,
        lambda acc, value: acc + value.unwrap_or(0),
    )
    assert result.fieldnames() == ["city", "total"]
    assert result.field(SHOPS.city).to_pylist() == ["New York", "Los Angeles", None]
    assert result.field(RESULTS.total).to_pylist() == [45, 8, 3]


def test_reducer_initial_value_is_not_shared(shops):
    def collect(acc, value):
        acc.append(value.unwrap())
        return acc

    aggregation = ReduceAggregation(SHOPS.shop, [], collect)
    result = aggregate_with(shops, [SHOPS.city], {RESULTS.names: _Joined(aggregation)})
    assert result.field(RESULTS.names).to_pylist() == [
        "Shop A,Shop B,Shop E",
        "Shop C,Shop D",
        "Shop F",
    ]
    assert aggregation.initial == []


def test_reducer_updating_accumulator_in_place(shops):
    def collect(acc, value):
        acc.append(value.unwrap())

    aggregation = _Joined(ReduceAggregation(SHOPS.shop, [], collect))
    result = aggregate_with(shops, [SHOPS.city], {RESULTS.names: aggregation})
    assert result.field(RESULTS.names).to_pylist() == [
        "Shop A,Shop B,Shop E",
        "Shop C,Shop D",
        "Shop F",
    ]


class _Joined(ReduceAggregation):
    def __init__(self, inner):
        super().__init__(inner.source, inner.initial, inner.reducer)

    def compute(self, group):
        return ",".join(super().compute(group))


def test_aggregate_with_builtin_aggregations(shops):
    result = shops.aggregate_with(
        [SHOPS.city],
        {
            RESULTS.total: SumAggregation(SHOPS.n_employees),
            RESULTS.count: CountAggregation(SHOPS.n_employees),
            RESULTS.smallest: MinAggregation(SHOPS.n_employees),
            RESULTS.biggest: MaxAggregation(SHOPS.n_employees),
            RESULTS.average: MeanAggregation(SHOPS.n_employees),
        },
    )
    assert result.fieldnames() == ["city", "total", "count", "smallest", "biggest", "average"]
    assert result.field(RESULTS.total).to_pylist() == [45, 8, 3]
    assert result.field(RESULTS.count).to_pylist() == [3, 1, 1]
    assert result.field(RESULTS.smallest).to_pylist() == [10, 8, 3]
    assert result.field(RESULTS.biggest).to_pylist() == [20, 8, 3]
    assert result.field(RESULTS.average).to_pylist() == [15.0, 8.0, 3.0]


def test_aggregate_groups_cover_all_rows(shops):
    result = shops.aggregate(
        [SHOPS.city], SHOPS.shop, RESULTS.count, 0, lambda acc, _: acc + 1
    )
    assert sum(result.field(RESULTS.count).to_pylist()) == shops.nrows()
    assert result.nrows() == len(shops.unique_values(SHOPS.city))


def test_aggregate_without_keys(shops):
    result = aggregate_with(shops, [], {RESULTS.total: SumAggregation(SHOPS.n_employees)})
    assert result.fieldnames() == ["total"]
    assert result.field(RESULTS.total).to_pylist() == [56]


def test_aggregate_multiple_keys(shops):
    result = aggregate_with(
        shops.update_permutation([4, 0, 1]),
        [SHOPS.city, SHOPS.shop],
        {RESULTS.count: CountAggregation(SHOPS.n_employees)},
    )
    assert result.field(SHOPS.shop).to_pylist() == ["Shop E", "Shop A", "Shop B"]
    assert result.field(RESULTS.count).to_pylist() == [1, 1, 1]


def test_aggregate_result_collides_with_key(shops):
    with pytest.raises(LabelCollisionError):
        aggregate_with(shops, [SHOPS.city], {SHOPS.city: CountAggregation(SHOPS.shop)})


def test_aggregation_description():
    assert str(SumAggregation(SHOPS.n_employees)) == "SumAggregation(n_employees)"
