import math

import pyarrow as pa
import pytest

from tablepyground.compute.elementwise import apply_scalar, combine, map_field
from tablepyground.errors import (
    DimensionMismatchError,
    InvalidArgumentError,
    TypeMismatchError,
)
from tablepyground.store import FieldData, dtypes

HOURS = FieldData.from_values(dtypes.FLOAT64, [8.0, None, 6.5, 4.0])
EXTRA = FieldData.from_values(dtypes.FLOAT64, [1.0, 2.0, 0.5, None])


@pytest.mark.parametrize(
    "op, expected",
    [
        ("+", [9.0, None, 7.0, None]),
        ("-", [7.0, None, 6.0, None]),
        ("*", [8.0, None, 3.25, None]),
        ("/", [8.0, None, 13.0, None]),
    ],
)
def test_combine(op, expected):
    result = combine(HOURS, EXTRA, op)
    assert result.dtype is dtypes.FLOAT64
    assert result.to_pylist() == expected


def test_apply_scalar():
    assert apply_scalar(HOURS, "-", 4).to_pylist() == [4.0, None, 2.5, 0.0]
    counts = FieldData.from_values(dtypes.UINT32, [1, 2, None])
    result = apply_scalar(counts, "*", 3)
    assert result.dtype is dtypes.UINT32
    assert result.to_pylist() == [3, 6, None]


def test_float_division_by_zero():
    values = FieldData.from_values(dtypes.FLOAT64, [2.0, 0.0, -1.0, None])
    result = apply_scalar(values, "/", 0.0).to_pylist()
    assert result[0] == math.inf
    assert math.isnan(result[1])
    assert result[2] == -math.inf
    assert result[3] is None

    zeros = FieldData.from_values(dtypes.FLOAT64, [0.0, 0.0, -0.0, 0.0])
    assert combine(HOURS, zeros, "/").to_pylist() == [math.inf, None, -math.inf, math.inf]


def test_integer_division_by_zero_raises():
    counts = FieldData.from_values(dtypes.INT64, [4, 2])
    with pytest.raises(pa.ArrowInvalid):
        apply_scalar(counts, "/", 0)


def test_combine_checks_overflow():
    big = FieldData.from_values(dtypes.INT32, [2**31 - 1])
    with pytest.raises(pa.ArrowInvalid):
        combine(big, big, "+")


def test_combine_failures():
    with pytest.raises(DimensionMismatchError):
        combine(HOURS, FieldData.from_values(dtypes.FLOAT64, [1.0]), "+")
    with pytest.raises(TypeMismatchError):
        combine(HOURS, FieldData.from_values(dtypes.INT64, [1, 2, 3, 4]), "+")
    names = FieldData.from_values(dtypes.TEXT, ["a"])
    with pytest.raises(TypeMismatchError):
        combine(names, names, "+")
    with pytest.raises(TypeMismatchError) as err:
        apply_scalar(names, "+", "b")
    assert str(err.value) == "arithmetic is not defined for text fields"
    with pytest.raises(InvalidArgumentError):
        combine(HOURS, EXTRA, "%")


def test_map_field():
    lengths = map_field(
        FieldData.from_values(dtypes.TEXT, ["Sally", None, "Bob"]), len, dtypes.UINT32
    )
    assert lengths.dtype is dtypes.UINT32
    assert lengths.to_pylist() == [5, None, 3]
