"""Element-wise operations on fields.

Arithmetic between two fields, or between a field and a scalar,
is computed by Arrow over the whole column at once.
Missing values propagate, so the result is missing wherever
one of the operands is missing:

>>> from tablepyground.store import FieldData, dtypes
>>> hours = FieldData.from_values(dtypes.FLOAT64, [8.0, None, 6.5])
>>> extra = FieldData.from_values(dtypes.FLOAT64, [1.0, 2.0, 0.5])
>>> combine(hours, extra, "+").to_pylist()
[9.0, None, 7.0]
>>> apply_scalar(hours, "*", 2).to_pylist()
[16.0, None, 13.0]

The checked variants of the Arrow kernels are used, so that
integer overflows raise an error instead of wrapping around.
Float division follows IEEE 754 instead, dividing by zero
gives an infinity or ``NaN``:

>>> apply_scalar(hours, "/", 0.0).to_pylist()
[inf, None, inf]

Any other transformation can be applied value by value
with :func:`map_field`:

>>> map_field(hours, lambda h: h > 7, dtypes.BOOL).to_pylist()
[True, None, False]
"""

from typing import Any, Callable

import pyarrow as pa
import pyarrow.compute as pc

from ..errors import DimensionMismatchError, InvalidArgumentError, TypeMismatchError
from ..store.dtypes import DType
from ..store.field import DataIndex, FieldData

OPERATORS: dict[str, Callable[..., pa.Array]] = {
    "+": pc.add_checked,
    "-": pc.subtract_checked,
    "*": pc.multiply_checked,
    "/": pc.divide_checked,
}

FLOAT_OPERATORS: dict[str, Callable[..., pa.Array]] = {
    "/": pc.divide,
}


def _arrow_operator(op: str, dtype: DType) -> Callable[..., pa.Array]:
    if dtype.is_float and op in FLOAT_OPERATORS:
        return FLOAT_OPERATORS[op]
    try:
        return OPERATORS[op]
    except KeyError:
        raise InvalidArgumentError(f"Unsupported operator {op!r}") from None


def _require_numeric(field: DataIndex) -> None:
    if not field.dtype.is_numeric:
        raise TypeMismatchError(
            f"arithmetic is not defined for {field.dtype.name} fields"
        )


def combine(left: DataIndex, right: DataIndex, op: str) -> FieldData:
    """Apply ``op`` to the values of the two fields at the same positions.

    :param left: The left operands.
    :param right: The right operands, same type and length of ``left``.
    :param op: One of ``+``, ``-``, ``*``, ``/``.
    """
    func = _arrow_operator(op, left.dtype)
    if len(left) != len(right):
        raise DimensionMismatchError(
            f"can't combine fields of length {len(left)} and {len(right)}"
        )
    if left.dtype is not right.dtype:
        raise TypeMismatchError(
            f"can't combine {left.dtype.name} and {right.dtype.name} fields"
        )
    _require_numeric(left)
    return FieldData.from_arrow(func(left.to_arrow(), right.to_arrow()))


def apply_scalar(field: DataIndex, op: str, scalar: Any) -> FieldData:
    """Apply ``op`` between each value of ``field`` and ``scalar``.

    The scalar is converted to the type of the field.
    """
    func = _arrow_operator(op, field.dtype)
    _require_numeric(field)
    return FieldData.from_arrow(
        func(field.to_arrow(), pa.scalar(scalar, type=field.dtype.arrow_type))
    )


def map_field(field: DataIndex, func: Callable[[Any], Any], dtype: DType) -> FieldData:
    """Apply ``func`` to each present value, producing a field of ``dtype``."""
    return FieldData.from_values(dtype, (value.map(func) for value in field))
