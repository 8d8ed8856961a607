"""Semantic types of the columns.

Each column of a store holds values of exactly one semantic type.
The types map one to one onto Arrow types, which is what the
columns become when they are materialized with ``to_arrow()``:

>>> UINT64
DType(uint64)
>>> UINT64.arrow_type
DataType(uint64)
>>> DType.from_arrow(pa.string()) is TEXT
True

Types are in charge of checking that python values are acceptable
for a column and of parsing values out of text:

>>> INT32.validate(12)
12
>>> FLOAT64.parse(" 1.5 ")
Exists(1.5)
>>> FLOAT64.parse("   ")
Missing
"""

from typing import Any

import pyarrow as pa

from ..errors import ParseError, TypeMismatchError
from .value import Exists, Missing, Value


class DType:
    """A semantic type supported by the engine.

    Wraps the :class:`pyarrow.DataType` used to store the values
    and knows how to validate and parse python values for it.
    """

    def __init__(self, name: str, arrow_type: pa.DataType, default: Any) -> None:
        """
        :param name: Human readable name of the type.
        :param arrow_type: The Arrow type backing the columns.
        :param default: The placeholder stored in place of missing values.
        """
        self.name = name
        self.arrow_type = arrow_type
        self.default = default

    def __repr__(self) -> str:
        return f"DType({self.name})"

    __str__ = __repr__

    @property
    def is_integer(self) -> bool:
        return pa.types.is_integer(self.arrow_type)

    @property
    def is_float(self) -> bool:
        return pa.types.is_floating(self.arrow_type)

    @property
    def is_numeric(self) -> bool:
        return self.is_integer or self.is_float

    @property
    def is_bool(self) -> bool:
        return pa.types.is_boolean(self.arrow_type)

    @property
    def is_text(self) -> bool:
        return pa.types.is_string(self.arrow_type)

    @property
    def supports_sum(self) -> bool:
        """Numeric and boolean columns can be summed, booleans count ``True``."""
        return self.is_numeric or self.is_bool

    @property
    def bounds(self) -> tuple[int, int] | None:
        """The range of values allowed by integer types."""
        if not self.is_integer:
            return None
        width = self.arrow_type.bit_width
        if pa.types.is_unsigned_integer(self.arrow_type):
            return 0, 2**width - 1
        return -(2 ** (width - 1)), 2 ** (width - 1) - 1

    def validate(self, value: Any) -> Any:
        """Check that ``value`` is acceptable for this type and normalize it.

        Raises :class:`TypeMismatchError` when the value can't be
        stored in a column of this type.
        """
        if self.is_text:
            if not isinstance(value, str):
                raise TypeMismatchError(f"expected text, got {value!r}", label=self.name)
            return value
        if self.is_bool:
            if not isinstance(value, bool):
                raise TypeMismatchError(f"expected bool, got {value!r}", label=self.name)
            return value
        # bool is an int subclass, but True is not a number for us.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeMismatchError(f"expected number, got {value!r}", label=self.name)
        if self.is_integer:
            if not isinstance(value, int):
                raise TypeMismatchError(f"expected integer, got {value!r}", label=self.name)
            low, high = self.bounds
            if not low <= value <= high:
                raise TypeMismatchError(f"{value} out of range", label=self.name)
            return value
        value = float(value)
        if pa.types.is_float32(self.arrow_type):
            # Round to the nearest representable float32
            value = pa.scalar(value, type=self.arrow_type).as_py()
        return value

    def parse(self, text: str) -> Value:
        """Parse a value out of its text representation.

        Surrounding whitespace is ignored and an empty field
        is considered a missing value.
        """
        text = text.strip()
        if not text:
            return Missing
        try:
            if self.is_text:
                return Exists(text)
            if self.is_bool:
                if text not in ("true", "false"):
                    raise ValueError(f"invalid boolean literal {text!r}")
                return Exists(text == "true")
            if self.is_integer:
                return Exists(self.validate(int(text)))
            return Exists(self.validate(float(text)))
        except (ValueError, TypeMismatchError) as e:
            raise ParseError(f"unable to parse {text!r}: {e}", label=self.name) from e

    @classmethod
    def from_arrow(cls, arrow_type: pa.DataType) -> "DType":
        """Get the semantic type backed by the given Arrow type."""
        for dtype in ALL_TYPES:
            if dtype.arrow_type == arrow_type:
                return dtype
        raise TypeMismatchError(f"unsupported arrow type {arrow_type}")


UINT32 = DType("uint32", pa.uint32(), 0)
UINT64 = DType("uint64", pa.uint64(), 0)
INT32 = DType("int32", pa.int32(), 0)
INT64 = DType("int64", pa.int64(), 0)
FLOAT32 = DType("float32", pa.float32(), 0.0)
FLOAT64 = DType("float64", pa.float64(), 0.0)
BOOL = DType("bool", pa.bool_(), False)
TEXT = DType("text", pa.string(), "")

ALL_TYPES = (UINT32, UINT64, INT32, INT64, FLOAT32, FLOAT64, BOOL, TEXT)
