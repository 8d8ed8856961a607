"""Possibly missing values.

Any cell of a column can either hold a value or be missing.
Instead of overloading ``None`` (which callers might want to use
for their own purposes) the engine represents each cell as a
:class:`Value`: either ``Exists(payload)`` or the ``Missing`` marker.

>>> Exists(3)
Exists(3)
>>> Missing
Missing
>>> Exists(3).unwrap_or(0), Missing.unwrap_or(0)
(3, 0)

Arithmetic is lifted over values, the result only exists
when both operands exist:

>>> Exists(2) + Exists(3)
Exists(5)
>>> Exists(2) * Missing
Missing

Division by zero never fails, it produces the IEEE 754 result:

>>> Exists(-60.0) / Exists(0.0), Exists(0.0) / Exists(0)
(Exists(-inf), Exists(nan))

Values are totally ordered for sorting purposes, with ``Missing``
before anything else and ``NaN`` before any other float::

    Missing < NaN < -inf < ... < +inf

>>> sorted([Exists(2.0), Missing, Exists(float("nan")), Exists(-1.0)])
[Missing, Exists(nan), Exists(-1.0), Exists(2.0)]

Two kinds of equality exist. ``==`` and ``hash`` implement *key*
equality, used when values act as keys (unique, grouping and joins):
two ``Missing`` are equal, and so are two ``NaN``. Predicates instead
use :meth:`Value.equals` for which a missing value never equals anything:

>>> Missing == Missing, Missing.equals(Missing)
(True, False)
"""

import abc
import functools
import math
import operator
from typing import Any, Callable

from ..errors import MissingValueError

_NAN_HASH = hash(("tablepyground", "nan"))
_MISSING_HASH = hash(("tablepyground", "missing"))


def _is_nan(obj: Any) -> bool:
    return isinstance(obj, float) and math.isnan(obj)


def _true_divide(a: Any, b: Any) -> Any:
    """Division following IEEE 754 when the divisor is zero."""
    try:
        return operator.truediv(a, b)
    except ZeroDivisionError:
        if a == 0 or _is_nan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _lift(op: Callable[[Any, Any], Any], reflected: bool = False) -> Callable:
    """Lift a binary operator so that it operates on Values."""

    def lifted(self: "Value", other: Any) -> "Value":
        other = Value.of(other)
        if not (self.exists() and other.exists()):
            return Missing
        if reflected:
            return Exists(op(other.value, self.value))
        return Exists(op(self.value, other.value))

    return lifted


@functools.total_ordering
class Value(abc.ABC):
    """A possibly missing value.

    Concrete values are either :class:`Exists` instances
    or the :data:`Missing` singleton.
    """

    __slots__ = ()

    @staticmethod
    def of(obj: Any) -> "Value":
        """Wrap a python object into a Value.

        ``None`` becomes ``Missing``, values are returned
        as they are and anything else becomes ``Exists``.

        >>> Value.of(None), Value.of(5), Value.of(Exists(5))
        (Missing, Exists(5), Exists(5))
        """
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return Missing
        return Exists(obj)

    @abc.abstractmethod
    def exists(self) -> bool:
        """If the value is present."""
        ...

    def is_missing(self) -> bool:
        """If the value is missing."""
        return not self.exists()

    @abc.abstractmethod
    def unwrap(self) -> Any:
        """Return the payload, raise :class:`MissingValueError` if missing."""
        ...

    def unwrap_or(self, default: Any) -> Any:
        """Return the payload or ``default`` if missing."""
        return self.unwrap() if self.exists() else default

    def unwrap_or_else(self, func: Callable[[], Any]) -> Any:
        """Return the payload or the result of ``func()`` if missing."""
        return self.unwrap() if self.exists() else func()

    def map(self, func: Callable[[Any], Any]) -> "Value":
        """Apply ``func`` to the payload, missing values stay missing."""
        return Exists(func(self.unwrap())) if self.exists() else Missing

    def map_or(self, default: Any, func: Callable[[Any], Any]) -> Any:
        """Apply ``func`` to the payload or return ``default`` if missing."""
        return func(self.unwrap()) if self.exists() else default

    def map_or_else(
        self, default_func: Callable[[], Any], func: Callable[[Any], Any]
    ) -> Any:
        """Apply ``func`` to the payload or return ``default_func()`` if missing."""
        return func(self.unwrap()) if self.exists() else default_func()

    def to_optional(self) -> Any:
        """The payload or ``None`` if missing."""
        return self.unwrap() if self.exists() else None

    def equals(self, other: Any) -> bool:
        """Predicate equality.

        Differently from ``==`` a missing value never equals
        anything, and ``NaN`` never equals ``NaN``.
        """
        other = Value.of(other)
        if not (self.exists() and other.exists()):
            return False
        return self.unwrap() == other.unwrap()

    @abc.abstractmethod
    def sort_key(self) -> tuple:
        """A key implementing ``Missing < NaN < any other value``."""
        ...

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    __add__ = _lift(operator.add)
    __sub__ = _lift(operator.sub)
    __mul__ = _lift(operator.mul)
    __truediv__ = _lift(_true_divide)
    __radd__ = _lift(operator.add, reflected=True)
    __rsub__ = _lift(operator.sub, reflected=True)
    __rmul__ = _lift(operator.mul, reflected=True)
    __rtruediv__ = _lift(_true_divide, reflected=True)


class Exists(Value):
    """A value that is present."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def exists(self) -> bool:
        return True

    def unwrap(self) -> Any:
        return self.value

    def sort_key(self) -> tuple:
        if _is_nan(self.value):
            return (1,)
        return (2, self.value)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        if not isinstance(other, Exists):
            return False
        if _is_nan(self.value) and _is_nan(other.value):
            return True
        return self.value == other.value

    def __hash__(self) -> int:
        if _is_nan(self.value):
            return _NAN_HASH
        # hash(-0.0) == hash(0.0) already
        return hash(self.value)

    def __repr__(self) -> str:
        return f"Exists({self.value!r})"

    def __str__(self) -> str:
        return str(self.value)


class _MissingType(Value):
    """The type of the :data:`Missing` marker, only one instance exists."""

    __slots__ = ()
    _instance = None

    def __new__(cls) -> "_MissingType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def exists(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise MissingValueError("unwrap() called on a missing value")

    def sort_key(self) -> tuple:
        return (0,)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return other is self

    def __hash__(self) -> int:
        return _MISSING_HASH

    def __reduce__(self) -> str:
        return "Missing"

    def __repr__(self) -> str:
        return "Missing"

    def __str__(self) -> str:
        return "NA"


Missing = _MissingType()
"""The marker for a missing value."""
