"""Errors raised by the engine.

Every operation that can fail for reasons the caller controls
(a label that doesn't exist, two columns of different types, views
of different length, ...) raises one of the exceptions defined here.

Each exception also derives from the builtin exception that
describes the same kind of failure, so code that doesn't care about
the engine specifics can catch ``KeyError``, ``TypeError`` and so on::

    try:
        view.field(unknown_label)
    except KeyError:
        ...

All errors carry the offending label (when there is one) and a short
reason:

>>> err = LabelNotFoundError("not present in view", label="DeptId")
>>> str(err)
'DeptId: not present in view'
>>> err.reason
'not present in view'
"""

from typing import Any


class EngineError(Exception):
    """Base class for all errors raised by the engine."""

    def __init__(self, reason: str, label: Any = None) -> None:
        """
        :param reason: Short description of what went wrong.
        :param label: The label (or label name) the error refers to, if any.
        """
        super().__init__(reason)
        self.reason = reason
        self.label = label

    def __str__(self) -> str:
        if self.label is None:
            return self.reason
        return f"{self.label}: {self.reason}"


class LabelNotFoundError(EngineError, KeyError):
    """The requested label is not present in the store or view."""


class LabelCollisionError(EngineError, ValueError):
    """The operation would introduce a duplicate public label."""


class TypeMismatchError(EngineError, TypeError):
    """A type differs from the declared one or the operation is undefined for it."""


class DimensionMismatchError(EngineError, ValueError):
    """Inputs that must have the same number of rows don't."""


class IndexOutOfBoundsError(EngineError, IndexError):
    """A position exceeds the length of the data being indexed."""


class ParseError(EngineError, ValueError):
    """A source value could not be converted to the requested type."""


class MissingValueError(EngineError, ValueError):
    """A missing value was unwrapped."""


class InvalidArgumentError(EngineError, ValueError):
    """An argument is not acceptable for the operation, like an unknown operator."""


class SealedFieldError(EngineError, RuntimeError):
    """A column was modified after being stored."""
