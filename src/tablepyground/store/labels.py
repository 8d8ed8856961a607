"""Labels identifying the fields of stores and views.

Fields are never looked up by their human readable name,
instead each field is identified by a :class:`Label`:
an identifier that pairs a natural number, unique within
the :class:`Tablespace` that created it, with a name and
the semantic type of the field.

Labels are declared upfront, grouped in tables:

>>> from tablepyground.store import dtypes
>>> space = Tablespace()
>>> emp = space.table("emp", EmpId=dtypes.UINT64, EmpName=dtypes.TEXT)
>>> dept = space.table("dept", DeptId=dtypes.UINT64)
>>> emp.EmpId
Label(emp.EmpId: uint64)
>>> emp.EmpName.ident, dept.DeptId.ident
(1, 2)

Two labels are the same label when both their identifier and
their name match, so two tables declaring a field with the same
name still have distinct labels:

>>> other = space.table("other", EmpId=dtypes.UINT64)
>>> other.EmpId == emp.EmpId
False

The type carried by the label is what allows the engine to
verify, at the boundary of every operation, that the caller
and the data agree on the type of the field.
"""

import dataclasses
import itertools
from typing import Any, Iterable, Iterator

from ..errors import LabelCollisionError, LabelNotFoundError, TypeMismatchError
from .dtypes import DType


@dataclasses.dataclass(frozen=True, eq=False)
class Label:
    """Identifier of a field.

    Equality and hashing only involve ``ident`` and ``name``.
    """

    ident: int
    name: str
    dtype: DType
    table: str | None = None

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Label):
            return NotImplemented
        return self.ident == other.ident and self.name == other.name

    def __hash__(self) -> int:
        return hash((self.ident, self.name))

    def __repr__(self) -> str:
        qualname = f"{self.table}.{self.name}" if self.table else self.name
        return f"Label({qualname}: {self.dtype.name})"

    def __str__(self) -> str:
        return self.name

    def renamed(self, name: str) -> "Label":
        """A new label with the same identifier and type but a different name."""
        return dataclasses.replace(self, name=name)


class TableLabels:
    """The labels declared for a table.

    Labels are available as attributes, by name and by iteration
    in the order they were declared. The table keeps its own state in
    underscored attributes so that any field name can be an attribute.
    """

    def __init__(self, name: str, labels: Iterable[Label]) -> None:
        self._table_name = name
        self._labels = {label.name: label for label in labels}

    def __getattr__(self, name: str) -> Label:
        try:
            return self.__dict__["_labels"][name]
        except KeyError:
            table_name = self.__dict__.get("_table_name")
            raise AttributeError(f"Table {table_name} has no field {name}") from None

    def __getitem__(self, name: str) -> Label:
        try:
            return self._labels[name]
        except KeyError:
            raise LabelNotFoundError(
                f"not declared in table {self._table_name}", label=name
            ) from None

    def __iter__(self) -> Iterator[Label]:
        return iter(self._labels.values())

    def __len__(self) -> int:
        return len(self._labels)

    def __repr__(self) -> str:
        return f"TableLabels({self._table_name}, {list(self._labels)})"


class Tablespace:
    """A namespace that hands out unique label identifiers.

    Every table declared within the same tablespace gets
    labels with identifiers that don't overlap with those of
    the other tables.
    """

    def __init__(self) -> None:
        self._counter = itertools.count()

    def label(self, name: str, dtype: DType, table: str | None = None) -> Label:
        """Declare a single label."""
        return Label(next(self._counter), name, dtype, table)

    def table(
        self,
        name: str,
        fields: Iterable[tuple[str, DType]] = (),
        /,
        **kwfields: DType,
    ) -> TableLabels:
        """Declare the labels of a table.

        Fields can be provided as keyword arguments or, when
        their names are not valid python identifiers, as a list
        of ``(name, dtype)`` tuples.  Both can be combined, in which
        case ``fields`` come first.
        """
        declared = list(fields) + list(kwfields.items())
        names = [fieldname for fieldname, _ in declared]
        if len(set(names)) != len(names):
            raise LabelCollisionError("duplicate field name in declaration", label=name)
        return TableLabels(
            name,
            [self.label(fieldname, dtype, name) for fieldname, dtype in declared],
        )


DEFAULT_TABLESPACE = Tablespace()


def table(
    name: str, fields: Iterable[tuple[str, DType]] = (), /, **kwfields: DType
) -> TableLabels:
    """Declare a table within the default tablespace."""
    return DEFAULT_TABLESPACE.table(name, fields, **kwfields)


def label(name: str, dtype: DType) -> Label:
    """Declare a standalone label within the default tablespace."""
    return DEFAULT_TABLESPACE.label(name, dtype)


class LabelMap:
    """Ordered mapping from labels to the position of their column.

    Stores use a label map to know in which of their
    columns the data for a label is and which type it has.
    Label maps are immutable, adding a label creates a new map.
    """

    def __init__(self, labels: Iterable[Label] = ()) -> None:
        self._labels: tuple[Label, ...] = ()
        self._index: dict[Label, int] = {}
        for lbl in labels:
            self._add(lbl)

    def _add(self, lbl: Label) -> None:
        if lbl in self._index:
            raise LabelCollisionError("label already present", label=lbl.name)
        self._index[lbl] = len(self._labels)
        self._labels = self._labels + (lbl,)

    def extended(self, lbl: Label) -> "LabelMap":
        """A new map with ``lbl`` appended."""
        new_map = LabelMap(self._labels)
        new_map._add(lbl)
        return new_map

    def index_of(self, lbl: Label) -> int:
        """The column position of ``lbl``.

        Fails if the label is unknown or if its type differs
        from the type the label was registered with.
        """
        try:
            idx = self._index[lbl]
        except KeyError:
            raise LabelNotFoundError("label not found", label=lbl.name) from None
        registered = self._labels[idx]
        if registered.dtype is not lbl.dtype:
            raise TypeMismatchError(
                f"requested as {lbl.dtype.name} but declared as {registered.dtype.name}",
                label=lbl.name,
            )
        return idx

    def __contains__(self, lbl: Any) -> bool:
        return lbl in self._index

    def __iter__(self) -> Iterator[Label]:
        return iter(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __getitem__(self, idx: int) -> Label:
        return self._labels[idx]

    def names(self) -> list[str]:
        """Human readable names of the labels, in order."""
        return [lbl.name for lbl in self._labels]

    def dtypes(self) -> list[DType]:
        """Types of the labels, in order."""
        return [lbl.dtype for lbl in self._labels]

    def lookup_name(self, name: str) -> Label:
        """Find the label with the given human readable name."""
        matches = [lbl for lbl in self._labels if lbl.name == name]
        if not matches:
            raise LabelNotFoundError("no field with this name", label=name)
        if len(matches) > 1:
            raise LabelCollisionError("name is ambiguous", label=name)
        return matches[0]
