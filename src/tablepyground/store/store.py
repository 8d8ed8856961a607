"""Stores: collections of columns indexed by label.

A :class:`Store` owns the actual data of a table: an ordered
set of columns (:class:`FieldData`) of possibly different types,
each one identified by a :class:`Label`.

Stores are built incrementally, each added field produces a new store
that shares the columns of the previous one:

>>> from tablepyground.store import dtypes, labels
>>> emp = labels.table("emp", EmpId=dtypes.UINT64, EmpName=dtypes.TEXT)
>>> store = (
...     Store.empty()
...     .push_field_from_iter(emp.EmpId, [0, 2, 5])
...     .push_field_from_iter(emp.EmpName, ["Sally", "Jamie", None])
... )
>>> store.nrows(), store.nfields()
(3, 2)
>>> store.fieldnames()
['EmpId', 'EmpName']
>>> store.select_field(emp.EmpName).to_pylist()
['Sally', 'Jamie', None]

Once a store is exposed through a view it is never modified again,
so it can be freely shared by multiple views.
"""

from typing import TYPE_CHECKING, Any, Iterable, Mapping, Sequence

from ..errors import DimensionMismatchError, TypeMismatchError
from .dtypes import DType
from .field import FieldData
from .labels import Label, LabelMap

if TYPE_CHECKING:
    from ..view.view import View
    from .datasources import FieldSource


class Store:
    """Heterogeneous collection of columns indexed by label."""

    def __init__(
        self, label_map: LabelMap | None = None, fields: Sequence[FieldData] = ()
    ) -> None:
        """
        :param label_map: The labels of the columns.
        :param fields: The columns, in the same order as the labels.
        """
        self.label_map = label_map if label_map is not None else LabelMap()
        self._fields = tuple(fields)
        if len(self.label_map) != len(self._fields):
            raise DimensionMismatchError(
                f"{len(self.label_map)} labels provided for {len(self._fields)} fields"
            )
        for field in self._fields:
            field.seal()

    @classmethod
    def empty(cls) -> "Store":
        """A store without any field."""
        return cls()

    @classmethod
    def from_columns(cls, columns: Iterable[tuple[Label, Iterable[Any]]]) -> "Store":
        """Build a store out of literal columns.

        :param columns: ``(label, values)`` pairs, values can be
                        :class:`Value` instances, ``None`` for missing
                        values or plain python values.
        """
        store = cls.empty()
        for lbl, values in columns:
            store = store.push_field_from_iter(lbl, values)
        return store

    @classmethod
    def from_sources(cls, sources: Mapping[Label, "FieldSource"]) -> "Store":
        """Build a store from source adapters.

        Each source provides the values for the label it is mapped to,
        the source and the label must agree on the type of the values.
        """
        store = cls.empty()
        for lbl, source in sources.items():
            if source.dtype is not lbl.dtype:
                raise TypeMismatchError(
                    f"source {source.name!r} provides {source.dtype.name} "
                    f"values, expected {lbl.dtype.name}",
                    label=lbl.name,
                )
            store = store.push_field_from_iter(lbl, source.values)
        return store

    def __repr__(self) -> str:
        return f"Store(fields={self.fieldnames()}, rows={self.nrows()})"

    def push_field(self, lbl: Label, field: FieldData) -> "Store":
        """A new store with ``field`` added under ``lbl``."""
        if field.dtype is not lbl.dtype:
            raise TypeMismatchError(
                f"field of type {field.dtype.name} can't be stored "
                f"as {lbl.dtype.name}",
                label=lbl.name,
            )
        return Store(self.label_map.extended(lbl), self._fields + (field,))

    def push_field_from_iter(self, lbl: Label, values: Iterable[Any]) -> "Store":
        """A new store with a field built from ``values`` added under ``lbl``."""
        return self.push_field(lbl, FieldData.from_values(lbl.dtype, values))

    def push_empty_field(self, lbl: Label) -> "Store":
        """A new store with an empty field added under ``lbl``."""
        return self.push_field(lbl, FieldData(lbl.dtype))

    def select_field(self, lbl: Label) -> FieldData:
        """The column stored under ``lbl``."""
        return self._fields[self.label_map.index_of(lbl)]

    def __contains__(self, lbl: Any) -> bool:
        return lbl in self.label_map

    def label(self, name: str) -> Label:
        """The label of the field with the given human readable name."""
        return self.label_map.lookup_name(name)

    def labels(self) -> list[Label]:
        return list(self.label_map)

    def fieldnames(self) -> list[str]:
        return self.label_map.names()

    def field_types(self) -> list[DType]:
        return self.label_map.dtypes()

    def nfields(self) -> int:
        return len(self._fields)

    def nrows(self) -> int:
        """The number of rows, which is the length of the longest field.

        While a store is being built its fields might have different
        lengths, they are required to be the same only once the
        store is wrapped in a frame.
        """
        return max((len(field) for field in self._fields), default=0)

    def is_uniform(self) -> bool:
        """If all the fields have the same length."""
        return len({len(field) for field in self._fields}) <= 1

    def into_view(self) -> "View":
        """Wrap the store into a view exposing all its fields."""
        from ..view.view import View

        return View.from_store(self)
