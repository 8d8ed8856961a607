"""Views: the tabular objects users interact with.

A :class:`View` exposes an ordered set of fields, each identified by
its public :class:`Label`, on top of one or more frames. Each entry
of the view maps the public label to a frame and to the label the
data has within the store of that frame::

    View
    +-----------+-------+-------------+
    | public    | frame | inner label |
    +-----------+-------+-------------+
    | EmpId     | 0     | EmpId       |      frame 0: (emp store, permutation)
    | DeptId    | 0     | DeptId      |      frame 1: (dept store, permutation)
    | DeptName  | 1     | DeptName    |
    +-----------+-------+-------------+

Restricting, relabeling, sorting, filtering, merging and joining
only create new entries or new permutations, the data
in the stores is never copied.

>>> from tablepyground.store import Store, dtypes, table
>>> emp = table("emp", EmpId=dtypes.UINT64, EmpName=dtypes.TEXT, Hours=dtypes.FLOAT64)
>>> view = Store.from_columns([
...     (emp.EmpId, [0, 2, 5, 6]),
...     (emp.EmpName, ["Sally", "Jamie", "Bob", "Cara"]),
...     (emp.Hours, [47.3, None, 98.3, 12.2]),
... ]).into_view()
>>> print(view.sort_by_label(emp.Hours))
EmpId | EmpName | Hours
----- | ------- | -----
2     | Jamie   | NA
6     | Cara    | 12.20
0     | Sally   | 47.30
5     | Bob     | 98.30
>>> from tablepyground.compute import filtering
>>> subset = view.filter(emp.Hours, filtering.greater_than(40)).subview([emp.EmpName])
>>> subset.fieldnames(), subset.nrows()
(['EmpName'], 2)
>>> subset.field(emp.EmpName).to_pylist()
['Sally', 'Bob']

The original view is left untouched by all the operations:

>>> view.field(emp.EmpId).to_pylist()
[0, 2, 5, 6]
"""

import dataclasses
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, Mapping, Sequence

import pyarrow as pa

from ..errors import (
    DimensionMismatchError,
    LabelCollisionError,
    LabelNotFoundError,
    TypeMismatchError,
)
from ..store.dtypes import DType
from ..store.field import DataIndex
from ..store.labels import Label
from ..store.store import Store
from ..store.value import Value
from .frame import Frame

if TYPE_CHECKING:
    from ..compute.aggregate import Aggregation
    from ..compute.filtering import ArrowPredicate
    from ..compute.join import Join
    from ..compute.stats import FieldStats, ViewStats


@dataclasses.dataclass(frozen=True)
class ViewEntry:
    """A field exposed by a view.

    :param label: The public label of the field.
    :param frame_index: The frame of the view holding the data.
    :param inner_label: The label of the field within the store of the frame.
    """

    label: Label
    frame_index: int
    inner_label: Label


class View:
    """An ordered set of labeled fields over one or more frames."""

    def __init__(
        self, frames: Sequence[Frame] = (), entries: Iterable[ViewEntry] | None = None
    ) -> None:
        """
        :param frames: The frames providing the data, they must
                       all have the same number of rows.
        :param entries: The fields exposed by the view, if omitted
                        all fields of all the frames are exposed
                        with their own labels.
        """
        self.frames = tuple(frames)
        if entries is None:
            entries = [
                ViewEntry(lbl, frame_index, lbl)
                for frame_index, frame in enumerate(self.frames)
                for lbl in frame.store.labels()
            ]
        self.entries = tuple(entries)

        nrows = {frame.nrows() for frame in self.frames}
        if len(nrows) > 1:
            raise DimensionMismatchError(
                f"frames with different number of rows: {sorted(nrows)}"
            )

        self._index: dict[Label, ViewEntry] = {}
        for entry in self.entries:
            if entry.label in self._index:
                raise LabelCollisionError("label already present", label=entry.label.name)
            if not 0 <= entry.frame_index < len(self.frames):
                raise LabelNotFoundError(
                    f"refers to missing frame {entry.frame_index}", label=entry.label.name
                )
            if entry.label.dtype is not entry.inner_label.dtype:
                raise TypeMismatchError(
                    f"exposed as {entry.label.dtype.name} but stored as "
                    f"{entry.inner_label.dtype.name}",
                    label=entry.label.name,
                )
            # Fails if the store doesn't have the field
            self.frames[entry.frame_index].store.label_map.index_of(entry.inner_label)
            self._index[entry.label] = entry

    @classmethod
    def from_store(cls, store: Store) -> "View":
        """A view exposing all the fields of ``store``."""
        return cls([Frame(store)])

    def __repr__(self) -> str:
        return f"View(fields={self.fieldnames()}, rows={self.nrows()})"

    def __str__(self) -> str:
        from ..utils.tabulate import tabulate

        return tabulate(self)

    def __contains__(self, lbl: Any) -> bool:
        return lbl in self._index

    def _entry(self, lbl: Label) -> ViewEntry:
        try:
            entry = self._index[lbl]
        except KeyError:
            raise LabelNotFoundError("not present in view", label=lbl.name) from None
        if entry.label.dtype is not lbl.dtype:
            raise TypeMismatchError(
                f"requested as {lbl.dtype.name} but declared as {entry.label.dtype.name}",
                label=lbl.name,
            )
        return entry

    def _with_entries(self, entries: Iterable[ViewEntry]) -> "View":
        return View(self.frames, entries)

    def field(self, lbl: Label) -> DataIndex:
        """The data of the field ``lbl`` in the row order of the view."""
        entry = self._entry(lbl)
        return self.frames[entry.frame_index].field(entry.inner_label)

    def label(self, name: str) -> Label:
        """The public label of the field with the given name."""
        matches = [entry.label for entry in self.entries if entry.label.name == name]
        if not matches:
            raise LabelNotFoundError("no field with this name", label=name)
        if len(matches) > 1:
            raise LabelCollisionError("name is ambiguous", label=name)
        return matches[0]

    def labels(self) -> list[Label]:
        return [entry.label for entry in self.entries]

    def fieldnames(self) -> list[str]:
        return [entry.label.name for entry in self.entries]

    def field_types(self) -> list[DType]:
        return [entry.label.dtype for entry in self.entries]

    def nrows(self) -> int:
        if not self.frames:
            return 0
        return self.frames[0].nrows()

    def nfields(self) -> int:
        return len(self.entries)

    def nframes(self) -> int:
        return len(self.frames)

    def is_empty(self) -> bool:
        """If the view has no rows."""
        return self.nrows() == 0

    def subview(self, labels: Iterable[Label]) -> "View":
        """A view with only the fields in ``labels``.

        The fields keep the order they have in this view,
        labels that are not part of the view are ignored.
        """
        keep = set(labels)
        return self._with_entries(entry for entry in self.entries if entry.label in keep)

    v = subview

    def relabel(self, old: Label, new: Label) -> "View":
        """A view where the field ``old`` is exposed as ``new``."""
        self._entry(old)
        if new != old and new in self._index:
            raise LabelCollisionError("label already present", label=new.name)
        if new.dtype is not old.dtype:
            raise TypeMismatchError(
                f"can't relabel a {old.dtype.name} field as {new.dtype.name}",
                label=new.name,
            )
        return self._with_entries(
            dataclasses.replace(entry, label=new) if entry.label == old else entry
            for entry in self.entries
        )

    def rename(self, old_name: str, new_name: str) -> "View":
        """A view where the field named ``old_name`` is named ``new_name``."""
        old = self.label(old_name)
        if new_name != old_name and new_name in self.fieldnames():
            raise LabelCollisionError("name already present", label=new_name)
        return self.relabel(old, old.renamed(new_name))

    def update_permutation(self, indices: Iterable[int | None]) -> "View":
        """A view with the rows of all frames reordered by ``indices``."""
        indices = list(indices)
        return View(
            [frame.update_permutation(indices) for frame in self.frames], self.entries
        )

    def sort_by_label(self, lbl: Label, stable: bool = True) -> "View":
        """A view with the rows sorted by the values of ``lbl``."""
        from ..compute import sorting

        return self.update_permutation(sorting.sort_order(self.field(lbl), stable))

    def sort_by_label_comparator(
        self, lbl: Label, compare: Callable[[Value, Value], int]
    ) -> "View":
        """A view with the rows sorted by ``lbl`` according to ``compare``."""
        from ..compute import sorting

        return self.update_permutation(sorting.sort_order_by(self.field(lbl), compare))

    def filter(
        self, lbl: Label, predicate: "Callable[[Value], bool] | ArrowPredicate"
    ) -> "View":
        """A view with only the rows where ``predicate`` holds for ``lbl``."""
        from ..compute import filtering

        return self.update_permutation(filtering.filter_order(self.field(lbl), predicate))

    def unique_indices(self, labels: Label | Sequence[Label]) -> list[int]:
        """Positions of the first row with each distinct value of ``labels``."""
        from ..compute import unique

        if isinstance(labels, Label):
            return unique.unique_indices(self.field(labels))
        return unique.composite_unique_indices([self.field(lbl) for lbl in labels])

    def unique_values(self, lbl: Label) -> list[Value]:
        """The distinct values of ``lbl`` in order of first occurrence."""
        from ..compute import unique

        return unique.unique_values(self.field(lbl))

    def unique(self, labels: Label | Sequence[Label]) -> "View":
        """A view with only the first row with each distinct value of ``labels``."""
        return self.update_permutation(self.unique_indices(labels))

    def merge(self, other: "View") -> "View":
        """Concatenate the fields of ``other`` to the ones of this view."""
        from ..compute.merge import merge

        return merge(self, other)

    def join(self, other: "View", join: "Join") -> "View":
        """Join the rows of this view to those of ``other``."""
        from ..compute.join import join as join_views

        return join_views(self, other, join)

    def melt(
        self, labels: Sequence[Label], variable: Label, value: Label
    ) -> "View":
        """Unpivot the fields ``labels`` into ``variable`` and ``value`` fields."""
        from ..compute.reshape import melt

        return melt(self, labels, variable, value)

    def aggregate(
        self,
        group_by: Sequence[Label],
        source: Label,
        result: Label,
        initial: Any,
        reducer: Callable[[Any, Value], Any],
    ) -> "View":
        """Reduce the values of ``source`` for each group of ``group_by``."""
        from ..compute.aggregate import aggregate

        return aggregate(self, group_by, source, result, initial, reducer)

    def aggregate_with(
        self, group_by: Sequence[Label], aggregations: Mapping[Label, "Aggregation"]
    ) -> "View":
        """Compute multiple aggregations for each group of ``group_by``."""
        from ..compute.aggregate import aggregate_with

        return aggregate_with(self, group_by, aggregations)

    def field_stats(self, lbl: Label) -> "FieldStats":
        from ..compute.stats import FieldStats

        return FieldStats.of(self.field(lbl))

    def view_stats(self) -> "ViewStats":
        from ..compute.stats import ViewStats

        return ViewStats(self)

    def columns(self) -> list[tuple[str, DataIndex]]:
        """The name and the data of each field, in order."""
        return [(entry.label.name, self.field(entry.label)) for entry in self.entries]

    def rows(self) -> Iterator[tuple[Value, ...]]:
        """The values of each row, in order."""
        return zip(*(field for _, field in self.columns()))

    def to_arrow(self) -> pa.Table:
        """Materialize the view as an Arrow table."""
        names, fields = [], []
        for name, field in self.columns():
            names.append(name)
            fields.append(field.to_arrow())
        return pa.Table.from_arrays(fields, names=names)
