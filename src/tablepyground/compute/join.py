"""Join operations between views.

The join operations are implemented by sorting the keys of the
two views and then walking both of them in order, pairing the rows
whose keys satisfy the join predicate.

Joining never copies data: the result is a view over the frames of
both inputs, each with a permutation that repeats or drops rows so
that row ``i`` of the left side is paired with row ``i`` of the right side.

Supposing we have two views::

    left:                        right:
    +-------+--------+           +--------+---------------+
    | EmpId | DeptId |           | DeptId | DeptName      |
    +-------+--------+           +--------+---------------+
    | 0     | 1      |           | 1      | Marketing     |
    | 2     | 2      |           | 2      | Sales         |
    | 5     | 1      |           | 3      | Manufacturing |
    +-------+--------+           +--------+---------------+

We would perform the following steps:

1. Compute the sort order of the join keys in both views::

    left:  [0, 2, 1]    (keys 1, 1, 2)
    right: [0, 1, 2]    (keys 1, 2, 3)

2. Walk both orders with two cursors, advancing the one pointing
   to the smaller key. When both point to the same key, find the run
   of rows with that key on each side and pair every row of the left
   run with every row of the right run::

    key 1: left [0, 2] x right [0] -> (0, 0), (2, 0)
    key 2: left [1]    x right [1] -> (1, 1)
    key 3: no left rows            -> nothing

3. Apply the left positions of the pairs to the frames of the left
   view and the right positions to the frames of the right view::

    +-------+--------+--------+-----------+
    | EmpId | DeptId | DeptId | DeptName  |
    +-------+--------+--------+-----------+
    | 0     | 1      | 1      | Marketing |
    | 5     | 1      | 1      | Marketing |
    | 2     | 2      | 2      | Sales     |
    +-------+--------+--------+-----------+

Rows are returned in ascending order of the left key, rows with the
same key by ascending position on the left and then on the right.
For outer joins the rows without a match follow, first those of the
left view and then those of the right view, with the other side missing.

Missing keys join with missing keys, like any other value.
Inequality predicates instead never match missing keys or ``NaN``.

>>> from tablepyground.store import Store, dtypes, table
>>> emp = table("emp", EmpId=dtypes.UINT64, DeptId=dtypes.UINT64)
>>> dept = table("dept", DeptId=dtypes.UINT64, DeptName=dtypes.TEXT)
>>> left = Store.from_columns([(emp.EmpId, [0, 2, 5]), (emp.DeptId, [1, 2, 1])]).into_view()
>>> right = Store.from_columns([
...     (dept.DeptId, [1, 2, 3]),
...     (dept.DeptName, ["Marketing", "Sales", "Manufacturing"]),
... ]).into_view()
>>> print(left.join(right, Join.equal(emp.DeptId, dept.DeptId)))
EmpId | DeptId | DeptId | DeptName
----- | ------ | ------ | ---------
0     | 1      | 1      | Marketing
5     | 1      | 1      | Marketing
2     | 2      | 2      | Sales
>>> print(left.join(right, Join.equal(emp.DeptId, dept.DeptId, JoinKind.RIGHT_OUTER)))
EmpId | DeptId | DeptId | DeptName
----- | ------ | ------ | -------------
0     | 1      | 1      | Marketing
5     | 1      | 1      | Marketing
2     | 2      | 2      | Sales
NA    | NA     | 3      | Manufacturing
"""

import bisect
import dataclasses
import enum

from ..errors import LabelCollisionError, TypeMismatchError
from ..store.field import DataIndex
from ..store.labels import Label
from ..view.view import View, ViewEntry
from .sorting import sort_order

JoinIndices = tuple[list[int | None], list[int | None]]


class JoinKind(enum.Enum):
    """Which rows without a match are part of the result."""

    INNER = "inner"
    LEFT_OUTER = "left_outer"
    RIGHT_OUTER = "right_outer"
    FULL_OUTER = "full_outer"

    @property
    def keeps_left(self) -> bool:
        return self in (JoinKind.LEFT_OUTER, JoinKind.FULL_OUTER)

    @property
    def keeps_right(self) -> bool:
        return self in (JoinKind.RIGHT_OUTER, JoinKind.FULL_OUTER)


class Predicate(enum.Enum):
    """How the left key must relate to the right key for rows to match."""

    EQUAL = "="
    LESS_THAN = "<"
    LESS_THAN_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_THAN_EQUAL = ">="


@dataclasses.dataclass(frozen=True)
class Join:
    """Description of a join.

    :param left: The key label in the left view.
    :param right: The key label in the right view.
    :param predicate: How the keys must relate for rows to match.
    :param kind: Which rows without a match to keep.
    """

    left: Label
    right: Label
    predicate: Predicate = Predicate.EQUAL
    kind: JoinKind = JoinKind.INNER

    def __post_init__(self) -> None:
        if self.left.dtype is not self.right.dtype:
            raise TypeMismatchError(
                f"can't join {self.left.dtype.name} keys with {self.right.dtype.name} keys",
                label=self.right.name,
            )

    def __str__(self) -> str:
        return f"Join({self.left.name} {self.predicate.value} {self.right.name}, {self.kind.value})"

    @classmethod
    def equal(cls, left: Label, right: Label, kind: JoinKind = JoinKind.INNER) -> "Join":
        return cls(left, right, Predicate.EQUAL, kind)

    @classmethod
    def less_than(cls, left: Label, right: Label, kind: JoinKind = JoinKind.INNER) -> "Join":
        return cls(left, right, Predicate.LESS_THAN, kind)

    @classmethod
    def less_than_equal(
        cls, left: Label, right: Label, kind: JoinKind = JoinKind.INNER
    ) -> "Join":
        return cls(left, right, Predicate.LESS_THAN_EQUAL, kind)

    @classmethod
    def greater_than(
        cls, left: Label, right: Label, kind: JoinKind = JoinKind.INNER
    ) -> "Join":
        return cls(left, right, Predicate.GREATER_THAN, kind)

    @classmethod
    def greater_than_equal(
        cls, left: Label, right: Label, kind: JoinKind = JoinKind.INNER
    ) -> "Join":
        return cls(left, right, Predicate.GREATER_THAN_EQUAL, kind)


def _equal_pairs(
    left_keys: list[tuple], left_order: list[int], right_keys: list[tuple], right_order: list[int]
) -> list[tuple[int, int]]:
    """Pairs of positions with equal keys, by merging the two sorted orders."""
    pairs = []
    li = ri = 0
    while li < len(left_order) and ri < len(right_order):
        left_key = left_keys[left_order[li]]
        right_key = right_keys[right_order[ri]]
        if left_key < right_key:
            li += 1
        elif right_key < left_key:
            ri += 1
        else:
            # Find the end of the run of equal keys on each side
            left_end = li
            while left_end < len(left_order) and left_keys[left_order[left_end]] == left_key:
                left_end += 1
            right_end = ri
            while right_end < len(right_order) and right_keys[right_order[right_end]] == right_key:
                right_end += 1
            for left_idx in left_order[li:left_end]:
                for right_idx in right_order[ri:right_end]:
                    pairs.append((left_idx, right_idx))
            li, ri = left_end, right_end
    return pairs


def _inequality_pairs(
    predicate: Predicate,
    left_keys: list[tuple],
    left_order: list[int],
    right_keys: list[tuple],
    right_order: list[int],
) -> list[tuple[int, int]]:
    """Pairs of positions whose keys satisfy an inequality predicate.

    For each left key, the matching right rows are a contiguous
    range of the sorted right keys, found by bisection.
    """
    sorted_right = [right_keys[idx] for idx in right_order]
    # Only actual values can be compared, missing and NaN sort before them.
    first_value = bisect.bisect_left(sorted_right, (2,))
    pairs = []
    for left_idx in left_order:
        key = left_keys[left_idx]
        if key < (2,):
            continue
        if predicate is Predicate.LESS_THAN:
            start, end = bisect.bisect_right(sorted_right, key), len(sorted_right)
        elif predicate is Predicate.LESS_THAN_EQUAL:
            start, end = bisect.bisect_left(sorted_right, key), len(sorted_right)
        elif predicate is Predicate.GREATER_THAN:
            start, end = first_value, bisect.bisect_left(sorted_right, key)
        else:
            start, end = first_value, bisect.bisect_right(sorted_right, key)
        start = max(start, first_value)
        for right_idx in sorted(right_order[start:end]):
            pairs.append((left_idx, right_idx))
    return pairs


def join_indices(
    left: DataIndex,
    right: DataIndex,
    predicate: Predicate = Predicate.EQUAL,
    kind: JoinKind = JoinKind.INNER,
) -> JoinIndices:
    """Positions of the left and right rows that form the joined rows.

    Returns two lists of the same length, the joined row ``i`` is made
    of the left row ``left[i]`` and the right row ``right[i]``.
    Rows without a match in outer joins have ``None`` on the other side.
    """
    if left.dtype is not right.dtype:
        raise TypeMismatchError(
            f"can't join {left.dtype.name} keys with {right.dtype.name} keys"
        )
    left_keys = [value.sort_key() for value in left]
    right_keys = [value.sort_key() for value in right]
    left_order = sort_order(left)
    right_order = sort_order(right)

    if predicate is Predicate.EQUAL:
        pairs = _equal_pairs(left_keys, left_order, right_keys, right_order)
    else:
        pairs = _inequality_pairs(predicate, left_keys, left_order, right_keys, right_order)

    left_indices: list[int | None] = [left_idx for left_idx, _ in pairs]
    right_indices: list[int | None] = [right_idx for _, right_idx in pairs]
    if kind.keeps_left:
        matched = set(left_indices)
        for left_idx in left_order:
            if left_idx not in matched:
                left_indices.append(left_idx)
                right_indices.append(None)
    if kind.keeps_right:
        matched = {idx for idx in right_indices if idx is not None}
        for right_idx in right_order:
            if right_idx not in matched:
                left_indices.append(None)
                right_indices.append(right_idx)
    return left_indices, right_indices


def join(left: View, right: View, spec: Join) -> View:
    """Join two views according to ``spec``.

    The result exposes the fields of the left view followed
    by those of the right view, which can't share any label.
    """
    collisions = [lbl.name for lbl in right.labels() if lbl in left]
    if collisions:
        raise LabelCollisionError(
            "present in both sides of the join, relabel it first",
            label=", ".join(collisions),
        )
    left_indices, right_indices = join_indices(
        left.field(spec.left), right.field(spec.right), spec.predicate, spec.kind
    )
    frames = [frame.update_permutation(left_indices) for frame in left.frames] + [
        frame.update_permutation(right_indices) for frame in right.frames
    ]
    offset = left.nframes()
    entries = list(left.entries) + [
        ViewEntry(entry.label, entry.frame_index + offset, entry.inner_label)
        for entry in right.entries
    ]
    return View(frames, entries)
