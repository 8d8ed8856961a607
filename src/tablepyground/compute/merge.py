"""Horizontal concatenation of views.

Merging two views with the same number of rows produces
a view exposing the fields of both, row ``i`` of the right
view is aligned with row ``i`` of the left view:

>>> from tablepyground.store import Store, dtypes, table
>>> emp = table("emp", EmpId=dtypes.UINT64)
>>> vac = table("vac", VacationHrs=dtypes.FLOAT64)
>>> left = Store.from_columns([(emp.EmpId, [0, 2, 5])]).into_view()
>>> right = Store.from_columns([(vac.VacationHrs, [47.3, 54.1, 98.3])]).into_view()
>>> merged = merge(left, right)
>>> merged.fieldnames(), merged.nframes()
(['EmpId', 'VacationHrs'], 2)
>>> merged.field(vac.VacationHrs).get(2)
Exists(98.3)
"""

from ..errors import DimensionMismatchError, LabelCollisionError
from ..view.view import View, ViewEntry


def merge(left: View, right: View) -> View:
    """Concatenate the fields of ``right`` after those of ``left``.

    No data is copied, the merged view refers to the frames of both views.
    """
    if left.nrows() != right.nrows():
        raise DimensionMismatchError(
            f"can't merge a view of {right.nrows()} rows "
            f"into a view of {left.nrows()} rows"
        )
    for lbl in right.labels():
        if lbl in left:
            raise LabelCollisionError("present in both merged views", label=lbl.name)

    offset = left.nframes()
    entries = list(left.entries) + [
        ViewEntry(entry.label, entry.frame_index + offset, entry.inner_label)
        for entry in right.entries
    ]
    return View(left.frames + right.frames, entries)
