"""Reshaping of views from wide to long format.

Data is frequently distributed with one column for each
value of some variable, like one column per year::

    EmpId, Year2010, Year2011
    0,     1500,     1600
    1,     900,      950

Melting those columns produces a table with one row for each
of the original cells, where a new column tells which of the
original columns the value came from::

    EmpId, SalaryYear, Salary
    0,     Year2010,   1500
    0,     Year2011,   1600
    1,     Year2010,   900
    1,     Year2011,   950

>>> from tablepyground.store import Store, dtypes, table
>>> sal = table("sal", EmpId=dtypes.UINT64, Year2010=dtypes.FLOAT64, Year2011=dtypes.FLOAT64)
>>> melted_fields = table("melted", SalaryYear=dtypes.TEXT, Salary=dtypes.FLOAT64)
>>> view = Store.from_columns([
...     (sal.EmpId, [0, 1]),
...     (sal.Year2010, [1500, 900]),
...     (sal.Year2011, [1600, None]),
... ]).into_view()
>>> print(melt(view, [sal.Year2010, sal.Year2011], melted_fields.SalaryYear, melted_fields.Salary))
EmpId | SalaryYear | Salary
----- | ---------- | -------
0     | Year2010   | 1500.00
0     | Year2011   | 1600.00
1     | Year2010   | 900.00
1     | Year2011   | NA

Differently from the other operations, melting materializes
its result into a new store.
"""

from typing import Sequence

from ..errors import InvalidArgumentError, LabelCollisionError, TypeMismatchError
from ..store.labels import Label
from ..store.store import Store
from ..view.view import View


def melt(view: View, labels: Sequence[Label], variable: Label, value: Label) -> View:
    """Unpivot the fields ``labels`` of ``view``.

    :param view: The view to reshape.
    :param labels: The fields to unpivot, they must all have the same type.
    :param variable: The text field that will hold the names of the unpivoted fields.
    :param value: The field that will hold the values, it must have
                  the same type of the unpivoted fields.
    """
    if not labels:
        raise InvalidArgumentError("At least one field to melt is required")
    melted = [view.field(lbl) for lbl in labels]
    dtype = labels[0].dtype
    for lbl in labels:
        if lbl.dtype is not dtype:
            raise TypeMismatchError(
                f"can't be melted as {dtype.name} together with {labels[0].name}",
                label=lbl.name,
            )
    if not variable.dtype.is_text:
        raise TypeMismatchError("the variable field must be text", label=variable.name)
    if value.dtype is not dtype:
        raise TypeMismatchError(
            f"the value field must be {dtype.name}", label=value.name
        )

    melted_labels = set(labels)
    kept = [lbl for lbl in view.labels() if lbl not in melted_labels]
    for new_label in (variable, value):
        if new_label in kept:
            raise LabelCollisionError("already present in melted view", label=new_label.name)
    if variable == value:
        raise LabelCollisionError("variable and value fields must differ", label=value.name)

    nvars = len(labels)
    store = Store.empty()
    for lbl in kept:
        store = store.push_field_from_iter(
            lbl, (cell for cell in view.field(lbl) for _ in range(nvars))
        )
    names = [lbl.name for lbl in labels]
    store = store.push_field_from_iter(
        variable, (name for _ in range(view.nrows()) for name in names)
    )
    store = store.push_field_from_iter(
        value, (cell for row in zip(*melted) for cell in row)
    )
    return store.into_view()
