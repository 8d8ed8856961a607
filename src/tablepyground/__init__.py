"""TablePyground

An in-process tabular data engine built for learning and teaching purposes.

Data is kept in columnar stores, where each column holds values
of a single semantic type any of which might be missing.
Stores are accessed through views, which allow restricting,
reordering, relabeling, joining and reshaping the data without
ever copying it.

The engine is constituted by multiple components, each isolated within its own
package and each self documented in literate programming style:

* The Store, which holds the data and identifies columns by label.
* The View layer, which exposes the data of one or more stores.
* The Compute operations, which analyse and combine views.

A typical session declares the labels of the tables upfront,
loads the data and then works on views:

>>> from tablepyground import Join, Store, dtypes, table
>>> emp = table("emp", EmpId=dtypes.UINT64, DeptId=dtypes.UINT64, EmpName=dtypes.TEXT)
>>> dept = table("dept", DeptId=dtypes.UINT64, DeptName=dtypes.TEXT)
>>> employees = Store.from_columns([
...     (emp.EmpId, [0, 2, 5]),
...     (emp.DeptId, [1, 2, 1]),
...     (emp.EmpName, ["Sally", "Jamie", "Bob"]),
... ]).into_view()
>>> departments = Store.from_columns([
...     (dept.DeptId, [1, 2]),
...     (dept.DeptName, ["Marketing", "Sales"]),
... ]).into_view()
>>> joined = employees.join(departments, Join.equal(emp.DeptId, dept.DeptId))
>>> print(joined.subview([emp.EmpName, dept.DeptName]).sort_by_label(emp.EmpName))
EmpName | DeptName
------- | ---------
Bob     | Marketing
Jamie   | Sales
Sally   | Marketing

For the user guide and code documentation of each component, refer to the
component itself.
"""

from . import compute, errors, store, view
from .compute import Join, JoinKind, Predicate
from .store import (
    ArrowTableSource,
    DType,
    Exists,
    FieldData,
    FieldSource,
    Label,
    Missing,
    Store,
    Tablespace,
    Value,
    dtypes,
    label,
    table,
)
from .view import View

__all__ = (
    "compute",
    "errors",
    "store",
    "view",
    "dtypes",
    "DType",
    "Value",
    "Exists",
    "Missing",
    "FieldData",
    "Label",
    "Tablespace",
    "label",
    "table",
    "Store",
    "FieldSource",
    "ArrowTableSource",
    "View",
    "Join",
    "JoinKind",
    "Predicate",
)
