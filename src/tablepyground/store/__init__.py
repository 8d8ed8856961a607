"""The Column Store

The store is where the data of the engine actually lives.
Data is kept in columns, each column holding values of
a single semantic type, any of which might be missing.

The store is organised in layers, each module builds on top
of the previous ones:

* :mod:`.value` the possibly missing values held by columns.
* :mod:`.dtypes` the semantic types supported by columns.
* :mod:`.field` the columns themselves.
* :mod:`.labels` the identifiers used to refer to columns.
* :mod:`.store` the collections of labeled columns.
* :mod:`.datasources` the adapters loading external data into stores.

>>> from tablepyground.store import Store, dtypes, table
>>> emp = table("emp", EmpId=dtypes.UINT64, EmpName=dtypes.TEXT)
>>> store = Store.from_columns([
...     (emp.EmpId, [0, 2, 5]),
...     (emp.EmpName, ["Sally", "Jamie", "Bob"]),
... ])
>>> store
Store(fields=['EmpId', 'EmpName'], rows=3)
"""

from . import dtypes
from .datasources import ArrowTableSource, FieldSource, parse_text
from .dtypes import DType
from .field import DataIndex, FieldData
from .labels import Label, LabelMap, TableLabels, Tablespace, label, table
from .store import Store
from .value import Exists, Missing, Value

__all__ = (
    "dtypes",
    "DType",
    "Value",
    "Exists",
    "Missing",
    "DataIndex",
    "FieldData",
    "Label",
    "LabelMap",
    "TableLabels",
    "Tablespace",
    "label",
    "table",
    "Store",
    "FieldSource",
    "ArrowTableSource",
    "parse_text",
)
