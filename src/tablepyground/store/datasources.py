"""Sources of data for stores.

The engine doesn't read files by itself, data comes to it
through source adapters: objects that provide a human readable
name, a semantic type and the values of a single field.

The most basic adapter is :class:`FieldSource`, which wraps
any iterable of values:

>>> from tablepyground.store import dtypes, labels
>>> emp = labels.table("emp", EmpId=dtypes.UINT64)
>>> store = Store.from_sources({emp.EmpId: FieldSource("id", dtypes.UINT64, [3, None, 5])})
>>> store.select_field(emp.EmpId).to_pylist()
[3, None, 5]

Text coming from external formats is parsed with the standard
parse rule of each type, where an empty field is a missing value:

>>> parse_text(dtypes.INT32, ["1", " 2 ", ""]).to_pylist()
[1, 2, None]

Arrow tables, like the ones produced by ``pyarrow.csv``, can be loaded
through :class:`ArrowTableSource` by mapping labels to the columns
of the table, either by name or by position:

>>> import pyarrow as pa
>>> data = pa.table({"id": ["1", "2"], "hours": [12.5, None]})
>>> hrs = labels.table("hrs", EmpId=dtypes.UINT64, Hours=dtypes.FLOAT64)
>>> store = ArrowTableSource(data).load({hrs.EmpId: "id", hrs.Hours: 1})
>>> store.fieldnames()
['EmpId', 'Hours']
>>> store.select_field(hrs.EmpId).to_pylist()
[1, 2]
"""

from typing import Any, Iterable, Iterator, Mapping

import pyarrow as pa
import pyarrow.compute as pc

from ..errors import LabelNotFoundError, ParseError
from .dtypes import DType
from .field import FieldData
from .labels import Label
from .store import Store
from .value import Missing, Value

Designator = str | int


class FieldSource:
    """The values of a single field, with their name and type."""

    def __init__(self, name: str, dtype: DType, values: Iterable[Any]) -> None:
        """
        :param name: Human readable name of the source field.
        :param dtype: The type of the provided values.
        :param values: The values, ``None`` is considered missing.
        """
        self.name = name
        self.dtype = dtype
        self.values = values

    def __str__(self) -> str:
        return f"FieldSource({self.name}: {self.dtype.name})"

    def __iter__(self) -> Iterator[Value]:
        for value in self.values:
            yield Value.of(value)


def parse_text(dtype: DType, strings: Iterable[str | None]) -> FieldData:
    """Build a field parsing each string with the rules of ``dtype``."""
    return FieldData.from_values(
        dtype, (Missing if text is None else dtype.parse(text) for text in strings)
    )


class ArrowTableSource:
    """Load fields from an in-memory pyarrow.Table or pyarrow.RecordBatch.

    Columns holding strings are parsed according to the type of
    the label they are loaded into, any other column is converted
    with a safe Arrow cast, so that no value is silently truncated.
    """

    def __init__(self, table: pa.Table | pa.RecordBatch) -> None:
        """
        :param table: The table or recordbatch with the data to read.
        """
        self.table = table

    def __str__(self) -> str:
        return f"ArrowTableSource(columns={self.table.column_names}, rows={self.table.num_rows})"

    def poll_schema(self) -> pa.Schema:
        """The schema of the table."""
        return self.table.schema

    def column(self, designator: Designator) -> pa.Array | pa.ChunkedArray:
        """The column of the table identified by name or position."""
        if isinstance(designator, bool) or not isinstance(designator, (str, int)):
            raise TypeError(f"invalid source field designator {designator!r}")
        if isinstance(designator, int):
            if not 0 <= designator < self.table.num_columns:
                raise LabelNotFoundError(
                    f"source has {self.table.num_columns} columns", label=str(designator)
                )
        elif designator not in self.table.column_names:
            raise LabelNotFoundError("no such column in source", label=designator)
        return self.table.column(designator)

    def field_source(self, lbl: Label, designator: Designator) -> FieldSource:
        """A source for ``lbl`` providing the values of the designated column."""
        column = self.column(designator)
        name = self.table.schema.field(designator).name
        if pa.types.is_string(column.type) or pa.types.is_large_string(column.type):
            try:
                values = [
                    Missing if text is None else lbl.dtype.parse(text)
                    for text in column.to_pylist()
                ]
            except ParseError as e:
                raise ParseError(e.reason, label=lbl.name) from e
        else:
            try:
                values = pc.cast(column, lbl.dtype.arrow_type, safe=True).to_pylist()
            except (pa.ArrowInvalid, pa.ArrowNotImplementedError) as e:
                raise ParseError(
                    f"unable to convert column {name!r} to {lbl.dtype.name}: {e}",
                    label=lbl.name,
                ) from e
        return FieldSource(name, lbl.dtype, values)

    def load(self, designators: Mapping[Label, Designator]) -> Store:
        """Build a store loading each label from the designated column.

        :param designators: ``{label: column name or index}``,
                            the fields are added in the order
                            of the mapping.
        """
        return Store.from_sources(
            {
                lbl: self.field_source(lbl, designator)
                for lbl, designator in designators.items()
            }
        )
