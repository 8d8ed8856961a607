"""Format views into a text table for print.

The `tabulate` function takes a view and formats it into a text table.
It will truncate long strings, format floats to 2 decimal places,
show missing values as ``NA`` and limit the number of rows to display.

Example:

    >>> from tablepyground.store import Store, dtypes, table
    >>> sales = table("sales", Product=dtypes.TEXT, Quantity=dtypes.INT64, Price=dtypes.FLOAT64)
    >>> view = Store.from_columns([
    ...     (sales.Product, ["Videogame", "Laptop", "Laptop"]),
    ...     (sales.Quantity, [8, None, 7]),
    ...     (sales.Price, [66.5, 38.72, 77.46]),
    ... ]).into_view()
    >>> print(tabulate(view))
    Product   | Quantity | Price
    --------- | -------- | -----
    Videogame | 8        | 66.50
    Laptop    | NA       | 38.72
    Laptop    | 7        | 77.46
"""

import itertools
from typing import TYPE_CHECKING

from ..store.value import Value

if TYPE_CHECKING:
    from ..view.view import View


def tabulate(view: "View", max_rows: int = 20) -> str:
    """Format a View into a text table.

    Will produce a string like::

        Product   | Quantity | Price | Total
        --------- | -------- | ----- | ------
        Videogame | 8        | 66.50 | 532.00
        Laptop    | NA       | 38.72 | NA
        Laptop    | 7        | 77.46 | 542.22
    """
    cols = view.fieldnames()
    rows = [
        [format_value(value) for value in row]
        for row in itertools.islice(view.rows(), max_rows)
    ]

    colsizes = compute_max_colsize(cols, rows)
    header = [maketablerow(cols, colsizes=colsizes)]
    separator = [maketablerow(["-"] * len(cols), colsizes=colsizes, fillvalue="-")]
    textrows = [maketablerow(row, colsizes=colsizes) for row in rows]

    table = "\n".join(header + separator + textrows)
    nrows = view.nrows()
    if nrows > max_rows:
        table += f"\n... and {nrows - max_rows} more rows"
    return table


def compute_max_colsize(cols: list[str], rows: list[list[str]]) -> list[int]:
    """Compute the maximum size of each column in a table."""
    return [
        max([len(row[colidx]) for row in rows] + [len(cols[colidx])])
        for colidx, _ in enumerate(cols)
    ]


def maketablerow(cols: list[str], colsizes: list[int], fillvalue: str = " ") -> str:
    """Make a table row with the given column sizes, without trailing spaces."""
    return " | ".join(
        [col.ljust(colsizes[idx], fillvalue) for idx, col in enumerate(cols)]
    ).rstrip()


def format_value(value: Value) -> str:
    """Format a value to be printed in the table.

    Missing values are printed as ``NA``, floats
    are formatted to 2 decimal places and long strings
    are truncated.
    """
    if value.is_missing():
        return "NA"
    v = value.unwrap()
    if isinstance(v, float):
        return f"{v:.2f}"
    elif isinstance(v, bool):
        return "true" if v else "false"

    v = str(v)
    if len(v) > 30:
        v = v[:27] + "..."
    return v
