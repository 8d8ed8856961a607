"""The TablePyground Compute Operations

The compute operations analyse and combine the data exposed by views.

Operations that work on a single field (sorting, filtering, unique)
don't produce data, they compute the positions of the rows
that should be kept and the order they should be kept in.
Those positions are then applied to views as permutations,
which is what the methods of :class:`View` do::

    (View)--field-->(DataIndex)--sort_order-->(positions)--update_permutation-->(View)

Operations that combine views (merge, join) return views
over the frames of their inputs, while reshaping operations
(melt, aggregate) materialize their result into new stores.

>>> from tablepyground.store import Store, dtypes, table
>>> animals = table("animals", name=dtypes.TEXT, n_legs=dtypes.UINT32)
>>> view = Store.from_columns([
...     (animals.name, ["Flamingo", "Horse", "Brittle stars", "Centipede"]),
...     (animals.n_legs, [2, 4, 5, 100]),
... ]).into_view()
>>> from tablepyground.compute import filtering
>>> # SELECT * FROM animals WHERE n_legs >= 5
>>> print(view.filter(animals.n_legs, filtering.greater_equal(5)))
name          | n_legs
------------- | ------
Brittle stars | 5
Centipede     | 100
"""

from .aggregate import (
    Aggregation,
    CountAggregation,
    MaxAggregation,
    MeanAggregation,
    MinAggregation,
    ReduceAggregation,
    SumAggregation,
    aggregate,
    aggregate_with,
)
from .elementwise import apply_scalar, combine, map_field
from .filtering import ArrowPredicate, filter_order
from .join import Join, JoinKind, Predicate, join, join_indices
from .merge import merge
from .reshape import melt
from .sorting import sort_order, sort_order_by, sort_order_unstable
from .stats import FieldStats, ViewStats
from .unique import composite_unique_indices, unique_indices, unique_values

__all__ = (
    "Aggregation",
    "ReduceAggregation",
    "SumAggregation",
    "CountAggregation",
    "MinAggregation",
    "MaxAggregation",
    "MeanAggregation",
    "aggregate",
    "aggregate_with",
    "combine",
    "apply_scalar",
    "map_field",
    "ArrowPredicate",
    "filter_order",
    "Join",
    "JoinKind",
    "Predicate",
    "join",
    "join_indices",
    "merge",
    "melt",
    "sort_order",
    "sort_order_by",
    "sort_order_unstable",
    "FieldStats",
    "ViewStats",
    "composite_unique_indices",
    "unique_indices",
    "unique_values",
)
