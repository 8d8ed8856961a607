"""Permutations of the rows of a frame.

Sorting, filtering and joining never move data around,
they only compute in which order the rows of the underlying
store should be read. That order is a :class:`Permutation`:
either the identity or an explicit list of source positions.

Permutations compose, updating a permutation with a new list
of indices ``V`` means that the logical row ``i`` will be read from
the row that was at position ``V[i]`` before the update:

>>> perm = Permutation.identity().update([3, 1, 0, 2])
>>> perm.indices
(3, 1, 0, 2)
>>> perm.update([0, 2]).indices
(3, 0)

This is what allows sorting and then filtering the already
sorted rows, the filter indices refer to the sorted positions.

Outer joins need rows that have no counterpart in the store,
those are represented by ``None`` entries, which are preserved
by further updates:

>>> Permutation([None, 1]).update([1, 0]).indices
(1, None)
"""

from typing import Iterable, Iterator

from ..errors import IndexOutOfBoundsError


class Permutation:
    """Identity or explicit list of positions into a row axis."""

    __slots__ = ("_indices",)

    def __init__(self, indices: Iterable[int | None] | None = None) -> None:
        """
        :param indices: The source positions, ``None`` for the identity.
        """
        self._indices = None if indices is None else tuple(indices)

    @classmethod
    def identity(cls) -> "Permutation":
        return cls()

    def __repr__(self) -> str:
        if self._indices is None:
            return "Permutation(identity)"
        return f"Permutation({list(self._indices)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Permutation):
            return NotImplemented
        return self._indices == other._indices

    def __hash__(self) -> int:
        return hash(self._indices)

    @property
    def is_identity(self) -> bool:
        return self._indices is None

    @property
    def indices(self) -> tuple[int | None, ...] | None:
        """The explicit positions, ``None`` for the identity."""
        return self._indices

    @property
    def length(self) -> int | None:
        """Number of rows, ``None`` means as many as the underlying data."""
        return None if self._indices is None else len(self._indices)

    def map_index(self, index: int) -> int | None:
        """The source position of the logical row ``index``."""
        if self._indices is None:
            return index
        if not 0 <= index < len(self._indices):
            raise IndexOutOfBoundsError(
                f"index {index} exceeds permutation length {len(self._indices)}"
            )
        return self._indices[index]

    def iter_indices(self, nrows: int) -> Iterator[int | None]:
        """Source positions of all the rows, ``nrows`` is used for the identity."""
        if self._indices is None:
            return iter(range(nrows))
        return iter(self._indices)

    def update(self, new_indices: Iterable[int | None]) -> "Permutation":
        """A new permutation reading ``self`` in the order of ``new_indices``."""
        if self._indices is None:
            return Permutation(new_indices)
        previous = self._indices
        return Permutation(None if idx is None else previous[idx] for idx in new_indices)
