"""The View Layer

Views are how the data held by stores is accessed and combined.
They are built in layers:

* :mod:`.permutation` the order in which the rows of a store are read.
* :mod:`.frame` a store read through a permutation.
* :mod:`.view` the labeled fields exposed on top of one or more frames.

All the operations of the view layer return new objects,
stores are shared between them and never copied.
"""

from .frame import Frame, FramedField
from .permutation import Permutation
from .view import View, ViewEntry

__all__ = ("Permutation", "Frame", "FramedField", "View", "ViewEntry")
