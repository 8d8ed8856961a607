"""Generic utilities and helpers.

This is a collection of helpers that are used by the
other parts of the codebase but are not specifically
bound to any of the components, like formatting data
for display.
"""

from .tabulate import tabulate

__all__ = ("tabulate",)
