"""Tri-state selection capability."""

from .propagation import SelectionPropagator, SelectionStateError, has_checked_or_indeterminate_children

__all__ = [
    "SelectionPropagator",
    "SelectionStateError",
    "has_checked_or_indeterminate_children",
]
