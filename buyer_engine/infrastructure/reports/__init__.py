"""Infrastructure helpers for rendering simulation reports."""

from .projections import ProjectionTableBuilder

__all__ = ["ProjectionTableBuilder"]
