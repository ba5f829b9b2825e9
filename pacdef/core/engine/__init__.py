"""Reconciliation engine."""

from pacdef.core.engine.reconcile import (
    ToDoPerBackend,
    collect_missing,
    collect_unmanaged,
)

__all__ = ["ToDoPerBackend", "collect_missing", "collect_unmanaged"]
