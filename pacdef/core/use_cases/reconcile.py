"""
Reconcile use cases — sync, clean, unmanaged.

Each run walks the same state machine:

    collect → nothing to do            (outcome "nothing_to_do")
            → confirm → declined       (outcome "declined", system untouched)
                      → confirmed → execute → done   (outcome "done")

Confirmation is injected so the CLI can prompt and tests can answer.
An ``ActionFailure`` during execution is not caught here.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Literal

from pacdef.backends.base import Backend
from pacdef.core.engine.reconcile import (
    ToDoPerBackend,
    collect_missing,
    collect_unmanaged,
)
from pacdef.core.models.group import Group

logger = logging.getLogger(__name__)

Outcome = Literal["nothing_to_do", "declined", "done", "shown"]
Confirm = Callable[[ToDoPerBackend], bool]


@dataclass
class ReconcileResult:
    """Outcome of one sync/clean/unmanaged run."""

    action: str
    outcome: Outcome
    todo: ToDoPerBackend = field(default_factory=ToDoPerBackend)
    skipped: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.outcome == "done"

    def to_dict(self) -> dict:
        return {
            "action": self.action,
            "outcome": self.outcome,
            "packages": self.todo.to_dict(),
            "skipped_backends": self.skipped,
        }


def _skipped(backends: list[Backend], todo: ToDoPerBackend) -> list[str]:
    answered = set(todo.sections())
    return [b.section for b in backends if b.section not in answered]


def _reconcile(
    action: str,
    todo: ToDoPerBackend,
    backends: list[Backend],
    confirm: Confirm,
    execute: Callable[[ToDoPerBackend], None],
) -> ReconcileResult:
    skipped = _skipped(backends, todo)

    if todo.nothing_to_do_for_all_backends():
        logger.info("%s: nothing to do", action)
        return ReconcileResult(action=action, outcome="nothing_to_do", todo=todo, skipped=skipped)

    if not confirm(todo):
        logger.info("%s: declined by user", action)
        return ReconcileResult(action=action, outcome="declined", todo=todo, skipped=skipped)

    execute(todo)
    return ReconcileResult(action=action, outcome="done", todo=todo, skipped=skipped)


def sync_packages(
    groups: Iterable[Group],
    backends: Iterable[Backend],
    confirm: Confirm,
) -> ReconcileResult:
    """Install every declared package that is missing.

    Raises:
        ActionFailure: If a confirmed install fails.
    """
    backends = list(backends)
    todo = collect_missing(groups, backends)
    return _reconcile(
        "sync", todo, backends, confirm, ToDoPerBackend.install_missing_packages
    )


def clean_packages(
    groups: Iterable[Group],
    backends: Iterable[Backend],
    confirm: Confirm,
) -> ReconcileResult:
    """Remove every explicitly installed package no group declares.

    Raises:
        ActionFailure: If a confirmed removal fails.
    """
    backends = list(backends)
    todo = collect_unmanaged(groups, backends)
    return _reconcile(
        "clean", todo, backends, confirm, ToDoPerBackend.remove_unmanaged_packages
    )


def show_unmanaged(
    groups: Iterable[Group],
    backends: Iterable[Backend],
) -> ReconcileResult:
    """Unmanaged packages per backend. Read-only."""
    backends = list(backends)
    todo = collect_unmanaged(groups, backends)
    return ReconcileResult(
        action="unmanaged",
        outcome="shown",
        todo=todo,
        skipped=_skipped(backends, todo),
    )
