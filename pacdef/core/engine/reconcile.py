"""
Reconciliation engine — per-backend diffs, aggregated.

Flow:
    registry → load each backend with the groups → diff → ToDoPerBackend
    → (caller confirms) → install / remove per backend

Collection only reads: a backend that cannot be queried is logged and
skipped, and the remaining backends still run. Execution runs after
confirmation: the first failure propagates and ends the run, and
backends already handled are not rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator

from pacdef.backends.base import Backend, BackendError, PackageSet
from pacdef.core.models.group import Group

logger = logging.getLogger(__name__)


class ToDoPerBackend:
    """Packages to act on, one entry per backend, in registry order.

    Backends that failed during collection have no entry at all.
    """

    def __init__(self) -> None:
        self._entries: list[tuple[Backend, PackageSet]] = []

    def append(self, backend: Backend, packages: PackageSet) -> None:
        if any(b.section == backend.section for b, _ in self._entries):
            raise ValueError(f"Duplicate entry for backend '{backend.section}'")
        self._entries.append((backend, packages))

    def __iter__(self) -> Iterator[tuple[Backend, PackageSet]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        """No backend produced an entry."""
        return not self._entries

    def nothing_to_do_for_all_backends(self) -> bool:
        return all(not packages for _, packages in self._entries)

    def sections(self) -> list[str]:
        return [backend.section for backend, _ in self._entries]

    def summary(self) -> list[tuple[str, PackageSet]]:
        """(section, packages) for display; empty entries are skipped."""
        return [
            (backend.section, packages)
            for backend, packages in self._entries
            if packages
        ]

    def install_missing_packages(self) -> None:
        """Install each entry's packages. The first failure propagates."""
        for backend, packages in self._entries:
            backend.install(packages)

    def remove_unmanaged_packages(self) -> None:
        """Remove each entry's packages. The first failure propagates."""
        for backend, packages in self._entries:
            backend.remove(packages)

    def to_dict(self) -> dict[str, list[str]]:
        return {section: list(packages) for section, packages in self.summary()}


def _collect(
    groups: Iterable[Group],
    backends: Iterable[Backend],
    diff: Callable[[Backend], PackageSet],
) -> ToDoPerBackend:
    groups = list(groups)
    result = ToDoPerBackend()

    for backend in backends:
        backend.load(groups)
        try:
            packages = diff(backend)
        except BackendError as e:
            logger.warning("WARNING: skipping backend '%s': %s", backend.section, e)
            continue
        result.append(backend, packages)

    return result


def collect_missing(
    groups: Iterable[Group],
    backends: Iterable[Backend],
) -> ToDoPerBackend:
    """Declared-but-not-installed packages for every backend that answers."""
    return _collect(groups, backends, lambda b: b.get_missing_packages_sorted())


def collect_unmanaged(
    groups: Iterable[Group],
    backends: Iterable[Backend],
) -> ToDoPerBackend:
    """Explicitly-installed-but-undeclared packages for every backend that answers."""
    return _collect(groups, backends, lambda b: b.get_unmanaged_packages_sorted())
