"""
Arch backend — pacman for queries, an AUR helper for changes.

Queries go straight to pacman. Installs and removals go through the
configured AUR helper (paru by default) so AUR packages work too; the
helper accepts pacman's flags.
"""

from __future__ import annotations

import logging

from pacdef.backends.base import Backend

logger = logging.getLogger(__name__)


class ArchBackend(Backend):
    """Arch Linux packages (``[arch]`` section)."""

    @property
    def section(self) -> str:
        return "arch"

    @property
    def binary(self) -> str:
        return "pacman"

    def query_installed(self) -> set[str]:
        return self._lines(self._query(["pacman", "-Qq"]))

    def query_explicit(self) -> set[str]:
        return self._lines(self._query(["pacman", "-Qqe"]))

    def _install(self, packages: list[str]) -> None:
        self._run_action([self._settings.aur_helper, "-S", "--needed", *packages])

    def _remove(self, packages: list[str]) -> None:
        # -s: unneeded dependencies, -n: backup files
        self._run_action([
            self._settings.aur_helper,
            "-Rsn",
            *self._settings.aur_rm_args,
            *packages,
        ])
