"""
Debian backend — dpkg for queries, apt-get for changes.
"""

from __future__ import annotations

import logging

from pacdef.backends.base import Backend

logger = logging.getLogger(__name__)

# Second status letter: current state, "i" = installed (first is the wanted state).
_INSTALLED = "i"


class DebianBackend(Backend):
    """Debian/Ubuntu packages (``[debian]`` section).

    ``dpkg-query`` also lists removed packages whose configuration is
    still present. Only the current state counts: held (``hi``) or
    pending-removal (``ri``, ``pi``) packages are still installed.
    """

    @property
    def section(self) -> str:
        return "debian"

    @property
    def binary(self) -> str:
        return "dpkg-query"

    def query_installed(self) -> set[str]:
        output = self._query(
            ["dpkg-query", "-W", "-f=${db:Status-Abbrev} ${Package}\\n"]
        )
        installed = set()
        for line in output.splitlines():
            parts = line.split()
            if len(parts) == 2 and parts[0][1:2] == _INSTALLED:
                installed.add(parts[1])
        return installed

    def query_explicit(self) -> set[str]:
        return self._lines(self._query(["apt-mark", "showmanual"]))

    def _install(self, packages: list[str]) -> None:
        self._run_action(["sudo", "apt-get", "install", *packages])

    def _remove(self, packages: list[str]) -> None:
        self._run_action(["sudo", "apt-get", "remove", "--autoremove", *packages])
