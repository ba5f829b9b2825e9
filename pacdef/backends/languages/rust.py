"""
Rust backend — binaries installed with ``cargo install``.
"""

from __future__ import annotations

import logging

from pacdef.backends.base import Backend

logger = logging.getLogger(__name__)


class RustBackend(Backend):
    """Rust crates (``[rust]`` section).

    cargo only tracks crates the user installed, so the explicit set is
    the installed set.
    """

    @property
    def section(self) -> str:
        return "rust"

    @property
    def binary(self) -> str:
        return "cargo"

    def query_installed(self) -> set[str]:
        output = self._query(["cargo", "install", "--list"])
        # "ripgrep v14.1.0:" followed by indented binary names
        crates = set()
        for line in output.splitlines():
            if not line or line[0].isspace():
                continue
            crates.add(line.split(" ", 1)[0])
        return crates

    def query_explicit(self) -> set[str]:
        return self.query_installed()

    def _install(self, packages: list[str]) -> None:
        self._run_action(["cargo", "install", *packages])

    def _remove(self, packages: list[str]) -> None:
        self._run_action(["cargo", "uninstall", *packages])
