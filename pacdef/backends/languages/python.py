"""
Python backend — packages managed by pip.

Uses ``pip_binary`` from the settings when set, otherwise the running
interpreter's ``-m pip`` (bare ``pip`` may not be on PATH).
"""

from __future__ import annotations

import json
import logging
import shutil
import sys

from pacdef.backends.base import Backend, QueryFailure

logger = logging.getLogger(__name__)


class PythonBackend(Backend):
    """Python packages (``[python]`` section).

    ``pip list --not-required`` gives the packages nothing else depends
    on, which is the closest pip gets to "explicitly installed".
    """

    @property
    def section(self) -> str:
        return "python"

    @property
    def binary(self) -> str:
        return self._settings.pip_binary or sys.executable

    def is_available(self) -> bool:
        if self._settings.pip_binary:
            return shutil.which(self._settings.pip_binary) is not None
        return bool(sys.executable)

    def _pip_cmd(self) -> list[str]:
        if self._settings.pip_binary:
            return [self._settings.pip_binary]
        return [sys.executable, "-m", "pip"]

    def query_installed(self) -> set[str]:
        return self._list_packages()

    def query_explicit(self) -> set[str]:
        return self._list_packages("--not-required")

    def _list_packages(self, *flags: str) -> set[str]:
        cmd = [*self._pip_cmd(), "list", "--format", "json", *flags]
        output = self._query(cmd)
        try:
            data = json.loads(output)
            return {entry["name"] for entry in data}
        except (json.JSONDecodeError, TypeError, KeyError) as e:
            raise QueryFailure(f"unexpected output from '{' '.join(cmd)}': {e}") from e

    def _install(self, packages: list[str]) -> None:
        self._run_action([*self._pip_cmd(), "install", *packages])

    def _remove(self, packages: list[str]) -> None:
        self._run_action([*self._pip_cmd(), "uninstall", "--yes", *packages])
