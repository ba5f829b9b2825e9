"""
Backend base — the contract between the reconciler and package managers.

Every supported ecosystem (pacman, apt, pip, cargo) is one Backend
subclass. The reconciler only talks to backends through this
interface: load the declared packages, query the system, diff, and
install or remove.

Failures are raised as ``BackendError``. The caller decides the
policy: collection catches and skips, execution lets the error end
the run.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence

from pacdef.core.config.loader import Settings
from pacdef.core.models.group import Group

logger = logging.getLogger(__name__)

# Sorted, duplicate-free package names.
PackageSet = list[str]


class BackendError(Exception):
    """Base class for every backend failure."""


class BackendUnavailable(BackendError):
    """The backend's underlying tool is missing or unusable."""


class QueryFailure(BackendError):
    """Querying installed or explicit packages failed."""


class BackendNotLoaded(BackendError):
    """A diff was requested before the backend was loaded."""


class ActionFailure(BackendError):
    """Installing or removing packages failed."""


class Backend(ABC):
    """Abstract base class for all package-manager backends.

    A backend starts not-loaded, is loaded once from the full group set,
    and is then queried or mutated. Package names are compared by exact
    string equality.

    To create a new backend:
        1. Subclass Backend
        2. Implement section, binary, query_installed, query_explicit,
           _install and _remove
        3. Add it to BACKEND_TYPES in the registry
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()
        self._declared: frozenset[str] | None = None

    @property
    @abstractmethod
    def section(self) -> str:
        """The group-file section this backend reads (e.g. 'arch')."""

    @property
    @abstractmethod
    def binary(self) -> str:
        """Executable whose presence makes this backend usable."""

    def is_available(self) -> bool:
        return shutil.which(self.binary) is not None

    # ── Declared state ─────────────────────────────────────────

    def load(self, groups: Iterable[Group]) -> None:
        """Derive the declared set from every group's ``[section]`` entries.

        Calling it again re-derives the set from scratch. Never touches
        the package manager.
        """
        declared: set[str] = set()
        for group in groups:
            declared.update(group.packages_for(self.section))
        self._declared = frozenset(declared)
        logger.debug("%s: %d declared packages", self.section, len(declared))

    @property
    def loaded(self) -> bool:
        return self._declared is not None

    @property
    def declared(self) -> frozenset[str]:
        if self._declared is None:
            raise BackendNotLoaded(f"backend '{self.section}' has not been loaded")
        return self._declared

    # ── System state ───────────────────────────────────────────

    @abstractmethod
    def query_installed(self) -> set[str]:
        """All packages currently installed through this backend."""

    @abstractmethod
    def query_explicit(self) -> set[str]:
        """Installed packages the user asked for, excluding dependencies."""

    # ── Diffs ──────────────────────────────────────────────────

    def get_missing_packages_sorted(self) -> PackageSet:
        """Declared but not installed."""
        declared = self.declared
        return sorted(declared - self.query_installed())

    def get_unmanaged_packages_sorted(self) -> PackageSet:
        """Explicitly installed but not declared."""
        declared = self.declared
        return sorted(self.query_explicit() - declared)

    # ── Actions ────────────────────────────────────────────────

    def install(self, packages: Sequence[str]) -> None:
        """Install exactly ``packages``. An empty set never calls the tool."""
        if not packages:
            return
        logger.info("%s: installing %s", self.section, ", ".join(packages))
        self._install(list(packages))

    def remove(self, packages: Sequence[str]) -> None:
        """Remove ``packages`` and, where supported, their dependencies."""
        if not packages:
            return
        logger.info("%s: removing %s", self.section, ", ".join(packages))
        self._remove(list(packages))

    @abstractmethod
    def _install(self, packages: list[str]) -> None:
        """Run the package manager's install command."""

    @abstractmethod
    def _remove(self, packages: list[str]) -> None:
        """Run the package manager's remove command."""

    # ── Helpers ────────────────────────────────────────────────

    def _query(self, cmd: list[str], timeout: int = 60) -> str:
        """Run a read-only command and return its stdout."""
        logger.debug("%s: query %s", self.section, " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except FileNotFoundError as e:
            raise BackendUnavailable(f"'{cmd[0]}' not found") from e
        except OSError as e:
            raise BackendUnavailable(f"cannot execute '{cmd[0]}': {e}") from e
        except subprocess.TimeoutExpired as e:
            raise QueryFailure(f"'{' '.join(cmd)}' timed out after {timeout}s") from e
        except UnicodeDecodeError as e:
            raise QueryFailure(f"'{' '.join(cmd)}' produced undecodable output: {e}") from e

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit code {result.returncode}"
            raise QueryFailure(f"'{' '.join(cmd)}' failed: {detail}")
        return result.stdout

    def _run_action(self, cmd: list[str]) -> None:
        """Run a mutating command attached to the terminal.

        The package manager may prompt (sudo password, its own
        confirmation), so output is not captured.
        """
        logger.debug("%s: run %s", self.section, " ".join(cmd))
        try:
            result = subprocess.run(cmd)
        except OSError as e:
            raise ActionFailure(f"cannot run '{cmd[0]}': {e}") from e

        if result.returncode != 0:
            raise ActionFailure(
                f"'{' '.join(cmd)}' exited with code {result.returncode}"
            )

    @staticmethod
    def _lines(output: str) -> set[str]:
        return {line.strip() for line in output.splitlines() if line.strip()}

    def __repr__(self) -> str:
        state = "loaded" if self.loaded else "not-loaded"
        return f"<{self.__class__.__name__} section={self.section!r} {state}>"
