"""
Fake backend — in-memory test double for every backend operation.

Holds its own installed/explicit sets, applies installs and removals
to them, and records every call. Queries and actions can be told to
fail to exercise the reconciler's error handling.
"""

from __future__ import annotations

from collections.abc import Iterable

from pacdef.backends.base import ActionFailure, Backend, BackendError, QueryFailure


class FakeBackend(Backend):
    """In-memory backend for tests.

    By default ``explicit`` equals ``installed``.
    """

    def __init__(
        self,
        section: str = "fake",
        installed: Iterable[str] = (),
        explicit: Iterable[str] | None = None,
        available: bool = True,
    ):
        super().__init__()
        self._section = section
        self.installed = set(installed)
        self.explicit = set(installed if explicit is None else explicit)
        self._available = available
        self._query_error: BackendError | None = None
        self._action_error: BackendError | None = None
        self._call_log: list[tuple[str, list[str]]] = []

    @property
    def section(self) -> str:
        return self._section

    @property
    def binary(self) -> str:
        return self._section

    @property
    def call_log(self) -> list[tuple[str, list[str]]]:
        """Every install/remove call as (operation, packages)."""
        return self._call_log

    def is_available(self) -> bool:
        return self._available

    def fail_queries(self, error: BackendError | str = "fake query failure") -> None:
        self._query_error = QueryFailure(error) if isinstance(error, str) else error

    def fail_actions(self, error: BackendError | str = "fake action failure") -> None:
        self._action_error = ActionFailure(error) if isinstance(error, str) else error

    def query_installed(self) -> set[str]:
        if self._query_error is not None:
            raise self._query_error
        return set(self.installed)

    def query_explicit(self) -> set[str]:
        if self._query_error is not None:
            raise self._query_error
        return set(self.explicit)

    def _install(self, packages: list[str]) -> None:
        self._call_log.append(("install", packages))
        if self._action_error is not None:
            raise self._action_error
        self.installed.update(packages)
        self.explicit.update(packages)

    def _remove(self, packages: list[str]) -> None:
        self._call_log.append(("remove", packages))
        if self._action_error is not None:
            raise self._action_error
        self.installed.difference_update(packages)
        self.explicit.difference_update(packages)
