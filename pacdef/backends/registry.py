"""
Backend registry — the fixed, ordered set of supported backends.

The order of ``BACKEND_TYPES`` is the order every command iterates,
collects and prints in. Backends are never discovered dynamically.
"""

from __future__ import annotations

import logging

from pacdef.backends.base import Backend
from pacdef.backends.languages.python import PythonBackend
from pacdef.backends.languages.rust import RustBackend
from pacdef.backends.system.arch import ArchBackend
from pacdef.backends.system.debian import DebianBackend
from pacdef.core.config.loader import Settings

logger = logging.getLogger(__name__)

BACKEND_TYPES: tuple[type[Backend], ...] = (
    ArchBackend,
    DebianBackend,
    PythonBackend,
    RustBackend,
)


class BackendRegistry:
    """Factory for one fresh instance of each known backend.

    Sections listed in ``settings.disabled_backends`` are left out.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        backend_types: tuple[type[Backend], ...] = BACKEND_TYPES,
    ):
        self._settings = settings or Settings()
        self._backend_types = backend_types

    def enumerate(self) -> list[Backend]:
        """New, not-loaded backends in registry order."""
        disabled = set(self._settings.disabled_backends)
        backends = []
        for backend_type in self._backend_types:
            backend = backend_type(self._settings)
            if backend.section in disabled:
                logger.debug("Backend disabled by settings: %s", backend.section)
                continue
            backends.append(backend)
        return backends

    def sections(self) -> list[str]:
        """Section names of all known backends, disabled ones included."""
        return [backend_type(self._settings).section for backend_type in self._backend_types]

    def backend_status(self) -> dict[str, dict[str, object]]:
        """Availability of every enabled backend."""
        status = {}
        for backend in self.enumerate():
            status[backend.section] = {
                "section": backend.section,
                "available": backend.is_available(),
                "type": backend.__class__.__name__,
            }
        return status
