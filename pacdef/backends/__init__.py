"""Backends — one per supported package manager.

Public re-exports for convenient access.
"""

from pacdef.backends.base import (
    ActionFailure,
    Backend,
    BackendError,
    BackendNotLoaded,
    BackendUnavailable,
    PackageSet,
    QueryFailure,
)
from pacdef.backends.fake import FakeBackend
from pacdef.backends.registry import BACKEND_TYPES, BackendRegistry

__all__ = [
    "ActionFailure",
    "BACKEND_TYPES",
    "Backend",
    "BackendError",
    "BackendNotLoaded",
    "BackendRegistry",
    "BackendUnavailable",
    "FakeBackend",
    "PackageSet",
    "QueryFailure",
]
