"""System package-manager backends — arch, debian."""

from pacdef.backends.system.arch import ArchBackend
from pacdef.backends.system.debian import DebianBackend

__all__ = ["ArchBackend", "DebianBackend"]
