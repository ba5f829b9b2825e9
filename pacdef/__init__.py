"""pacdef — declarative package management across package managers."""

__version__ = "1.0.0"
