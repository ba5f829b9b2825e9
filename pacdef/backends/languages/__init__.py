"""Language package-manager backends — python, rust."""

from pacdef.backends.languages.python import PythonBackend
from pacdef.backends.languages.rust import RustBackend

__all__ = ["PythonBackend", "RustBackend"]
