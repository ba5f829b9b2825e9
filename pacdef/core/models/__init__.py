"""
Domain models — Pydantic types for pacdef.

    from pacdef.core.models import Group, Section
"""

from pacdef.core.models.group import Group, Section

__all__ = [
    "Group",
    "Section",
]
