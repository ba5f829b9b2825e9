"""
Group model — a named declaration of packages, per backend section.

Groups are loaded once at startup and never mutated afterwards. Both
models are frozen, so groups can live in sets and be shared read-only
with every backend during ``load``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Section(BaseModel):
    """One ``[name]`` block of a group file."""

    model_config = ConfigDict(frozen=True)

    name: str                                   # backend section, e.g. "arch"
    packages: tuple[str, ...] = ()


class Group(BaseModel):
    """A named, ordered declaration of packages intended for installation.

    A section name may occur more than once (a file can repeat a header,
    and groups from several sources can be merged); lookups always see
    the union of all occurrences in declaration order.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    sections: tuple[Section, ...] = Field(default_factory=tuple)

    def packages_for(self, section: str) -> tuple[str, ...]:
        """All packages declared for ``section``, first occurrence wins."""
        seen: dict[str, None] = {}
        for sec in self.sections:
            if sec.name != section:
                continue
            for package in sec.packages:
                seen.setdefault(package, None)
        return tuple(seen)

    def section_names(self) -> list[str]:
        """Distinct section names in declaration order."""
        return list(dict.fromkeys(sec.name for sec in self.sections))

    def merge(self, other: Group) -> Group:
        """Combine a second declaration source for the same group."""
        if other.name != self.name:
            raise ValueError(
                f"Cannot merge group '{other.name}' into '{self.name}'"
            )
        return Group(name=self.name, sections=self.sections + other.sections)

    def __lt__(self, other: Group) -> bool:
        return self.name < other.name
