"""
Group file parser — reads the groups directory into Group models.

One file per group; the file name is the group name. Format::

    # comment
    [arch]
    vim
    git        # trailing comments are fine

    [python]
    black

Group files are usually symlinks into a dotfiles repository, so a
regular file triggers a warning unless ``warn_not_symlinks`` is off.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from pacdef.core.config.loader import ConfigError
from pacdef.core.models.group import Group, Section

logger = logging.getLogger(__name__)


def _strip_comment(line: str) -> str:
    return line.split("#", 1)[0].strip()


def parse_group(name: str, text: str, source: str | None = None) -> Group:
    """Parse the contents of one group file.

    Args:
        name: Group name (the file name).
        text: File contents.
        source: Where the text came from, for error messages.

    Raises:
        ConfigError: On a package outside any section or an empty header.
    """
    origin = source or name
    sections: list[Section] = []
    current: str | None = None
    packages: list[str] = []

    def close() -> None:
        if current is not None:
            sections.append(Section(name=current, packages=tuple(packages)))

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = _strip_comment(raw)
        if not line:
            continue

        if line.startswith("[") and line.endswith("]"):
            close()
            current = line[1:-1].strip()
            packages = []
            if not current:
                raise ConfigError(f"{origin}:{lineno}: empty section header")
            continue

        if current is None:
            raise ConfigError(
                f"{origin}:{lineno}: package '{line}' is not inside a [section]"
            )
        packages.append(line)

    close()
    return Group(name=name, sections=tuple(sections))


def load_group_file(path: Path) -> Group:
    """Read and parse a single group file."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read group file {path}: {e}") from e
    return parse_group(path.name, text, source=str(path))


def load_groups(
    directories: Path | Iterable[Path],
    warn_not_symlinks: bool = True,
) -> frozenset[Group]:
    """Load every group in one or more group directories.

    Hidden files are skipped. Groups sharing a name across directories
    are merged in directory order.

    Raises:
        ConfigError: If a directory is missing or a file is invalid.
    """
    dirs = [directories] if isinstance(directories, Path) else list(directories)
    merged: dict[str, Group] = {}

    for directory in dirs:
        if not directory.is_dir():
            raise ConfigError(f"Group directory not found: {directory}")

        for path in sorted(directory.iterdir()):
            if path.name.startswith(".") or not path.is_file():
                continue

            if warn_not_symlinks and not path.is_symlink():
                logger.warning("group file %s is not a symlink", path)

            group = load_group_file(path)
            if group.name in merged:
                merged[group.name] = merged[group.name].merge(group)
            else:
                merged[group.name] = group

    logger.info("Loaded %d groups from %s", len(merged), ", ".join(map(str, dirs)))
    return frozenset(merged.values())
