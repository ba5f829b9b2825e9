"""
Group use cases — list groups, open group files in an editor.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Iterable, Sequence
from pathlib import Path

from pacdef.core.config.loader import ConfigError
from pacdef.core.models.group import Group

logger = logging.getLogger(__name__)


def list_groups(groups: Iterable[Group]) -> list[str]:
    """Group names, sorted."""
    return sorted(group.name for group in groups)


def edit_group_files(
    group_dir: Path,
    names: Sequence[str],
    editor: str | None = None,
) -> None:
    """Open the named group files in the user's editor.

    Args:
        group_dir: Directory holding the group files.
        names: Group names (file names) to open.
        editor: Editor command; defaults to ``$EDITOR``.

    Raises:
        ConfigError: If a file is missing, no editor is configured, or
            the editor fails.
    """
    if not names:
        raise ConfigError("No group given to edit")

    files = [group_dir / name for name in names]
    for file in files:
        if not file.exists():
            raise ConfigError(f"group file {file} not found")

    editor = editor or os.environ.get("EDITOR")
    if not editor:
        raise ConfigError("No editor configured: set $EDITOR or pass --editor")

    try:
        cmd = [*shlex.split(editor), *map(str, files)]
    except ValueError as e:
        raise ConfigError(f"cannot parse editor command '{editor}'") from e
    logger.debug("Running editor: %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd)
    except OSError as e:
        raise ConfigError(f"running editor '{editor}'") from e

    if result.returncode != 0:
        raise ConfigError(f"editor exited with error (code {result.returncode})")
