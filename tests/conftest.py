"""
Shared test fixtures and configuration.
"""

import subprocess
import textwrap
from pathlib import Path

import pytest

from pacdef.core.models.group import Group, Section


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """A pacdef config directory with two group files."""
    base = tmp_path / "pacdef"
    groups = base / "groups"
    groups.mkdir(parents=True)
    (groups / "base").write_text(textwrap.dedent("""\
        [pkg]
        vim
        git
    """))
    (groups / "dev").write_text(textwrap.dedent("""\
        [pkg]
        git
        [lang]
        black
    """))
    (base / "pacdef.yaml").write_text("warn_not_symlinks: false\n")
    return base


@pytest.fixture
def base_group() -> Group:
    return Group(
        name="base",
        sections=(Section(name="pkg", packages=("vim", "git")),),
    )


class FakeRun:
    """Stand-in for ``subprocess.run`` that records commands.

    ``responses`` maps a command prefix (longest match wins) to
    (returncode, stdout, stderr).
    """

    def __init__(self, responses: dict[tuple[str, ...], tuple[int, str, str]] | None = None):
        self.responses = responses or {}
        self.calls: list[list[str]] = []
        self.raise_for: dict[str, Exception] = {}

    def __call__(self, cmd, *args, **kwargs):
        self.calls.append(list(cmd))
        if cmd[0] in self.raise_for:
            raise self.raise_for[cmd[0]]
        for length in range(len(cmd), 0, -1):
            key = tuple(cmd[:length])
            if key in self.responses:
                code, out, err = self.responses[key]
                return subprocess.CompletedProcess(cmd, code, out, err)
        return subprocess.CompletedProcess(cmd, 0, "", "")


@pytest.fixture
def fake_run(monkeypatch) -> FakeRun:
    """Patch subprocess.run for every backend command."""
    runner = FakeRun()
    monkeypatch.setattr("pacdef.backends.base.subprocess.run", runner)
    return runner
