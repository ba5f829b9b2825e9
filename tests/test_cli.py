"""
Tests for CLI commands and global options.
"""

import json
from pathlib import Path

from click.testing import CliRunner

from pacdef.backends.fake import FakeBackend
from pacdef.main import cli


def _invoke(config_dir: Path, args: list[str], backends=None, input: str | None = None):
    runner = CliRunner()
    obj = {"backends": backends} if backends is not None else None
    return runner.invoke(
        cli,
        ["--config-dir", str(config_dir), *args],
        obj=obj,
        input=input,
    )


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "declarative package management" in result.output

    def test_version_option(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_version_command(self, config_dir: Path):
        result = _invoke(config_dir, ["version"])
        assert result.exit_code == 0
        assert result.output.strip() == "pacdef, version: 1.0.0"


class TestGroupsCommand:
    def test_lists_sorted(self, config_dir: Path):
        result = _invoke(config_dir, ["groups"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["base", "dev"]

    def test_json(self, config_dir: Path):
        result = _invoke(config_dir, ["groups", "--json"])
        assert json.loads(result.output) == ["base", "dev"]

    def test_missing_group_dir(self, tmp_path: Path):
        result = _invoke(tmp_path, ["groups"])
        assert result.exit_code == 1
        assert "Group directory not found" in result.output

    def test_invalid_group_file(self, config_dir: Path):
        (config_dir / "groups" / "broken").write_text("vim\n")
        result = _invoke(config_dir, ["groups"])
        assert result.exit_code == 1
        assert "not inside a [section]" in result.output


class TestSyncCommand:
    def test_confirmed(self, config_dir: Path):
        pkg = FakeBackend("pkg", installed={"git", "curl"})
        lang = FakeBackend("lang", installed={"black"})
        result = _invoke(config_dir, ["sync"], backends=[pkg, lang], input="y\n")
        assert result.exit_code == 0
        assert "Would install the following packages:" in result.output
        assert "  pkg\n    vim\n" in result.output
        assert "lang" not in result.output
        assert "Done." in result.output
        assert pkg.call_log == [("install", ["vim"])]

    def test_declined(self, config_dir: Path):
        pkg = FakeBackend("pkg", installed={"git"})
        result = _invoke(config_dir, ["sync"], backends=[pkg], input="n\n")
        assert result.exit_code == 0
        assert "Aborted, nothing changed." in result.output
        assert pkg.call_log == []

    def test_nothing_to_do(self, config_dir: Path):
        pkg = FakeBackend("pkg", installed={"git", "vim"})
        lang = FakeBackend("lang", installed={"black"})
        result = _invoke(config_dir, ["sync"], backends=[pkg, lang])
        assert result.exit_code == 0
        assert result.output.strip() == "nothing to do"

    def test_noconfirm(self, config_dir: Path):
        pkg = FakeBackend("pkg")
        result = _invoke(config_dir, ["sync", "--noconfirm"], backends=[pkg])
        assert result.exit_code == 0
        assert "Continue?" not in result.output
        assert pkg.installed == {"git", "vim"}

    def test_action_failure_exits_1(self, config_dir: Path):
        pkg = FakeBackend("pkg")
        pkg.fail_actions("'paru -S --needed git vim' exited with code 1")
        result = _invoke(config_dir, ["sync", "--noconfirm"], backends=[pkg])
        assert result.exit_code == 1
        assert "exited with code 1" in result.output

    def test_failing_backend_is_skipped(self, config_dir: Path):
        broken = FakeBackend("pkg")
        broken.fail_queries()
        lang = FakeBackend("lang")
        result = _invoke(config_dir, ["sync", "--noconfirm"], backends=[broken, lang])
        assert result.exit_code == 0
        assert lang.installed == {"black"}


class TestCleanCommand:
    def test_confirmed(self, config_dir: Path):
        pkg = FakeBackend("pkg", installed={"git", "vim", "curl"})
        result = _invoke(config_dir, ["clean"], backends=[pkg], input="y\n")
        assert result.exit_code == 0
        assert "Would remove the following packages and their dependencies:" in result.output
        assert pkg.installed == {"git", "vim"}

    def test_declined(self, config_dir: Path):
        pkg = FakeBackend("pkg", installed={"git", "vim", "curl"})
        result = _invoke(config_dir, ["clean"], backends=[pkg], input="n\n")
        assert "Aborted" in result.output
        assert pkg.installed == {"git", "vim", "curl"}

    def test_nothing_to_do(self, config_dir: Path):
        pkg = FakeBackend("pkg", installed={"git"})
        result = _invoke(config_dir, ["clean"], backends=[pkg])
        assert result.output.strip() == "nothing to do"


class TestUnmanagedCommand:
    def test_lists_per_section(self, config_dir: Path):
        pkg = FakeBackend("pkg", installed={"git", "curl", "htop"})
        lang = FakeBackend("lang", installed={"black"})
        result = _invoke(config_dir, ["unmanaged"], backends=[pkg, lang])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["pkg", "  curl", "  htop"]
        assert pkg.installed == {"git", "curl", "htop"}

    def test_json(self, config_dir: Path):
        pkg = FakeBackend("pkg", installed={"curl"})
        result = _invoke(config_dir, ["unmanaged", "--json"], backends=[pkg])
        data = json.loads(result.output)
        assert data["outcome"] == "shown"
        assert data["packages"] == {"pkg": ["curl"]}


class TestEditCommand:
    def test_missing_group(self, config_dir: Path):
        result = _invoke(config_dir, ["edit", "nope", "--editor", "true"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_opens_editor(self, config_dir: Path):
        result = _invoke(config_dir, ["edit", "base", "dev", "--editor", "true"])
        assert result.exit_code == 0

    def test_requires_group(self, config_dir: Path):
        result = _invoke(config_dir, ["edit"])
        assert result.exit_code == 2


class TestBackendsCommand:
    def test_json(self, config_dir: Path):
        result = _invoke(config_dir, ["backends", "--json"])
        assert result.exit_code == 0
        assert list(json.loads(result.output)) == ["arch", "debian", "python", "rust"]

    def test_respects_disabled(self, config_dir: Path):
        (config_dir / "pacdef.yaml").write_text("disabled_backends: [arch, debian]\n")
        result = _invoke(config_dir, ["backends", "--json"])
        assert list(json.loads(result.output)) == ["python", "rust"]

    def test_invalid_settings(self, config_dir: Path):
        (config_dir / "pacdef.yaml").write_text("bogus: true\n")
        result = _invoke(config_dir, ["backends"])
        assert result.exit_code == 1
        assert "Invalid settings" in result.output
