"""Tests for the tarcheck command."""

import subprocess
import tarfile
from pathlib import Path

import pytest
from click.testing import CliRunner

from tarsniff.tarcheck import main


@pytest.fixture
def archives(tmp_path):
    """A plain tar, a gzipped tar and a text file."""
    text = tmp_path / "notes.txt"
    text.write_text("not an archive\n")
    with tarfile.open(tmp_path / "plain", "w") as tar:
        tar.add(text, arcname="notes.txt")
    with tarfile.open(tmp_path / "packed", "w:gz") as tar:
        tar.add(text, arcname="notes.txt")
    return tmp_path


def test_tarcheck_help():
    """Test that tarcheck --help works."""
    result = subprocess.run(
        ["tarcheck", "--help"],
        capture_output=True,
        text=True,
        cwd=Path(__file__).parent.parent,
    )
    assert result.returncode == 0
    assert "Check whether FILES are tar archives" in result.stdout or "Usage:" in result.stdout


def test_tarcheck_all_archives(archives):
    plain, packed = str(archives / "plain"), str(archives / "packed")
    result = CliRunner().invoke(main, [plain, packed])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [f"{plain}\ttar", f"{packed}\tgzip-tar"]


def test_tarcheck_not_an_archive(archives):
    text = str(archives / "notes.txt")
    result = CliRunner().invoke(main, [str(archives / "plain"), text])
    assert result.exit_code == 1
    assert f"{text}\tnone" in result.output


def test_tarcheck_missing_file(archives):
    missing = str(archives / "missing")
    result = CliRunner().invoke(main, [missing])
    assert result.exit_code == 1
    assert f"{missing}\tnone" in result.output


def test_tarcheck_quiet(archives):
    result = CliRunner().invoke(main, ["-q", str(archives / "notes.txt")])
    assert result.exit_code == 1
    assert result.output == ""


def test_tarcheck_requires_files():
    result = CliRunner().invoke(main, [])
    assert result.exit_code == 2
