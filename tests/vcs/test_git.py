"""Tests for the Git inspector."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from gramcat.vcs import GitInspector

_REMOTE = "https://github.com/delph-in/erg.git"


def _clone(tmp_path: Path) -> Path:
    repo = tmp_path / "erg"
    (repo / ".git").mkdir(parents=True)
    return repo


def _runner(args, cwd, timeout=None):  # type: ignore[no-untyped-def]
    if args[:3] == ["git", "remote", "get-url"]:
        return f"{_REMOTE}\n"
    if args[:2] == ["git", "rev-parse"]:
        return "1a2b3c4\n"
    if args[:2] == ["git", "log"]:
        return "0f9e8d7\n"
    return ""


def test_git_inspector_reads_local_clone(tmp_path: Path) -> None:
    repo = _clone(tmp_path)
    inspector = GitInspector(_runner)

    info = inspector.inspect(repo)

    assert inspector.supports(repo)
    assert info.url == _REMOTE
    assert info.descriptor == _REMOTE
    assert info.revision_latest == "1a2b3c4"
    assert info.revision_changed == "0f9e8d7"


def test_git_inspector_warns_on_declared_mismatch(tmp_path: Path, caplog) -> None:  # type: ignore[no-untyped-def]
    repo = _clone(tmp_path)
    declared = "git clone https://example.org/fork/erg.git"

    with caplog.at_level(logging.WARNING):
        info = GitInspector(_runner).inspect(repo, declared)

    assert info.descriptor == declared
    assert info.url == "https://example.org/fork/erg.git"
    assert "differs from that of the local checkout" in caplog.text


def test_git_failure_leaves_fields_empty(tmp_path: Path) -> None:
    repo = _clone(tmp_path)

    def runner(args, cwd, timeout=None):  # type: ignore[no-untyped-def]
        raise FileNotFoundError("git")

    info = GitInspector(runner).inspect(repo)

    assert info.revision_latest == ""
    assert info.revision_changed == ""
    assert info.descriptor == ""


def test_git_called_process_error_is_tolerated(tmp_path: Path) -> None:
    repo = _clone(tmp_path)

    def runner(args, cwd, timeout=None):  # type: ignore[no-untyped-def]
        if args[:2] == ["git", "remote"]:
            raise subprocess.CalledProcessError(2, args)
        return _runner(args, cwd)

    info = GitInspector(runner).inspect(repo)
    assert info.url == ""
    assert info.revision_latest == "1a2b3c4"
