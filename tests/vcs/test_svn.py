"""Tests for the Subversion inspector."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from gramcat.vcs import SvnInspector, VcsInfo

_LOCAL_URL = "https://svn.example.org/erg/trunk"
_TAG_URL = "https://svn.example.org/erg/tags/1214"


def _working_copy(tmp_path: Path) -> Path:
    repo = tmp_path / "erg"
    (repo / ".svn").mkdir(parents=True)
    return repo


def _runner(calls: list[list[str]]):  # type: ignore[no-untyped-def]
    def runner(args, cwd, timeout=None):  # type: ignore[no-untyped-def]
        calls.append(list(args))
        target = args[2]
        if target.startswith("https://"):
            return (
                f"Path: erg\nURL: {target}\nRelative URL: ^/erg\n"
                "Revision: 27001\nNode Kind: directory\nLast Changed Rev: 26990\n"
            )
        return f"Path: .\nWorking Copy Root Path: {target}\nURL: {_LOCAL_URL}\nRevision: 26000\n"

    return runner


def test_svn_inspector_uses_local_url_without_declaration(tmp_path: Path, caplog) -> None:  # type: ignore[no-untyped-def]
    repo = _working_copy(tmp_path)
    calls: list[list[str]] = []
    inspector = SvnInspector(_runner(calls))

    with caplog.at_level(logging.WARNING):
        info = inspector.inspect(repo)

    assert inspector.supports(repo)
    assert info == VcsInfo(
        url=_LOCAL_URL,
        descriptor=_LOCAL_URL,
        revision_latest="27001",
        revision_changed="26990",
    )
    assert calls == [["svn", "info", str(repo)], ["svn", "info", _LOCAL_URL]]
    assert "differs" not in caplog.text


def test_svn_inspector_queries_declared_url_and_warns_on_mismatch(tmp_path: Path, caplog) -> None:  # type: ignore[no-untyped-def]
    repo = _working_copy(tmp_path)
    calls: list[list[str]] = []
    declared = f"svn checkout {_TAG_URL} erg"

    with caplog.at_level(logging.WARNING):
        info = SvnInspector(_runner(calls)).inspect(repo, declared)

    assert calls[-1] == ["svn", "info", _TAG_URL]
    assert info.descriptor == declared
    assert info.revision_latest == "27001"
    assert "differs from that of the local checkout" in caplog.text


def test_svn_inspector_matching_declaration_does_not_warn(tmp_path: Path, caplog) -> None:  # type: ignore[no-untyped-def]
    repo = _working_copy(tmp_path)

    with caplog.at_level(logging.WARNING):
        info = SvnInspector(_runner([])).inspect(repo, f"svn co {_LOCAL_URL}")

    assert info.url == _LOCAL_URL
    assert caplog.text == ""


def test_svn_failure_leaves_revisions_empty(tmp_path: Path) -> None:
    repo = _working_copy(tmp_path)

    def runner(args, cwd, timeout=None):  # type: ignore[no-untyped-def]
        raise subprocess.CalledProcessError(1, args)

    info = SvnInspector(runner).inspect(repo, "svn co https://svn.example.org/x")

    assert info.revision_latest == ""
    assert info.revision_changed == ""
    assert info.descriptor == "svn co https://svn.example.org/x"


def test_svn_inspector_passes_timeout(tmp_path: Path) -> None:
    repo = _working_copy(tmp_path)
    seen: list[float | None] = []

    def runner(args, cwd, timeout=None):  # type: ignore[no-untyped-def]
        seen.append(timeout)
        return f"URL: {_LOCAL_URL}\n"

    SvnInspector(runner, timeout=15).inspect(repo)
    assert seen == [15, 15]


def test_svn_local_failure_skips_url_comparison(tmp_path: Path, caplog) -> None:  # type: ignore[no-untyped-def]
    repo = _working_copy(tmp_path)
    calls: list[list[str]] = []
    answer = _runner(calls)

    def runner(args, cwd, timeout=None):  # type: ignore[no-untyped-def]
        if args[2] == str(repo):
            calls.append(list(args))
            raise subprocess.CalledProcessError(1, args)
        return answer(args, cwd, timeout)

    with caplog.at_level(logging.DEBUG):
        info = SvnInspector(runner).inspect(repo, f"svn co {_TAG_URL}")

    assert calls[-1] == ["svn", "info", _TAG_URL]
    assert info.url == _TAG_URL
    assert info.revision_latest == "27001"
    assert "not comparing it with METADATA" in caplog.text
    assert "differs from that of the local checkout" not in caplog.text
