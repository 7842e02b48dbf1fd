"""Tests for release discovery and date normalisation."""

from __future__ import annotations

import logging

import pytest

from gramcat.release import extract_release, find_version_file, normalize_release, resolve_release

_VERSION_LSP = """
(in-package :common-lisp-user)

(defparameter *grammar-version* "ERG ({token})")
"""


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("1999", "1999-01-01"),
        ("9912", "1999-12-01"),
        ("9912_1030", "1999-12-01"),
        ("20030615", "2003-06-15"),
        ("2003-06-15", "2003-06-15"),
        ("1214", "1214"),
        ("trunk", "trunk"),
        ("2.0b", "2.0b"),
    ],
)
def test_normalize_release(token: str, expected: str) -> None:
    assert normalize_release(token) == expected


def test_extract_release_reads_marker_line(grammar_builder) -> None:  # type: ignore[no-untyped-def]
    grammar_builder.write({"Version.lsp": _VERSION_LSP.format(token="1214")})
    version_file = find_version_file(grammar_builder.path())

    assert version_file is not None
    assert extract_release(version_file) == "1214"


def test_find_version_file_matches_lisp_extension(grammar_builder) -> None:  # type: ignore[no-untyped-def]
    grammar_builder.write({"Version.lisp": _VERSION_LSP.format(token="0907")})
    version_file = find_version_file(grammar_builder.path())
    assert version_file is not None
    assert version_file.name == "Version.lisp"


def test_resolve_release_normalises_extracted_token(grammar_builder) -> None:  # type: ignore[no-untyped-def]
    grammar_builder.write({"Version.lsp": _VERSION_LSP.format(token="9912_1030")})
    assert resolve_release(grammar_builder.path()) == "1999-12-01"


def test_resolve_release_prefers_declared_value(grammar_builder) -> None:  # type: ignore[no-untyped-def]
    grammar_builder.write({"Version.lsp": _VERSION_LSP.format(token="1214")})
    assert resolve_release(grammar_builder.path(), declared="1999") == "1999"


def test_resolve_release_warns_without_version_file(grammar_builder, caplog) -> None:  # type: ignore[no-untyped-def]
    with caplog.at_level(logging.WARNING):
        release = resolve_release(grammar_builder.path())

    assert release == ""
    assert "Failed to find version file" in caplog.text


def test_resolve_release_without_marker_is_empty(grammar_builder) -> None:  # type: ignore[no-untyped-def]
    grammar_builder.write({"Version.lsp": "(defparameter *other* \"x (1)\")\n"})
    assert resolve_release(grammar_builder.path()) == ""
