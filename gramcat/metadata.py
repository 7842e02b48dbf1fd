"""Declarative reader for the METADATA file at a grammar root."""

from __future__ import annotations

import re
import shlex
from pathlib import Path
from typing import Dict

from .logging import get_logger

METADATA_FILENAME = "METADATA"

_KEY_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_REFERENCE_PATTERN = re.compile(r"\$(?:\{([A-Za-z_][A-Za-z0-9_]*)\}|([A-Za-z_][A-Za-z0-9_]*))")

logger = get_logger("metadata")


def parse_metadata(text: str) -> Dict[str, str]:
    """Parse shell-style ``KEY=value`` assignments without executing anything.

    Quoting and ``#`` comments follow POSIX shell rules. ``$KEY`` and
    ``${KEY}`` expand to keys assigned earlier in the same text; any other
    reference is kept literally.
    """
    lexer = shlex.shlex(_strip_comments(text), posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""

    values: Dict[str, str] = {}
    try:
        for token in lexer:
            if token == "export":
                continue
            key, sep, value = token.partition("=")
            if not sep or not _KEY_PATTERN.match(key):
                logger.debug("Ignoring METADATA token that is not an assignment: %s", token)
                continue
            values[key] = _expand(value, values)
    except ValueError as exc:
        logger.warning("METADATA file could not be fully parsed (%s); later entries ignored.", exc)
    return values


def load_metadata(directory: Path) -> Dict[str, str]:
    """Return declared metadata for the grammar at ``directory`` (empty when absent)."""
    path = directory / METADATA_FILENAME
    if not path.is_file():
        logger.warning("%s file not found!", METADATA_FILENAME)
        return {}
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.warning("Unable to read %s: %s", path, exc)
        return {}
    values = parse_metadata(text)
    logger.debug("Loaded %d METADATA entries from %s", len(values), path)
    return values


def _strip_comments(text: str) -> str:
    """Drop `#` comments that begin a word, leaving quoted text and `a#b` alone."""
    out: list[str] = []
    quote: str | None = None
    index = 0
    while index < len(text):
        char = text[index]
        if quote is None:
            if char == "#" and (not out or out[-1].isspace()):
                end = text.find("\n", index)
                index = len(text) if end == -1 else end
                continue
            if char in {"'", '"'}:
                quote = char
            elif char == "\\":
                out.append(text[index : index + 2])
                index += 2
                continue
        elif char == quote:
            quote = None
        elif char == "\\" and quote == '"':
            out.append(text[index : index + 2])
            index += 2
            continue
        out.append(char)
        index += 1
    return "".join(out)


def _expand(value: str, known: Dict[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        name = match.group(1) or match.group(2)
        return known.get(name, match.group(0))

    return _REFERENCE_PATTERN.sub(_replace, value)


__all__ = ["METADATA_FILENAME", "load_metadata", "parse_metadata"]
