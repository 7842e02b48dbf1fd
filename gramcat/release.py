"""Release version discovery from the grammar's Version.lsp file."""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import DEFAULT_VERSION_GLOB
from .logging import get_logger

_VERSION_MARKER = "*grammar-version*"
_VERSION_PATTERN = re.compile(r'\* "[^(]+\(([^)]+)\)')

# Tried in order; the first that parses wins.
_DATE_FORMATS = (
    "%y%m%d",
    "%Y%m%d",
    "%Y-%m-%d",
    "%Y%m",
    "%Y/%m/%d",
    "%d %B %Y",
    "%B %Y",
)
_YEAR_RANGE = range(1900, 2100)

logger = get_logger("release")


def find_version_file(directory: Path, pattern: str = DEFAULT_VERSION_GLOB) -> Optional[Path]:
    matches = sorted(path for path in directory.glob(pattern) if path.is_file())
    if not matches:
        logger.warning("Failed to find version file in grammar directory.")
        return None
    logger.debug("Version file: %s", matches[0])
    return matches[0]


def extract_release(version_file: Path) -> str:
    """Return the parenthesised token of the ``*grammar-version*`` line, if any."""
    try:
        text = version_file.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.warning("Unable to read %s: %s", version_file, exc)
        return ""
    for line in text.splitlines():
        if _VERSION_MARKER not in line:
            continue
        match = _VERSION_PATTERN.search(line)
        if match:
            return match.group(1)
    return ""


def normalize_release(token: str) -> str:
    """Interpret ``token`` as a calendar date where possible.

    ``"9912_1030"`` becomes ``"1999-12-01"`` and ``"1999"`` becomes
    ``"1999-01-01"``; tokens that do not parse, or that only parse to a year outside
    1900-2099 (such as ``"1214"``), are returned unchanged.
    """
    candidate = token.strip().split("_", 1)[0]
    if len(candidate) == 4:
        candidate = f"{candidate}01"
    for fmt in _DATE_FORMATS:
        try:
            parsed = datetime.strptime(candidate, fmt)
        except ValueError:
            continue
        if parsed.year not in _YEAR_RANGE:
            continue
        return parsed.date().isoformat()
    return token


def resolve_release(directory: Path, declared: str = "", pattern: str = DEFAULT_VERSION_GLOB) -> str:
    """Return the release for the catalogue, preferring a declared value."""
    version_file = find_version_file(directory, pattern)
    if declared:
        logger.debug("Latest release declared in METADATA: %s", declared)
        return declared
    release = extract_release(version_file) if version_file is not None else ""
    logger.debug("Latest release: %s", release)
    if not release:
        return ""
    normalized = normalize_release(release)
    if normalized != release:
        logger.debug("Latest release interpreted as: %s", normalized)
    return normalized


__all__ = ["extract_release", "find_version_file", "normalize_release", "resolve_release"]
