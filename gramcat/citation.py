"""Citation resolution from METADATA or a bibliography file."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Mapping, Sequence

from .config import DEFAULT_BIBLIOGRAPHY_FILES
from .logging import get_logger

if TYPE_CHECKING:
    from .formatters import Formatter

logger = get_logger("citation")


def resolve_citation(
    metadata: Mapping[str, str],
    directory: Path,
    formatter: "Formatter",
    bibliography_files: Sequence[str] = DEFAULT_BIBLIOGRAPHY_FILES,
) -> str:
    """Build the citation cell.

    Declared ``CITE``/``BIB_URL``/``PDF_URL`` values and bibliography file
    contents are alternatives; they are never combined.
    """
    cite = metadata.get("CITE", "")
    bib_url = metadata.get("BIB_URL", "")
    pdf_url = metadata.get("PDF_URL", "")

    if not (cite or bib_url or pdf_url):
        logger.debug(
            "No bibliographical details found in METADATA. "
            "Attempting to extract from .bib file."
        )
        return read_bibliography(directory, formatter, bibliography_files)

    citation = formatter.escape(cite)
    if bib_url:
        citation += formatter.citation_link(bib_url, ".bib")
    if pdf_url:
        citation += formatter.citation_link(pdf_url, ".pdf")
    logger.debug("Citation: %s", citation)
    return citation


def read_bibliography(
    directory: Path,
    formatter: "Formatter",
    bibliography_files: Sequence[str] = DEFAULT_BIBLIOGRAPHY_FILES,
) -> str:
    for name in bibliography_files:
        path = directory / name
        if not path.is_file():
            continue
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            logger.warning("Unable to read %s: %s", path, exc)
            return ""
        logger.debug("Citation read from %s", path)
        return formatter.escape(text.rstrip("\n"))
    logger.warning(
        "No citation defined in METADATA and no bibliography file (%s) found.",
        ", ".join(bibliography_files),
    )
    return ""


__all__ = ["read_bibliography", "resolve_citation"]
