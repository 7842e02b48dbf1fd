from __future__ import annotations

import logging
import textwrap
from pathlib import Path
from typing import Mapping

import pytest


class GrammarBuilder:
    """Utility for writing files into a throwaway grammar directory."""

    def __init__(self, tmp_path: Path, name: str = "mygrammar") -> None:
        self.root = tmp_path / name
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the grammar directory."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def mkdir(self, relative: str) -> Path:
        path = self.root / relative
        path.mkdir(parents=True, exist_ok=True)
        return path

    def path(self) -> Path:
        """Return the grammar root path."""
        return self.root


@pytest.fixture
def grammar_builder(tmp_path: Path) -> GrammarBuilder:
    """Provide a reusable grammar builder rooted at the pytest tmp_path."""
    return GrammarBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_gramcat_logger():
    """Undo configure_logging() so caplog sees records in every test."""
    yield
    logger = logging.getLogger("gramcat")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
