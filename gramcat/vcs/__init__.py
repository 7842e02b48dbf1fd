"""Version-control inspectors and selection."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

from .base import RepositoryInspector, Runner, VcsInfo, extract_url
from .git import GitInspector
from .svn import SvnInspector


class NullInspector(RepositoryInspector):
    """Used when the grammar is not under version control."""

    name = "none"

    def supports(self, directory: Path) -> bool:
        return True

    def inspect(self, directory: Path, declared: str = "") -> VcsInfo:
        self.logger.debug("No supported version control metadata found in %s", directory)
        return VcsInfo(descriptor=declared)


def default_inspectors(
    runner: Runner | None = None, *, timeout: float | None = None
) -> Sequence[RepositoryInspector]:
    return (
        SvnInspector(runner, timeout=timeout),
        GitInspector(runner, timeout=timeout),
    )


def detect_inspector(
    directory: Path,
    inspectors: Iterable[RepositoryInspector] | None = None,
) -> RepositoryInspector:
    """Return the first inspector that recognises ``directory``."""
    candidates = default_inspectors() if inspectors is None else inspectors
    for inspector in candidates:
        if inspector.supports(directory):
            return inspector
    return NullInspector()


__all__ = [
    "GitInspector",
    "NullInspector",
    "RepositoryInspector",
    "SvnInspector",
    "VcsInfo",
    "default_inspectors",
    "detect_inspector",
    "extract_url",
]
