"""Base classes for version-control inspectors."""

from __future__ import annotations

import re
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable

from ..logging import get_logger

_URL_PATTERN = re.compile(r"\b\w+://\S+")

Runner = Callable[..., str]


@dataclass(frozen=True)
class VcsInfo:
    """Repository facts gathered for a catalogue entry."""

    url: str = ""
    descriptor: str = ""
    revision_latest: str = ""
    revision_changed: str = ""

    def as_fields(self) -> Dict[str, str]:
        return {
            "vcs_descriptor": self.descriptor,
            "revision_latest": self.revision_latest,
            "revision_changed": self.revision_changed,
        }


class RepositoryInspector(ABC):
    """Contract for adapters that query a working copy for revision data."""

    name = "base"

    def __init__(self, runner: Runner | None = None, *, timeout: float | None = None) -> None:
        self._runner = runner or self._default_runner
        self.timeout = timeout
        self.logger = get_logger(f"vcs.{self.name}")

    @abstractmethod
    def supports(self, directory: Path) -> bool:
        """Return True when ``directory`` is a working copy of this kind."""

    @abstractmethod
    def inspect(self, directory: Path, declared: str = "") -> VcsInfo:
        """Collect repository facts; ``declared`` is the VCS locator from METADATA."""

    # ------------------------------------------------------------------
    # Shared helpers

    def _reconcile(self, local_url: str, declared: str) -> str:
        """Pick the authoritative URL, warning when METADATA disagrees with the checkout."""
        if not declared:
            return local_url
        declared_url = extract_url(declared)
        self.logger.debug("URL for repository given in METADATA file: %s", declared_url)
        if not local_url:
            self.logger.debug(
                "Local repository URL unavailable; not comparing it with METADATA."
            )
        elif declared_url != local_url:
            self.logger.warning(
                "Repository URL provided in METADATA file differs from that of the "
                "local checkout. Since the local data is used for calculating various "
                "grammar metrics, fields of the catalogue entry may be inaccurate."
            )
        return declared_url

    def _run(self, args: Iterable[str], *, cwd: Path) -> str:
        return self._runner(list(args), cwd=cwd, timeout=self.timeout)

    @staticmethod
    def _default_runner(args: Iterable[str], *, cwd: Path, timeout: float | None = None) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            capture_output=True,
            timeout=timeout,
        )
        return completed.stdout


def extract_url(text: str) -> str:
    """Return the first URL-like token in ``text`` (e.g. from ``svn co URL``)."""
    match = _URL_PATTERN.search(text or "")
    return match.group(0) if match else ""


def parse_info_fields(output: str) -> Dict[str, str]:
    """Split ``Key: value`` lines as printed by ``svn info``."""
    fields: Dict[str, str] = {}
    for line in output.splitlines():
        key, sep, value = line.partition(": ")
        key = key.strip()
        if sep and key not in fields:
            fields[key] = value.strip()
    return fields


VCS_ERRORS = (OSError, subprocess.SubprocessError)


__all__ = [
    "RepositoryInspector",
    "Runner",
    "VCS_ERRORS",
    "VcsInfo",
    "extract_url",
    "parse_info_fields",
]
