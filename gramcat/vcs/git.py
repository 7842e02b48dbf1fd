"""Git working-copy inspector."""

from __future__ import annotations

from pathlib import Path

from .base import VCS_ERRORS, RepositoryInspector, VcsInfo


class GitInspector(RepositoryInspector):
    """Reads revision data from a local Git clone.

    Git cannot be queried remotely without fetching, so revisions always come
    from the local clone even when METADATA names another URL.
    """

    name = "git"

    def supports(self, directory: Path) -> bool:
        return (directory / ".git").exists()

    def inspect(self, directory: Path, declared: str = "") -> VcsInfo:
        self.logger.debug("Git working copy found.")
        local_url = self._query(directory, ["git", "remote", "get-url", "origin"])
        self.logger.debug("URL for local Git remote: %s", local_url)
        url = self._reconcile(local_url, declared)

        latest = self._query(directory, ["git", "rev-parse", "--short", "HEAD"])
        changed = self._query(directory, ["git", "log", "-1", "--format=%h", "--", "."])
        info = VcsInfo(
            url=url,
            descriptor=declared or url,
            revision_latest=latest,
            revision_changed=changed,
        )
        self.logger.debug("Latest revision from repository: %s", info.revision_latest)
        return info

    def _query(self, directory: Path, args: list[str]) -> str:
        try:
            return self._run(args, cwd=directory).strip()
        except VCS_ERRORS as exc:
            self.logger.warning("Git command failed (%s): %s", " ".join(args), exc)
            return ""


__all__ = ["GitInspector"]
