"""Subversion working-copy inspector."""

from __future__ import annotations

from pathlib import Path

from .base import VCS_ERRORS, RepositoryInspector, VcsInfo, extract_url, parse_info_fields


class SvnInspector(RepositoryInspector):
    """Reads revision data with ``svn info``.

    The local checkout provides the upstream URL; revision numbers come from
    the URL declared in METADATA when present, since that is what the
    catalogue advertises.
    """

    name = "svn"

    def supports(self, directory: Path) -> bool:
        return (directory / ".svn").is_dir()

    def inspect(self, directory: Path, declared: str = "") -> VcsInfo:
        self.logger.debug("Subversion working copy found.")
        local_url = ""
        try:
            local_info = parse_info_fields(self._info(directory, str(directory)))
            local_url = extract_url(local_info.get("URL", ""))
        except VCS_ERRORS as exc:
            self.logger.warning("Unable to read Subversion info for %s: %s", directory, exc)
        self.logger.debug("URL for local SVN repository: %s", local_url)

        url = self._reconcile(local_url, declared)
        self.logger.debug("Proceeding with the following SVN URL: %s", url)
        if not url:
            return VcsInfo(descriptor=declared)

        try:
            stats = parse_info_fields(self._info(directory, url))
        except VCS_ERRORS as exc:
            self.logger.warning("Unable to query Subversion repository %s: %s", url, exc)
            return VcsInfo(url=url, descriptor=declared)

        info = VcsInfo(
            url=stats.get("URL", url),
            descriptor=declared or stats.get("URL", ""),
            revision_latest=stats.get("Revision", ""),
            revision_changed=stats.get("Last Changed Rev", ""),
        )
        self.logger.debug("Version control URL/command: %s", info.descriptor)
        self.logger.debug("Latest revision from repository: %s", info.revision_latest)
        return info

    def _info(self, directory: Path, target: str) -> str:
        return self._run(["svn", "info", target], cwd=directory)


__all__ = ["SvnInspector"]
