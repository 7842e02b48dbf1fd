"""Pipeline orchestration: collect a catalogue entry and render it."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Callable, Iterable, Optional

from .citation import resolve_citation
from .config import GramcatConfig, load_config
from .formatters import Formatter, WikiFormatter
from .logging import get_logger
from .metadata import load_metadata
from .metrics import GrammarMetricsProvider, LkbMetricsProvider
from .models import CatalogueEntry
from .release import resolve_release
from .vcs import RepositoryInspector, default_inspectors, detect_inspector


class CatalogueBuilder:
    """Runs the extraction stages in order for a single grammar.

    Each stage only fills fields that METADATA left empty, so declared values
    always survive into the rendered table.
    """

    def __init__(
        self,
        formatter: Formatter | None = None,
        *,
        config: GramcatConfig | None = None,
        inspectors: Optional[Iterable[RepositoryInspector]] = None,
        metrics_provider: GrammarMetricsProvider | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.formatter = formatter or WikiFormatter()
        self.config = config
        self._inspector_overrides = list(inspectors) if inspectors is not None else None
        self._metrics_override = metrics_provider
        self._today = today
        self.logger = get_logger("orchestrator")

    def build(self, path: str | Path) -> CatalogueEntry:
        directory = Path(path).expanduser().resolve()
        self.logger.debug("Grammar directory: %s", directory)
        config = self.config or load_config(directory)

        metadata = load_metadata(directory)
        entry = CatalogueEntry.from_metadata(metadata, default_name=directory.name)

        inspector = detect_inspector(directory, self._inspectors(config))
        vcs_info = inspector.inspect(directory, entry.vcs_descriptor)
        entry.fill_many(vcs_info.as_fields())

        entry.latest_release = resolve_release(
            directory, entry.latest_release, config.catalogue.version_glob
        )

        entry.fill(
            "citation",
            resolve_citation(
                entry.metadata,
                directory,
                self.formatter,
                config.catalogue.bibliography_files,
            ),
        )

        metrics = self._metrics_provider(config).collect(directory)
        filled = entry.fill_many(metrics)
        self.logger.debug("Grammar metrics filled: %s", ", ".join(filled) or "none")
        return entry

    def render(self, entry: CatalogueEntry, formatter: Formatter | None = None) -> str:
        active = formatter or self.formatter
        return active.render(entry, self._today())

    def run(self, path: str | Path) -> str:
        return self.render(self.build(path))

    def _inspectors(self, config: GramcatConfig) -> Iterable[RepositoryInspector]:
        if self._inspector_overrides is not None:
            return self._inspector_overrides
        return default_inspectors(timeout=config.vcs.timeout)

    def _metrics_provider(self, config: GramcatConfig) -> GrammarMetricsProvider:
        if self._metrics_override is not None:
            return self._metrics_override
        return LkbMetricsProvider(
            config.engine.logon_root,
            timeout=config.engine.timeout,
            options=config.engine.options,
        )


__all__ = ["CatalogueBuilder"]
