"""Configuration loading for gramcat (.gramcat.yml and environment)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

CONFIG_FILENAME = ".gramcat.yml"

DEFAULT_VERSION_GLOB = "Version.l*sp"
DEFAULT_BIBLIOGRAPHY_FILES = ("canonical.bib", "citation.bib")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class EngineConfig:
    """Settings for the external grammar engine (LOGON/LKB)."""

    logon_root: Optional[Path] = None
    timeout: Optional[float] = None
    options: List[str] = field(default_factory=lambda: ["--binary", "-I", "base"])


@dataclass
class VcsConfig:
    """Settings for version-control queries."""

    timeout: Optional[float] = None


@dataclass
class CatalogueConfig:
    """Where to look for release and bibliography information."""

    version_glob: str = DEFAULT_VERSION_GLOB
    bibliography_files: List[str] = field(
        default_factory=lambda: list(DEFAULT_BIBLIOGRAPHY_FILES)
    )


@dataclass
class GramcatConfig:
    """Represents the settings defined in .gramcat.yml plus environment overrides."""

    root: Path
    engine: EngineConfig = field(default_factory=EngineConfig)
    vcs: VcsConfig = field(default_factory=VcsConfig)
    catalogue: CatalogueConfig = field(default_factory=CatalogueConfig)


def load_config(grammar_dir: Path, environ: Mapping[str, str] | None = None) -> GramcatConfig:
    """Load configuration for the grammar at ``grammar_dir``."""
    env = os.environ if environ is None else environ
    root = grammar_dir.expanduser().resolve()
    config_file = root / CONFIG_FILENAME

    data: Dict[str, Any] = {}
    if config_file.is_file():
        data = _read_config(config_file)

    engine_data = _as_dict(data.get("engine"))
    engine = EngineConfig()
    logon_root = _as_str(engine_data.get("logon_root"))
    if logon_root:
        engine.logon_root = Path(logon_root).expanduser()
    engine.timeout = _as_float(engine_data.get("timeout"))
    if "options" in engine_data:
        engine.options = _as_str_list(engine_data.get("options"))

    vcs_data = _as_dict(data.get("vcs"))
    vcs = VcsConfig(timeout=_as_float(vcs_data.get("timeout")))

    catalogue_data = _as_dict(data.get("catalogue"))
    catalogue = CatalogueConfig()
    version_glob = _as_str(catalogue_data.get("version_glob"))
    if version_glob:
        catalogue.version_glob = version_glob
    bib_files = _as_str_list(catalogue_data.get("bibliography_files"))
    if bib_files:
        catalogue.bibliography_files = bib_files

    _apply_environment(engine, vcs, env)

    return GramcatConfig(root=root, engine=engine, vcs=vcs, catalogue=catalogue)


def _apply_environment(engine: EngineConfig, vcs: VcsConfig, env: Mapping[str, str]) -> None:
    logon_root = env.get("LOGONROOT")
    if logon_root:
        engine.logon_root = Path(logon_root).expanduser()
    engine_timeout = _as_float(env.get("GRAMCAT_ENGINE_TIMEOUT"))
    if engine_timeout is not None:
        engine.timeout = engine_timeout
    vcs_timeout = _as_float(env.get("GRAMCAT_VCS_TIMEOUT"))
    if vcs_timeout is not None:
        vcs.timeout = vcs_timeout


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if value > 0 else None
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
        return number if number > 0 else None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "CatalogueConfig",
    "ConfigError",
    "EngineConfig",
    "GramcatConfig",
    "VcsConfig",
    "load_config",
]
