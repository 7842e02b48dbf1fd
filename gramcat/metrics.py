"""Grammar size metrics computed by an external grammar engine."""

from __future__ import annotations

import os
import subprocess
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Dict, Iterator, Mapping, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .logging import get_logger
from .models import METRIC_FIELDS

TEMPLATES_DIR = Path(__file__).with_name("templates")
SCRIPT_TEMPLATE = "lkb_metrics.lsp.j2"
GRAMMAR_SCRIPT = Path("lkb") / "script"

# Variables that would make the LKB try to open a GUI.
_GUI_VARIABLES = ("DISPLAY", "LUI")

EngineRunner = Callable[..., None]

logger = get_logger("metrics")


class GrammarMetricsProvider(ABC):
    """Contract for adapters that compute grammar size statistics."""

    @abstractmethod
    def collect(self, directory: Path) -> Dict[str, int]:
        """Return a mapping of metric field name to count (possibly empty)."""


class NullMetricsProvider(GrammarMetricsProvider):
    def collect(self, directory: Path) -> Dict[str, int]:
        return {}


class LkbMetricsProvider(GrammarMetricsProvider):
    """Loads the grammar in the LKB through LOGON and reads back its counts.

    The engine prints a lot of noise while loading, so the script writes
    ``KEY=VALUE`` lines to a scratch file instead of stdout.
    """

    def __init__(
        self,
        logon_root: Path | None,
        *,
        timeout: float | None = None,
        options: Sequence[str] = ("--binary", "-I", "base"),
        runner: EngineRunner | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.logon_root = logon_root
        self.timeout = timeout
        self.options = list(options)
        self._runner = runner or self._default_runner
        self._environ = os.environ if environ is None else environ
        self._env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    @property
    def executable(self) -> Path | None:
        if self.logon_root is None:
            return None
        return self.logon_root / "bin" / "logon"

    def build_script(self, directory: Path, output_path: Path) -> str:
        template = self._env.get_template(SCRIPT_TEMPLATE)
        return template.render(
            script_path=_lisp_string(directory / GRAMMAR_SCRIPT),
            output_path=_lisp_string(output_path),
        )

    def collect(self, directory: Path) -> Dict[str, int]:
        executable = self.executable
        if executable is None:
            logger.warning("LOGONROOT is not set; grammar metrics will be left empty.")
            return {}
        if not (directory / GRAMMAR_SCRIPT).is_file():
            logger.warning("No LKB script at %s; skipping grammar metrics.", directory / GRAMMAR_SCRIPT)
            return {}

        with scratch_file(prefix="gramcat.", suffix=".metrics") as output_path:
            logger.debug(
                "Attempting to get grammar metrics by loading the grammar with the LKB. "
                "Temporary file created: %s",
                output_path,
            )
            script = self.build_script(directory, output_path)
            try:
                self._runner(
                    [str(executable), *self.options],
                    script=script,
                    env=self._engine_environment(),
                    timeout=self.timeout,
                )
            except subprocess.TimeoutExpired:
                logger.warning("The LKB did not finish within %s seconds; metrics left empty.", self.timeout)
                return {}
            except (OSError, subprocess.SubprocessError) as exc:
                logger.warning("Unable to run the LKB (%s); metrics left empty.", exc)
                return {}
            try:
                text = output_path.read_text(encoding="utf-8", errors="replace")
            except OSError as exc:
                logger.warning("The LKB produced no metrics file (%s).", exc)
                return {}
        logger.debug("LKB process completed. Temporary file deleted.")
        return parse_metrics(text)

    def _engine_environment(self) -> Dict[str, str]:
        env = {key: value for key, value in self._environ.items() if key not in _GUI_VARIABLES}
        if self.logon_root is not None:
            env["LOGONROOT"] = str(self.logon_root)
        return env

    @staticmethod
    def _default_runner(
        args: Sequence[str],
        *,
        script: str,
        env: Mapping[str, str],
        timeout: float | None = None,
    ) -> None:
        subprocess.run(
            list(args),
            input=script,
            text=True,
            env=dict(env),
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=timeout,
            check=False,
        )


def parse_metrics(text: str) -> Dict[str, int]:
    """Read ``KEY=VALUE`` lines, keeping only known, non-negative integer metrics."""
    metrics: Dict[str, int] = {}
    for line in text.splitlines():
        key, sep, value = line.strip().partition("=")
        name = key.strip().lower()
        if not sep or name not in METRIC_FIELDS:
            continue
        try:
            number = int(value.strip())
        except ValueError:
            logger.debug("Ignoring malformed metric line: %s", line)
            continue
        if number >= 0:
            metrics[name] = number
    return metrics


@contextmanager
def scratch_file(prefix: str = "gramcat.", suffix: str = "") -> Iterator[Path]:
    """Yield a uniquely named temporary file that is removed on exit."""
    handle, name = tempfile.mkstemp(prefix=prefix, suffix=suffix)
    os.close(handle)
    path = Path(name)
    try:
        yield path
    finally:
        path.unlink(missing_ok=True)


def _lisp_string(path: Path) -> str:
    return str(path).replace("\\", "\\\\").replace('"', '\\"')


__all__ = [
    "GrammarMetricsProvider",
    "LkbMetricsProvider",
    "NullMetricsProvider",
    "parse_metrics",
    "scratch_file",
]
