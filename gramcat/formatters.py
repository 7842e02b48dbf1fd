"""Markup back-ends for rendering a catalogue entry as a table."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Callable, Dict, List, Tuple

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup, escape

from .models import CatalogueEntry

TEMPLATES_DIR = Path(__file__).with_name("templates")
TABLE_TEMPLATE = "table.j2"
_LABEL_WIDTH = 27

# (label, field, numeric)
ROWS: Tuple[Tuple[str, str, bool], ...] = (
    ("maintainer", "maintainer", False),
    ("contributors", "contributors", False),
    ("contact", "contact_email", False),
    ("website", "website", False),
    ("demo", "demo_website", False),
    ("documentation", "documentation_url", False),
    ("issue tracker", "issue_tracker", False),
    ("version control", "vcs_descriptor", False),
    ("latest revision", "revision_latest", False),
    ("latest release", "latest_release", False),
    ("canonical citation", "citation", False),
    ("license", "license", False),
    ("grammar type", "grammar_type", False),
    ("required external resources", "external_resources", False),
    ("associated resources", "associated_resources", False),
    ("lexical items", "lexical_items", True),
    ("lexical rules", "lexical_rules", True),
    ("grammar rules", "grammar_rules", True),
    ("features", "features", True),
    ("types (with glb)", "types_with_glb", True),
)


@dataclass(frozen=True)
class Row:
    label: str
    delimiter: str
    value: object


class Formatter(ABC):
    """Markup-specific pieces of the catalogue table."""

    name = "base"
    autoescape = False
    column_start = ""
    column_delimiter = ""
    number_delimiter = ""
    column_end = ""

    @abstractmethod
    def header(self, entry: CatalogueEntry, published: date) -> str:
        """Text emitted before the first row."""

    def footer(self) -> str:
        return ""

    @abstractmethod
    def link(self, url: str, text: str) -> str:
        """Inline hyperlink to ``url`` labelled ``text``."""

    def citation_link(self, url: str, text: str) -> str:
        return f" ({self.link(url, text)})"

    def escape(self, text: str) -> str:
        return text

    def prepare(self, entry: CatalogueEntry) -> Dict[str, object]:
        """Return the display value of every table field."""
        values: Dict[str, object] = {}
        for _label, name, _numeric in ROWS:
            value = getattr(entry, name)
            values[name] = "" if value is None else value
        return values

    def rows(self, entry: CatalogueEntry) -> List[Row]:
        values = self.prepare(entry)
        return [
            Row(
                label=label.ljust(_LABEL_WIDTH),
                delimiter=self.number_delimiter if numeric else self.column_delimiter,
                value=values[name],
            )
            for label, name, numeric in ROWS
        ]

    def render(self, entry: CatalogueEntry, published: date | None = None) -> str:
        template = _environment(self.autoescape).get_template(TABLE_TEMPLATE)
        return template.render(
            header=self.header(entry, published or date.today()),
            footer=self.footer(),
            start=self.column_start,
            end=self.column_end,
            rows=self.rows(entry),
        )


class WikiFormatter(Formatter):
    """MoinMoin markup for the DELPH-IN GrammarCatalogue wiki page."""

    name = "wiki"
    column_start = "||"
    column_delimiter = "||"
    number_delimiter = "||"
    column_end = "||"

    def header(self, entry: CatalogueEntry, published: date) -> str:
        short, full = entry.short_name, entry.full_name
        summary = (
            f"{self.column_start} [#{short} {full} ({short})] {self.column_delimiter} "
            f"{entry.language_name} {self.column_delimiter} {entry.maintainer} {self.column_end}"
        )
        return "\n".join(
            [
                summary,
                "",
                f"== {full} ({short}) ==",
                f"[[Anchor({short})]]",
                f"''Published {published.isoformat()}''",
            ]
        )

    def link(self, url: str, text: str) -> str:
        return f"[{url} {text}]"

    def prepare(self, entry: CatalogueEntry) -> Dict[str, object]:
        values = super().prepare(entry)
        if entry.grammar_type:
            values["grammar_type"] = f"[#GrammarTypes {entry.grammar_type}]"
        return values


class LatexFormatter(Formatter):
    """A two-column ``tabular`` body; citation links are left out."""

    name = "latex"
    column_start = " "
    column_delimiter = "&"
    number_delimiter = "&"
    column_end = "\\\\"

    def header(self, entry: CatalogueEntry, published: date) -> str:
        return "\\begin{tabular}{ll}"

    def footer(self) -> str:
        return "\\end{tabular}"

    def link(self, url: str, text: str) -> str:
        return ""

    def citation_link(self, url: str, text: str) -> str:
        return ""


class HtmlFormatter(Formatter):
    """An HTML ``<table>``; every user-supplied value is escaped."""

    name = "html"
    autoescape = True
    column_start = Markup("<tr><th align='left'>")
    column_delimiter = Markup("</th><td>")
    number_delimiter = Markup("</th><td align='right'>")
    column_end = Markup("</td></tr>")

    _LINKED_FIELDS = ("website", "demo_website", "documentation_url", "issue_tracker")

    def header(self, entry: CatalogueEntry, published: date) -> str:
        return Markup("<table><caption>{} ({})</caption>").format(
            entry.full_name, entry.short_name
        )

    def footer(self) -> str:
        return Markup("</table>")

    def link(self, url: str, text: str) -> str:
        return Markup("<a href='{}'>{}</a>").format(url, text)

    def citation_link(self, url: str, text: str) -> str:
        return Markup(" ({})").format(self.link(url, text))

    def escape(self, text: str) -> str:
        return escape(text)

    def prepare(self, entry: CatalogueEntry) -> Dict[str, object]:
        values = super().prepare(entry)
        # Empty URLs render as empty cells rather than dangling anchors.
        if entry.contact_email:
            values["contact_email"] = Markup("<a href='mailto:{0}?Subject=[{1}]'>{0}</a>").format(
                entry.contact_email, entry.short_name
            )
        for name in self._LINKED_FIELDS:
            url = getattr(entry, name)
            if url:
                values[name] = self.link(url, url)
        return values


_FORMATTERS: Dict[str, Callable[[], Formatter]] = {
    "wiki": WikiFormatter,
    "latex": LatexFormatter,
    "html": HtmlFormatter,
}


def get_formatter(name: str) -> Formatter:
    try:
        return _FORMATTERS[name.lower()]()
    except KeyError:
        known = ", ".join(sorted(_FORMATTERS))
        raise ValueError(f"Unknown output format '{name}' (expected one of: {known})") from None


@lru_cache(maxsize=None)
def _environment(autoescape: bool) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=autoescape,
        trim_blocks=True,
        lstrip_blocks=True,
    )


__all__ = [
    "Formatter",
    "HtmlFormatter",
    "LatexFormatter",
    "ROWS",
    "WikiFormatter",
    "get_formatter",
]
