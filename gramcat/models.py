"""Core data models shared across gramcat components."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Dict, Mapping, Optional, Sequence, Tuple

# METADATA keys whose names differ from the upper-cased field name.
_KEY_ALIASES: Dict[str, str] = {
    "SHORT_GRAMMAR_NAME": "short_name",
    "GRAMMAR_NAME": "full_name",
    "VCS": "vcs_descriptor",
    "REV_LATEST": "revision_latest",
    "REV_CHANGED": "revision_changed",
}

METRIC_FIELDS: Tuple[str, ...] = (
    "lexical_items",
    "lexical_rules",
    "grammar_rules",
    "features",
    "types_with_glb",
)


@dataclass
class CatalogueEntry:
    """Everything known about one grammar, accumulated stage by stage."""

    short_name: str
    full_name: str = ""
    language_name: str = ""
    maintainer: str = ""
    contributors: str = ""
    contact_email: str = ""
    website: str = ""
    demo_website: str = ""
    documentation_url: str = ""
    issue_tracker: str = ""
    license: str = ""
    grammar_type: str = ""
    external_resources: str = ""
    associated_resources: str = ""
    vcs_descriptor: str = ""
    revision_latest: str = ""
    revision_changed: str = ""
    latest_release: str = ""
    citation: str = ""
    lexical_items: Optional[int] = None
    lexical_rules: Optional[int] = None
    grammar_rules: Optional[int] = None
    features: Optional[int] = None
    types_with_glb: Optional[int] = None
    metadata: Dict[str, str] = field(default_factory=dict, repr=False)

    @classmethod
    def from_metadata(cls, metadata: Mapping[str, str], *, default_name: str) -> "CatalogueEntry":
        """Seed an entry from declared METADATA values."""
        entry = cls(short_name="", metadata=dict(metadata))
        names = {item.name for item in fields(cls)} - {"metadata"}
        for key, value in metadata.items():
            name = field_for_key(key)
            if name is None or name not in names or not value:
                continue
            if name in METRIC_FIELDS:
                number = _as_count(value)
                if number is not None:
                    setattr(entry, name, number)
                continue
            setattr(entry, name, value)
        if not entry.short_name:
            entry.short_name = default_name
        return entry

    def is_declared(self, name: str) -> bool:
        value = getattr(self, name)
        return value is not None and value != ""

    def fill(self, name: str, value: object) -> bool:
        """Set ``name`` unless it already carries a value; report whether it changed."""
        if self.is_declared(name) or value is None or value == "":
            return False
        setattr(self, name, value)
        return True

    def fill_many(self, values: Mapping[str, object]) -> Sequence[str]:
        return [name for name, value in values.items() if self.fill(name, value)]


def field_for_key(key: str) -> Optional[str]:
    """Translate a METADATA variable name into a CatalogueEntry field name."""
    if key in _KEY_ALIASES:
        return _KEY_ALIASES[key]
    if not key.isupper():
        return None
    return key.lower()


def _as_count(value: object) -> Optional[int]:
    try:
        number = int(str(value).strip())
    except ValueError:
        return None
    return number if number >= 0 else None


__all__ = ["CatalogueEntry", "METRIC_FIELDS", "field_for_key"]
