"""Catalogue entry generator for DELPH-IN style grammars."""

__version__ = "0.3.0"
