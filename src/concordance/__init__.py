"""Keyword-in-context concordance index over plain-text corpora."""

__version__ = "0.1.0"
