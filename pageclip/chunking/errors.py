"""Errors raised by the chunking engine."""

from __future__ import annotations


class InvalidPolicy(ValueError):
    """A size window that no splitter can honour (e.g. ``min_chars > max_chars``)."""
