"""Folio - multi-user publishing service."""

__version__ = "0.1.0"
