"""Async database infrastructure.

This module provides the persistence gateway over aiosqlite.
"""
from .connection import Database, MutationResult

__all__ = [
    'Database',
    'MutationResult',
]
