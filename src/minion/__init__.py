"""Minion command-line task runner."""

__version__ = "0.3.0"
