"""Steppable sorting-algorithm animator."""

__version__ = "0.3.0"
