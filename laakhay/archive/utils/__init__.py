"""Utility functions."""

from .iterators import aclose_iterator, close_iterator

__all__ = ["close_iterator", "aclose_iterator"]
