"""Ekram feed material price reporting service."""

__version__ = "1.0.0"
