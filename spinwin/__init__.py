"""Spin-to-win promotional offers API."""

__version__ = "1.0.0"
