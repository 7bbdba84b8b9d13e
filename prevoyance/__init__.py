"""Calculation backend for a Swiss personal-finance portal."""

__version__ = "0.1.0"
