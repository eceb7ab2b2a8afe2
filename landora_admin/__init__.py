"""Landora admin access gate."""

__version__ = "0.1.0"
