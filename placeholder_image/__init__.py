"""Synthetic placeholder images for intercepted requests."""

__version__ = "0.1.0"
