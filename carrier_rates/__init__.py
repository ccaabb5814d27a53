"""Normalized shipping rate quotes across carriers, with UPS as the reference carrier."""

__version__ = "1.0.0"
