"""Compressed skills index generation for skill and agent catalogs."""

__version__ = "0.1.0"
