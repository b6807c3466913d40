"""Post-processing helpers for managed README regions."""

from .markers import MarkerError, MarkerManager, write_atomic

__all__ = ["MarkerError", "MarkerManager", "write_atomic"]
