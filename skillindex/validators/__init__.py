"""Validation package for catalog manifests."""

from .base import CatalogReport, ValidationError, ValidationIssue
from .catalog import CatalogValidator

__all__ = [
    "CatalogReport",
    "CatalogValidator",
    "ValidationError",
    "ValidationIssue",
]
