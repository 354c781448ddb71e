"""Seed domain exports."""

from .data import SeedData
from .exceptions import SeedDataError, SeedEntryError, SeedError
from .orchestrator import (
    MARKETING_PERMISSIONS,
    PUBLIC_CONTENT_PERMISSIONS,
    SeedOrchestrator,
    SeedReport,
    seed_example_app,
)

__all__ = [
    "MARKETING_PERMISSIONS",
    "PUBLIC_CONTENT_PERMISSIONS",
    "SeedData",
    "SeedDataError",
    "SeedEntryError",
    "SeedError",
    "SeedOrchestrator",
    "SeedReport",
    "seed_example_app",
]
