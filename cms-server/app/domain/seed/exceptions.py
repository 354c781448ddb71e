"""Seed domain specific exceptions."""

from __future__ import annotations

from typing import Any


class SeedError(Exception):
    """Base class for seeding errors."""


class SeedDataError(SeedError):
    """Raised when the seed data file is missing or malformed."""


class SeedEntryError(SeedError):
    """Raised when a single entry cannot be created; seeding moves on."""

    def __init__(self, model: str, entry: dict[str, Any], cause: BaseException) -> None:
        super().__init__(f"could not create {model} entry: {cause}")
        self.model = model
        self.entry = entry
        self.cause = cause
