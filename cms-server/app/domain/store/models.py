"""Key-value store scopes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class StoreScope:
    environment: str
    type: str
    name: str
