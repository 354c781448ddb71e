"""Seed data loaded from ``data.json``."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .exceptions import SeedDataError


@dataclass(slots=True)
class SeedData:
    categories: list[dict[str, Any]] = field(default_factory=list)
    authors: list[dict[str, Any]] = field(default_factory=list)
    articles: list[dict[str, Any]] = field(default_factory=list)
    global_settings: dict[str, Any] = field(default_factory=dict)
    about: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, payload: dict[str, Any]) -> "SeedData":
        try:
            return cls(
                categories=list(payload.get("categories") or []),
                authors=list(payload.get("authors") or []),
                articles=list(payload.get("articles") or []),
                global_settings=dict(payload.get("global") or {}),
                about=dict(payload.get("about") or {}),
            )
        except (TypeError, ValueError) as exc:
            raise SeedDataError(f"malformed seed data: {exc}") from exc

    @classmethod
    def load(cls, data_dir: Path) -> "SeedData":
        path = Path(data_dir) / "data.json"
        try:
            with path.open("r", encoding="utf-8") as fh:
                payload = json.load(fh)
        except FileNotFoundError as exc:
            raise SeedDataError(f"seed data file not found: {path}") from exc
        except json.JSONDecodeError as exc:
            raise SeedDataError(f"seed data file is not valid JSON: {path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise SeedDataError(f"seed data must be a JSON object: {path}")
        return cls.from_mapping(payload)
