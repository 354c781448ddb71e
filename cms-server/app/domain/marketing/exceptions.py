"""Marketing domain specific exceptions."""

from __future__ import annotations

from typing import Any, Optional


class MarketingError(Exception):
    """Base class for marketing forwarding errors."""


class ValidationError(MarketingError):
    """Raised for missing or malformed input such as a bad email address."""


class ConfigError(MarketingError):
    """Raised when required Mailchimp configuration is missing."""


class UpstreamError(MarketingError):
    """Raised when Mailchimp answers with a non-success status."""

    def __init__(self, status: int, message: str, *, title: Optional[str] = None, body: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.title = title
        self.body = body
