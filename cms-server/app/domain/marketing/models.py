"""Marketing request/response models."""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class ContactStatus(str, Enum):
    PENDING = "pending"
    SUBSCRIBED = "subscribed"


class FormKind(str, Enum):
    CONTACT = "contact"
    INTEREST = "interest"


def subscriber_hash(email: str) -> str:
    """Identifier Mailchimp uses to address a list member."""
    return hashlib.md5(email.lower().encode("utf-8")).hexdigest()


@dataclass(slots=True, frozen=True)
class NewsletterResult:
    email: str
    campaign_id: str
    list_id: str
    status: Optional[str] = None


@dataclass(slots=True, frozen=True)
class FormSubmission:
    success: bool
    message: str
    status: int
    url: str

    def as_dict(self) -> dict[str, Any]:
        return {"success": self.success, "message": self.message, "status": self.status, "url": self.url}
