"""Marketing domain exports."""

from .exceptions import ConfigError, MarketingError, UpstreamError, ValidationError
from .models import ContactStatus, FormKind, FormSubmission, NewsletterResult, subscriber_hash
from .service import MarketingService, validate_email

__all__ = [
    "ConfigError",
    "ContactStatus",
    "FormKind",
    "FormSubmission",
    "MarketingError",
    "MarketingService",
    "NewsletterResult",
    "UpstreamError",
    "ValidationError",
    "subscriber_hash",
    "validate_email",
]
