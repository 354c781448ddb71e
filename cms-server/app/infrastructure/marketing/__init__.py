"""Third-party marketing integrations."""

from .mailchimp import MailchimpClient, SubscriptionFormClient, server_prefix

__all__ = ["MailchimpClient", "SubscriptionFormClient", "server_prefix"]
