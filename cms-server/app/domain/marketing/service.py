"""Marketing forwarder: newsletter sign-ups and list-manage form submissions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Optional

from app.core.config import MarketingSettings

from .exceptions import ConfigError, UpstreamError, ValidationError
from .models import (
    EMAIL_PATTERN,
    ContactStatus,
    FormKind,
    FormSubmission,
    NewsletterResult,
    subscriber_hash,
)

if TYPE_CHECKING:
    from app.infrastructure.marketing import MailchimpClient, SubscriptionFormClient

logger = logging.getLogger(__name__)

MEMBER_EXISTS = "Member Exists"


def validate_email(email: Optional[str]) -> str:
    if not email:
        raise ValidationError("email is required")
    if not isinstance(email, str) or not EMAIL_PATTERN.match(email):
        raise ValidationError("email format is not valid")
    return email


@dataclass(slots=True)
class MarketingService:
    mailchimp: MailchimpClient
    forms: SubscriptionFormClient
    settings: MarketingSettings

    async def send_newsletter(self, email: Optional[str]) -> NewsletterResult:
        """Add ``email`` to the audience of the configured campaign.

        A new address is created as ``pending`` (double opt-in); an address
        Mailchimp already knows is switched to ``subscribed``.
        """
        email = validate_email(email)
        campaign_id = self.settings.campaign_id
        if not campaign_id:
            raise ConfigError("MAILCHIMP_CAMPAIGN_ID is not configured")

        list_id = await self.get_list_id(campaign_id)
        member = await self.create_contact(email, list_id)
        return NewsletterResult(email=email, campaign_id=campaign_id, list_id=list_id, status=member.get("status"))

    async def get_list_id(self, campaign_id: str) -> str:
        campaign = await self.mailchimp.get_campaign(campaign_id)
        list_id = (campaign.get("recipients") or {}).get("list_id")
        if not list_id:
            raise UpstreamError(404, f"campaign {campaign_id} has no recipient list")
        return list_id

    async def create_contact(self, email: str, list_id: str) -> dict[str, Any]:
        try:
            return await self.mailchimp.add_list_member(
                list_id, {"email_address": email, "status": ContactStatus.PENDING.value}
            )
        except UpstreamError as exc:
            if exc.status != 400 or exc.title != MEMBER_EXISTS:
                raise
        logger.info("Contact already on list %s, marking as subscribed", list_id)
        return await self.mailchimp.update_list_member(
            list_id, subscriber_hash(email), {"status": ContactStatus.SUBSCRIBED.value}
        )

    async def list_campaigns(
        self,
        *,
        count: int = 10,
        offset: int = 0,
        status: Optional[str] = None,
        type: Optional[str] = None,
        sort_field: Optional[str] = None,
        sort_dir: Optional[str] = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"count": count or 10, "offset": offset or 0}
        if status:
            params["status"] = status
        if type:
            params["type"] = type
        if sort_field:
            params["sort_field"] = sort_field
        if sort_dir:
            params["sort_dir"] = sort_dir

        logger.info("Listing Mailchimp campaigns with %s", params)
        response = await self.mailchimp.list_campaigns(params)
        return {
            "campaigns": response.get("campaigns") or [],
            "total_items": response.get("total_items") or 0,
        }

    def build_form(self, kind: FormKind, fields: Mapping[str, Optional[str]]) -> tuple[str, dict[str, str]]:
        """Target URL and form body for a list-manage submission."""

        def value(name: str) -> str:
            return fields.get(name) or ""

        if kind is FormKind.CONTACT:
            return self.settings.contact_form_url, {
                "EMAIL": value("email"),
                "FNAME": value("name"),
                "PHONE": value("phone"),
                "DESCRIPT": value("description"),
                self.settings.honeypot_field: "",
                "subscribe": "Subscribe",
            }
        return self.settings.interest_form_url, {
            "EMAIL": value("email"),
            "COUNTRY": value("country"),
            "DESCRIPT": value("description"),
            self.settings.honeypot_field: "",
            "tags": self.settings.interest_tag,
        }

    async def submit_form(self, kind: FormKind | str, fields: Mapping[str, Optional[str]]) -> FormSubmission:
        try:
            kind = FormKind(kind)
        except ValueError as exc:
            raise ValidationError(f"unknown form kind: {kind}") from exc
        url, body = self.build_form(kind, fields)
        response = await self.forms.submit(url, body)

        if response.is_success or response.status_code == 302:
            return FormSubmission(
                success=True,
                message="Form submitted successfully",
                status=response.status_code,
                url=str(response.url),
            )

        logger.error("Mailchimp %s form rejected: %s %s", kind.value, response.status_code, response.reason_phrase)
        raise UpstreamError(
            response.status_code,
            f"Error submitting form: {response.status_code} {response.reason_phrase}",
        )
