"""Marketing endpoints forwarding form submissions to Mailchimp."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.deps import get_marketing_service, require_public_permission
from app.domain.marketing import (
    ConfigError,
    FormKind,
    MarketingError,
    MarketingService,
    UpstreamError,
    ValidationError,
    validate_email,
)
from app.schemas import (
    ContactRequest,
    InterestRequest,
    MarketingResponse,
    NewsletterData,
    NewsletterRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, "error": error or message})


def _newsletter_error(exc: MarketingError) -> JSONResponse:
    if isinstance(exc, ValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    if isinstance(exc, ConfigError):
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    if isinstance(exc, UpstreamError) and exc.status == 404:
        return _error(status.HTTP_404_NOT_FOUND, f"Campaign not found: {exc}", str(exc))
    if isinstance(exc, UpstreamError) and exc.status == 401:
        return _error(
            status.HTTP_401_UNAUTHORIZED,
            "Authentication failed. Check the Mailchimp API key",
            str(exc),
        )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error sending newsletter", str(exc))


@router.post(
    "/send-newsletter",
    response_model=MarketingResponse,
    summary="Subscribe an email to the newsletter campaign list",
    dependencies=[Depends(require_public_permission("marketing", "sendNewsletter"))],
)
async def send_newsletter(
    payload: NewsletterRequest,
    service: MarketingService = Depends(get_marketing_service),
):
    try:
        result = await service.send_newsletter(payload.email)
    except MarketingError as exc:
        logger.error("Error sending newsletter: %s", exc)
        return _newsletter_error(exc)

    data = NewsletterData(email=result.email, campaign_id=result.campaign_id, list_id=result.list_id)
    return MarketingResponse(
        message="Newsletter subscription sent successfully",
        data=data.model_dump(by_alias=True),
    )


async def _submit(service: MarketingService, kind: FormKind, fields: dict[str, str | None], label: str):
    try:
        result = await service.submit_form(kind, fields)
    except ValidationError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except MarketingError as exc:
        logger.error("Error submitting %s form: %s", kind.value, exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Error submitting {label} form", str(exc))
    return result


@router.post(
    "/contact",
    response_model=MarketingResponse,
    summary="Forward a contact form to the Mailchimp subscription endpoint",
    dependencies=[Depends(require_public_permission("marketing", "contact"))],
)
async def contact(
    payload: ContactRequest,
    service: MarketingService = Depends(get_marketing_service),
):
    try:
        email = validate_email(payload.email)
    except ValidationError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    result = await _submit(service, FormKind.CONTACT, payload.model_dump(), "contact")
    if isinstance(result, JSONResponse):
        return result
    return MarketingResponse(
        message="Contact form sent successfully",
        data={
            "email": email,
            "name": payload.name,
            "phone": payload.phone,
            "result": result.as_dict(),
        },
    )


@router.post(
    "/interest",
    response_model=MarketingResponse,
    summary="Forward an interest form to the Mailchimp subscription endpoint",
    dependencies=[Depends(require_public_permission("marketing", "interest"))],
)
async def interest(
    payload: InterestRequest,
    service: MarketingService = Depends(get_marketing_service),
):
    try:
        email = validate_email(payload.email)
    except ValidationError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    result = await _submit(service, FormKind.INTEREST, payload.model_dump(), "interest")
    if isinstance(result, JSONResponse):
        return result
    return MarketingResponse(
        message="Interest form sent successfully",
        data={
            "email": email,
            "country": payload.country,
            "result": result.as_dict(),
        },
    )
