"""HTTP clients for the Mailchimp marketing API and list-manage forms."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from app.domain.marketing.exceptions import ConfigError, UpstreamError

logger = logging.getLogger(__name__)


def server_prefix(api_key: str) -> str:
    """Data center suffix of a Mailchimp API key (``<key>-us19`` -> ``us19``)."""
    key, separator, prefix = api_key.rpartition("-")
    if not key or not separator or not prefix:
        raise ConfigError("MAILCHIMP_API_KEY must end with the data center suffix, e.g. '-us19'")
    return prefix


def _upstream_error(response: httpx.Response) -> UpstreamError:
    body: Any
    try:
        body = response.json()
    except ValueError:
        body = response.text
    title = body.get("title") if isinstance(body, dict) else None
    detail = body.get("detail") if isinstance(body, dict) else None
    message = detail or title or f"{response.status_code} {response.reason_phrase}"
    return UpstreamError(response.status_code, message, title=title, body=body)


def _transport_error(exc: httpx.HTTPError) -> UpstreamError:
    return UpstreamError(502, f"Mailchimp request failed: {exc.__class__.__name__} {exc}".rstrip())


class MailchimpClient:
    """Subset of the Marketing API v3 used by the marketing forwarder."""

    def __init__(self, http: httpx.AsyncClient, api_key: Optional[str]) -> None:
        self._http = http
        self._api_key = api_key

    def _base_url(self) -> str:
        if not self._api_key:
            raise ConfigError("MAILCHIMP_API_KEY is not configured")
        return f"https://{server_prefix(self._api_key)}.api.mailchimp.com/3.0"

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> dict[str, Any]:
        url = self._base_url() + path
        try:
            response = await self._http.request(
                method,
                url,
                json=json,
                params=params,
                auth=("anystring", self._api_key or ""),
            )
        except httpx.HTTPError as exc:
            logger.warning("Mailchimp %s %s unreachable: %s", method, path, exc)
            raise _transport_error(exc) from exc
        if response.is_error:
            error = _upstream_error(response)
            logger.warning("Mailchimp %s %s failed: %s %s", method, path, error.status, error)
            raise error
        return response.json() if response.content else {}

    async def get_campaign(self, campaign_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/campaigns/{campaign_id}")

    async def list_campaigns(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self._request("GET", "/campaigns", params=params)

    async def add_list_member(self, list_id: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        return await self._request("POST", f"/lists/{list_id}/members", json=payload)

    async def update_list_member(self, list_id: str, member_hash: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        return await self._request("PATCH", f"/lists/{list_id}/members/{member_hash}", json=payload)


class SubscriptionFormClient:
    """Posts url-encoded fields to a public list-manage subscription form."""

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    async def submit(self, url: str, fields: Mapping[str, str]) -> httpx.Response:
        try:
            return await self._http.post(
                url,
                data=dict(fields),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                follow_redirects=False,
            )
        except httpx.HTTPError as exc:
            logger.warning("Subscription form %s unreachable: %s", url, exc)
            raise _transport_error(exc) from exc
