"""Normalisation of stored file URLs onto the configured CDN."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


def normalize_cdn_base(cdn_base: str) -> str:
    """Absolute CDN base without a trailing slash (``https://`` when no scheme)."""
    base = cdn_base.strip()
    if "://" not in base:
        base = f"https://{base.lstrip('/')}"
    return base.rstrip("/")


def _split_base(base: str) -> tuple[str, str]:
    scheme, _, domain = base.partition("://")
    return f"{scheme}://", domain


def _as_path(fragment: str) -> str:
    if not fragment or fragment.startswith(("/", "?", "#")):
        return fragment
    return f"/{fragment}"


def rewrite_file_url(url: str, cdn_base: Optional[str], api_host: Optional[str] = None) -> str:
    """Point ``url`` at the CDN.

    Checks run in order and the first that applies wins:

    1. no CDN configured, or an empty url: unchanged;
    2. already under the CDN base: unchanged;
    3. the API host with the CDN domain glued after it
       (``https://api.example.com/cdn.example.com/img.png``): the path after
       the CDN domain is re-rooted on the base;
    4. relative or scheme-less: re-rooted on the base, dropping anything in
       front of the CDN domain when it is present;
    5. absolute on another host: unchanged.

    Never raises, and applying it twice gives the same result as once.
    """
    if not cdn_base or not cdn_base.strip() or not url:
        return url

    base = normalize_cdn_base(cdn_base)
    scheme, domain = _split_base(base)
    if not domain:
        return url

    if url == base or url.startswith(f"{base}/"):
        return url

    # Compatibility shim for URLs that were concatenated onto the API origin.
    if api_host:
        host_at = url.find(api_host)
        if host_at != -1:
            domain_at = url.find(domain, host_at + len(api_host))
            if domain_at != -1:
                return base + _as_path(url[domain_at + len(domain):])

    is_relative = url.startswith("/") and not url.startswith("//")
    is_host_relative = "://" not in url and not url.startswith("//")
    if is_relative or is_host_relative:
        domain_at = url.find(domain)
        if domain_at != -1:
            return scheme + url[domain_at:]
        return base + _as_path(url)

    return url


@dataclass(slots=True, frozen=True)
class CdnUrlRewriter:
    """``rewrite_file_url`` bound to the deployment's CDN and API host."""

    cdn_base: Optional[str] = None
    api_host: Optional[str] = None

    @property
    def enabled(self) -> bool:
        return bool(self.cdn_base and self.cdn_base.strip())

    def __call__(self, url: str) -> str:
        return rewrite_file_url(url, self.cdn_base, self.api_host)

    def rewrite_references(self, payload: Any) -> Any:
        """Copy of ``payload`` with every embedded file reference rewritten.

        A file reference is any mapping carrying both ``url`` and ``mime``.
        """
        if isinstance(payload, list):
            return [self.rewrite_references(item) for item in payload]
        if isinstance(payload, dict):
            copied = {key: self.rewrite_references(value) for key, value in payload.items()}
            if "mime" in copied and isinstance(copied.get("url"), str):
                copied["url"] = self(copied["url"])
            return copied
        return payload
