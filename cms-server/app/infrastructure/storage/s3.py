"""S3 upload provider backed by boto3."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import StorageSettings, mask_secret
from app.domain.files.urls import normalize_cdn_base
from app.domain.uploads import UploadError

logger = logging.getLogger(__name__)


class S3UploadProvider:
    """Stores objects in a single bucket; URLs point at the CDN when one is set."""

    name = "aws-s3"

    def __init__(self, settings: StorageSettings, client: Any = None) -> None:
        if not settings.bucket:
            raise ValueError("AWS_BUCKET must be configured for the aws-s3 provider")
        self.bucket = settings.bucket
        self.region = settings.region
        self.cdn_base = settings.cdn_base
        self._settings = settings
        self.client = client or boto3.client(
            "s3",
            region_name=settings.region,
            endpoint_url=settings.endpoint_url,
            aws_access_key_id=settings.access_key_id,
            aws_secret_access_key=settings.secret_access_key,
            config=Config(
                connect_timeout=settings.upload_timeout,
                read_timeout=settings.upload_timeout,
            ),
        )

    @property
    def bucket_host(self) -> str:
        if self.region:
            return f"{self.bucket}.s3.{self.region}.amazonaws.com"
        return f"{self.bucket}.s3.amazonaws.com"

    def object_url(self, key: str) -> str:
        if self.cdn_base:
            return f"{normalize_cdn_base(self.cdn_base)}/{key}"
        return f"https://{self.bucket_host}/{key}"

    async def upload(self, key: str, data: bytes, content_type: Optional[str]) -> str:
        params: dict[str, Any] = {"Bucket": self.bucket, "Key": key, "Body": data}
        if content_type:
            params["ContentType"] = content_type
        try:
            await asyncio.to_thread(self.client.put_object, **params)
        except (BotoCoreError, ClientError) as exc:
            error = getattr(exc, "response", {}).get("Error", {})
            logger.error(
                "S3 put_object failed for %s/%s: code=%s message=%s",
                self.bucket,
                key,
                error.get("Code"),
                error.get("Message") or str(exc),
            )
            raise UploadError(f"S3 upload failed for {key}: {exc}") from exc
        return self.object_url(key)

    async def delete(self, key: str) -> None:
        try:
            await asyncio.to_thread(self.client.delete_object, Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            raise UploadError(f"S3 delete failed for {key}: {exc}") from exc

    def describe(self) -> dict[str, object]:
        return {
            "provider": self.name,
            "bucket": self.bucket,
            "region": self.region or "not configured",
            "cdn": self.cdn_base or "not configured",
            "access_key_id": mask_secret(self._settings.access_key_id),
            "secret_access_key": mask_secret(self._settings.secret_access_key),
        }
