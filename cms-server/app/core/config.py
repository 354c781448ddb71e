"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional
from urllib.parse import urlsplit

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 1337
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./cms.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class StorageSettings(BaseModel):
    """Upload provider options.

    ``provider`` selects where binaries go: ``aws-s3`` pushes objects to the
    bucket with boto3, ``local`` writes them under ``local_root`` and serves
    them from ``public_path``. ``cdn_base`` is the public host files are
    served through; it may be a bare domain or a full ``scheme://host``.
    """

    provider: Literal["aws-s3", "local"] = "local"
    bucket: Optional[str] = None
    region: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    endpoint_url: Optional[str] = None
    cdn_base: Optional[str] = None
    local_root: Path = Field(default=Path("public/uploads"))
    public_path: str = "/uploads"
    folder_path: str = "/"
    upload_timeout: float = 60.0


class MarketingSettings(BaseModel):
    api_key: Optional[str] = None
    campaign_id: Optional[str] = None
    contact_form_url: str = (
        "https://antpack.us19.list-manage.com/subscribe/post"
        "?u=1f207d6d7e9745dca48c572fd&id=981ba743b6&f_id=00f2c2e1f0"
    )
    interest_form_url: str = (
        "https://antpack.us19.list-manage.com/subscribe/post"
        "?u=1f207d6d7e9745dca48c572fd&id=981ba743b6&f_id=00f1c2e1f0"
    )
    honeypot_field: str = "b_1f207d6d7e9745dca48c572fd_981ba743b6"
    interest_tag: str = "133"
    timeout: float = 15.0


class SeedSettings(BaseModel):
    enabled: bool = True
    data_dir: Path = Field(default=Path("data"))


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"
    project_name: str = "Content Server"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    storage: StorageSettings = StorageSettings()
    marketing: MarketingSettings = MarketingSettings()
    seed: SeedSettings = SeedSettings()

    # Flat variable names shared with the deployment environment.
    aws_bucket: Optional[str] = None
    aws_region: Optional[str] = None
    aws_access_key_id: Optional[str] = None
    aws_access_secret: Optional[str] = None
    resources_cdn: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("RESOURCES_CDN", "AWS_CDN", "resources_cdn")
    )
    mailchimp_api_key: Optional[str] = None
    mailchimp_campaign_id: Optional[str] = None
    api_url: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("API_URL", "PUBLIC_URL", "api_url")
    )

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def upload_storage(self) -> StorageSettings:
        """Storage section with the flat AWS variables folded in.

        A bucket in ``AWS_BUCKET`` switches the provider to ``aws-s3`` unless
        ``STORAGE__PROVIDER`` was set explicitly.
        """
        updates: dict[str, object] = {}
        if self.aws_bucket and not self.storage.bucket:
            updates["bucket"] = self.aws_bucket
            if "provider" not in self.storage.model_fields_set:
                updates["provider"] = "aws-s3"
        if self.aws_region and not self.storage.region:
            updates["region"] = self.aws_region
        if self.aws_access_key_id and not self.storage.access_key_id:
            updates["access_key_id"] = self.aws_access_key_id
        if self.aws_access_secret and not self.storage.secret_access_key:
            updates["secret_access_key"] = self.aws_access_secret
        if self.resources_cdn and not self.storage.cdn_base:
            updates["cdn_base"] = self.resources_cdn
        if not updates:
            return self.storage
        return self.storage.model_copy(update=updates)

    @property
    def marketing_config(self) -> MarketingSettings:
        updates: dict[str, object] = {}
        if self.mailchimp_api_key and not self.marketing.api_key:
            updates["api_key"] = self.mailchimp_api_key
        if self.mailchimp_campaign_id and not self.marketing.campaign_id:
            updates["campaign_id"] = self.mailchimp_campaign_id
        if not updates:
            return self.marketing
        return self.marketing.model_copy(update=updates)

    @property
    def cdn_base(self) -> Optional[str]:
        return self.upload_storage.cdn_base

    @property
    def api_host(self) -> Optional[str]:
        """Host part of ``API_URL``/``PUBLIC_URL``, if one is configured."""
        if not self.api_url:
            return None
        raw = self.api_url if "://" in self.api_url else f"https://{self.api_url}"
        return urlsplit(raw).netloc or None


def mask_secret(value: Optional[str]) -> str:
    """Show only the first and last four characters of a credential."""
    if not value:
        return "not configured"
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}..{value[-4:]}"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
