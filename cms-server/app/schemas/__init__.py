"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class NewsletterRequest(BaseModel):
    email: Optional[str] = None


class ContactRequest(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    description: Optional[str] = None


class InterestRequest(BaseModel):
    email: Optional[str] = None
    country: Optional[str] = None
    description: Optional[str] = None


class NewsletterData(BaseModel):
    email: str
    campaign_id: str = Field(alias="campaignId")
    list_id: str = Field(alias="listId")

    model_config = ConfigDict(populate_by_name=True)


class MarketingResponse(BaseModel):
    success: bool = True
    message: str
    data: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    message: str
    error: Optional[str] = None


class FileRecordResponse(BaseModel):
    id: int
    name: str
    alternative_text: Optional[str] = Field(default=None, alias="alternativeText")
    caption: Optional[str] = None
    ext: Optional[str] = None
    mime: Optional[str] = None
    size: int
    url: str
    provider: str
    folder_path: str = Field(default="/", alias="folderPath")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class FileListResponse(BaseModel):
    total: int
    files: list[FileRecordResponse]


class EntryResponse(BaseModel):
    id: int
    document_id: str = Field(alias="documentId")
    content_type: str = Field(alias="contentType")
    data: dict[str, Any]
    published_at: Optional[datetime] = Field(default=None, alias="publishedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class EntryListResponse(BaseModel):
    total: int
    data: list[EntryResponse]
