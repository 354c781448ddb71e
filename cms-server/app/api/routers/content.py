"""Read-only access to published entries for the public role."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session, get_url_rewriter
from app.domain.content import Entry
from app.domain.content.service import EntryService, UnknownContentTypeError
from app.domain.files import CdnUrlRewriter
from app.domain.permissions.service import PermissionService
from app.schemas import EntryListResponse, EntryResponse

router = APIRouter()


async def _ensure_allowed(db: AsyncSession, content_type: str, action: str) -> None:
    try:
        EntryService.ensure_known(content_type)
    except UnknownContentTypeError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found") from exc
    if not await PermissionService.with_session(db).is_allowed(content_type, action):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


def _to_response(entry: Entry, rewrite: CdnUrlRewriter) -> EntryResponse:
    return EntryResponse(
        id=entry.id,
        document_id=entry.document_id,
        content_type=entry.content_type,
        data=rewrite.rewrite_references(entry.data),
        published_at=entry.published_at,
    )


@router.get("/{content_type}", response_model=EntryListResponse, summary="List published entries")
async def list_entries(
    content_type: str = Path(...),
    limit: int = Query(default=25, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db_session),
    rewrite: CdnUrlRewriter = Depends(get_url_rewriter),
) -> EntryListResponse:
    await _ensure_allowed(db, content_type, "find")
    page = await EntryService.with_session(db).list_entries(content_type, limit=limit, offset=offset)
    return EntryListResponse(total=page.total, data=[_to_response(entry, rewrite) for entry in page.entries])


@router.get("/{content_type}/{document_id}", response_model=EntryResponse, summary="Get a published entry")
async def get_entry(
    content_type: str = Path(...),
    document_id: str = Path(...),
    db: AsyncSession = Depends(get_db_session),
    rewrite: CdnUrlRewriter = Depends(get_url_rewriter),
) -> EntryResponse:
    await _ensure_allowed(db, content_type, "findOne")
    entry = await EntryService.with_session(db).get_entry(content_type, document_id)
    if entry is None or entry.published_at is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    return _to_response(entry, rewrite)
