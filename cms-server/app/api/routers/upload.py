"""Upload endpoints; every URL returned to clients is rewritten onto the CDN."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_app_container, get_db_session, get_url_rewriter, require_public_permission
from app.core.container import ApplicationContainer
from app.domain.files import CdnUrlRewriter, FileRecord
from app.domain.uploads import UploadError, UploadRequest
from app.infrastructure.database.repositories import SqlFileRepository
from app.schemas import FileListResponse, FileRecordResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(record: FileRecord, rewrite: CdnUrlRewriter) -> FileRecordResponse:
    response = FileRecordResponse.model_validate(record)
    response.url = rewrite(record.url)
    return response


@router.post(
    "",
    response_model=list[FileRecordResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Upload one or more files",
    dependencies=[Depends(require_public_permission("upload", "upload"))],
)
async def upload_files(
    files: list[UploadFile] = File(...),
    name: Optional[str] = Form(default=None),
    caption: Optional[str] = Form(default=None),
    alternative_text: Optional[str] = Form(default=None, alias="alternativeText"),
    folder_path: Optional[str] = Form(default=None, alias="folderPath"),
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_app_container),
    rewrite: CdnUrlRewriter = Depends(get_url_rewriter),
) -> list[FileRecordResponse]:
    requests: list[UploadRequest] = []
    for upload in files:
        try:
            data = await upload.read()
        finally:
            await upload.close()
        requests.append(
            UploadRequest(
                file_name=upload.filename or "file",
                data=data,
                mime=upload.content_type,
                name=name if len(files) == 1 else None,
                caption=caption,
                alternative_text=alternative_text,
                folder_path=folder_path,
            )
        )

    try:
        records = await container.upload_service(db).upload(requests)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except UploadError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    return [_to_response(record, rewrite) for record in records]


@router.get(
    "/files",
    response_model=FileListResponse,
    summary="List uploaded files",
    dependencies=[Depends(require_public_permission("upload", "find"))],
)
async def list_files(
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db_session),
    rewrite: CdnUrlRewriter = Depends(get_url_rewriter),
) -> FileListResponse:
    repository = SqlFileRepository(db)
    records = await repository.list_files(limit, offset)
    total = await repository.count_files()
    return FileListResponse(total=total, files=[_to_response(record, rewrite) for record in records])


@router.get(
    "/files/{file_id}",
    response_model=FileRecordResponse,
    summary="Get an uploaded file",
    dependencies=[Depends(require_public_permission("upload", "findOne"))],
)
async def get_file(
    file_id: int,
    db: AsyncSession = Depends(get_db_session),
    rewrite: CdnUrlRewriter = Depends(get_url_rewriter),
) -> FileRecordResponse:
    record = await SqlFileRepository(db).get_by_id(file_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    return _to_response(record, rewrite)
