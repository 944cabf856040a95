# Standard library imports
from typing import Literal
from uuid import UUID

# Third-party imports
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from app.core.db import get_async_session
from app.db_selectors.issues import list_issues
from app.dependancies.common import get_current_admin
from app.models.admin.admin_user import AdminUser
from app.models.issues.issue import PENDING_STATUSES, IssueStatus
from app.schemas.issues.issue_schemas import (
    IssueAssignmentUpdate,
    IssueListResponse,
    IssueResponse,
    IssueStatusUpdate,
)
from app.services.exceptions import AdminUserNotFoundError, IssueNotFoundError, PhotoLimitExceededError
from app.services.issues.issue_services import add_issue_photos, assign_issue, get_issue_or_raise, update_issue_status
from app.services.storage.s3_service import S3Service, get_storage_service
from app.settings import settings
from app.utils.validators.file_validator import validate_photo_upload

router = APIRouter(prefix="/admin/issues", tags=["Admin Issues"])


async def _get_issue(db: AsyncSession, issue_id: UUID):
    try:
        return await get_issue_or_raise(db, issue_id)
    except IssueNotFoundError:
        raise HTTPException(status_code=404, detail="Issue not found")


@router.get("/", response_model=IssueListResponse)
async def list_all_issues(
    status: IssueStatus | Literal["pending"] | None = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    _: AdminUser = Depends(get_current_admin),
    db: AsyncSession = Depends(get_async_session),
):
    """All issues newest first; status=pending covers submitted, assigned and in_progress"""
    if status == "pending":
        statuses = list(PENDING_STATUSES)
    elif status is not None:
        statuses = [status]
    else:
        statuses = None

    issues, total = await list_issues(db, statuses=statuses, limit=limit, offset=offset)
    return IssueListResponse(issues=[IssueResponse.model_validate(i) for i in issues], total=total)


@router.patch("/{issue_id}/status", response_model=IssueResponse)
async def change_issue_status(
    issue_id: UUID,
    payload: IssueStatusUpdate,
    current_admin: AdminUser = Depends(get_current_admin),
    db: AsyncSession = Depends(get_async_session),
):
    """Set any status; resolving stamps resolved_at and resolved_by"""
    issue = await _get_issue(db, issue_id)
    issue = await update_issue_status(db, issue, payload.status, current_admin, payload.notes)
    return IssueResponse.model_validate(issue)


@router.patch("/{issue_id}/assignment", response_model=IssueResponse)
async def change_issue_assignment(
    issue_id: UUID,
    payload: IssueAssignmentUpdate,
    current_admin: AdminUser = Depends(get_current_admin),
    db: AsyncSession = Depends(get_async_session),
):
    """Manually (re)assign an issue to an administrator"""
    issue = await _get_issue(db, issue_id)
    try:
        issue = await assign_issue(db, issue, payload.admin_id, current_admin)
    except AdminUserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return IssueResponse.model_validate(issue)


@router.post("/{issue_id}/after-photos", response_model=IssueResponse)
async def upload_after_photos(
    issue_id: UUID,
    files: list[UploadFile] = File(...),
    _: AdminUser = Depends(get_current_admin),
    db: AsyncSession = Depends(get_async_session),
    storage: S3Service = Depends(get_storage_service),
):
    """Attach "after" photos showing the fix"""
    issue = await _get_issue(db, issue_id)

    for file in files:
        validate_photo_upload(file)

    offset = len(issue.after_photos)
    if offset + len(files) > settings.MAX_PHOTOS_PER_ISSUE:
        raise HTTPException(
            status_code=400,
            detail=f"An issue can have at most {settings.MAX_PHOTOS_PER_ISSUE} photos of each kind",
        )

    urls = []
    for index, file in enumerate(files, start=offset):
        data = await file.read()
        urls.append(await storage.upload_issue_photo(issue.id, "after", index, data, file.content_type))

    try:
        issue = await add_issue_photos(db, issue, urls, after=True)
    except PhotoLimitExceededError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return IssueResponse.model_validate(issue)
