# Standard library imports
from uuid import UUID

# Third-party imports
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from app.core.db import get_async_session
from app.db_selectors.issues import list_issues_by_phone, list_resolved_issues
from app.schemas.issues.issue_schemas import DashboardStats, IssueCreate, IssueListResponse, IssueResponse
from app.services.events.event_publisher import CeleryEventPublisher, get_event_publisher
from app.services.exceptions import IssueNotFoundError, PhotoLimitExceededError
from app.services.issues.issue_services import add_issue_photos, get_dashboard_stats, get_issue_or_raise, submit_issue
from app.services.storage.s3_service import S3Service, get_storage_service
from app.settings import settings
from app.utils.validators.file_validator import validate_photo_upload
from app.utils.validators.phone_validator import validate_phone_number

router = APIRouter(prefix="/issues", tags=["Issues"])


@router.post("/", response_model=IssueResponse)
async def create_issue(
    issue_data: IssueCreate,
    db: AsyncSession = Depends(get_async_session),
    publisher: CeleryEventPublisher = Depends(get_event_publisher),
):
    """Submit a new issue; auto-assignment and admin notifications follow asynchronously"""
    issue, notification = await submit_issue(db, issue_data)

    publisher.issue_created(issue.id)
    publisher.notification_created(notification.id)

    return IssueResponse.model_validate(issue)


@router.post("/{issue_id}/photos", response_model=IssueResponse)
async def upload_issue_photos(
    issue_id: UUID,
    submitter_phone: str = Form(...),
    files: list[UploadFile] = File(...),
    db: AsyncSession = Depends(get_async_session),
    storage: S3Service = Depends(get_storage_service),
):
    """Attach "before" photos to an issue, in upload order"""
    try:
        issue = await get_issue_or_raise(db, issue_id)
    except IssueNotFoundError:
        raise HTTPException(status_code=404, detail="Issue not found")

    if validate_phone_number(submitter_phone) != issue.submitter_phone:
        raise HTTPException(status_code=403, detail="Only the submitter can add photos to this issue")

    for file in files:
        validate_photo_upload(file)

    offset = len(issue.before_photos)
    if offset + len(files) > settings.MAX_PHOTOS_PER_ISSUE:
        raise HTTPException(
            status_code=400,
            detail=f"An issue can have at most {settings.MAX_PHOTOS_PER_ISSUE} photos of each kind",
        )

    urls = []
    for index, file in enumerate(files, start=offset):
        data = await file.read()
        urls.append(await storage.upload_issue_photo(issue.id, "before", index, data, file.content_type))

    try:
        issue = await add_issue_photos(db, issue, urls)
    except PhotoLimitExceededError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return IssueResponse.model_validate(issue)


@router.get("/mine", response_model=IssueListResponse)
async def list_my_issues(
    phone: str = Query(..., min_length=10),
    db: AsyncSession = Depends(get_async_session),
):
    """Issues submitted from a phone number, newest first"""
    normalized = validate_phone_number(phone)
    if normalized is None:
        raise HTTPException(status_code=400, detail="Invalid phone number")

    issues = await list_issues_by_phone(db, normalized)
    return IssueListResponse(issues=[IssueResponse.model_validate(i) for i in issues], total=len(issues))


@router.get("/showcase", response_model=IssueListResponse)
async def showcase(
    limit: int = Query(settings.SHOWCASE_DEFAULT_LIMIT, ge=1, le=settings.SHOWCASE_MAX_LIMIT),
    db: AsyncSession = Depends(get_async_session),
):
    """Recently resolved issues with their before/after photos"""
    issues = await list_resolved_issues(db, limit)
    return IssueListResponse(issues=[IssueResponse.model_validate(i) for i in issues], total=len(issues))


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(db: AsyncSession = Depends(get_async_session)):
    """Public resolution statistics"""
    return await get_dashboard_stats(db)


@router.get("/{issue_id}", response_model=IssueResponse)
async def get_issue(issue_id: UUID, db: AsyncSession = Depends(get_async_session)):
    """Get issue details"""
    try:
        issue = await get_issue_or_raise(db, issue_id)
    except IssueNotFoundError:
        raise HTTPException(status_code=404, detail="Issue not found")

    return IssueResponse.model_validate(issue)
