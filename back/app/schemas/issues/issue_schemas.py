# Standard library imports
from datetime import datetime
from uuid import UUID

# Third-party imports
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

# Local application imports
from app.models.issues.issue import ISSUE_STATUS_FLOW, IssueCategory, IssuePriority, IssueStatus
from app.utils.validators.phone_validator import validate_phone_number


class IssueLocation(BaseModel):
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    address: str | None = None
    state: str | None = Field(None, max_length=100)
    district: str | None = Field(None, max_length=100)
    panchayat_union: str | None = Field(None, max_length=100)
    # Routing keys; an empty district_id disables auto-assignment and area notifications
    district_id: str = Field("", max_length=100)
    panchayat_union_id: str = Field("", max_length=100)


class IssueCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    description: str = Field(..., min_length=1)
    category: IssueCategory
    location: IssueLocation
    submitter_phone: str

    @field_validator("submitter_phone")
    @classmethod
    def validate_submitter_phone(cls, value: str) -> str:
        phone = validate_phone_number(value)
        if phone is None:
            raise ValueError("Invalid phone number")
        return phone


class IssueStatusUpdate(BaseModel):
    status: IssueStatus
    notes: str | None = None


class IssueAssignmentUpdate(BaseModel):
    admin_id: str = Field(..., min_length=1)


class IssueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    category: IssueCategory
    priority: IssuePriority
    status: IssueStatus
    latitude: float | None
    longitude: float | None
    address: str | None
    state: str | None
    district: str | None
    panchayat_union: str | None
    district_id: str | None
    panchayat_union_id: str | None
    before_photos: list[str]
    after_photos: list[str]
    submitter_phone: str
    assigned_to: str | None
    assigned_by: str | None
    resolution_notes: str | None
    resolved_at: datetime | None
    resolved_by: str | None
    created_at: datetime
    updated_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def next_statuses(self) -> list[IssueStatus]:
        # Suggested actions for the admin UI; status updates are not limited to these
        return list(ISSUE_STATUS_FLOW[self.status])


class IssueListResponse(BaseModel):
    issues: list[IssueResponse]
    total: int


class DashboardStats(BaseModel):
    total_issues: int
    resolved_issues: int
    pending_issues: int
    avg_resolution_days: float
    resolution_rate: int
    by_category: dict[str, int]
    by_status: dict[str, int]
