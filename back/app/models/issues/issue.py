# Standard library imports
import enum

# Third-party imports
from sqlalchemy import JSON, Column, DateTime, Enum as SQLEnum, Float, String, Text

# Local application imports
from app.models.base import Base
from app.models.mixins.uuid_timestamp import UUIDTimeStampMixin


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class IssueStatus(str, enum.Enum):
    SUBMITTED = "submitted"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"
    REJECTED = "rejected"


# Advisory lifecycle, used for display and filtering only; status updates are not guarded.
ISSUE_STATUS_FLOW: dict[IssueStatus, tuple[IssueStatus, ...]] = {
    IssueStatus.SUBMITTED: (IssueStatus.ASSIGNED, IssueStatus.REJECTED),
    IssueStatus.ASSIGNED: (IssueStatus.IN_PROGRESS, IssueStatus.REJECTED),
    IssueStatus.IN_PROGRESS: (IssueStatus.RESOLVED, IssueStatus.REJECTED),
    IssueStatus.RESOLVED: (IssueStatus.CLOSED,),
    IssueStatus.CLOSED: (),
    IssueStatus.REJECTED: (),
}

PENDING_STATUSES = (IssueStatus.SUBMITTED, IssueStatus.ASSIGNED, IssueStatus.IN_PROGRESS)
RESOLVED_STATUSES = (IssueStatus.RESOLVED, IssueStatus.CLOSED)


class IssuePriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class IssueCategory(str, enum.Enum):
    ROAD = "road"
    WATER = "water"
    ELECTRICITY = "electricity"
    SANITATION = "sanitation"
    DRAINAGE = "drainage"
    STREETLIGHT = "streetlight"


class Issue(Base, UUIDTimeStampMixin):
    __tablename__ = "issues"

    # Issue details
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(SQLEnum(IssueCategory, name="issue_category", values_callable=_enum_values), nullable=False)
    priority = Column(
        SQLEnum(IssuePriority, name="issue_priority", values_callable=_enum_values),
        nullable=False,
        default=IssuePriority.MEDIUM,
    )
    status = Column(
        SQLEnum(IssueStatus, name="issue_status", values_callable=_enum_values),
        nullable=False,
        default=IssueStatus.SUBMITTED,
        index=True,
    )

    # Location information (names for display, ids for routing)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    address = Column(Text, nullable=True)
    state = Column(String(100), nullable=True)
    district = Column(String(100), nullable=True)
    panchayat_union = Column(String(100), nullable=True)
    district_id = Column(String(100), nullable=True, index=True)
    panchayat_union_id = Column(String(100), nullable=True, index=True)

    # Media, in upload order
    before_photos = Column(JSON, nullable=False, default=list)
    after_photos = Column(JSON, nullable=False, default=list)

    # Submitter
    submitter_phone = Column(String(20), nullable=False, index=True)

    # Handling
    assigned_to = Column(String(100), nullable=True)
    assigned_by = Column(String(100), nullable=True)
    resolution_notes = Column(Text, nullable=True)
    resolved_at = Column(DateTime(timezone=True), nullable=True, index=True)
    resolved_by = Column(String(100), nullable=True)
