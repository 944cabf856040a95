# Standard library imports
from enum import Enum
from uuid import UUID

# Third-party imports
from pydantic import BaseModel, Field

# Local application imports
from app.schemas.admin.admin_user_schemas import AdminSnapshot


class Audience(BaseModel):
    """Administrators responsible for an area, and the subset reachable by push."""

    matched: list[AdminSnapshot] = Field(default_factory=list)
    deliverable: list[AdminSnapshot] = Field(default_factory=list)

    @property
    def tokens(self) -> list[str]:
        # Two admins can share a device; send once per token
        return list(dict.fromkeys(admin.fcm_token for admin in self.deliverable if admin.fcm_token))


class DispatchStatus(str, Enum):
    SKIPPED = "skipped"
    ALREADY_PROCESSED = "already_processed"
    NO_RECIPIENTS = "no_recipients"
    SENT = "sent"
    FAILED = "failed"


class DispatchOutcome(BaseModel):
    notification_id: UUID
    status: DispatchStatus
    matched_count: int = 0
    recipient_count: int = 0
    success_count: int = 0
    failure_count: int = 0
    error: str | None = None
