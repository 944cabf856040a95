# Third-party imports
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, Uuid, text

# Local application imports
from app.models.base import Base
from app.models.mixins.uuid_timestamp import UUIDTimeStampMixin

NEW_ISSUE_NOTIFICATION = "new_issue"


class IssueNotification(Base, UUIDTimeStampMixin):
    """Fan-out job for one issue event; kept as an audit record once processed."""

    __tablename__ = "issue_notifications"

    type = Column(String(50), nullable=False, default=NEW_ISSUE_NOTIFICATION)
    issue_id = Column(Uuid(as_uuid=True), ForeignKey("issues.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    district_id = Column(String(100), nullable=True)
    panchayat_union_id = Column(String(100), nullable=True)

    # Set once, by the last write of the dispatcher
    processed = Column(Boolean, nullable=False, default=False, server_default=text("false"), index=True)

    # Dispatch outcome
    matched_count = Column(Integer, nullable=True)
    recipient_count = Column(Integer, nullable=True)
    success_count = Column(Integer, nullable=True)
    failure_count = Column(Integer, nullable=True)
    error = Column(Text, nullable=True)
    processed_at = Column(DateTime(timezone=True), nullable=True)
