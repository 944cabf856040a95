"""
Pydantic schemas package.

This package contains all Pydantic schemas for request/response
validation and serialization.
"""

# Local application imports
from app.schemas.admin import AdminSnapshot, AdminUserCreate, AdminUserResponse, AdminUserUpdate
from app.schemas.common import ErrorResponse
from app.schemas.issues import IssueCreate, IssueResponse, IssueStatusUpdate
from app.schemas.notifications import Audience, DispatchOutcome, MulticastResult

__all__ = [
    # Admin schemas
    "AdminSnapshot",
    "AdminUserCreate",
    "AdminUserResponse",
    "AdminUserUpdate",
    # Common
    "ErrorResponse",
    # Issue schemas
    "IssueCreate",
    "IssueResponse",
    "IssueStatusUpdate",
    # Notification schemas
    "Audience",
    "DispatchOutcome",
    "MulticastResult",
]
