from .issue_schemas import (
    DashboardStats,
    IssueAssignmentUpdate,
    IssueCreate,
    IssueListResponse,
    IssueLocation,
    IssueResponse,
    IssueStatusUpdate,
)

__all__ = [
    "DashboardStats",
    "IssueAssignmentUpdate",
    "IssueCreate",
    "IssueListResponse",
    "IssueLocation",
    "IssueResponse",
    "IssueStatusUpdate",
]
