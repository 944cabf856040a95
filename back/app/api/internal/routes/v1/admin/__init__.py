from .admin_issue_routes import router as admin_issue_router
from .admin_user_routes import router as admin_user_router

__all__ = ["admin_issue_router", "admin_user_router"]
