from .issue_routes import router as issue_router

__all__ = ["issue_router"]
