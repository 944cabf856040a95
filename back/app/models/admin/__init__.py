# Local application imports
from app.models.admin.admin_user import STATEWIDE_ROLES, AdminRole, AdminUser

__all__ = ["AdminUser", "AdminRole", "STATEWIDE_ROLES"]
