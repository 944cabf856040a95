# Local application imports
from app.services.admin.admin_user_services import (
    create_admin_user,
    delete_admin_user,
    get_admin_user_or_raise,
    save_device_token,
    update_admin_user,
)

__all__ = [
    "create_admin_user",
    "delete_admin_user",
    "get_admin_user_or_raise",
    "save_device_token",
    "update_admin_user",
]
