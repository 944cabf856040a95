from .admin_user_schemas import (
    AdminSnapshot,
    AdminUserCreate,
    AdminUserResponse,
    AdminUserUpdate,
    AssignedArea,
    DeviceTokenUpdate,
)

__all__ = [
    "AdminSnapshot",
    "AdminUserCreate",
    "AdminUserResponse",
    "AdminUserUpdate",
    "AssignedArea",
    "DeviceTokenUpdate",
]
