# Third-party imports
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from app.core.db import get_async_session
from app.db_selectors.admin import list_admin_users
from app.dependancies.common import get_current_admin, require_user_manager
from app.models.admin.admin_user import AdminUser
from app.schemas.admin.admin_user_schemas import (
    AdminUserCreate,
    AdminUserResponse,
    AdminUserUpdate,
    DeviceTokenUpdate,
)
from app.services.admin.admin_user_services import (
    create_admin_user,
    delete_admin_user,
    get_admin_user_or_raise,
    save_device_token,
    update_admin_user,
)
from app.services.exceptions import (
    AdminUserAlreadyExistsError,
    AdminUserNotFoundError,
    InvalidAssignedAreaError,
    SelfModificationError,
)

router = APIRouter(prefix="/admin/users", tags=["Admin Users"])


@router.get("/me", response_model=AdminUserResponse)
async def get_me(current_admin: AdminUser = Depends(get_current_admin)):
    """The signed-in administrator"""
    return AdminUserResponse.model_validate(current_admin)


@router.put("/me/device-token", response_model=AdminUserResponse)
async def update_my_device_token(
    payload: DeviceTokenUpdate,
    current_admin: AdminUser = Depends(get_current_admin),
    db: AsyncSession = Depends(get_async_session),
):
    """Register the browser/device that should receive new-issue notifications"""
    admin = await save_device_token(db, current_admin, payload.fcm_token)
    return AdminUserResponse.model_validate(admin)


@router.get("/", response_model=list[AdminUserResponse])
async def list_users(
    _: AdminUser = Depends(require_user_manager),
    db: AsyncSession = Depends(get_async_session),
):
    """All administrators, newest first"""
    admins = await list_admin_users(db)
    return [AdminUserResponse.model_validate(admin) for admin in admins]


@router.post("/", response_model=AdminUserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: AdminUserCreate,
    _: AdminUser = Depends(require_user_manager),
    db: AsyncSession = Depends(get_async_session),
):
    """Provision an administrator; the phone number becomes the id"""
    try:
        admin = await create_admin_user(db, payload)
    except AdminUserAlreadyExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidAssignedAreaError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return AdminUserResponse.model_validate(admin)


@router.get("/{admin_id}", response_model=AdminUserResponse)
async def get_user(
    admin_id: str,
    _: AdminUser = Depends(require_user_manager),
    db: AsyncSession = Depends(get_async_session),
):
    try:
        admin = await get_admin_user_or_raise(db, admin_id)
    except AdminUserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return AdminUserResponse.model_validate(admin)


@router.patch("/{admin_id}", response_model=AdminUserResponse)
async def update_user(
    admin_id: str,
    payload: AdminUserUpdate,
    current_admin: AdminUser = Depends(require_user_manager),
    db: AsyncSession = Depends(get_async_session),
):
    """Change name, role, area or active flag"""
    try:
        admin = await update_admin_user(db, admin_id, payload, current_admin)
    except AdminUserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SelfModificationError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except InvalidAssignedAreaError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return AdminUserResponse.model_validate(admin)


@router.delete("/{admin_id}")
async def delete_user(
    admin_id: str,
    current_admin: AdminUser = Depends(require_user_manager),
    db: AsyncSession = Depends(get_async_session),
):
    try:
        await delete_admin_user(db, admin_id, current_admin)
    except SelfModificationError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except AdminUserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {"message": "Admin user deleted successfully"}
