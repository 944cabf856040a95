# Third-party imports
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from app.core.monitoring.logging import get_contextual_logger
from app.db_selectors.admin import admin_user_exists, get_admin_user_by_id
from app.models.admin.admin_user import AdminRole, AdminUser
from app.schemas.admin.admin_user_schemas import AdminUserCreate, AdminUserUpdate, AssignedArea
from app.services.exceptions import (
    AdminUserAlreadyExistsError,
    AdminUserNotFoundError,
    InvalidAssignedAreaError,
    SelfModificationError,
)
from app.utils.validators.phone_validator import admin_id_from_phone

logger = get_contextual_logger(__name__)


def normalize_assigned_area(role: AdminRole, area: AssignedArea | None) -> tuple[str | None, str | None]:
    """
    Validate and reduce an area to what the role uses.

    district_leader keeps only the district, panchayat_leader keeps district and
    panchayat union, every other role carries no area.
    """
    district = (area.district or "").strip() if area else ""
    panchayat_union = (area.panchayat_union or "").strip() if area else ""

    if role == AdminRole.DISTRICT_LEADER:
        if not district:
            raise InvalidAssignedAreaError("District is required for this role")
        return district, None

    if role == AdminRole.PANCHAYAT_LEADER:
        if not district:
            raise InvalidAssignedAreaError("District is required for this role")
        if not panchayat_union:
            raise InvalidAssignedAreaError("Panchayat Union is required for Panchayat Leader role")
        return district, panchayat_union

    return None, None


async def get_admin_user_or_raise(db: AsyncSession, admin_id: str) -> AdminUser:
    admin = await get_admin_user_by_id(db, admin_id)
    if admin is None:
        raise AdminUserNotFoundError(admin_id)
    return admin


async def create_admin_user(db: AsyncSession, data: AdminUserCreate) -> AdminUser:
    """
    Provision an administrator. The id is derived from the phone number, so
    provisioning the same phone twice is rejected rather than duplicated.
    """
    admin_id = admin_id_from_phone(data.phone)
    if await admin_user_exists(db, admin_id):
        raise AdminUserAlreadyExistsError(admin_id)

    district, panchayat_union = normalize_assigned_area(data.role, data.assigned_area)
    admin = AdminUser(
        id=admin_id,
        phone=data.phone,
        name=data.name,
        role=data.role,
        assigned_district=district,
        assigned_panchayat_union=panchayat_union,
        is_active=True,
    )
    db.add(admin)
    await db.commit()
    await db.refresh(admin)

    logger.info(f"Admin user {admin_id} created with role {data.role.value}")
    return admin


async def update_admin_user(
    db: AsyncSession,
    admin_id: str,
    data: AdminUserUpdate,
    acting_admin: AdminUser,
) -> AdminUser:
    admin = await get_admin_user_or_raise(db, admin_id)

    if data.is_active is False and admin.id == acting_admin.id:
        raise SelfModificationError("You cannot deactivate yourself")

    updates = data.model_dump(exclude_unset=True)
    if "name" in updates and data.name is not None:
        admin.name = data.name
    if "is_active" in updates and data.is_active is not None:
        admin.is_active = data.is_active

    # Re-derive the area whenever the role or the area changes
    if "role" in updates or "assigned_area" in updates:
        role = data.role or admin.role
        area = data.assigned_area
        if area is None and "assigned_area" not in updates:
            area = AssignedArea(district=admin.assigned_district, panchayat_union=admin.assigned_panchayat_union)
        admin.role = role
        admin.assigned_district, admin.assigned_panchayat_union = normalize_assigned_area(role, area)

    await db.commit()
    await db.refresh(admin)
    logger.info(f"Admin user {admin_id} updated by {acting_admin.id}: {sorted(updates)}")
    return admin


async def delete_admin_user(db: AsyncSession, admin_id: str, acting_admin: AdminUser) -> None:
    if admin_id == acting_admin.id:
        raise SelfModificationError("You cannot delete yourself")

    admin = await get_admin_user_or_raise(db, admin_id)
    await db.delete(admin)
    await db.commit()
    logger.info(f"Admin user {admin_id} deleted by {acting_admin.id}")


async def save_device_token(db: AsyncSession, admin: AdminUser, fcm_token: str | None) -> AdminUser:
    """Register (or, with an empty token, unregister) the admin's push device."""
    admin.fcm_token = fcm_token or None
    await db.commit()
    await db.refresh(admin)
    logger.info(f"Device token {'saved' if admin.fcm_token else 'cleared'} for admin {admin.id}")
    return admin
