# Third-party imports
from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from app.models.admin.admin_user import AdminUser
from app.schemas.admin.admin_user_schemas import AdminSnapshot


async def get_admin_user_by_id(db: AsyncSession, admin_id: str) -> AdminUser | None:
    result = await db.execute(select(AdminUser).where(AdminUser.id == admin_id))
    return result.scalar_one_or_none()


async def admin_user_exists(db: AsyncSession, admin_id: str) -> bool:
    result = await db.execute(select(exists().where(AdminUser.id == admin_id)))
    return bool(result.scalar())


async def list_admin_users(db: AsyncSession) -> list[AdminUser]:
    """Every administrator, newest first (management listing)."""
    result = await db.execute(select(AdminUser).order_by(AdminUser.created_at.desc(), AdminUser.id))
    return list(result.scalars().all())


async def list_admin_snapshots(db: AsyncSession) -> list[AdminSnapshot]:
    """
    The full roster in provisioning order, read fresh on every call.

    Inactive and token-less administrators are included; filtering is the
    resolver's job. The order is stable so tie-breaks in assignment are
    reproducible.
    """
    result = await db.execute(select(AdminUser).order_by(AdminUser.created_at.asc(), AdminUser.id.asc()))
    return [AdminSnapshot.model_validate(admin) for admin in result.scalars().all()]
