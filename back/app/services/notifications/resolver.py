"""
Responsibility resolver.

Maps an issue's (district id, panchayat union id) and a roster snapshot to the
administrators who must hear about it and the one it is auto-assigned to.
Pure functions: no I/O, no caching, same output for the same roster.
"""

# Standard library imports
from collections.abc import Iterable

# Local application imports
from app.models.admin.admin_user import STATEWIDE_ROLES, AdminRole
from app.schemas.admin.admin_user_schemas import AdminSnapshot
from app.schemas.notifications.notification_schemas import Audience


def _area_key(value: str | None) -> str:
    # Missing and empty sub-districts are the same area
    return value or ""


def is_area_panchayat_leader(admin: AdminSnapshot, district_id: str, panchayat_union_id: str | None) -> bool:
    return (
        admin.role == AdminRole.PANCHAYAT_LEADER
        and _area_key(admin.assigned_district) == district_id
        and _area_key(admin.assigned_panchayat_union) == _area_key(panchayat_union_id)
    )


def is_area_district_leader(admin: AdminSnapshot, district_id: str) -> bool:
    return admin.role == AdminRole.DISTRICT_LEADER and _area_key(admin.assigned_district) == district_id


def is_responsible(admin: AdminSnapshot, district_id: str, panchayat_union_id: str | None) -> bool:
    """Whether an active administrator belongs to the audience of an issue in this area."""
    if not admin.is_active:
        return False
    if admin.role in STATEWIDE_ROLES:
        return True
    return is_area_panchayat_leader(admin, district_id, panchayat_union_id) or is_area_district_leader(
        admin, district_id
    )


def resolve_audience(
    district_id: str | None,
    panchayat_union_id: str | None,
    roster: Iterable[AdminSnapshot],
) -> Audience:
    """
    Compute the notification audience for an area.

    matched: active panchayat leaders of exactly (district, panchayat union),
    active district leaders of the district and every active state/super admin,
    collapsed by id and kept in roster order.
    deliverable: the matched administrators that have a device token.

    An empty district yields an empty audience; routing needs geography.
    """
    if not district_id:
        return Audience()

    matched: dict[str, AdminSnapshot] = {}
    for admin in roster:
        if admin.id in matched:
            continue
        if is_responsible(admin, district_id, panchayat_union_id):
            matched[admin.id] = admin

    members = list(matched.values())
    return Audience(matched=members, deliverable=[admin for admin in members if admin.has_device_token])


def resolve_assignee(
    district_id: str | None,
    panchayat_union_id: str | None,
    roster: Iterable[AdminSnapshot],
) -> AdminSnapshot | None:
    """
    Pick the auto-assignment target for an area.

    An exact panchayat leader beats any district leader regardless of roster
    order. Within a tier the first active match in roster order wins. Device
    tokens play no part here.
    """
    if not district_id:
        return None

    district_leader: AdminSnapshot | None = None
    for admin in roster:
        if not admin.is_active:
            continue
        if is_area_panchayat_leader(admin, district_id, panchayat_union_id):
            return admin
        if district_leader is None and is_area_district_leader(admin, district_id):
            district_leader = admin

    return district_leader
