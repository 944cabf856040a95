# Standard library imports
import enum

# Third-party imports
from sqlalchemy import Boolean, Enum as SQLEnum, String, text
from sqlalchemy.orm import Mapped, mapped_column, validates

# Local application imports
from app.models.base import Base
from app.models.mixins.uuid_timestamp import TimeStampMixin
from app.utils.validators.phone_validator import validate_phone_number


class AdminRole(str, enum.Enum):
    BOOTH_AGENT = "booth_agent"
    PANCHAYAT_LEADER = "panchayat_leader"
    CONSTITUENCY_HEAD = "constituency_head"
    DISTRICT_LEADER = "district_leader"
    STATE_ADMIN = "state_admin"
    SUPER_ADMIN = "super_admin"


# Roles that see every issue regardless of geography
STATEWIDE_ROLES = frozenset({AdminRole.STATE_ADMIN, AdminRole.SUPER_ADMIN})


class AdminUser(TimeStampMixin, Base):
    __tablename__ = "admin_users"

    # Phone number digits without "+" (see admin_id_from_phone); doubles as the idempotency key
    id: Mapped[str] = mapped_column(String(20), primary_key=True)

    phone: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    role: Mapped[AdminRole] = mapped_column(
        SQLEnum(AdminRole, name="admin_role", values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
        index=True,
    )

    # Jurisdiction
    assigned_district: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    assigned_panchayat_union: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Firebase Cloud Messaging registration token
    fcm_token: Mapped[str | None] = mapped_column(String(512), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, server_default=text("true"), nullable=False)

    @property
    def has_device_token(self) -> bool:
        return bool(self.fcm_token)

    @validates("phone")
    def validate_phone(self, key: str, value: str) -> str:
        phone_value = validate_phone_number(value)
        if phone_value is None:
            raise ValueError("Invalid phone number")
        return phone_value

    def __str__(self) -> str:
        return f"AdminUser: {self.name or self.phone} ({self.role.value})"
