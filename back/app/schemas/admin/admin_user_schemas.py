# Standard library imports
from datetime import datetime

# Third-party imports
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Local application imports
from app.models.admin.admin_user import AdminRole
from app.utils.validators.phone_validator import validate_phone_number


class AssignedArea(BaseModel):
    district: str | None = Field(None, max_length=100)
    panchayat_union: str | None = Field(None, max_length=100)


class AdminUserCreate(BaseModel):
    phone: str
    name: str = Field(..., min_length=1, max_length=100)
    role: AdminRole
    assigned_area: AssignedArea | None = None

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: str) -> str:
        phone = validate_phone_number(value)
        if phone is None:
            raise ValueError("Invalid phone number")
        return phone


class AdminUserUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    role: AdminRole | None = None
    assigned_area: AssignedArea | None = None
    is_active: bool | None = None


class DeviceTokenUpdate(BaseModel):
    # None (or empty) unregisters the device
    fcm_token: str | None = Field(None, max_length=512)


class AdminUserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    phone: str
    name: str
    role: AdminRole
    assigned_district: str | None
    assigned_panchayat_union: str | None
    is_active: bool
    has_device_token: bool = False
    created_at: datetime
    updated_at: datetime


class AdminSnapshot(BaseModel):
    """Read-only view of one roster entry, as consumed by the responsibility resolver."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    phone: str
    name: str = ""
    role: AdminRole
    assigned_district: str | None = None
    assigned_panchayat_union: str | None = None
    fcm_token: str | None = None
    is_active: bool = True

    @property
    def display_name(self) -> str:
        return self.name or self.phone

    @property
    def has_device_token(self) -> bool:
        return bool(self.fcm_token)
