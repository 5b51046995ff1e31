from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from rentledger.models.enums import (
    LeaseStatus,
    MaintenancePriority,
    MaintenanceStatus,
    PaymentStatus,
)


CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("999999999999.99")


def _parse_decimal(value, field: str) -> Decimal:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number")
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValueError(f"{field} must be a number")
    if not parsed.is_finite():
        raise ValueError(f"{field} must be a number")
    # Money columns are Numeric(14, 2).
    if abs(parsed) > MAX_AMOUNT:
        raise ValueError(f"{field} must not exceed {MAX_AMOUNT}")
    if parsed != parsed.quantize(CENT):
        raise ValueError(f"{field} must have at most 2 decimal places")
    return parsed


def positive_decimal(value, field: str) -> Decimal:
    parsed = _parse_decimal(value, field)
    if parsed <= 0:
        raise ValueError(f"{field} must be greater than zero")
    return parsed


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RequiredText(CamelModel):
    @field_validator("*", mode="before")
    @classmethod
    def strip_strings(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


# --- Landlord ---------------------------------------------------------------


class SyncRequest(CamelModel):
    name: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def blank_name(cls, value):
        return _blank_to_none(value)


class LandlordOut(CamelModel):
    id: str
    email: str
    name: str
    created_at: datetime


class SyncOut(CamelModel):
    status: str = "synced"
    user: LandlordOut


# --- Property ---------------------------------------------------------------


class PropertyCreate(RequiredText):
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=500)
    city: str = Field(..., min_length=1, max_length=120)
    state: str = Field(..., min_length=1, max_length=120)


class PropertyOut(CamelModel):
    id: str
    landlord_id: str
    name: str
    address: str
    city: str
    state: str
    created_at: datetime


# --- Unit -------------------------------------------------------------------


class UnitCreate(RequiredText):
    property_id: str = Field(..., min_length=1)
    unit_number: str = Field(..., min_length=1, max_length=50)
    rent_amount: Decimal
    tenant_name: Optional[str] = None
    tenant_email: Optional[EmailStr] = None
    tenant_phone: Optional[str] = None

    @field_validator("rent_amount", mode="before")
    @classmethod
    def validate_rent(cls, value):
        return positive_decimal(value, "rentAmount")

    @field_validator("tenant_name", "tenant_email", "tenant_phone", mode="before")
    @classmethod
    def blank_tenant_fields(cls, value):
        return _blank_to_none(value)


class UnitOut(CamelModel):
    id: str
    property_id: str
    unit_number: str
    rent_amount: Decimal
    tenant_name: Optional[str] = None
    tenant_email: Optional[str] = None
    tenant_phone: Optional[str] = None
    customer_code: Optional[str] = None
    virtual_account_number: Optional[str] = None
    virtual_account_bank: Optional[str] = None
    created_at: datetime


class UnitWithPropertyOut(UnitOut):
    property: PropertyOut


class PropertyWithUnitsOut(PropertyOut):
    units: List[UnitOut] = []


# --- Tenant -----------------------------------------------------------------


class TenantCreate(RequiredText):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone_number: Optional[str] = Field(None, max_length=50)
    national_id: Optional[str] = Field(None, max_length=100)

    @field_validator("phone_number", "national_id", mode="before")
    @classmethod
    def blank_optional(cls, value):
        return _blank_to_none(value)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class TenantOut(CamelModel):
    id: str
    landlord_id: str
    name: str
    email: Optional[str] = None
    phone_number: Optional[str] = None
    national_id: Optional[str] = None
    created_at: datetime


# --- Lease ------------------------------------------------------------------


class LeaseCreate(RequiredText):
    tenant_id: str = Field(..., min_length=1)
    unit_id: str = Field(..., min_length=1)
    start_date: date
    end_date: date
    monthly_rent: Decimal
    security_deposit: Decimal = Decimal("0")
    status: LeaseStatus = LeaseStatus.ACTIVE

    @field_validator("monthly_rent", mode="before")
    @classmethod
    def validate_rent(cls, value):
        return positive_decimal(value, "monthlyRent")

    @field_validator("security_deposit", mode="before")
    @classmethod
    def validate_deposit(cls, value):
        if value is None or value == "":
            return Decimal("0")
        parsed = _parse_decimal(value, "securityDeposit")
        if parsed < 0:
            raise ValueError("securityDeposit cannot be negative")
        return parsed

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, value):
        return value or LeaseStatus.ACTIVE


class LeaseOut(CamelModel):
    id: str
    tenant_id: str
    unit_id: str
    start_date: date
    end_date: date
    monthly_rent: Decimal
    security_deposit: Decimal
    status: LeaseStatus
    created_at: datetime


class LeaseWithUnitOut(LeaseOut):
    unit: UnitOut


class LeaseDetailOut(LeaseOut):
    tenant: TenantOut
    unit: UnitWithPropertyOut


class TenantWithLeasesOut(TenantOut):
    leases: List[LeaseWithUnitOut] = []


# --- Payment ----------------------------------------------------------------


class PaymentCreate(RequiredText):
    unit_id: str = Field(..., min_length=1)
    amount: Decimal
    date: Optional[datetime] = None
    reference: Optional[str] = Field(None, max_length=255)
    status: PaymentStatus = PaymentStatus.SUCCESS

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, value):
        return positive_decimal(value, "amount")

    @field_validator("reference", "date", mode="before")
    @classmethod
    def blank_optional(cls, value):
        return _blank_to_none(value)

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, value):
        return value or PaymentStatus.SUCCESS


class PaymentOut(CamelModel):
    id: str
    unit_id: str
    amount: Decimal
    reference: str
    status: PaymentStatus
    paid_at: datetime


class PaymentWithUnitOut(PaymentOut):
    unit: UnitWithPropertyOut


# --- Maintenance ------------------------------------------------------------


class MaintenanceCreate(RequiredText):
    property_id: str = Field(..., min_length=1)
    unit_id: Optional[str] = None
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    priority: MaintenancePriority
    status: MaintenanceStatus = MaintenanceStatus.PENDING

    @field_validator("unit_id", mode="before")
    @classmethod
    def blank_unit(cls, value):
        return _blank_to_none(value)

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, value):
        return value or MaintenanceStatus.PENDING


class MaintenanceOut(CamelModel):
    id: str
    property_id: str
    unit_id: Optional[str] = None
    title: str
    description: str
    priority: MaintenancePriority
    status: MaintenanceStatus
    date: datetime


class MaintenanceDetailOut(MaintenanceOut):
    property: PropertyOut
    unit: Optional[UnitOut] = None


# --- Webhooks ---------------------------------------------------------------


class WebhookAck(BaseModel):
    status: str = "received"

