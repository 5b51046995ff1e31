import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentledger.core.database import Base

from .enums import (
    LeaseStatus,
    MaintenancePriority,
    MaintenanceStatus,
    PaymentStatus,
)


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def enum_column(enum_cls, name: str):
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        values_callable=lambda members: [m.value for m in members],
    )


class Landlord(Base):
    __tablename__ = "landlords"

    # Same value as the identity provider's subject.
    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    properties: Mapped[List["Property"]] = relationship(
        "Property", back_populates="landlord"
    )
    tenants: Mapped[List["Tenant"]] = relationship("Tenant", back_populates="landlord")

    def __repr__(self):
        return f"<Landlord(id={self.id}, email='{self.email}')>"


class Property(Base):
    __tablename__ = "properties"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    landlord_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("landlords.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    city: Mapped[str] = mapped_column(String(120), nullable=False)
    state: Mapped[str] = mapped_column(String(120), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    landlord: Mapped["Landlord"] = relationship("Landlord", back_populates="properties")
    units: Mapped[List["Unit"]] = relationship(
        "Unit", back_populates="property", order_by="Unit.unit_number"
    )
    maintenance_requests: Mapped[List["Maintenance"]] = relationship(
        "Maintenance", back_populates="property"
    )

    def __repr__(self):
        return f"<Property(id={self.id}, name='{self.name}')>"


class Unit(Base):
    """
    A rentable unit inside a property.

    ``tenant_name``/``tenant_email``/``tenant_phone`` are a denormalized
    snapshot of the current occupant, overwritten whenever a lease is
    created. The authoritative tenant record is ``Tenant``.

    ``customer_code``, ``virtual_account_number`` and ``virtual_account_bank``
    are written once, in the same insert that creates the unit, and never
    updated afterwards.
    """

    __tablename__ = "units"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    property_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("properties.id"), nullable=False, index=True
    )
    unit_number: Mapped[str] = mapped_column(String(50), nullable=False)
    rent_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)

    tenant_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    tenant_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    tenant_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    customer_code: Mapped[Optional[str]] = mapped_column(
        String(100), unique=True, nullable=True
    )
    virtual_account_number: Mapped[Optional[str]] = mapped_column(
        String(30), nullable=True
    )
    virtual_account_bank: Mapped[Optional[str]] = mapped_column(
        String(120), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    property: Mapped["Property"] = relationship("Property", back_populates="units")
    leases: Mapped[List["Lease"]] = relationship("Lease", back_populates="unit")
    payments: Mapped[List["Payment"]] = relationship("Payment", back_populates="unit")
    maintenance_requests: Mapped[List["Maintenance"]] = relationship(
        "Maintenance", back_populates="unit"
    )

    def apply_tenant_snapshot(
        self, name: Optional[str], email: Optional[str], phone: Optional[str]
    ) -> None:
        self.tenant_name = name
        self.tenant_email = email
        self.tenant_phone = phone

    def __repr__(self):
        return f"<Unit(id={self.id}, unit_number='{self.unit_number}')>"


class Tenant(Base):
    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    landlord_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("landlords.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    national_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    landlord: Mapped["Landlord"] = relationship("Landlord", back_populates="tenants")
    leases: Mapped[List["Lease"]] = relationship("Lease", back_populates="tenant")

    def __repr__(self):
        return f"<Tenant(id={self.id}, name='{self.name}')>"


class Lease(Base):
    __tablename__ = "leases"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    tenant_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("tenants.id"), nullable=False, index=True
    )
    unit_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("units.id"), nullable=False, index=True
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    monthly_rent: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    security_deposit: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0")
    )
    status: Mapped[LeaseStatus] = mapped_column(
        enum_column(LeaseStatus, "lease_status"),
        nullable=False,
        default=LeaseStatus.ACTIVE,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="leases")
    unit: Mapped["Unit"] = relationship("Unit", back_populates="leases")

    def __repr__(self):
        return f"<Lease(id={self.id}, unit_id={self.unit_id}, status='{self.status}')>"


class Payment(Base):
    __tablename__ = "payments"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    unit_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("units.id"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    # Idempotency key: one row per real-world payment.
    reference: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    status: Mapped[PaymentStatus] = mapped_column(
        enum_column(PaymentStatus, "payment_status"),
        nullable=False,
        default=PaymentStatus.SUCCESS,
    )
    paid_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    unit: Mapped["Unit"] = relationship("Unit", back_populates="payments")

    __table_args__ = (Index("ix_payments_unit_paid_at", "unit_id", "paid_at"),)

    def __repr__(self):
        return f"<Payment(id={self.id}, reference='{self.reference}', amount={self.amount})>"


class Maintenance(Base):
    __tablename__ = "maintenance_requests"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    property_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("properties.id"), nullable=False, index=True
    )
    unit_id: Mapped[Optional[str]] = mapped_column(
        String(32), ForeignKey("units.id"), nullable=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[MaintenancePriority] = mapped_column(
        enum_column(MaintenancePriority, "maintenance_priority"), nullable=False
    )
    status: Mapped[MaintenanceStatus] = mapped_column(
        enum_column(MaintenanceStatus, "maintenance_status"),
        nullable=False,
        default=MaintenanceStatus.PENDING,
    )
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    property: Mapped["Property"] = relationship(
        "Property", back_populates="maintenance_requests"
    )
    unit: Mapped[Optional["Unit"]] = relationship(
        "Unit", back_populates="maintenance_requests"
    )

    def __repr__(self):
        return f"<Maintenance(id={self.id}, title='{self.title}', status='{self.status}')>"
