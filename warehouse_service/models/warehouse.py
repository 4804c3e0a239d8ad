"""Warehouse model for storage location master data."""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from warehouse_service.database import Base


def next_version(current: int | None) -> int:
    """Version generator: new rows start at 0, every update adds one."""
    return 0 if current is None else current + 1


class Warehouse(Base):
    """Warehouse model representing a storage location.

    Rows are never renamed by code; ``code`` is fixed once the warehouse
    is created. Deactivated warehouses keep their row with
    ``is_active = False``.

    Attributes:
        id: Unique identifier (UUID)
        code: Short business code for the warehouse (e.g., 'WH-01')
        name: Human-readable warehouse name
        address: Street address
        city: City name
        state: State or province
        postal_code: Postal or ZIP code
        country: Country name
        phone: Contact phone number
        email: Contact email address
        manager_name: Name of the warehouse manager
        is_active: False once the warehouse has been soft-deleted
        created_at: Timestamp when the record was created
        updated_at: Timestamp of the last mutation
        version: Optimistic-locking counter, checked on every update
    """

    __tablename__ = "warehouses"
    __table_args__ = (Index("idx_warehouse_city", "city"),)

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    code: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    address: Mapped[str | None] = mapped_column(String(200), nullable=True)
    city: Mapped[str | None] = mapped_column(String(50), nullable=True)
    state: Mapped[str | None] = mapped_column(String(50), nullable=True)
    postal_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    country: Mapped[str | None] = mapped_column(String(50), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(100), nullable=True)
    manager_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    version: Mapped[int] = mapped_column(nullable=False)

    __mapper_args__ = {
        "version_id_col": version,
        "version_id_generator": next_version,
    }

    def __repr__(self) -> str:
        return f"<Warehouse(code={self.code!r}, name={self.name!r})>"
