"""Pydantic schemas for warehouse requests and responses.

JSON payloads use camelCase names (``postalCode``, ``isActive``); the
snake_case attribute names are accepted on input as well.
"""

from datetime import datetime
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

CAMEL_CASE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
)


def _not_blank(value: str | None, label: str) -> str | None:
    if value is not None and not value.strip():
        raise ValueError(f"{label} must not be blank")
    return value


class WarehouseDto(BaseModel):
    """External representation of a warehouse.

    Used as the response body and as the partial-update request body:
    every field is optional here so that an update can carry only the
    fields it changes. Store-assigned fields (id, timestamps) are read-only
    and ignored on input; ``version``, when sent with an update, must match
    the stored version.
    """

    model_config = CAMEL_CASE_CONFIG

    id: UUID | None = Field(default=None, description="Warehouse UUID")
    code: str | None = Field(
        default=None, max_length=20, description="Unique warehouse code"
    )
    name: str | None = Field(default=None, max_length=100, description="Warehouse name")
    address: str | None = Field(default=None, max_length=200, description="Street address")
    city: str | None = Field(default=None, max_length=50, description="City")
    state: str | None = Field(default=None, max_length=50, description="State or province")
    postal_code: str | None = Field(default=None, max_length=20, description="Postal code")
    country: str | None = Field(default=None, max_length=50, description="Country")
    phone: str | None = Field(default=None, max_length=20, description="Contact phone")
    email: str | None = Field(default=None, max_length=100, description="Contact email")
    manager_name: str | None = Field(
        default=None, max_length=50, description="Warehouse manager name"
    )
    is_active: bool | None = Field(default=None, description="False once deactivated")
    created_at: datetime | None = Field(default=None, description="Creation timestamp")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp")
    version: int | None = Field(default=None, description="Optimistic-locking version")

    @field_validator("code")
    @classmethod
    def code_not_blank(cls, value: str | None) -> str | None:
        return _not_blank(value, "Warehouse code")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str | None) -> str | None:
        return _not_blank(value, "Warehouse name")

    @field_validator("email")
    @classmethod
    def email_format(cls, value: str | None) -> str | None:
        """Reject malformed addresses but keep the value exactly as sent."""
        if value is None:
            return value
        try:
            validate_email(
                value, check_deliverability=False, globally_deliverable=False
            )
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email format: {e}") from e
        return value


class WarehouseCreate(WarehouseDto):
    """Request body for creating a warehouse."""

    code: str = Field(max_length=20, description="Unique warehouse code")
    name: str = Field(max_length=100, description="Warehouse name")
    is_active: bool = Field(description="Whether the warehouse is active")


class WarehousePage(BaseModel):
    """Response schema for a page of warehouses."""

    model_config = CAMEL_CASE_CONFIG

    items: list[WarehouseDto] = Field(description="Warehouses on this page")
    total: int = Field(description="Total number of matching warehouses")
    page: int = Field(description="Current page index (0-based)")
    page_size: int = Field(description="Items per page")
    total_pages: int = Field(description="Total number of pages")
