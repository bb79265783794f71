"""
==============================================================================
Product Schemas Module
==============================================================================

Request and response schemas for the catalog backend (backend field names:
country, created_at, updated_at, deleted_at) and the gateway request body
(client field names: countryCode).

==============================================================================
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductWrite(BaseModel):
    """Backend create/update request."""
    name: str = Field(..., min_length=1, max_length=255)
    country: str = Field(..., min_length=2, max_length=255)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be blank")
        return v

    @field_validator("country")
    @classmethod
    def validate_country(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Country must have at least two characters")
        return v


class ProductCreate(ProductWrite):
    """Product creation request."""


class ProductUpdate(ProductWrite):
    """Product update request."""


class ProductRecord(BaseModel):
    """Product as stored by the catalog backend."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    country: str
    sku: str
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None


class ClientProductPayload(BaseModel):
    """
    Gateway request body.

    Presence is checked by the gateway itself so a missing field becomes
    a 400 envelope.
    """
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    countryCode: Optional[str] = None
