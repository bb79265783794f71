"""
==============================================================================
SQLAlchemy ORM Models Module
==============================================================================

ORM model for the product catalog.

Database Schema:
---------------

    ┌─────────────────────────────────────────────────────────────────┐
    │                          products                                │
    ├─────────────────────────────────────────────────────────────────┤
    │ id (INTEGER, PK, AUTO INCREMENT, never reused)                  │
    │ name (VARCHAR, NOT NULL)                                        │
    │ country (CHAR(2), NOT NULL, uppercase)                          │
    │ sku (VARCHAR, NOT NULL)                                         │
    │ created_at (DATETIME)                                           │
    │ updated_at (DATETIME)                                           │
    │ deleted_at (DATETIME, NULLABLE)  ← tombstone marker             │
    │ UNIQUE (name, country)                                          │
    └─────────────────────────────────────────────────────────────────┘

Lifecycle:
---------

    ┌────────┐  delete()   ┌────────────┐
    │ ACTIVE │ ──────────▶ │ TOMBSTONED │
    └────────┘             └────────────┘
        ▲                        │
        └────────────────────────┘
                restore()

Tombstoned rows stay in the table, keep their id, and still occupy the
(name, country) identity space.

=============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    String,
    UniqueConstraint,
    func,
)

from product_catalog.db.database import Base


class Product(Base):
    """
    Catalog product.

    Attributes:
        id: Store-assigned identifier
        name: Product display name
        country: Two-letter uppercase country code
        sku: Derived identifier CT-<COUNTRY>-<N>
        created_at: Creation timestamp
        updated_at: Last field modification timestamp
        deleted_at: Soft-delete timestamp (None while active)
    """

    __tablename__ = "products"
    __table_args__ = (
        UniqueConstraint("name", "country", name="uq_products_name_country"),
        {"sqlite_autoincrement": True},
    )

    # =========================================================================
    # COLUMNS
    # =========================================================================

    id: int = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        doc="Store-assigned product identifier"
    )

    name: str = Column(
        String(255),
        nullable=False,
        index=True,
        doc="Product display name"
    )

    country: str = Column(
        String(2),
        nullable=False,
        doc="Two-letter uppercase country code"
    )

    sku: str = Column(
        String(64),
        nullable=False,
        doc="Derived stock-keeping identifier"
    )

    created_at: datetime = Column(
        DateTime,
        default=func.now(),
        nullable=False,
        doc="Creation timestamp"
    )

    updated_at: datetime = Column(
        DateTime,
        default=func.now(),
        nullable=False,
        doc="Last modification timestamp"
    )

    deleted_at: Optional[datetime] = Column(
        DateTime,
        nullable=True,
        default=None,
        doc="Soft-delete timestamp (NULL = active)"
    )

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def is_trashed(self) -> bool:
        """Check if the product is soft-deleted."""
        return self.deleted_at is not None

    def __repr__(self) -> str:
        return (
            f"Product(id={self.id!r}, "
            f"name={self.name!r}, "
            f"country={self.country!r}, "
            f"sku={self.sku!r}, "
            f"trashed={self.is_trashed})"
        )
