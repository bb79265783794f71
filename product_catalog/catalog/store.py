"""
==============================================================================
Product Store Module
==============================================================================

Durable record storage for products, backed by a SQLAlchemy session.

The store owns identity (ids), timestamps and persistence. It knows nothing
about uniqueness rules or SKUs; those live in the lifecycle manager.

Every query here sees tombstoned rows too: soft deletion is just a non-null
deleted_at column.

==============================================================================
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from product_catalog.db.models import Product


# Module logger
logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class ProductStore:
    """
    SQLAlchemy-backed product store.

    Example:
        >>> store = ProductStore(db_session)
        >>> store.count()
        3
        >>> store.find_by_identity("Widget", "MX")
        Product(id=1, name='Widget', country='MX', sku='CT-MX-1', trashed=False)
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def all(self) -> List[Product]:
        """All records, tombstoned included, in id order."""
        return self._db.query(Product).order_by(Product.id).all()

    def get(self, product_id: int) -> Optional[Product]:
        """Record by id regardless of tombstone state."""
        return self._db.get(Product, product_id)

    def count(self) -> int:
        """Total number of records ever created and still stored."""
        return self._db.query(func.count(Product.id)).scalar() or 0

    def find_by_identity(
        self,
        name: str,
        country: str,
        exclude_id: Optional[int] = None
    ) -> Optional[Product]:
        """
        Find the record holding a (name, country) pair.

        Args:
            name: Product name
            country: Normalized country code
            exclude_id: Ignore the record with this id

        Returns:
            Matching record or None
        """
        query = self._db.query(Product).filter(
            Product.name == name,
            Product.country == country,
        )
        if exclude_id is not None:
            query = query.filter(Product.id != exclude_id)
        return query.first()

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    def add(self, product: Product) -> Product:
        """
        Persist a new record and assign its id and timestamps.

        Raises:
            IntegrityError: If the store-level unique constraint rejects it
        """
        now = utcnow()
        product.created_at = now
        product.updated_at = now

        self._db.add(product)
        self._commit()
        self._db.refresh(product)
        return product

    def save(self, product: Product) -> Product:
        """Persist field changes and stamp updated_at."""
        product.updated_at = utcnow()
        self._commit()
        self._db.refresh(product)
        return product

    def save_tombstone(self, product: Product) -> Product:
        """Persist a change to the tombstone marker only."""
        self._commit()
        self._db.refresh(product)
        return product

    def _commit(self) -> None:
        try:
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
