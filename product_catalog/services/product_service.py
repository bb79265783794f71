"""
==============================================================================
Product Lifecycle Service Module
==============================================================================

Business rules for catalog products on top of the ProductStore.

This module implements:
- ProductLifecycleManager: create/read/update/soft-delete/restore
- (name, country) uniqueness across ALL records, tombstoned included
- SKU derivation at write time

State Machine:
-------------

    ┌────────┐  delete()   ┌────────────┐
    │ ACTIVE │ ──────────▶ │ TOMBSTONED │ ──┐
    └────────┘             └────────────┘   │ restore()
      ▲    │ update()            │          │
      │    └──┐                  └──────────┘
      └───────┘ restore() is also accepted on an ACTIVE record (no-op)

- update() and delete() are only allowed on ACTIVE records
- restore() always succeeds on an existing record

Concurrency:
-----------
Uniqueness is check-then-act: two concurrent writers can both pass the
check. The table's UNIQUE(name, country) constraint catches the loser at
commit time, which is reported as the same Conflict.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from product_catalog.catalog.sku import creation_sku, normalize_country, update_sku
from product_catalog.catalog.store import ProductStore, utcnow
from product_catalog.core import exceptions
from product_catalog.db.models import Product


# Module logger
logger = logging.getLogger(__name__)

DELETED_MESSAGE = "Product deleted successfully"
RESTORED_MESSAGE = "Product restored"


class ProductLifecycleManager:
    """
    Service enforcing product identity, SKU and soft-delete rules.

    No operation retries; every failure is raised immediately as an
    AppException.

    Example:
        >>> manager = ProductLifecycleManager(db_session)
        >>> product = manager.create("Widget", "mx")
        >>> product.sku
        'CT-MX-1'
        >>> manager.delete(product.id)
        'Product deleted successfully'
        >>> manager.create("Widget", "MX")  # raises CONFLICT, the tombstone still holds the pair
    """

    def __init__(self, db: Session, store: Optional[ProductStore] = None) -> None:
        """
        Initialize the lifecycle manager.

        Args:
            db: SQLAlchemy database session
            store: Optional ProductStore (built on db if None)
        """
        self._store = store or ProductStore(db)

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def list(self) -> List[Product]:
        """All products, tombstoned included."""
        return self._store.all()

    def get(self, product_id: int) -> Product:
        """
        Get a product in any state.

        Raises:
            AppException: NOT_FOUND if no record has this id
        """
        product = self._store.get(product_id)

        if product is None:
            raise exceptions.product_not_found(product_id)

        return product

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    def create(self, name: str, country: str) -> Product:
        """
        Create a product.

        Args:
            name: Product name
            country: Country value (normalized to two uppercase letters)

        Returns:
            Created Product

        Raises:
            AppException: CONFLICT if (name, country) exists, even tombstoned
        """
        country = normalize_country(country)

        if self._store.find_by_identity(name, country) is not None:
            logger.warning(f"Product creation rejected: duplicate ({name}, {country})")
            raise exceptions.product_exists(name, country)

        product = Product(
            name=name,
            country=country,
            sku=creation_sku(country, self._store.count()),
        )

        try:
            product = self._store.add(product)
        except IntegrityError:
            logger.warning(f"Product creation lost a race: duplicate ({name}, {country})")
            raise exceptions.product_exists(name, country)

        logger.info(f"✅ Product created: #{product.id} {product.name} ({product.sku})")
        return product

    def update(self, product_id: int, name: str, country: str) -> Product:
        """
        Update name and country of an active product.

        When the country changes, the SKU is rebuilt from the new country
        and the product's own id.

        Raises:
            AppException: NOT_FOUND, FORBIDDEN (tombstoned) or CONFLICT
        """
        product = self.get(product_id)

        if product.is_trashed:
            logger.warning(f"Update rejected: product #{product_id} is deleted")
            raise exceptions.product_trashed(product_id)

        country = normalize_country(country)
        country_changed = country != product.country

        if name != product.name or country_changed:
            existing = self._store.find_by_identity(name, country, exclude_id=product.id)
            if existing is not None:
                logger.warning(
                    f"Update rejected: ({name}, {country}) held by product #{existing.id}"
                )
                raise exceptions.product_conflict(existing.id, name, country)

        product.name = name
        product.country = country
        if country_changed:
            product.sku = update_sku(country, product.id)

        try:
            product = self._store.save(product)
        except IntegrityError:
            logger.warning(f"Product update lost a race: duplicate ({name}, {country})")
            existing = self._store.find_by_identity(name, country, exclude_id=product_id)
            raise exceptions.product_conflict(
                existing.id if existing is not None else None, name, country
            )

        logger.info(f"✏️ Product updated: #{product.id} {product.name} ({product.sku})")
        return product

    def delete(self, product_id: int) -> str:
        """
        Soft-delete an active product.

        Returns:
            Confirmation message

        Raises:
            AppException: NOT_FOUND, or FORBIDDEN if already deleted
        """
        product = self.get(product_id)

        if product.is_trashed:
            logger.warning(f"Delete rejected: product #{product_id} already deleted")
            raise exceptions.product_already_deleted(product_id)

        product.deleted_at = utcnow()
        self._store.save_tombstone(product)

        logger.info(f"🗑️ Product deleted: #{product_id}")
        return DELETED_MESSAGE

    def restore(self, product_id: int) -> str:
        """
        Restore a product. Restoring an active product is a no-op.

        Returns:
            Confirmation message

        Raises:
            AppException: NOT_FOUND
        """
        product = self.get(product_id)

        if product.is_trashed:
            product.deleted_at = None
            self._store.save_tombstone(product)
            logger.info(f"♻️ Product restored: #{product_id}")
        else:
            logger.debug(f"Restore on active product #{product_id}: nothing to do")

        return RESTORED_MESSAGE
