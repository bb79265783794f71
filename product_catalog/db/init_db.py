"""
==============================================================================
Database Initialization Module
==============================================================================

Database initialization and setup utilities for the catalog backend.

Initialization Flow:
-------------------
1. Create all tables from ORM models
2. If SEED_DEMO_DATA is enabled and the catalog is empty, create the
   demo products through the lifecycle manager (so their SKUs follow the
   normal creation rule)

Usage:
------
    from product_catalog.db import init_db

    init_db()

==============================================================================
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from product_catalog.config import get_settings
from product_catalog.db.database import DatabaseManager
from product_catalog.db.models import Product


# Module logger
logger = logging.getLogger(__name__)


DEMO_PRODUCTS: List[Tuple[str, str]] = [
    ("Producto México", "MX"),
    ("Producto USA", "US"),
    ("Producto Canadá", "CA"),
]


class DatabaseInitializer:
    """
    Database initialization manager.

    Example:
        >>> initializer = DatabaseInitializer()
        >>> initializer.initialize()
        >>> initializer.reset()          # development only
    """

    def __init__(
        self,
        db_manager: Optional[DatabaseManager] = None,
        session: Optional[Session] = None
    ) -> None:
        """
        Args:
            db_manager: Optional DatabaseManager instance (singleton if None)
            session: Optional existing session (creates new if None)
        """
        self._db_manager = db_manager or DatabaseManager()
        self._settings = get_settings()
        self._session = session

    # =========================================================================
    # TABLE OPERATIONS
    # =========================================================================

    def create_tables(self) -> None:
        """Create all database tables from ORM models (idempotent)."""
        logger.info("Creating database tables...")
        self._db_manager.create_tables()
        logger.info("✅ Database tables created successfully")

    # =========================================================================
    # SEED OPERATIONS
    # =========================================================================

    def seed_demo_products(self) -> int:
        """
        Create the demo products if the catalog is empty.

        Returns:
            Number of products created
        """
        # Deferred import: the service layer imports db.models
        from product_catalog.services.product_service import ProductLifecycleManager

        if self._session is not None:
            return self._seed(self._session, ProductLifecycleManager)

        with self._db_manager.session_scope() as session:
            return self._seed(session, ProductLifecycleManager)

    def _seed(self, session: Session, manager_cls) -> int:
        if session.query(Product).first() is not None:
            logger.info("Catalog already has products, skipping demo seed")
            return 0

        manager = manager_cls(session)
        for name, country in DEMO_PRODUCTS:
            manager.create(name, country)

        logger.info(f"🌱 Seeded {len(DEMO_PRODUCTS)} demo products")
        return len(DEMO_PRODUCTS)

    # =========================================================================
    # FULL INITIALIZATION
    # =========================================================================

    def initialize(self) -> None:
        """Run the full initialization flow."""
        self.create_tables()

        if self._settings.seed_demo_data:
            self.seed_demo_products()

        if self._db_manager.verify_connection():
            logger.info("✅ Database connection verified")
        else:
            logger.warning("⚠️ Database connection check failed")

    def reset(self) -> None:
        """
        Drop and recreate all tables.

        WARNING: This deletes all data. Only allowed in development.
        """
        if not self._settings.is_development:
            logger.error(f"Cannot reset database in {self._settings.app_env}!")
            raise RuntimeError("Database reset is only allowed in development")

        logger.warning("RESETTING DATABASE - ALL DATA WILL BE LOST")
        self._db_manager.drop_tables()
        self.create_tables()


def init_db() -> None:
    """Initialize the catalog database."""
    DatabaseInitializer().initialize()
