"""
==============================================================================
Database Package
==============================================================================

SQLAlchemy database infrastructure and ORM models.

Architecture:
------------
├── database.py   - DatabaseManager class, session factory, get_db
├── models.py     - Product ORM model
└── init_db.py    - DatabaseInitializer for setup and demo seed

==============================================================================
"""

from .database import DatabaseManager, Base, get_db
from .models import Product
from .init_db import DatabaseInitializer, init_db

__all__ = [
    "DatabaseManager",
    "Base",
    "get_db",
    "Product",
    "DatabaseInitializer",
    "init_db",
]
