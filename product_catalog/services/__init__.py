"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes implementing catalog business rules.

Architecture Pattern: Service Layer
----------------------------------

    ┌─────────────────────────┐
    │       API Router        │
    └────────────┬────────────┘
                 │
    ┌────────────▼────────────┐
    │ ProductLifecycleManager │  ← Business Logic
    └────────────┬────────────┘
                 │
    ┌────────────▼────────────┐
    │      ProductStore       │  ← Data Access (via ORM)
    └─────────────────────────┘

==============================================================================
"""

from .product_service import ProductLifecycleManager

__all__ = [
    "ProductLifecycleManager",
]
