"""
==============================================================================
Catalog Package - Product Storage
==============================================================================

Record storage and write-time derivations for catalog products.

Modules:
--------
- store: ProductStore over a SQLAlchemy session
- sku: country normalization and SKU derivation

==============================================================================
"""

from .sku import creation_sku, normalize_country, update_sku
from .store import ProductStore

__all__ = [
    "ProductStore",
    "creation_sku",
    "normalize_country",
    "update_sku",
]
