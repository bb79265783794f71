"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request and response schemas using Pydantic for validation.

This package provides:
- Common: Envelope schemas
- Product: Backend product schemas and the gateway request body

==============================================================================
"""

from .common import SuccessResponse, MessageResponse, ErrorResponse
from .product import (
    ClientProductPayload,
    ProductCreate,
    ProductRecord,
    ProductUpdate,
)

__all__ = [
    # Common
    "SuccessResponse",
    "MessageResponse",
    "ErrorResponse",
    # Product
    "ClientProductPayload",
    "ProductCreate",
    "ProductRecord",
    "ProductUpdate",
]
