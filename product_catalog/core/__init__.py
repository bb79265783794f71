"""
==============================================================================
Core Package
==============================================================================

Core infrastructure shared by the catalog backend and the gateway.

Modules:
--------
- exceptions: ErrorKind taxonomy, AppException and error factory functions

Usage:
------
    from product_catalog.core import exceptions
    raise exceptions.product_not_found(product_id)

==============================================================================
"""

from .exceptions import (
    AppException,
    ErrorKind,
    register_exception_handlers,
)

__all__ = [
    "AppException",
    "ErrorKind",
    "register_exception_handlers",
]
