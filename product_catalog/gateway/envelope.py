"""
==============================================================================
Response Envelope Module
==============================================================================

Field mapping and response envelopes at the gateway edge.

Field names:
-----------
    backend        client
    ----------     -----------
    country    ↔   countryCode
    created_at  →  createdAt
    updated_at  →  updatedAt
    deleted_at  →  deletedAt

Envelopes:
---------
    {"success": true, "data": ...}
    {"success": true, "message": "..."}
    {"success": false, "error": "...", "details": {...}}   (see AppException)

==============================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List

from product_catalog.core import exceptions
from product_catalog.schemas.product import ClientProductPayload


TO_CLIENT_FIELDS = {
    "country": "countryCode",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
    "deleted_at": "deletedAt",
}

TO_BACKEND_FIELDS = {"countryCode": "country"}


def to_client(record: Dict[str, Any]) -> Dict[str, Any]:
    """Rename backend fields to client fields; unknown fields pass through."""
    return {TO_CLIENT_FIELDS.get(key, key): value for key, value in record.items()}


def to_client_list(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [to_client(record) for record in records]


def require_product_fields(payload: ClientProductPayload) -> ClientProductPayload:
    """
    Check a create/update body before any network call.

    Raises:
        AppException: VALIDATION_ERROR (400) naming the missing fields
    """
    missing = [
        field
        for field in ("name", "countryCode")
        if not (getattr(payload, field) or "").strip()
    ]
    if missing:
        raise exceptions.validation_error(
            "Fields 'name' and 'countryCode' are required",
            {"missing_fields": missing},
        )
    return payload


def to_backend(payload: ClientProductPayload) -> Dict[str, Any]:
    """Build the backend request body from a validated client payload."""
    body = payload.model_dump(include={"name", "countryCode"})
    return {
        TO_BACKEND_FIELDS.get(key, key): value.strip()
        for key, value in body.items()
    }


def success(data: Any) -> Dict[str, Any]:
    return {"success": True, "data": data}


def message(text: str) -> Dict[str, Any]:
    return {"success": True, "message": text}
