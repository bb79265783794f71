"""
==============================================================================
Gateway Product Service Module
==============================================================================

Client-facing product operations of the gateway:

    validate body → proxy call → field mapping → envelope

Errors raised by the proxy pass through untouched; the only error this
layer originates besides local validation is NOT_FOUND for a single-record
lookup the backend reported as absent.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from product_catalog.core import exceptions
from product_catalog.gateway import envelope
from product_catalog.gateway.proxy import GatewayResilienceProxy
from product_catalog.schemas.product import ClientProductPayload


# Module logger
logger = logging.getLogger(__name__)

DEFAULT_DELETED_MESSAGE = "Product deleted successfully"
DEFAULT_RESTORED_MESSAGE = "Product restored"


class GatewayProductService:
    """
    Gateway-side product operations returning ready-to-send envelopes.

    Example:
        >>> service = GatewayProductService(GatewayResilienceProxy.from_settings())
        >>> await service.create_product(ClientProductPayload(name="Widget", countryCode="mx"))
        {'success': True, 'data': {'id': 4, 'name': 'Widget', 'countryCode': 'MX', ...}}
    """

    def __init__(self, proxy: GatewayResilienceProxy) -> None:
        self._proxy = proxy

    async def list_products(self) -> Dict[str, Any]:
        """
        Raises:
            AppException: INTERNAL_ERROR when the backend answers with something
                other than a list of records
        """
        records = await self._proxy.list_products()

        if not isinstance(records, list):
            logger.error(f"Catalog backend returned {type(records).__name__} for the product list")
            raise exceptions.internal_error("Unexpected product list from backend service")

        return envelope.success(envelope.to_client_list(records))

    async def get_product(self, product_id: int) -> Dict[str, Any]:
        """
        Raises:
            AppException: NOT_FOUND when the backend has no such product
        """
        record = await self._proxy.get_product(product_id)

        if record is None:
            logger.info(f"Product {product_id} not found in catalog backend")
            raise exceptions.not_found("Product not found")

        return envelope.success(envelope.to_client(record))

    async def create_product(self, payload: ClientProductPayload) -> Dict[str, Any]:
        envelope.require_product_fields(payload)
        record = await self._proxy.create_product(envelope.to_backend(payload))
        return envelope.success(envelope.to_client(record))

    async def update_product(self, product_id: int, payload: ClientProductPayload) -> Dict[str, Any]:
        envelope.require_product_fields(payload)
        record = await self._proxy.update_product(product_id, envelope.to_backend(payload))
        return envelope.success(envelope.to_client(record))

    async def delete_product(self, product_id: int) -> Dict[str, Any]:
        result = await self._proxy.delete_product(product_id)
        return envelope.message(result.get("message") or DEFAULT_DELETED_MESSAGE)

    async def restore_product(self, product_id: int) -> Dict[str, Any]:
        result = await self._proxy.restore_product(product_id)
        return envelope.message(result.get("message") or DEFAULT_RESTORED_MESSAGE)
