"""
==============================================================================
Gateway Endpoints
==============================================================================

Client-facing REST surface of the gateway (/api/products, /api/health).
Bodies and responses use client field names (countryCode, createdAt, ...).

==============================================================================
"""

from fastapi import APIRouter, Depends, status

from product_catalog.gateway.proxy import GatewayResilienceProxy
from product_catalog.gateway.service import GatewayProductService
from product_catalog.schemas.common import ErrorResponse, MessageResponse, SuccessResponse
from product_catalog.schemas.product import ClientProductPayload


products_router = APIRouter(
    prefix="/products",
    tags=["Products"],
    responses={
        400: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
health_router = APIRouter(prefix="/health", tags=["Health"])


def get_proxy() -> GatewayResilienceProxy:
    """FastAPI dependency providing the backend proxy."""
    return GatewayResilienceProxy.from_settings()


def get_product_service(
    proxy: GatewayResilienceProxy = Depends(get_proxy)
) -> GatewayProductService:
    """FastAPI dependency providing the gateway product service."""
    return GatewayProductService(proxy)


@products_router.get("", response_model=SuccessResponse)
async def list_products(service: GatewayProductService = Depends(get_product_service)):
    """List all products, including soft-deleted ones."""
    return await service.list_products()


@products_router.get("/{product_id}", response_model=SuccessResponse)
async def get_product(
    product_id: int,
    service: GatewayProductService = Depends(get_product_service)
):
    """Get a product by id."""
    return await service.get_product(product_id)


@products_router.post("", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: ClientProductPayload,
    service: GatewayProductService = Depends(get_product_service)
):
    """Create a product from {name, countryCode}."""
    return await service.create_product(payload)


@products_router.put("/{product_id}", response_model=SuccessResponse)
async def update_product(
    product_id: int,
    payload: ClientProductPayload,
    service: GatewayProductService = Depends(get_product_service)
):
    """Update a product from {name, countryCode}."""
    return await service.update_product(product_id, payload)


@products_router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: int,
    service: GatewayProductService = Depends(get_product_service)
):
    """Soft delete a product."""
    return await service.delete_product(product_id)


@products_router.patch("/{product_id}/restore", response_model=MessageResponse)
async def restore_product(
    product_id: int,
    service: GatewayProductService = Depends(get_product_service)
):
    """Restore a soft-deleted product."""
    return await service.restore_product(product_id)


@health_router.get("")
async def gateway_health(proxy: GatewayResilienceProxy = Depends(get_proxy)):
    """
    Gateway health.

    Always answers 200; a down backend only degrades the overall status.
    """
    backend_ok = await proxy.check_health()

    return {
        "status": "healthy" if backend_ok else "degraded",
        "components": {
            "gateway": "healthy",
            proxy.service_name: "healthy" if backend_ok else "unavailable",
        },
    }
