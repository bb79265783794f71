"""
==============================================================================
Gateway Resilience Proxy Module
==============================================================================

Outbound HTTP calls from the gateway to the catalog backend.

Every forwarded operation runs the same pipeline:

    ┌──────────────────┐  fail   ┌─────────────────────────────┐
    │ liveness probe   │ ──────▶ │ 503 status=unavailable      │
    │ (health timeout) │         └─────────────────────────────┘
    └────────┬─────────┘
             │ ok
    ┌────────▼─────────┐
    │ forwarded call   │
    │ (request timeout)│
    └────────┬─────────┘
             │
    ┌────────▼──────────────────────────────────────────────────┐
    │ classification (first match wins)                         │
    │  upstream status >= 400  → same status, upstream message  │
    │  timeout                 → 504 status=timeout             │
    │  connection refused      → 503 status=connection_refused  │
    │  other transport error   → 503 status=connection_error    │
    └───────────────────────────────────────────────────────────┘

The probe and the forwarded call are independent requests: a healthy
probe followed by a failing call is classified like any other failure.
Timeouts are per request. A timed-out call is not cancelled server-side.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from product_catalog.config import Settings, get_settings
from product_catalog.core import exceptions


# Module logger
logger = logging.getLogger(__name__)

HEALTH_CHECK_PATH = "/health-check"


def _is_connection_refused(exc: BaseException) -> bool:
    """Walk the exception chain looking for a refused connection."""
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, ConnectionRefusedError):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return "refused" in str(exc).lower()


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return {"raw": response.text}


class GatewayResilienceProxy:
    """
    Resilient client for the catalog backend.

    Attributes:
        base_url: Backend base URL (e.g. http://localhost:8000/api)
        service_name: Name reported in error details
        request_timeout_ms: Bound for each forwarded call
        health_check_timeout_ms: Bound for each liveness probe

    Example:
        >>> proxy = GatewayResilienceProxy.from_settings()
        >>> products = await proxy.list_products()
        >>> product = await proxy.get_product(42)   # None if the backend says 404
    """

    def __init__(
        self,
        base_url: str,
        service_name: str = "catalog-service",
        request_timeout_ms: int = 5000,
        health_check_timeout_ms: int = 3000,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> None:
        """
        Args:
            base_url: Backend base URL
            service_name: Name reported in error details
            request_timeout_ms: Forwarded call timeout in milliseconds
            health_check_timeout_ms: Liveness probe timeout in milliseconds
            transport: Optional httpx transport (tests, in-process backends)
        """
        self.base_url = base_url.rstrip("/")
        self.service_name = service_name
        self.request_timeout_ms = request_timeout_ms
        self.health_check_timeout_ms = health_check_timeout_ms
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "GatewayResilienceProxy":
        """Build a proxy from application settings."""
        settings = settings or get_settings()
        return cls(
            base_url=settings.catalog_api_url,
            service_name=settings.catalog_service_name,
            request_timeout_ms=settings.request_timeout_ms,
            health_check_timeout_ms=settings.health_check_timeout_ms,
            transport=transport,
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, transport=self._transport)

    # =========================================================================
    # LIVENESS
    # =========================================================================

    async def check_health(self) -> bool:
        """
        Probe the backend's health endpoint.

        Returns:
            True only on a 2xx answer within the health check timeout
        """
        try:
            async with self._client() as client:
                response = await client.get(
                    HEALTH_CHECK_PATH,
                    timeout=self.health_check_timeout_ms / 1000,
                )
        except httpx.HTTPError as e:
            logger.warning(f"Health check of {self.service_name} failed: {type(e).__name__}: {e}")
            return False

        if not response.is_success:
            logger.warning(
                f"Health check of {self.service_name} answered {response.status_code}"
            )
            return False

        return True

    async def ensure_available(self) -> None:
        """
        Raises:
            AppException: SERVICE_UNAVAILABLE if the probe fails
        """
        if not await self.check_health():
            logger.error(f"❌ {self.service_name} unavailable, request aborted")
            raise exceptions.service_unavailable(self.service_name)

    # =========================================================================
    # FORWARDING
    # =========================================================================

    async def _forward(
        self,
        method: str,
        path: str,
        operation: str,
        json: Optional[Dict[str, Any]] = None,
        not_found_as_none: bool = False
    ) -> Any:
        """
        Probe, forward one call and classify its failure.

        Args:
            method: HTTP method
            path: Path relative to the backend base URL
            operation: Human-readable operation for error messages
            json: Optional JSON body
            not_found_as_none: Return None instead of raising on upstream 404

        Returns:
            Decoded upstream payload, unchanged
        """
        await self.ensure_available()

        logger.debug(f"→ {method} {self.base_url}{path} ({operation})")

        try:
            async with self._client() as client:
                response = await client.request(
                    method,
                    path,
                    json=json,
                    timeout=self.request_timeout_ms / 1000,
                )
        except httpx.TimeoutException:
            logger.error(f"⏱️ Timed out after {self.request_timeout_ms} ms while {operation}")
            raise exceptions.gateway_timeout(
                self.service_name, operation, self.request_timeout_ms
            )
        except httpx.ConnectError as e:
            if _is_connection_refused(e):
                logger.error(f"Connection to {self.service_name} refused while {operation}")
                raise exceptions.connection_refused(self.service_name)
            logger.error(f"Connection error while {operation}: {e}")
            raise exceptions.connection_error(self.service_name, type(e).__name__)
        except httpx.TransportError as e:
            logger.error(f"Transport error while {operation}: {type(e).__name__}: {e}")
            raise exceptions.connection_error(self.service_name, type(e).__name__)

        if response.status_code == 404 and not_found_as_none:
            return None

        if response.is_error:
            body = _decode(response)
            if not isinstance(body, dict):
                body = {"raw": body}
            logger.warning(
                f"{self.service_name} answered {response.status_code} while {operation}"
            )
            raise exceptions.upstream_error(
                self.service_name, operation, response.status_code, body
            )

        return _decode(response)

    # =========================================================================
    # PRODUCT OPERATIONS
    # =========================================================================

    async def list_products(self) -> List[Dict[str, Any]]:
        return await self._forward("GET", "/products", "fetching products")

    async def get_product(self, product_id: int) -> Optional[Dict[str, Any]]:
        """Backend record, or None when the backend reports 404."""
        return await self._forward(
            "GET",
            f"/products/{product_id}",
            f"fetching product {product_id}",
            not_found_as_none=True,
        )

    async def create_product(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._forward("POST", "/products", "creating product", json=data)

    async def update_product(self, product_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._forward(
            "PUT", f"/products/{product_id}", f"updating product {product_id}", json=data
        )

    async def delete_product(self, product_id: int) -> Dict[str, Any]:
        return await self._forward(
            "DELETE", f"/products/{product_id}", f"deleting product {product_id}"
        )

    async def restore_product(self, product_id: int) -> Dict[str, Any]:
        return await self._forward(
            "PATCH", f"/products/{product_id}/restore", f"restoring product {product_id}"
        )

    def __repr__(self) -> str:
        return (
            f"GatewayResilienceProxy(base_url={self.base_url!r}, "
            f"service_name={self.service_name!r})"
        )
