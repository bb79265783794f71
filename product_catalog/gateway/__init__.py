"""
==============================================================================
Gateway Package
==============================================================================

API gateway in front of the catalog backend.

Modules:
--------
- proxy: GatewayResilienceProxy (liveness probe, timeouts, failure taxonomy)
- envelope: field mapping, local validation, response envelopes
- service: GatewayProductService (client-facing operations)
- routes: FastAPI routers
- main: application factory

==============================================================================
"""

from .proxy import GatewayResilienceProxy
from .service import GatewayProductService

__all__ = [
    "GatewayResilienceProxy",
    "GatewayProductService",
]
