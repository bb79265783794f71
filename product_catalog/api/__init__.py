"""
==============================================================================
Catalog Backend API
==============================================================================

Routers:
--------
- health: /api/health-check liveness probe
- products: /api/products lifecycle endpoints

==============================================================================
"""
