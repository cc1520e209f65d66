"""CMMS Gateway client package.

Async client for the API gateway in front of the CMMS backend services.

- ``GatewayClient``: the authenticated request primitive
- ``CMMSGateway``: facade exposing one namespace per resource family
- Session providers supply the bearer token and active organization
"""

from gateway.auth import (
    Session,
    SessionProvider,
    StaticSessionProvider,
    SupabaseAuthConfig,
    SupabaseSessionProvider,
)
from gateway.client import GatewayClient
from gateway.cmms import CMMSGateway
from gateway.config import GatewayConfig, RetryConfig
from gateway.errors import RequestFailed
from gateway.resource import ChildResource, Collection, Resource, ScopedCollection, ScopedResource

__all__ = [
    # Client
    "CMMSGateway",
    "GatewayClient",
    # Configuration
    "GatewayConfig",
    "RetryConfig",
    # Auth
    "Session",
    "SessionProvider",
    "StaticSessionProvider",
    "SupabaseAuthConfig",
    "SupabaseSessionProvider",
    # Errors
    "RequestFailed",
    # Endpoint shapes
    "Resource",
    "Collection",
    "ScopedResource",
    "ScopedCollection",
    "ChildResource",
]
