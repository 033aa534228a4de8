"""
Odoo API Client Package.

Structure:
    - client.py: Main OdooClient facade
    - _http.py: requests-backed XML-RPC transport
    - endpoints.py: Endpoint handles and the single-handle router
    - session.py: Login caching and credential prepending
    - common.py: Version, timezone and login
    - objects.py: CRUD operations on models
    - reports.py: Report generation with polling

Usage:
    from odoo_client.api import OdooClient

    client = OdooClient.connect(host, database, user, password)

    # Domain-specific
    ids = client.objects.search("res.partner", [])

    # Flat methods
    ids = client.search("res.partner", [])
"""

from .client import OdooClient, get_client
from ._http import RequestsTransport, build_session
from .endpoints import EndpointHandle, EndpointRouter
from .session import Session
from .common import CommonAPI
from .objects import ObjectsAPI
from .reports import PollPolicy, ReportsAPI

__all__ = [
    # Main client
    "OdooClient",
    "get_client",
    # Transport layer
    "RequestsTransport",
    "build_session",
    "EndpointHandle",
    "EndpointRouter",
    "Session",
    # Domain APIs
    "CommonAPI",
    "ObjectsAPI",
    "ReportsAPI",
    "PollPolicy",
]
