"""
Odoo API Client - Main facade for all API operations.

This module wires the endpoint router, the session and the domain APIs
together and exposes them as flat methods.
"""

from typing import Any, Dict, List, Optional

import requests

from ..config import OdooConfig, get_config
from .common import CommonAPI
from .endpoints import EndpointRouter
from .objects import ObjectsAPI
from .reports import PollPolicy, ReportsAPI
from .session import Session


class OdooClient:
    """
    Client for the Odoo XML-RPC API.

    Provides both:
    - Domain-specific sub-clients (client.common, client.objects, client.reports)
    - Flat methods (client.search(), client.get_report(), ...)

    Usage:
        client = OdooClient.connect(
            "http://localhost:8069/xmlrpc/2", "demo", "admin", "admin"
        )
        ids = client.search("res.partner", [["is_company", "=", True]])
        partners = client.read("res.partner", ids, ["name"])
        pdf = client.get_report("account.invoice", [ids[0]])

    One instance must not be shared between threads.
    """

    def __init__(
        self,
        config: Optional[OdooConfig] = None,
        http_session: Optional[requests.Session] = None,
    ):
        """
        Initialize the API client.

        Args:
            config: Configuration. Uses the environment configuration if not provided.
            http_session: Optional custom HTTP session for all XML-RPC calls
        """
        self.config = config or get_config()
        self._router = EndpointRouter(self.config, http_session)
        self._session = Session(self.config, self._router)

        # Domain-specific API modules
        self.common = CommonAPI(self.config, self._router)
        self.objects = ObjectsAPI(self._session)
        self.reports = ReportsAPI(self._session, self.config.poll_policy())

    @classmethod
    def connect(
        cls,
        host: str,
        database: str,
        user: str,
        password: str,
        http_session: Optional[requests.Session] = None,
        **options: Any,
    ) -> "OdooClient":
        """
        Create a client from a connection profile.

        Args:
            host: XML-RPC base URL
            database: Database to log into
            user: Login name
            password: Password of the user
            http_session: Optional custom HTTP session
            **options: Further OdooConfig fields (timeout, verify_ssl, ...)
        """
        config = OdooConfig(
            host=host,
            database=database,
            user=user,
            password=password,
            **options,
        )
        return cls(config, http_session)

    @property
    def uid(self) -> Optional[int]:
        """User id of the session, logging in on first access."""
        return self._session.uid()

    @property
    def router(self) -> EndpointRouter:
        """Endpoint router holding the active handle."""
        return self._router

    # ========== Metadata ==========

    def version(self) -> Dict[str, Any]:
        """Get server version information."""
        return self.common.version()

    def timezone(self) -> Optional[str]:
        """Get the timezone of the configured user."""
        return self.common.timezone()

    # ========== Objects ==========

    def search(
        self,
        model: str,
        criteria: List[Any],
        offset: int = 0,
        limit: int = 100,
    ) -> List[int]:
        """Search record ids."""
        return self.objects.search(model, criteria, offset, limit)

    def create(self, model: str, fields: Dict[str, Any]) -> Optional[int]:
        """Create a record."""
        return self.objects.create(model, fields)

    def read(
        self,
        model: str,
        ids: List[int],
        fields: Optional[List[str]] = None,
    ) -> List[Dict[str, Any]]:
        """Read records."""
        return self.objects.read(model, ids, fields)

    def search_read(
        self,
        model: str,
        criteria: Optional[List[Any]] = None,
        fields: Optional[List[str]] = None,
        offset: int = 0,
        limit: int = 100,
    ) -> List[Dict[str, Any]]:
        """Search and read records."""
        return self.objects.search_read(model, criteria, fields, offset, limit)

    def write(self, model: str, ids: List[int], fields: Dict[str, Any]) -> List[Any]:
        """Update records."""
        return self.objects.write(model, ids, fields)

    def unlink(self, model: str, ids: List[int]) -> bool:
        """Delete records."""
        return self.objects.unlink(model, ids)

    # ========== Reports ==========

    def get_report(
        self,
        model: str,
        ids: List[int],
        report_type: str = ReportsAPI.DEFAULT_TYPE,
        policy: Optional[PollPolicy] = None,
    ) -> bytes:
        """Render a report for the first id and return the document."""
        return self.reports.get_report(model, ids, report_type, policy)

    # ========== Diagnostics ==========

    def get_last_request(self) -> Optional[str]:
        """Raw XML of the last request on the active endpoint."""
        return self._router.get_handle().last_request

    def get_last_response(self) -> Optional[str]:
        """Raw XML of the last response on the active endpoint."""
        return self._router.get_handle().last_response

    def set_http_session(self, session: requests.Session) -> None:
        """Use a custom HTTP session for endpoints connected from now on."""
        self._router.set_http_session(session)

    # ========== Context Manager ==========

    def close(self) -> None:
        """Close the HTTP session if the client created it."""
        self._router.close()

    def __enter__(self) -> "OdooClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def get_client(config: Optional[OdooConfig] = None) -> OdooClient:
    """
    Get an API client instance.

    Args:
        config: Optional configuration, defaults to the environment configuration

    Returns:
        OdooClient instance

    Raises:
        ConfigurationError: If the connection profile is incomplete
    """
    config = config or get_config()
    return OdooClient(config.require_configured())
