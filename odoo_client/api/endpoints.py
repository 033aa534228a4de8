"""
Endpoint routing for the Odoo XML-RPC API.

The server exposes its services under named sub-paths of the XML-RPC base
URL (``common``, ``object``, ``report``). The router hands out one connected
handle at a time and only builds a new one when a different endpoint is
requested.
"""

import logging
import xmlrpc.client
from typing import Any, Dict, Optional, Sequence
from urllib.parse import urlsplit

import requests

from ..config import OdooConfig
from ..exceptions import NoActiveEndpointError, OdooError, RemoteFault
from ._http import RequestsTransport, build_session

logger = logging.getLogger(__name__)


class EndpointHandle:
    """
    A connected XML-RPC handle for a single endpoint URL.

    Unless system lookup is skipped, the handle asks the server for the
    signature of every method before its first call.
    """

    def __init__(
        self,
        url: str,
        session: requests.Session,
        timeout: Optional[float] = None,
        verify_ssl: bool = True,
    ):
        """
        Initialize the handle.

        Args:
            url: Full endpoint URL
            session: HTTP session used by the transport
            timeout: Request timeout in seconds
            verify_ssl: Verify TLS certificates
        """
        self.url = url
        self.transport = RequestsTransport(
            session,
            scheme=urlsplit(url).scheme or "http",
            timeout=timeout,
            verify_ssl=verify_ssl,
        )
        self._proxy = xmlrpc.client.ServerProxy(
            url,
            transport=self.transport,
            allow_none=True,
        )
        self.skip_system_lookup = False
        self._signatures: Dict[str, Any] = {}

    def set_skip_system_lookup(self, skip: bool = True) -> None:
        """Enable or disable the introspection lookup before calls."""
        self.skip_system_lookup = skip

    def call(self, method: str, params: Sequence[Any] = ()) -> Any:
        """
        Call a remote method.

        Args:
            method: Remote method name
            params: Positional parameters

        Returns:
            The unmarshalled result

        Raises:
            RemoteFault: If the server answered with a fault
            TransportError: On HTTP or payload failures
        """
        if not self.skip_system_lookup and method not in self._signatures:
            self._signatures[method] = self._lookup_signature(method)

        logger.debug(f"Calling {method} on {self.url}")
        try:
            return getattr(self._proxy, method)(*params)
        except xmlrpc.client.Fault as e:
            raise RemoteFault(e.faultCode, e.faultString)

    def signature(self, method: str) -> Any:
        """Return the signature fetched for a method, if any."""
        return self._signatures.get(method)

    def _lookup_signature(self, method: str) -> Any:
        try:
            return self._proxy.system.methodSignature(method)
        except (xmlrpc.client.Fault, OdooError) as e:
            logger.debug(f"System lookup for {method} on {self.url} failed: {e}")
            return None

    @property
    def last_request(self) -> Optional[str]:
        """Raw XML of the last request sent through this handle."""
        data = self.transport.last_request
        return data.decode("utf-8", errors="replace") if data is not None else None

    @property
    def last_response(self) -> Optional[str]:
        """Raw XML of the last response received through this handle."""
        data = self.transport.last_response
        return data.decode("utf-8", errors="replace") if data is not None else None


class EndpointRouter:
    """
    Maps endpoint names to a single cached handle.

    Requesting the cached endpoint again reuses its handle; requesting another
    one replaces the cache entry. Replaced handles are not closed explicitly,
    their connections stay with the shared HTTP session.
    """

    def __init__(
        self,
        config: OdooConfig,
        http_session: Optional[requests.Session] = None,
    ):
        """
        Initialize the router.

        Args:
            config: Client configuration (host, timeout, TLS, retries)
            http_session: Optional custom HTTP session for all handles
        """
        self.config = config
        self._http_session = http_session
        self._owns_session = False
        self._path: Optional[str] = None
        self._handle: Optional[EndpointHandle] = None

    @property
    def http_session(self) -> requests.Session:
        """Get the custom HTTP session or lazily create the default one."""
        if self._http_session is None:
            self._http_session = build_session(self.config)
            self._owns_session = True
        return self._http_session

    @property
    def active_endpoint(self) -> Optional[str]:
        """Name of the cached endpoint, if any."""
        return self._path

    def set_http_session(self, session: requests.Session) -> None:
        """
        Use a custom HTTP session for handles built from now on.

        The cached handle keeps its current session.
        """
        self._http_session = session
        self._owns_session = False

    def get_handle(self, name: Optional[str] = None) -> EndpointHandle:
        """
        Get the handle for an endpoint.

        Args:
            name: Endpoint name. None returns the currently cached handle.

        Returns:
            The cached or newly built handle

        Raises:
            NoActiveEndpointError: If name is None and no endpoint was requested yet
        """
        if name is None or name == self._path:
            if self._handle is None:
                raise NoActiveEndpointError("No endpoint has been used yet")
            return self._handle

        url = f"{self.config.host}/{name}"
        logger.debug(f"Connecting endpoint {name}: {url}")

        handle = EndpointHandle(
            url,
            self.http_session,
            timeout=self.config.timeout,
            verify_ssl=self.config.verify_ssl,
        )
        # Odoo does not implement the system.* introspection methods and logs
        # an error for every lookup.
        handle.set_skip_system_lookup(True)

        self._path = name
        self._handle = handle
        return handle

    def close(self) -> None:
        """Close the HTTP session if the router created it."""
        if self._owns_session and self._http_session is not None:
            self._http_session.close()
            self._http_session = None
            self._owns_session = False
        self._path = None
        self._handle = None
