"""
HTTP layer for the Odoo XML-RPC client.

Carries marshalled XML-RPC bodies over a ``requests`` session so that
connection pooling, TLS settings and timeouts are configurable, and keeps
the raw payloads of the last exchange for diagnostics.
"""

import logging
import xmlrpc.client
from typing import Any, Optional, Tuple
from xml.parsers.expat import ExpatError

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .. import __version__
from ..config import OdooConfig
from ..exceptions import ConnectionFailedError, TransportError

logger = logging.getLogger(__name__)


def build_session(config: OdooConfig) -> requests.Session:
    """
    Create the default HTTP session.

    Retries only cover establishing the connection: a request that reached
    the server is never sent twice.
    """
    session = requests.Session()

    retry_strategy = Retry(
        total=config.max_retries,
        connect=config.max_retries,
        read=0,
        status=0,
        other=0,
        backoff_factor=0.5,
    )
    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update({
        "User-Agent": f"odoo-client/{__version__}",
        "Accept": "text/xml",
    })

    return session


class RequestsTransport(xmlrpc.client.Transport):
    """
    XML-RPC transport posting through a ``requests`` session.

    Handles:
    - Posting the request body with configured timeout and TLS verification
    - Mapping ``requests`` failures to client exceptions
    - Recording the last request and response payloads
    """

    def __init__(
        self,
        session: requests.Session,
        scheme: str = "http",
        timeout: Optional[float] = None,
        verify_ssl: bool = True,
    ):
        """
        Initialize the transport.

        Args:
            session: HTTP session to post with
            scheme: URL scheme of the endpoint (http or https)
            timeout: Request timeout in seconds
            verify_ssl: Verify TLS certificates
        """
        super().__init__()
        self.session = session
        self.scheme = scheme
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.last_request: Optional[bytes] = None
        self.last_response: Optional[bytes] = None

    def request(
        self,
        host: str,
        handler: str,
        request_body: bytes,
        verbose: bool = False,
    ) -> Tuple[Any, ...]:
        """Post one marshalled call and return the unmarshalled params."""
        url = f"{self.scheme}://{host}{handler}"

        self.last_request = request_body
        self.last_response = None

        logger.debug(f"XML-RPC request: POST {url}")
        if verbose:
            logger.debug(request_body.decode("utf-8", errors="replace"))

        try:
            response = self.session.post(
                url,
                data=request_body,
                headers={"Content-Type": "text/xml"},
                timeout=self.timeout,
                verify=self.verify_ssl,
            )
        except requests.exceptions.ConnectionError as e:
            raise ConnectionFailedError(f"Connection failed: {e}")
        except requests.exceptions.Timeout as e:
            raise ConnectionFailedError(f"Request timed out: {e}")
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {e}")

        self.last_response = response.content
        logger.debug(f"XML-RPC response: {response.status_code} ({len(response.content)} bytes)")

        if response.status_code != 200:
            raise TransportError(
                f"XML-RPC request failed: HTTP {response.status_code} {response.reason}",
                status_code=response.status_code,
                response_data=response.text,
            )

        return self.parse_body(response.content)

    def parse_body(self, body: bytes) -> Tuple[Any, ...]:
        """
        Unmarshal a method response.

        Raises:
            xmlrpc.client.Fault: If the server answered with a fault
            TransportError: If the payload is not a valid method response
        """
        parser, unmarshaller = self.getparser()
        try:
            parser.feed(body)
            parser.close()
            return unmarshaller.close()
        except (ExpatError, xmlrpc.client.ResponseError) as e:
            raise TransportError(
                f"Malformed XML-RPC response: {e}",
                response_data=body.decode("utf-8", errors="replace"),
            )
