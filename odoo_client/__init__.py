"""
Odoo Client - XML-RPC client for the Odoo (formerly OpenERP) external API.

Provides CRUD access to business models, metadata queries and report
generation while hiding login and endpoint bookkeeping.
"""

__version__ = "1.0.0"

from .config import OdooConfig, get_config
from .exceptions import (
    OdooError,
    TransportError,
    ConnectionFailedError,
    RemoteFault,
    NoActiveEndpointError,
    ReportResponseError,
    ReportTimeoutError,
    ValidationError,
    ConfigurationError,
)
from .api import OdooClient, PollPolicy, get_client

__all__ = [
    "__version__",
    "OdooClient",
    "OdooConfig",
    "PollPolicy",
    "get_client",
    "get_config",
    # Exceptions
    "OdooError",
    "TransportError",
    "ConnectionFailedError",
    "RemoteFault",
    "NoActiveEndpointError",
    "ReportResponseError",
    "ReportTimeoutError",
    "ValidationError",
    "ConfigurationError",
]
