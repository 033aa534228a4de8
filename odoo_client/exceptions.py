"""
Exceptions for the Odoo client.

Only hard failures are raised: transport faults, remote faults, malformed
report payloads and missing endpoints. Wrongly-shaped but well-formed answers
to CRUD and metadata calls are narrowed to safe defaults instead.
"""

from typing import Any, Optional


class OdooError(Exception):
    """Base exception for all Odoo client errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class TransportError(OdooError):
    """The HTTP exchange failed or returned an unusable payload."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Any] = None,
        details: Optional[str] = None,
    ):
        self.status_code = status_code
        self.response_data = response_data
        super().__init__(message, details=details)


class ConnectionFailedError(TransportError):
    """The server could not be reached or did not answer in time."""
    pass


class RemoteFault(OdooError):
    """The server answered with an XML-RPC fault."""

    def __init__(self, fault_code: Any, fault_string: str):
        self.fault_code = fault_code
        self.fault_string = fault_string
        super().__init__(
            f"Remote fault {fault_code}: {fault_string}",
            details=fault_string,
        )


class NoActiveEndpointError(OdooError):
    """No endpoint has been requested yet."""
    pass


class ReportResponseError(OdooError, LookupError):
    """A report status answer is missing its state or result."""
    pass


class ReportTimeoutError(OdooError, TimeoutError):
    """The report was still pending after the last allowed poll."""

    def __init__(self, message: str, report_id: Any = None, attempts: int = 0):
        self.report_id = report_id
        self.attempts = attempts
        super().__init__(message)


class ValidationError(OdooError, ValueError):
    """Invalid arguments supplied by the caller."""
    pass


class ConfigurationError(OdooError):
    """Required connection settings are missing or invalid."""
    pass
