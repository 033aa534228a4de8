"""
Common API - Server metadata and authentication.
"""

from typing import Any, Dict, Optional

from ._narrow import ResponseKind, narrow
from .endpoints import EndpointRouter
from ..config import OdooConfig


class CommonAPI:
    """
    API for the ``common`` endpoint.

    Handles:
    - Server version information
    - User timezone
    - Login
    """

    ENDPOINT = "common"

    def __init__(self, config: OdooConfig, router: EndpointRouter):
        self.config = config
        self._router = router

    def version(self) -> Dict[str, Any]:
        """
        Get server version information.

        Returns:
            Version mapping, empty if the server answered something else
        """
        response = self._router.get_handle(self.ENDPOINT).call("version")
        return narrow(response, ResponseKind.MAPPING, {}, "version")

    def timezone(self) -> Optional[str]:
        """
        Get the timezone of the configured user.

        Authenticates with the raw login name rather than the user id.

        Returns:
            Timezone name or None
        """
        params = [
            self.config.database,
            self.config.user,
            self.config.password,
        ]
        response = self._router.get_handle(self.ENDPOINT).call("timezone_get", params)
        return narrow(response, ResponseKind.STRING, None, "timezone_get")

    def login(self) -> Any:
        """Log in and return the raw server answer."""
        return self._router.get_handle(self.ENDPOINT).call("login", [
            self.config.database,
            self.config.user,
            self.config.password,
        ])
