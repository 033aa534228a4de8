"""
Session state for the Odoo client.

Holds the cached user id and prepends credentials to every authenticated
call. Login is attempted once per session; a failed login is not retried
and later calls send a null uid for the server to reject.
"""

import logging
from typing import Any, List, Optional

from ..config import OdooConfig
from ._narrow import ResponseKind, narrow
from .common import CommonAPI
from .endpoints import EndpointRouter

logger = logging.getLogger(__name__)


class Session:
    """Cached login state bound to one router."""

    def __init__(self, config: OdooConfig, router: EndpointRouter):
        """
        Initialize the session.

        Args:
            config: Connection profile
            router: Endpoint router used for the login call
        """
        self.config = config
        self.router = router
        self._common = CommonAPI(config, router)
        self._uid: Optional[int] = None
        self._login_attempted = False

    @property
    def login_attempted(self) -> bool:
        """Whether a login call has completed, successful or not."""
        return self._login_attempted

    def uid(self) -> Optional[int]:
        """Get the user id, logging in on first use."""
        if not self._login_attempted:
            # A login that raised is tried again on the next call
            response = self._common.login()
            self._login_attempted = True
            self._uid = narrow(response, ResponseKind.INTEGER, None, "login")

            if self._uid is None:
                logger.warning(
                    f"Login as {self.config.user!r} on database "
                    f"{self.config.database!r} did not return a user id"
                )
            else:
                logger.debug(f"Logged in as {self.config.user!r} (uid={self._uid})")

        return self._uid

    def build_params(self, *args: Any) -> List[Any]:
        """Prepend database, uid and password to call arguments."""
        return [self.config.database, self.uid(), self.config.password, *args]
