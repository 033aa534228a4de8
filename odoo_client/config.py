"""
Configuration for the Odoo client.

A configuration bundles the immutable connection profile (host, database,
user, password) with transport and report polling options. It can be built
directly or loaded from ``ODOO_*`` environment variables.
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Optional, Dict, Any

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "ODOO_"

DEFAULT_TIMEOUT = 30
DEFAULT_POLL_INTERVAL = 1.0


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_optional_int(value: str) -> Optional[int]:
    value = value.strip()
    if not value or value.lower() == "none":
        return None
    return int(value)


@dataclass(frozen=True)
class OdooConfig:
    """
    Connection profile and client options.

    Attributes:
        host: XML-RPC base URL, e.g. ``http://localhost:8069/xmlrpc/2``
        database: Database to log into
        user: Login name
        password: Password (or API key) of the user
        timeout: HTTP timeout in seconds
        verify_ssl: Verify TLS certificates
        max_retries: Connection-establishment retries (0 disables them)
        report_poll_interval: Seconds to wait between report status polls
        report_max_attempts: Maximum report status polls, None for unbounded
    """

    host: str = ""
    database: str = ""
    user: str = ""
    password: str = ""
    timeout: float = DEFAULT_TIMEOUT
    verify_ssl: bool = True
    max_retries: int = 0
    report_poll_interval: float = DEFAULT_POLL_INTERVAL
    report_max_attempts: Optional[int] = None

    def __post_init__(self) -> None:
        # Endpoint URLs are built as host + "/" + name
        object.__setattr__(self, "host", self.host.rstrip("/"))

    def __repr__(self) -> str:
        return (
            f"OdooConfig(host={self.host!r}, database={self.database!r}, "
            f"user={self.user!r}, password='***')"
        )

    def is_configured(self) -> bool:
        """Check whether the connection profile is complete."""
        return bool(self.host and self.database and self.user and self.password)

    def require_configured(self) -> "OdooConfig":
        """Return self, raising ConfigurationError if the profile is incomplete."""
        missing = [
            name for name in ("host", "database", "user", "password")
            if not getattr(self, name)
        ]
        if missing:
            raise ConfigurationError(
                "Incomplete Odoo configuration, missing: " + ", ".join(missing),
                details=f"Set {', '.join(ENV_PREFIX + m.upper() for m in missing)}",
            )
        return self

    def poll_policy(self):
        """Build the report polling policy from this configuration."""
        from .api.reports import PollPolicy

        return PollPolicy(
            interval=self.report_poll_interval,
            max_attempts=self.report_max_attempts,
        )

    def update(self, **changes: Any) -> "OdooConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "OdooConfig":
        """
        Load configuration from ``ODOO_*`` environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            Configuration; unset variables keep their defaults.

        Raises:
            ConfigurationError: If a numeric or boolean variable cannot be parsed
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            return env.get(ENV_PREFIX + name)

        kwargs: Dict[str, Any] = {}
        for field_name in ("host", "database", "user", "password"):
            value = get(field_name.upper())
            if value is not None:
                kwargs[field_name] = value

        converters = {
            "timeout": float,
            "verify_ssl": _parse_bool,
            "max_retries": int,
            "report_poll_interval": float,
            "report_max_attempts": _parse_optional_int,
        }
        for field_name, convert in converters.items():
            value = get(field_name.upper())
            if value is None:
                continue
            try:
                kwargs[field_name] = convert(value)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid value for {ENV_PREFIX}{field_name.upper()}: {value!r}",
                    details=str(e),
                )

        config = cls(**kwargs)
        logger.debug(f"Loaded configuration from environment: {config!r}")
        return config


_config: Optional[OdooConfig] = None


def get_config() -> OdooConfig:
    """Get the process-wide configuration, loading it from the environment once."""
    global _config
    if _config is None:
        _config = OdooConfig.from_env()
    return _config


def reset_config() -> None:
    """Forget the cached process-wide configuration."""
    global _config
    _config = None
