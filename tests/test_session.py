"""
Tests for session state and credential prepending.
"""

import pytest

from odoo_client.api.session import Session
from odoo_client.exceptions import ConnectionFailedError


class TestSession:
    """Tests for Session."""

    def test_uid_logs_in_once(self, config, mock_router, handles):
        """Test two uid lookups trigger exactly one login."""
        session = Session(config, mock_router)

        assert session.uid() == 2
        assert session.uid() == 2

        handles["common"].call.assert_called_once_with(
            "login", ["demo", "admin", "secret"]
        )
        mock_router.get_handle.assert_called_once_with("common")

    def test_failed_login_not_retried(self, config, mock_router, handles):
        """Test a non-integer login answer leaves uid None for good."""
        handles["common"].call.side_effect = None
        handles["common"].call.return_value = False
        session = Session(config, mock_router)

        assert session.uid() is None
        assert session.uid() is None
        assert session.login_attempted is True
        handles["common"].call.assert_called_once()

    def test_boolean_login_is_not_uid(self, config, mock_router, handles):
        """Test True is not accepted as a user id."""
        handles["common"].call.side_effect = None
        handles["common"].call.return_value = True

        assert Session(config, mock_router).uid() is None

    def test_build_params(self, config, mock_router):
        """Test credentials are prepended in order."""
        session = Session(config, mock_router)

        params = session.build_params("res.partner", "search", [], 0, 100)

        assert params == ["demo", 2, "secret", "res.partner", "search", [], 0, 100]

    def test_build_params_with_null_uid(self, config, mock_router, handles):
        """Test a failed login sends a null credential."""
        handles["common"].call.side_effect = None
        handles["common"].call.return_value = "denied"
        session = Session(config, mock_router)

        assert session.build_params("x") == ["demo", None, "secret", "x"]

    def test_build_params_rebuilt_each_call(self, config, mock_router):
        """Test each call gets a fresh list."""
        session = Session(config, mock_router)
        first = session.build_params()
        first.append("mutated")

        assert session.build_params() == ["demo", 2, "secret"]

    def test_login_retried_after_transport_failure(self, config, mock_router, handles):
        """Test a login that raised is attempted again on the next call."""
        handles["common"].call.side_effect = [ConnectionFailedError("Connection failed"), 2]
        session = Session(config, mock_router)

        with pytest.raises(ConnectionFailedError):
            session.uid()
        assert session.login_attempted is False

        assert session.uid() == 2
        assert session.uid() == 2
        assert handles["common"].call.call_count == 2
