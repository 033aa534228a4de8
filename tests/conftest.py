"""
Test fixtures: a stub Odoo XML-RPC server and mocked collaborators.
"""

import xmlrpc.client
from typing import Any, Callable, Dict, List, Tuple
from unittest.mock import MagicMock

import pytest
import responses

from odoo_client import OdooClient, OdooConfig

HOST = "http://odoo.test/xmlrpc/2"
DATABASE = "demo"
USER = "admin"
PASSWORD = "secret"
UID = 2


class StubOdooServer:
    """
    In-memory Odoo answering XML-RPC calls through ``responses`` callbacks.

    Keeps a tiny record store per model so CRUD calls behave like the real
    server. Handlers can be overridden per (endpoint, method).
    """

    ENDPOINTS = ("common", "object", "report")

    def __init__(self, rsps: responses.RequestsMock):
        self.calls: List[Tuple[str, str, Tuple[Any, ...]]] = []
        self.records: Dict[str, Dict[int, Dict[str, Any]]] = {}
        self._next_id = 1
        self.handlers: Dict[Tuple[str, str], Callable[..., Any]] = {
            ("common", "login"): lambda db, user, password: UID,
            ("common", "version"): lambda: {"server_version": "16.0", "protocol_version": 1},
            ("common", "timezone_get"): lambda db, user, password: "Europe/Brussels",
            ("object", "execute"): self._execute,
        }
        for endpoint in self.ENDPOINTS:
            rsps.add_callback(
                responses.POST,
                f"{HOST}/{endpoint}",
                callback=self._callback(endpoint),
                content_type="text/xml",
            )

    def on(self, endpoint: str, method: str, handler: Callable[..., Any]) -> None:
        self.handlers[(endpoint, method)] = handler

    def calls_to(self, endpoint: str, method: str) -> List[Tuple[Any, ...]]:
        return [params for e, m, params in self.calls if (e, m) == (endpoint, method)]

    def _callback(self, endpoint: str):
        def callback(request):
            params, method = xmlrpc.client.loads(request.body)
            self.calls.append((endpoint, method, params))
            handler = self.handlers.get((endpoint, method))
            if handler is None:
                fault = xmlrpc.client.Fault(1, f"Method not found: {method}")
                return (200, {}, xmlrpc.client.dumps(fault, methodresponse=True))
            try:
                result = handler(*params)
            except xmlrpc.client.Fault as fault:
                return (200, {}, xmlrpc.client.dumps(fault, methodresponse=True))
            body = xmlrpc.client.dumps((result,), methodresponse=True, allow_none=True)
            return (200, {}, body)
        return callback

    def _execute(self, db, uid, password, model, method, *args):
        if uid != UID:
            raise xmlrpc.client.Fault(3, "Access Denied")
        table = self.records.setdefault(model, {})

        if method == "create":
            record_id = self._next_id
            self._next_id += 1
            table[record_id] = dict(args[0])
            return record_id
        if method == "search":
            return sorted(table)
        if method == "read":
            ids, fields = args
            return [self._project(record_id, table[record_id], fields) for record_id in ids]
        if method == "search_read":
            _domain, fields, offset, limit = args
            ids = sorted(table)[offset:offset + limit]
            return [self._project(record_id, table[record_id], fields) for record_id in ids]
        if method == "write":
            ids, values = args
            for record_id in ids:
                table[record_id].update(values)
            return True
        if method == "unlink":
            for record_id in args[0]:
                table.pop(record_id, None)
            return True
        raise xmlrpc.client.Fault(2, f"Unknown method {method}")

    @staticmethod
    def _project(record_id: int, record: Dict[str, Any], fields: List[str]) -> Dict[str, Any]:
        values = {"id": record_id}
        values.update({k: v for k, v in record.items() if not fields or k in fields})
        return values


@pytest.fixture
def config():
    """Create a test configuration."""
    return OdooConfig(host=HOST, database=DATABASE, user=USER, password=PASSWORD)


@pytest.fixture
def stub_server():
    """Start a stub Odoo server on the test host."""
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield StubOdooServer(rsps)


@pytest.fixture
def client(config, stub_server):
    """Create a client talking to the stub server."""
    with OdooClient(config) as odoo:
        yield odoo


@pytest.fixture
def handles():
    """Mocked endpoint handles keyed by endpoint name."""
    return {
        "common": MagicMock(name="common"),
        "object": MagicMock(name="object"),
        "report": MagicMock(name="report"),
    }


@pytest.fixture
def mock_router(handles):
    """Router returning the mocked handle of each endpoint."""
    router = MagicMock()
    router.get_handle.side_effect = lambda name=None: handles[name]
    handles["common"].call.side_effect = (
        lambda method, params=(): UID if method == "login" else None
    )
    return router
