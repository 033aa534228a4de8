"""
Objects API - CRUD operations on business models.
"""

from typing import Any, Dict, List, Optional

from ._narrow import ResponseKind, narrow
from .session import Session


class ObjectsAPI:
    """
    API for the ``object`` endpoint.

    Every verb is dispatched through ``execute`` with the session credentials
    prepended. Results of the wrong shape are replaced by the verb's default
    (empty list, None or False) instead of raising.
    """

    ENDPOINT = "object"

    def __init__(self, session: Session):
        """
        Initialize Objects API.

        Args:
            session: Session providing credentials and the endpoint router
        """
        self._session = session

    def execute(self, model: str, method: str, *args: Any) -> Any:
        """
        Call a model method and return the raw result.

        Args:
            model: Model name, e.g. ``res.partner``
            method: Model method name
            *args: Method arguments
        """
        # Credentials first: the login call may switch the active endpoint
        params = self._session.build_params(model, method, *args)
        return self._session.router.get_handle(self.ENDPOINT).call("execute", params)

    def search(
        self,
        model: str,
        criteria: List[Any],
        offset: int = 0,
        limit: int = 100,
    ) -> List[int]:
        """
        Search record ids.

        Args:
            model: Model name
            criteria: Search domain, e.g. ``[["is_company", "=", True]]``
            offset: Number of records to skip
            limit: Maximum number of ids

        Returns:
            Matching ids
        """
        response = self.execute(model, "search", criteria, offset, limit)
        return narrow(response, ResponseKind.SEQUENCE, [], "search")

    def create(self, model: str, fields: Dict[str, Any]) -> Optional[int]:
        """
        Create a record.

        Args:
            model: Model name
            fields: Field values (format: {"field": value})

        Returns:
            New record id or None
        """
        response = self.execute(model, "create", fields)
        return narrow(response, ResponseKind.INTEGER, None, "create")

    def read(
        self,
        model: str,
        ids: List[int],
        fields: Optional[List[str]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Read records.

        Args:
            model: Model name
            ids: Record ids
            fields: Fields to fetch, empty or None fetches all fields

        Returns:
            Records
        """
        response = self.execute(model, "read", ids, fields or [])
        return narrow(response, ResponseKind.SEQUENCE, [], "read")

    def search_read(
        self,
        model: str,
        criteria: Optional[List[Any]] = None,
        fields: Optional[List[str]] = None,
        offset: int = 0,
        limit: int = 100,
    ) -> List[Dict[str, Any]]:
        """
        Search and read records in one call.

        Args:
            model: Model name
            criteria: Search domain, None matches all records
            fields: Fields to fetch, empty or None fetches all fields
            offset: Number of records to skip
            limit: Maximum number of records

        Returns:
            Records
        """
        response = self.execute(
            model, "search_read", criteria or [], fields or [], offset, limit
        )
        return narrow(response, ResponseKind.SEQUENCE, [], "search_read")

    def write(self, model: str, ids: List[int], fields: Dict[str, Any]) -> List[Any]:
        """
        Update records.

        Args:
            model: Model name
            ids: Record ids
            fields: Field values (format: {"field": value})

        Returns:
            The server answer if it is a sequence, otherwise an empty list
        """
        response = self.execute(model, "write", ids, fields)
        return narrow(response, ResponseKind.SEQUENCE, [], "write")

    def unlink(self, model: str, ids: List[int]) -> bool:
        """
        Delete records.

        Args:
            model: Model name
            ids: Record ids

        Returns:
            True if the server reported success
        """
        response = self.execute(model, "unlink", ids)
        return narrow(response, ResponseKind.BOOLEAN, False, "unlink")
