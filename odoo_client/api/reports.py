"""
Reports API - Asynchronous report generation.

A report is rendered in two phases: ``report`` submits the job and returns
its id, then ``report_get`` is polled until the job state turns truthy and
the base64 encoded document can be decoded.
"""

import base64
import binascii
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..exceptions import ReportResponseError, ReportTimeoutError, ValidationError
from .session import Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PollPolicy:
    """
    How often and how long a pending report is polled.

    Attributes:
        interval: Seconds to sleep between two polls
        max_attempts: Maximum number of polls, None polls until the report is ready
    """

    interval: float = 1.0
    max_attempts: Optional[int] = None

    def __post_init__(self) -> None:
        if self.interval < 0:
            raise ValidationError(f"Poll interval must not be negative: {self.interval}")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValidationError(f"max_attempts must be at least 1: {self.max_attempts}")

    def allows(self, attempt: int) -> bool:
        """Check whether another poll may follow the given attempt number."""
        return self.max_attempts is None or attempt < self.max_attempts


class ReportsAPI:
    """
    API for the ``report`` endpoint.

    Handles:
    - Submitting a report job for a single record
    - Polling the job until it is ready
    - Decoding the rendered document
    """

    ENDPOINT = "report"
    DEFAULT_TYPE = "qweb-pdf"

    def __init__(self, session: Session, policy: Optional[PollPolicy] = None):
        """
        Initialize Reports API.

        Args:
            session: Session providing credentials and the endpoint router
            policy: Default polling policy (unbounded, one second interval)
        """
        self._session = session
        self.policy = policy or PollPolicy()

    def get_report(
        self,
        model: str,
        ids: List[int],
        report_type: str = DEFAULT_TYPE,
        policy: Optional[PollPolicy] = None,
    ) -> bytes:
        """
        Render a report and return the document.

        Only the first id is rendered; one document is produced per call.

        Args:
            model: Model name (also used as report name)
            ids: Record ids, typically a single one
            report_type: Report type, e.g. ``qweb-pdf`` or ``qweb-html``
            policy: Polling policy overriding the default one

        Returns:
            Raw document bytes

        Raises:
            ValidationError: If ids is empty
            ReportResponseError: If a status answer lacks state or result
            ReportTimeoutError: If the policy's attempts ran out
        """
        if not ids:
            raise ValidationError("At least one record id is required to render a report")

        policy = policy or self.policy

        params = self._session.build_params(model, ids, {
            "model": model,
            "id": ids[0],
            "report_type": report_type,
        })
        client = self._session.router.get_handle(self.ENDPOINT)

        report_id = client.call("report", params)
        logger.debug(f"Submitted report {model} for id {ids[0]} ({report_type}): {report_id!r}")

        attempt = 0
        while True:
            attempt += 1
            report = client.call("report_get", self._session.build_params(report_id))

            if self._state(report, report_id):
                return self._decode(report, report_id)

            if not policy.allows(attempt):
                raise ReportTimeoutError(
                    f"Report {report_id!r} still pending after {attempt} attempts",
                    report_id=report_id,
                    attempts=attempt,
                )

            logger.debug(f"Report {report_id!r} pending (attempt {attempt})")
            time.sleep(policy.interval)

    @staticmethod
    def _state(report: Any, report_id: Any) -> Any:
        if not isinstance(report, dict) or "state" not in report:
            raise ReportResponseError(
                f"Malformed status for report {report_id!r}: no state",
                details=repr(report),
            )
        return report["state"]

    @staticmethod
    def _decode(report: Dict[str, Any], report_id: Any) -> bytes:
        result = report.get("result")
        if not isinstance(result, str):
            raise ReportResponseError(
                f"Malformed status for report {report_id!r}: no result",
                details=repr(report),
            )
        try:
            return base64.b64decode(result)
        except binascii.Error as e:
            raise ReportResponseError(
                f"Report {report_id!r} result is not valid base64: {e}"
            )
