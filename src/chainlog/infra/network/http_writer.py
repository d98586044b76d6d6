from __future__ import annotations

"""
HTTP Collector Sink.

A write sink that forwards every rendered log line to a remote collector
as a JSON POST. Plug it into a logger with to_writer(). Delivery failures
are reported on the diagnostic channel and never raised into the caller.
"""

import logging
from typing import Any, Dict, Optional, Tuple

import requests

from chainlog.infra.network.common import DEFAULT_TIMEOUT, SUCCESS_CODES, USER_AGENT

logger = logging.getLogger(__name__)


class HttpWriter:
    """
    Posts one JSON document per log line.

    Attributes:
        url: Collector endpoint.
        fields: Static fields merged into every payload (eg: service name).
        timeout: Per-request timeout in seconds.
        sent: Number of lines accepted by the collector.
        failures: Number of lines that could not be delivered.
    """

    def __init__(
            self,
            url: str,
            fields: Optional[Dict[str, Any]] = None,
            *,
            timeout: float = DEFAULT_TIMEOUT,
            headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.url = url
        self.fields = dict(fields or {})
        self.timeout = timeout
        self.headers = {"User-Agent": USER_AGENT, **(headers or {})}
        self.sent = 0
        self.failures = 0

    def write(self, data: str) -> int:
        """
        Deliver one chunk of text, ignoring bare line terminators.

        Args:
            data: Rendered line, possibly with its trailing newline.

        Returns:
            int: Number of characters consumed.
        """
        line = data.rstrip("\r\n")
        if not line:
            return len(data)

        payload = dict(self.fields)
        payload["line"] = line
        ok, detail = _secure_post(self.url, payload, self.headers, self.timeout)
        if ok:
            self.sent += 1
        else:
            self.failures += 1
            logger.warning(f"HttpWriter: delivery to {self.url} failed: {detail}")
        return len(data)

    def flush(self) -> None:
        pass


def _secure_post(
        url: str,
        data: Dict[str, Any],
        headers: Dict[str, str],
        timeout: float,
) -> Tuple[bool, str]:
    """Execute a JSON POST request with robust exception handling."""
    try:
        response = requests.post(url, json=data, headers=headers, timeout=timeout)
        if response.status_code in SUCCESS_CODES:
            return True, "Success"
        return False, f"HTTP {response.status_code}"
    except requests.RequestException as e:
        return False, str(e)
