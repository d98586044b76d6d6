from __future__ import annotations

"""
Integration tests for the HTTP Collector Sink.

Utilizes mocking to verify JSON delivery and failure handling without
making real network calls.
"""

from unittest.mock import MagicMock, patch

import requests

from chainlog.core.logger import Logger
from chainlog.infra.network import HttpWriter


def test_write_posts_json_line() -> None:
    """TC-01: Each line becomes one JSON POST carrying the static fields."""
    mock_response = MagicMock()
    mock_response.status_code = 200

    with patch("requests.post", return_value=mock_response) as mock_post:
        writer = HttpWriter("https://collector.local/ingest", {"service": "billing"})
        consumed = writer.write("charged 3 EUR\n")

        assert consumed == len("charged 3 EUR\n")
        args, kwargs = mock_post.call_args
        assert args[0] == "https://collector.local/ingest"
        assert kwargs["json"] == {"service": "billing", "line": "charged 3 EUR"}
        assert "User-Agent" in kwargs["headers"]
        assert writer.sent == 1
        assert writer.failures == 0


def test_blank_chunks_are_not_posted() -> None:
    with patch("requests.post") as mock_post:
        HttpWriter("https://collector.local/ingest").write("\n")

        mock_post.assert_not_called()


def test_network_failure_is_counted_not_raised() -> None:
    """TC-02: Connection errors never reach the caller."""
    with patch("requests.post", side_effect=requests.ConnectionError("down")):
        writer = HttpWriter("https://collector.local/ingest")
        writer.write("lost line")

        assert writer.sent == 0
        assert writer.failures == 1


def test_http_error_status_is_a_failure() -> None:
    mock_response = MagicMock()
    mock_response.status_code = 503

    with patch("requests.post", return_value=mock_response):
        writer = HttpWriter("https://collector.local/ingest")
        writer.write("rejected")

        assert writer.failures == 1


def test_logger_routes_lines_to_http_writer(root: Logger) -> None:
    """TC-03: A chained logger delivers rendered lines to the collector."""
    mock_response = MagicMock()
    mock_response.status_code = 201

    with patch("requests.post", return_value=mock_response) as mock_post:
        writer = HttpWriter("https://collector.local/ingest")
        root.to_writer(writer).with_header(False).with_context({"rid": "r7"}, "rid").info("paid")

        assert mock_post.call_count == 1
        assert mock_post.call_args.kwargs["json"] == {"line": "{r7} paid"}
