from __future__ import annotations

"""
Network Sink Infrastructure.

Write sinks that ship log lines to remote collectors over HTTP.
"""

from chainlog.infra.network.http_writer import HttpWriter

__all__ = [
    "HttpWriter",
]
