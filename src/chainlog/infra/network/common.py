from __future__ import annotations

USER_AGENT = "chainlog-http-writer/1.0.0"
DEFAULT_TIMEOUT = 10
SUCCESS_CODES = (200, 201, 202, 204)
