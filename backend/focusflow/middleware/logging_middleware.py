"""
ASGI middleware that logs every API request with its status and duration.

Written as plain ASGI (not BaseHTTPMiddleware) so file downloads and other
streamed responses pass through untouched. Bodies of failed responses are
logged, truncated, to show why a request was rejected.
"""

import json
import logging
import time
from typing import Optional
from urllib.parse import parse_qsl
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..core.logging_config import filter_sensitive_data, truncate_large_data

logger = logging.getLogger(__name__)


def _error_reason(body: bytes) -> Optional[str]:
    """Pull the detail/error message out of an error response body."""
    text = body.decode("utf-8", errors="ignore")
    if not text:
        return None
    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        return truncate_large_data(text, max_length=500)
    if isinstance(payload, dict):
        for key in ("detail", "error", "message"):
            if payload.get(key):
                return truncate_large_data(str(payload[key]), max_length=500)
    return truncate_large_data(json.dumps(filter_sensitive_data(payload), ensure_ascii=False), max_length=500)


class RequestLoggingMiddleware:
    """Logs method, path, status code and duration of each HTTP request."""

    def __init__(self, app: ASGIApp, exclude_paths: Optional[list] = None):
        """
        Args:
            app: The ASGI application
            exclude_paths: Paths that are never logged (e.g. health probes)
        """
        self.app = app
        self.exclude_paths = set(exclude_paths or ["/health"])

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope.get("path", "") in self.exclude_paths:
            await self.app(scope, receive, send)
            return

        start_time = time.time()
        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "")
        query = scope.get("query_string", b"").decode("utf-8", errors="ignore")
        query_params = filter_sensitive_data(dict(parse_qsl(query))) if query else None

        status_code = 0
        error_chunks = []

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 0)
            elif message["type"] == "http.response.body" and status_code >= 400:
                error_chunks.append(message.get("body", b""))
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"Request failed: {method} {path} - {str(e)}",
                exc_info=True,
                extra={"extra_fields": {
                    "method": method,
                    "path": path,
                    "duration_ms": round(duration_ms, 2),
                    "error": str(e),
                }}
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        reason = _error_reason(b"".join(error_chunks)) if error_chunks else None

        if status_code < 400:
            log_level = logging.INFO
        elif status_code < 500:
            log_level = logging.WARNING
        else:
            log_level = logging.ERROR

        message = f"{method} {path} - {status_code} ({duration_ms:.2f}ms)"
        if reason:
            message += f" | {reason}"

        logger.log(
            log_level,
            message,
            extra={"extra_fields": {
                "method": method,
                "path": path,
                "query_params": query_params,
                "status_code": status_code,
                "duration_ms": round(duration_ms, 2),
                "error_reason": reason,
            }}
        )
