"""Correlation ID middleware.

Forwards the caller's X-Correlation-ID, or reuses the request id when the
caller sent none. Must sit inside RequestIDMiddleware. Raw ASGI.
"""

import uuid
from typing import Callable

from useraccounts.middleware._headers import append_header, get_header
from useraccounts.middleware.request_id import sanitize_request_id


def CorrelationIDMiddleware(
    app: Callable, header_name: str = "X-Correlation-ID"
) -> Callable:
    """Add or forward the correlation id header."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        raw = get_header(scope, header_name)
        if raw:
            correlation_id = sanitize_request_id(raw)
        else:
            correlation_id = scope.get("state", {}).get("request_id") or str(uuid.uuid4())
        scope.setdefault("state", {})["correlation_id"] = correlation_id

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                append_header(message, header_name, correlation_id)
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
