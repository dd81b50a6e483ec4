"""Request ID middleware for per-request tracking.

This middleware:
1. Takes the request ID from the X-Request-ID header, or generates a UUID
2. Stores it in ``request.state.request_id``
3. Adds it to the logging context for the duration of the request
4. Echoes it in the X-Request-ID response header
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from starlette.datastructures import MutableHeaders

from catalog_service.infra.logging.context import clear_log_context, set_log_context

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

REQUEST_ID_HEADER = "x-request-id"


def generate_request_id() -> str:
    return str(uuid.uuid4())


class RequestIDMiddleware:
    """Pure ASGI middleware attaching a request ID to every HTTP request.

    Usage:
        app = FastAPI()
        app.add_middleware(RequestIDMiddleware)
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = self._extract(scope) or generate_request_id()
        scope.setdefault("state", {})["request_id"] = request_id
        set_log_context(request_id=request_id)

        async def send_with_header(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message).append(REQUEST_ID_HEADER, request_id)
            await send(message)

        try:
            await self.app(scope, receive, send_with_header)
        finally:
            clear_log_context()

    @staticmethod
    def _extract(scope: Scope) -> str | None:
        for name, value in scope.get("headers", []):
            if name == REQUEST_ID_HEADER.encode("latin-1") and value:
                return value.decode("latin-1")
        return None
