"""
Request Body Limit Module

This module caps the size of JSON and URL-encoded request bodies before
they reach route handlers.

Features:
- Content-Length precheck
- Chunked body counting
- Body replay for handlers
- 413 responses

Security:
- Payload size limits
- No silent truncation
"""

import logging
from typing import Iterable

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

LIMITED_CONTENT_TYPES = (
    "application/json",
    "application/x-www-form-urlencoded",
)


def media_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


class BodySizeLimitMiddleware:
    """
    ASGI middleware rejecting oversized JSON and form bodies with 413.

    The whole body is buffered (it is at most ``max_body_size`` bytes) and
    replayed to the application, so handlers read it as usual.
    """

    def __init__(
        self,
        app: ASGIApp,
        max_body_size: int,
        content_types: Iterable[str] = LIMITED_CONTENT_TYPES,
    ):
        self.app = app
        self.max_body_size = max_body_size
        self.content_types = tuple(content_types)

    def applies_to(self, headers: Headers) -> bool:
        content_type = headers.get("content-type")
        if not content_type:
            return False
        kind = media_type(content_type)
        return kind in self.content_types or (
            "application/json" in self.content_types and kind.endswith("+json")
        )

    async def reject(self, scope: Scope, receive: Receive, send: Send):
        response = JSONResponse(status_code=413, content={"detail": "Request entity too large"})
        await response(scope, receive, send)

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        if not self.applies_to(headers):
            await self.app(scope, receive, send)
            return

        content_length = headers.get("content-length")
        if content_length is not None and content_length.isdigit():
            if int(content_length) > self.max_body_size:
                logger.warning(
                    f"Rejected {scope['method']} {scope['path']}: "
                    f"declared body of {content_length} bytes exceeds {self.max_body_size}"
                )
                await self.reject(scope, receive, send)
                return

        chunks = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            chunk = message.get("body", b"")
            received += len(chunk)
            if received > self.max_body_size:
                logger.warning(
                    f"Rejected {scope['method']} {scope['path']}: "
                    f"body exceeds {self.max_body_size} bytes"
                )
                await self.reject(scope, receive, send)
                return
            chunks.append(chunk)
            more_body = message.get("more_body", False)

        body = b"".join(chunks)
        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)
