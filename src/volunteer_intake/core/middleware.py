"""
Request Size Middleware

Rejects requests whose body exceeds the configured limit before they reach
a route handler or the multipart parser. The declared Content-Length is
checked first; bodies without one (chunked uploads) are counted as they
are read.
"""

import logging

from fastapi import status
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class RequestBodyTooLarge(Exception):
    """Raised from ``receive`` once the streamed body passes the limit."""


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "error", "message": message})


class BodySizeLimitMiddleware:
    """Answer 413 when the request body is above ``max_bytes``."""

    def __init__(self, app: ASGIApp, max_bytes: int):
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None:
            try:
                declared = int(content_length)
            except ValueError:
                response = _error_response(
                    status.HTTP_400_BAD_REQUEST, "Invalid Content-Length header."
                )
                await response(scope, receive, send)
                return
            if declared > self.max_bytes:
                self._log_rejection(scope, declared)
                await self._too_large(scope, receive, send)
                return

        received = 0
        exceeded = False
        response_started = False

        async def limited_receive() -> Message:
            nonlocal received, exceeded
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    exceeded = True
                    raise RequestBodyTooLarge()
            return message

        async def guarded_send(message: Message) -> None:
            nonlocal response_started
            # Whatever the app answers after the limit trips is replaced by a 413
            if exceeded and not response_started:
                return
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, guarded_send)
        except RequestBodyTooLarge:
            if response_started:
                raise

        if exceeded and not response_started:
            self._log_rejection(scope, received)
            await self._too_large(scope, receive, send)

    def _log_rejection(self, scope: Scope, size: int) -> None:
        logger.warning(
            f"Rejected {scope['method']} {scope['path']}: body of {size} bytes "
            f"exceeds {self.max_bytes}"
        )

    async def _too_large(self, scope: Scope, receive: Receive, send: Send) -> None:
        response = _error_response(
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, "Request body too large."
        )
        await response(scope, receive, send)
