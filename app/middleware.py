# =============================================================================
# app/middleware.py - Security Headers Middleware
# =============================================================================
# Pure ASGI middleware installed as the outermost layer of the app, so every
# response (success, handled error, or unhandled crash) leaves with the same
# protective headers.
#
# Usage:
#   app.add_middleware(SecurityHeadersMiddleware)
# =============================================================================

import logging

from starlette.datastructures import MutableHeaders
from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "Content-Security-Policy": "default-src 'self'",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
}


def apply_security_headers(headers: MutableHeaders) -> MutableHeaders:
    """Set every security header, replacing any value already present."""
    for name, value in SECURITY_HEADERS.items():
        headers[name] = value
    return headers


class SecurityHeadersMiddleware:
    """
    Attach SECURITY_HEADERS to every HTTP response.

    Exceptions escaping the app are logged and answered with a plain-text
    500 here, because Starlette's own error response is produced outside
    of user middleware and would miss the headers.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        logger.info(f"Incoming request: {scope['method']} {scope['path']}")
        response_started = False

        async def send_with_headers(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
                apply_security_headers(MutableHeaders(scope=message))
            await send(message)

        try:
            await self.app(scope, receive, send_with_headers)
        except Exception:
            logger.exception(f"Unhandled error on {scope['method']} {scope['path']}")
            if response_started:
                raise
            response = PlainTextResponse("500 - Internal Server Error", status_code=500)
            await response(scope, receive, send_with_headers)
