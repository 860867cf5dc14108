"""Sentry context middleware to capture request context in error reports."""

import uuid

import sentry_sdk
from starlette.types import ASGIApp, Receive, Scope, Send

from caixapdv.core.logging import get_request_id


class SentryContextMiddleware:
    """
    Middleware to inject structured context into Sentry error reports.

    Captures:
    - request_id: Unique request identifier
    - method and path of the request
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Process request with Sentry context injection."""
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        # Set by RequestIDMiddleware, which wraps this one
        request_id = get_request_id()
        if request_id == "no-request-id":
            request_id = str(uuid.uuid4())

        with sentry_sdk.isolation_scope() as sentry_scope:
            sentry_scope.set_tag("request_id", request_id)
            sentry_scope.set_context(
                "request",
                {
                    "method": scope.get("method"),
                    "path": scope.get("path"),
                    "request_id": request_id,
                },
            )
            await self.app(scope, receive, send)
