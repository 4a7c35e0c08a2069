# app/core/middleware.py
"""
HTTP middleware: request correlation, access logging and response
hardening headers.
"""
from __future__ import annotations

import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.core.logging import get_logger, request_id as request_id_context, user_id as user_id_context

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Binds a request id for the lifetime of the request and writes one
    access log line per request.

    An id supplied by the client (or a proxy) in ``X-Request-ID`` is kept;
    otherwise a UUID4 is generated. The id is echoed back in the response.
    """

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = rid
        rid_token = request_id_context.set(rid)
        uid_token = user_id_context.set(None)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "Unhandled error while serving request",
                exc_info=True,
                extra={"method": request.method, "path": request.url.path},
            )
            raise
        else:
            elapsed_ms = (time.perf_counter() - started) * 1000
            response.headers[self.header_name] = rid
            log = logger.warning if response.status_code >= 500 else logger.info
            log(
                f"{request.method} {request.url.path} -> {response.status_code}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": round(elapsed_ms, 2),
                },
            )
            return response
        finally:
            user_id_context.reset(uid_token)
            request_id_context.reset(rid_token)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds no-sniff, frame-deny and no-store headers to every response."""

    HEADERS = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Cache-Control": "no-store",
    }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for name, value in self.HEADERS.items():
            response.headers.setdefault(name, value)
        return response


def register_middlewares(app: FastAPI) -> None:
    # Added last, so it is the outermost layer and every other log line carries the id.
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestContextMiddleware)


__all__ = [
    "REQUEST_ID_HEADER",
    "RequestContextMiddleware",
    "SecurityHeadersMiddleware",
    "register_middlewares",
]
