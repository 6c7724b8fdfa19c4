"""Handler Boundary — APIRoute subclass that contains failures inside each route.

Invariants:
    - BackofficeError, HTTPException and RequestValidationError pass through untouched
    - Any other exception is logged with path/method context (full traceback,
      server-side only) and re-raised as UpstreamError, rendered as a generic 500
    - Nothing raised by a handler reaches the ASGI server

Design Decisions:
    - Route class over middleware: the wrapper sees the handler's exceptions before
      Starlette's ServerErrorMiddleware, and keeps the route name for logging
"""

import logging
from typing import Callable

from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from backoffice.core.errors import BackofficeError, UpstreamError

logger = logging.getLogger(__name__)

_PASS_THROUGH = (BackofficeError, StarletteHTTPException, RequestValidationError)


class GuardedRoute(APIRoute):
    """Route whose handler failures become UpstreamError."""

    def get_route_handler(self) -> Callable:
        original = super().get_route_handler()
        route_name = self.name

        async def guarded_handler(request: Request) -> Response:
            try:
                return await original(request)
            except _PASS_THROUGH:
                raise
            except Exception as e:
                logger.error(
                    f"Unhandled {type(e).__name__} in {route_name}: {e}",
                    exc_info=True,
                    extra={
                        "path": request.url.path,
                        "method": request.method,
                        "error_code": "INTERNAL_ERROR",
                    },
                )
                raise UpstreamError(f"{route_name} failed") from e

        return guarded_handler
