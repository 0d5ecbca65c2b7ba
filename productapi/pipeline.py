"""Request pipeline for the product API.

Every request passes through an ordered list of stages before it is
routed.  A stage is a callable taking the request and returning either
``None`` (carry on with the next stage) or a ``Response`` that ends the
request right there.  The default order is:

1. ``log_request``: records method and path, never rejects.
2. ``require_api_key``: checks the ``x-api-key`` header against the
   configured secret and answers 403 on mismatch.

After the stages the request is routed to its handler.  Anything the
handler raises ends up in ``format_error``, the one place where error
kinds are turned into a status code and an ``{"error": ...}`` body.
"""

import secrets
from typing import Callable, Iterable, Optional, Sequence

from fastapi import FastAPI, Request
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from .errors import APIError, AuthorizationError, InternalError

Stage = Callable[[Request], Optional[Response]]

API_KEY_HEADER = "x-api-key"


def error_response(exc: APIError, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)


def format_error(request: Request, exc: Exception) -> JSONResponse:
    """Turn any failure raised while handling ``request`` into a JSON response.

    Known ``APIError`` kinds keep their status and message.  Anything else
    is logged with its traceback and reported as a generic 500 so no
    internals leak to the client.
    """
    if isinstance(exc, APIError):
        logger.warning(
            "{} {} failed with {} ({}): {}",
            request.method, request.url.path, exc.status_code, exc.kind.name, exc.message,
        )
        return error_response(exc)

    logger.opt(exception=exc).error(
        "{} {} failed with unhandled {}", request.method, request.url.path, type(exc).__name__
    )
    return error_response(InternalError())


def log_request(request: Request) -> Optional[Response]:
    logger.info("{} {}", request.method, request.url.path)
    return None


def require_api_key(api_key: str, exempt_paths: Iterable[str] = ("/",)) -> Stage:
    exempt = frozenset(exempt_paths)
    expected = api_key.encode("utf-8")

    def authorize(request: Request) -> Optional[Response]:
        if request.url.path in exempt:
            return None
        supplied = request.headers.get(API_KEY_HEADER)
        if supplied and secrets.compare_digest(supplied.encode("utf-8"), expected):
            return None
        logger.warning("{} {} rejected: missing or invalid API key", request.method, request.url.path)
        return error_response(AuthorizationError())

    return authorize


class RequestPipeline(BaseHTTPMiddleware):
    def __init__(self, app, stages: Sequence[Stage]):
        super().__init__(app)
        self.stages = list(stages)

    async def dispatch(self, request: Request, call_next):
        for stage in self.stages:
            response = stage(request)
            if response is not None:
                return response

        try:
            return await call_next(request)
        except Exception as exc:
            # errors the app-level handlers did not claim
            return format_error(request, exc)


async def _api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return format_error(request, exc)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # unknown routes, wrong methods: same body shape as domain errors
    logger.warning("{} {} failed with {}: {}", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def install_pipeline(app: FastAPI, api_key: str) -> None:
    app.add_exception_handler(APIError, _api_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_middleware(RequestPipeline, stages=[log_request, require_api_key(api_key)])
