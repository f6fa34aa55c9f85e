from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from corsguard.cors.policy import OriginPolicy
from corsguard.utils.errors import OriginRejected
from corsguard.utils.logging import logger

ALLOW_ORIGIN_HEADER = "Access-Control-Allow-Origin"

CallNext = Callable[[Request], Awaitable[Response]]


async def intercept(policy: OriginPolicy, request: Request, call_next: CallNext) -> Response:
    """Run the origin check, then either forward the request or reject it with 403."""
    try:
        allow_origin = policy.validate(request.headers)
    except OriginRejected as exc:
        logger.warning(
            f"CORS reject {request.method} {request.url.path}: "
            f"{exc.reason.value} origin={exc.origin!r}"
        )
        return Response(status_code=403)

    response = await call_next(request)
    # append, not set: earlier values stay as separate header lines
    response.headers.append(ALLOW_ORIGIN_HEADER, allow_origin)
    return response


class CorsMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, policy: OriginPolicy | None = None):
        super().__init__(app)
        self.policy = policy if policy is not None else OriginPolicy()

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        return await intercept(self.policy, request, call_next)
