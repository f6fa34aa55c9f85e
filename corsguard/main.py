import uuid
from typing import Optional

from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from starlette.middleware.trustedhost import TrustedHostMiddleware

from corsguard.config import Settings, settings as default_settings, build_policy
from corsguard.cors.middleware import CorsMiddleware
from corsguard.cors.policy import OriginPolicy
from corsguard.utils.logging import logger, request_id_ctx, set_level
from corsguard.utils.response import success
from corsguard.utils.errors import (
    handle_http_exception,
    handle_validation_error,
    handle_unhandled,
)

def create_app(settings: Optional[Settings] = None, policy: Optional[OriginPolicy] = None) -> FastAPI:
    settings = settings or default_settings
    policy = policy if policy is not None else build_policy(settings)
    set_level(settings.LOG_LEVEL)

    app = FastAPI(title=settings.APP_NAME, version="1.0.0")
    app.state.cors_policy = policy
    logger.info(f"CORS policy: {policy!r}")

    # ----- Middleware -----
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=(settings.TRUSTED_HOSTS + ["*"] if settings.APP_ENV == "dev" else settings.TRUSTED_HOSTS),
    )
    app.add_middleware(CorsMiddleware, policy=policy)

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        token = request_id_ctx.set(str(uuid.uuid4())[:8])
        try:
            response = await call_next(request)
            response.headers["X-Request-Id"] = request_id_ctx.get() or "-"
        finally:
            request_id_ctx.reset(token)
        return response

    # ----- Exception Handlers -----
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unhandled)

    # ----- Routes -----
    @app.get("/healthz", tags=["system"])
    async def healthz():
        return {
            "status": "ok",
            "app": settings.APP_NAME,
            "env": settings.APP_ENV,
            "version": app.version,
            "cors": "*" if policy.is_wildcard else sorted(policy.allowed_origins),
        }

    @app.get("/")
    async def index():
        return success({"app": settings.APP_NAME})

    return app

app = create_app()
