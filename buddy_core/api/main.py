"""
FastAPI app assembly: logging, middleware, error rendering and router wiring.

``create_app`` takes an explicitly constructed ``StoreClient``; the module-level
``app`` is built from the environment for ASGI servers.
"""
import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from buddy_core.api.auth import router as auth_router
from buddy_core.api.rpc import router as rpc_router
from buddy_core.db.database import StoreClient
from buddy_core.errors import ServiceError, ValidationError
from buddy_core.utils import config

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)


def _error_response(request: Request, exc: ServiceError) -> JSONResponse:
    body = exc.to_dict()
    body["operation"] = request.path_params.get("operation")
    return JSONResponse(status_code=exc.status_code, content={"error": body})


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.warning("operation_failed: path=%s code=%s message=%s", request.url.path, exc.code, exc.message)
    else:
        logger.info("operation_rejected: path=%s code=%s message=%s", request.url.path, exc.code, exc.message)
    return _error_response(request, exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(request, ValidationError("Request body is not valid JSON"))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("operation_crashed: path=%s", request.url.path)
    return _error_response(request, ServiceError())


def create_app(store: Optional[StoreClient] = None) -> FastAPI:
    if store is None:
        store = StoreClient.from_env()

    app = FastAPI(
        title="Buddy Tracker Service",
        description="Onboarding buddy pairings, tasks and meetings behind a role-aware RPC API.",
        version="1.0.0",
    )
    app.state.store = store

    # Avoid implicit trailing-slash redirects for predictable URLs
    app.router.redirect_slashes = False

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    app.include_router(auth_router)
    app.include_router(rpc_router)

    @app.get("/health")
    def health_check():
        return {
            "status": "ok",
            "service": "buddy-tracker",
            "store": "up" if store.ping() else ("down" if store.available else "absent"),
        }

    logger.info(
        "app_startup: log_level=%s store_configured=%s allow_degraded_reads=%s",
        LOG_LEVEL_NAME,
        store.available,
        store.allow_degraded_reads,
    )
    return app


app = create_app()
