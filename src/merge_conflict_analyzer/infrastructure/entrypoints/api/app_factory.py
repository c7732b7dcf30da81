import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from merge_conflict_analyzer.infrastructure.config.main_settings import Settings
from merge_conflict_analyzer.infrastructure.entrypoints.api.github_webhook_router import (
    router as github_webhook_router,
)
from merge_conflict_analyzer.infrastructure.entrypoints.api.health_router import (
    router as health_router,
)
from merge_conflict_analyzer.infrastructure.observability import configure_logging
from merge_conflict_analyzer.infrastructure.observability.logging import CorrelationMiddleware
from merge_conflict_analyzer.infrastructure.observability.tracing_setup import configure_tracing

logger = structlog.get_logger()


def create_app(settings: Settings) -> FastAPI:
    configure_logging(settings.log_level, settings.log_format, settings.env)
    configure_tracing(console_export=settings.trace_console_export)
    logger.info(
        "Boot diagnostics",
        app_name=settings.app_name,
        environment=settings.env,
        workspace_root=str(settings.workspace_root),
    )

    app = FastAPI(title=settings.app_name)
    app.add_middleware(CorrelationMiddleware)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.error(
            "Request validation failed",
            error_type="RequestValidationError",
            error_details=str(exc.errors()),
            context_endpoint=str(request.url.path),
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.errors()},
        )

    app.include_router(health_router)
    app.include_router(github_webhook_router, prefix="/api/v1")
    app.mount("/metrics", make_asgi_app())

    return app
