import uvicorn

from merge_conflict_analyzer.infrastructure.config.main_settings import Settings
from merge_conflict_analyzer.infrastructure.entrypoints.api.app_factory import create_app

settings = Settings()
app = create_app(settings)


def dev() -> None:
    """Serve the webhook API with auto-reload."""
    uvicorn.run(
        "merge_conflict_analyzer.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
        # structlog owns the root handler; uvicorn's dictConfig would replace it
        log_config=None,
    )
