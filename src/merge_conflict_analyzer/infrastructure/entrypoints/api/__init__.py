from .app_factory import create_app
from .github_webhook_router import router as github_webhook_router
from .health_router import router as health_router

__all__ = ["create_app", "github_webhook_router", "health_router"]
