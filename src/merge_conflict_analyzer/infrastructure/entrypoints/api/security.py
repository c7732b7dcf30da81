import hashlib
import hmac

from fastapi import Depends, Header, HTTPException, Request, status

from merge_conflict_analyzer.infrastructure.tools.vcs.github.config.github_settings import (
    GitHubSettings,
)

SIGNATURE_PREFIX = "sha256="


def get_github_settings() -> GitHubSettings:
    return GitHubSettings()


def compute_signature(secret: str, body: bytes) -> str:
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


async def verify_github_signature(
    request: Request,
    x_hub_signature_256: str | None = Header(default=None),
    settings: GitHubSettings = Depends(get_github_settings),
) -> None:
    if not settings.webhook_secret:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Webhook secret not configured",
        )
    if not x_hub_signature_256:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Missing signature")
    expected = compute_signature(settings.webhook_secret.get_secret_value(), await request.body())
    if not hmac.compare_digest(expected, x_hub_signature_256):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid signature")
