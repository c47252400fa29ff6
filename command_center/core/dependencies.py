import logging
import secrets
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from command_center.core.config import Settings, get_settings
from command_center.skills.dispatcher import SkillDispatcher
from command_center.skills.registry import SkillRegistry

# auto_error is off so a missing header yields 401 (not 403) and the
# development bypass still applies.
http_bearer_scheme = HTTPBearer(auto_error=False)

logger = logging.getLogger(__name__)


async def require_api_key(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(http_bearer_scheme)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> None:
    """Dependency that checks the caller's bearer token against AGENT_API_KEY.

    Authentication is bypassed entirely when APP_ENV is "development".

    Raises:
        HTTPException: 401 when the token is missing, no key is configured,
            or the token does not match
    """
    if settings.is_development:
        return

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        logger.warning("Agent API rejected: reason=missing_credentials")
        raise unauthorized

    if settings.AGENT_API_KEY is None:
        logger.warning("Agent API rejected: reason=api_key_not_configured")
        raise unauthorized

    expected = settings.AGENT_API_KEY.get_secret_value()
    if not secrets.compare_digest(credentials.credentials.encode(), expected.encode()):
        logger.warning("Agent API rejected: reason=token_mismatch")
        raise unauthorized


def get_skill_registry(request: Request) -> SkillRegistry:
    """Registry built during application startup."""
    registry: SkillRegistry = request.app.state.skill_registry
    return registry


def get_skill_dispatcher(request: Request) -> SkillDispatcher:
    """Dispatcher built during application startup."""
    dispatcher: SkillDispatcher = request.app.state.skill_dispatcher
    return dispatcher
