import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from command_center.api.agent import router as agent_router
from command_center.core.config import get_settings
from command_center.core.logging import setup_logging
from command_center.core.rate_limit import limiter
from command_center.skills.catalog import build_registry
from command_center.skills.dispatcher import SkillDispatcher
from command_center.skills.normalizer import ResponseNormalizer

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()

    # A duplicate skill id raises here and aborts startup
    registry = build_registry()
    app.state.skill_registry = registry
    app.state.skill_dispatcher = SkillDispatcher(
        registry,
        normalizer=ResponseNormalizer(max_follow_ups=settings.MAX_FOLLOW_UPS),
        timeout_multiplier=settings.DISPATCH_TIMEOUT_MULTIPLIER,
        timeout_ceiling_ms=settings.DISPATCH_TIMEOUT_CEILING_MS,
    )

    logger.info(f"application started env={settings.APP_ENV} skills={len(registry)}")
    yield
    logger.info("application stopped")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.include_router(agent_router, prefix=settings.API_V1_PREFIX)

    @app.get("/health")
    async def health(request: Request) -> dict[str, object]:
        registry = getattr(request.app.state, "skill_registry", None)
        return {"status": "ok", "skills": len(registry) if registry is not None else 0}

    return app


app = create_app()
