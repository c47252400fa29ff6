from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from command_center.core.config import Settings, get_settings
from command_center.core.rate_limit import limiter
from command_center.main import app
from command_center.skills.registry import SkillRegistry
from tests.fakes import EchoSkill, PipelineHealthStub

TEST_API_KEY = "test-agent-key"


@pytest.fixture
def pipeline_skill() -> PipelineHealthStub:
    return PipelineHealthStub()


@pytest.fixture
def registry(pipeline_skill: PipelineHealthStub) -> SkillRegistry:
    registry = SkillRegistry()
    registry.register(pipeline_skill)
    registry.register(EchoSkill())
    return registry


@pytest.fixture
def test_settings() -> Settings:
    return Settings(AGENT_API_KEY=TEST_API_KEY, APP_ENV="test")


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {TEST_API_KEY}"}


@pytest_asyncio.fixture
async def client(test_settings: Settings) -> AsyncIterator[AsyncClient]:
    """Client against the real app, with startup (registry build) executed"""
    app.dependency_overrides[get_settings] = lambda: test_settings
    limiter.reset()

    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac

    app.dependency_overrides.clear()
