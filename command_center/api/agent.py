"""Agent API endpoints: skill discovery and command dispatch."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from command_center.core.dependencies import (
    get_skill_dispatcher,
    get_skill_registry,
    require_api_key,
)
from command_center.core.rate_limit import discovery_limit, dispatch_limit, limiter
from command_center.schemas.dispatch import (
    DispatchRequest,
    DispatchResult,
    SkillListResponse,
    SkillPublic,
)
from command_center.skills.base import SkillDomain
from command_center.skills.dispatcher import SkillDispatcher
from command_center.skills.registry import SkillRegistry

router = APIRouter(prefix="/agent", tags=["agent"], dependencies=[Depends(require_api_key)])


@router.get("/skills", response_model=SkillListResponse, response_model_exclude_none=True)
@limiter.limit(discovery_limit)
async def list_skills(
    request: Request,
    registry: Annotated[SkillRegistry, Depends(get_skill_registry)],
    domain: SkillDomain | None = Query(None, description="Only list skills in this domain"),
) -> SkillListResponse:
    """List registered skills (public metadata only)."""
    skills = [SkillPublic.model_validate(entry) for entry in registry.list_public(domain)]
    return SkillListResponse(skills=skills, count=len(skills))


@router.post("/command", response_model=DispatchResult)
@limiter.limit(dispatch_limit)
async def dispatch_command(
    request: Request,
    command: DispatchRequest,
    dispatcher: Annotated[SkillDispatcher, Depends(get_skill_dispatcher)],
) -> DispatchResult:
    """Run a command against the skill registry.

    Both success and failure envelopes are returned with status 200; the
    ``status`` field tells them apart.
    """
    return await dispatcher.dispatch(command)
