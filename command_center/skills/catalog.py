"""
Startup catalog

Builds the process-wide registry. Skills are registered explicitly here, in a
fixed order, instead of through import side effects; registration order is the
listing order and the matcher's tie-break.
"""

import logging

from command_center.skills.base import BaseSkill
from command_center.skills.handlers import (
    CreateCampaignSkill,
    EnrichProspectsSkill,
    ExportResultsSkill,
    HelpSkill,
    KpiDetailSkill,
    PipelineHealthSkill,
    ProspectSearchSkill,
    RecommendationsSkill,
)
from command_center.skills.registry import SkillRegistry

logger = logging.getLogger(__name__)


def builtin_skills(registry: SkillRegistry) -> list[BaseSkill]:
    return [
        PipelineHealthSkill(),
        KpiDetailSkill(),
        ProspectSearchSkill(),
        EnrichProspectsSkill(),
        RecommendationsSkill(),
        CreateCampaignSkill(),
        ExportResultsSkill(),
        HelpSkill(registry),
    ]


def register_builtin_skills(registry: SkillRegistry) -> None:
    """
    Register every built-in skill

    Raises:
        DuplicateSkillError: Two skills claim the same id (fatal at startup)
    """
    for skill in builtin_skills(registry):
        registry.register(skill)


def build_registry() -> SkillRegistry:
    """Create, populate and freeze the registry"""
    registry = SkillRegistry()
    register_builtin_skills(registry)
    registry.freeze()
    logger.info(f"Skill registry ready with {len(registry)} skills")
    return registry
