"""
Skills System

Skills are typed handlers the conversational agent dispatches requests to.
Each one declares its metadata and input fields; the dispatcher resolves,
validates, executes and normalizes.
"""

from command_center.skills.base import (
    BaseSkill,
    FollowUp,
    ResponseType,
    SkillDomain,
    SkillField,
    SkillResult,
)
from command_center.skills.catalog import build_registry
from command_center.skills.dispatcher import SkillDispatcher
from command_center.skills.errors import (
    DuplicateSkillError,
    HandlerError,
    InvalidInputError,
    InvalidSkillError,
    RegistryFrozenError,
    SkillError,
    SkillNotFoundError,
    SkillTimeoutError,
    UnresolvedRequestError,
)
from command_center.skills.matcher import KeywordSkillMatcher, SkillMatcher
from command_center.skills.normalizer import ResponseNormalizer
from command_center.skills.registry import SkillRegistry

__all__ = [
    "BaseSkill",
    "FollowUp",
    "ResponseType",
    "SkillDomain",
    "SkillField",
    "SkillResult",
    "SkillRegistry",
    "SkillDispatcher",
    "SkillMatcher",
    "KeywordSkillMatcher",
    "ResponseNormalizer",
    "build_registry",
    "SkillError",
    "DuplicateSkillError",
    "RegistryFrozenError",
    "SkillNotFoundError",
    "UnresolvedRequestError",
    "InvalidInputError",
    "InvalidSkillError",
    "SkillTimeoutError",
    "HandlerError",
]
