"""
Skill Registry for managing and discovering skills

The registry is a flat id -> skill mapping. It is populated once during
startup, then frozen; after that it is only read, so lookups need no locking.
"""

import logging
from collections.abc import Iterator
from typing import Any

from command_center.skills.base import BaseSkill, ResponseType, SkillDomain
from command_center.skills.errors import (
    DuplicateSkillError,
    InvalidSkillError,
    RegistryFrozenError,
    SkillNotFoundError,
)

logger = logging.getLogger(__name__)


def check_metadata(skill: BaseSkill) -> None:
    """
    Reject skills the dispatcher and discovery surfaces cannot serve

    Raises:
        InvalidSkillError: Naming the first problem found
    """
    skill_id = getattr(skill, "id", None)
    if not isinstance(skill_id, str) or not skill_id.strip():
        raise InvalidSkillError(skill_id, "id must be a non-empty string")

    for attr in ("name", "description"):
        value = getattr(skill, attr, None)
        if not isinstance(value, str) or not value.strip():
            raise InvalidSkillError(skill_id, f"{attr} must be a non-empty string")

    if not isinstance(getattr(skill, "domain", None), SkillDomain):
        raise InvalidSkillError(skill_id, "domain must be a SkillDomain")

    if not isinstance(skill.response_type, ResponseType):
        raise InvalidSkillError(skill_id, "response_type must be a ResponseType")

    estimated_ms = skill.estimated_ms
    if isinstance(estimated_ms, bool) or not isinstance(estimated_ms, int) or estimated_ms <= 0:
        raise InvalidSkillError(skill_id, "estimated_ms must be a positive integer")

    names = [field.name for field in skill.input_schema]
    if len(names) != len(set(names)):
        raise InvalidSkillError(skill_id, "input_schema declares a field twice")


class DomainView:
    """Restartable view over the skills of one domain

    Each iteration reads the registry afresh, so it reflects its current state.
    """

    def __init__(self, registry: "SkillRegistry", domain: SkillDomain) -> None:
        self._registry = registry
        self.domain = domain

    def __iter__(self) -> Iterator[BaseSkill]:
        return (skill for skill in self._registry.list_all() if skill.domain == self.domain)

    def __repr__(self) -> str:
        return f"DomainView(domain={self.domain.value!r})"


class SkillRegistry:
    """
    Registry for managing skills

    Maintains a collection of skills and provides methods for:
    - Registering new skills (startup only)
    - Retrieving skills by id
    - Listing skills in registration order
    - Filtering skills by domain
    """

    def __init__(self) -> None:
        """Initialize empty skill registry"""
        self._skills: dict[str, BaseSkill] = {}
        self._frozen = False

    def register(self, skill: BaseSkill) -> None:
        """
        Register a skill in the registry

        Args:
            skill: The skill to register

        Raises:
            InvalidSkillError: If the skill's metadata is incomplete or malformed
            DuplicateSkillError: If a skill with the same id is already registered
            RegistryFrozenError: If startup registration has already finished
        """
        check_metadata(skill)

        if self._frozen:
            raise RegistryFrozenError(skill.id)

        if skill.id in self._skills:
            logger.error(
                f"Duplicate skill id '{skill.id}' from {type(skill).__name__}; "
                f"already claimed by {type(self._skills[skill.id]).__name__}"
            )
            raise DuplicateSkillError(skill.id)

        self._skills[skill.id] = skill
        logger.info(f"Registered skill: {skill.id} ({skill.domain.value})")

    def freeze(self) -> None:
        """Mark startup registration as finished"""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, skill_id: str) -> BaseSkill:
        """
        Retrieve a skill by id

        Raises:
            SkillNotFoundError: If no skill has this id
        """
        skill = self._skills.get(skill_id)
        if skill is None:
            raise SkillNotFoundError(skill_id)
        return skill

    def get_skill(self, skill_id: str) -> BaseSkill | None:
        """Retrieve a skill by id, or None if not found"""
        return self._skills.get(skill_id)

    def list_all(self) -> list[BaseSkill]:
        """All skills in registration order"""
        return list(self._skills.values())

    def find_by_domain(self, domain: SkillDomain | str) -> DomainView:
        """Skills whose domain matches, in registration order"""
        return DomainView(self, SkillDomain(domain))

    def list_public(self, domain: SkillDomain | str | None = None) -> list[dict[str, Any]]:
        """
        Public catalog entries for discovery surfaces

        Args:
            domain: Optional domain filter

        Returns:
            List of metadata dictionaries (see BaseSkill.to_public_dict)
        """
        skills = self.list_all() if domain is None else self.find_by_domain(domain)
        return [skill.to_public_dict() for skill in skills]

    def __len__(self) -> int:
        """Return number of registered skills"""
        return len(self._skills)

    def __contains__(self, skill_id: object) -> bool:
        """Check if skill is registered"""
        return skill_id in self._skills
