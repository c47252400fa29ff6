"""
Help Skill

Lists every registered skill with its description and a command to try.
"""

from typing import Any

from command_center.skills.base import BaseSkill, FollowUp, ResponseType, SkillDomain, SkillResult
from command_center.skills.registry import SkillRegistry


class HelpSkill(BaseSkill):
    """Skill that describes the registry it belongs to"""

    id = "help"
    name = "Help"
    description = "Lists all available skills and example commands."
    domain = SkillDomain.SYSTEM
    response_type = ResponseType.TABLE
    estimated_ms = 50
    examples = (
        "help",
        "what can you do?",
        "show commands",
        "list skills",
    )
    keywords = ("commands", "skills", "what can", "how do")

    def __init__(self, registry: SkillRegistry) -> None:
        self.registry = registry

    async def execute(self, args: dict[str, Any]) -> SkillResult:
        skills = self.registry.list_all()
        rows = [
            {
                "id": skill.id,
                "name": skill.name,
                "domain": skill.domain.value,
                "description": skill.description,
                "example": skill.examples[0] if skill.examples else "",
            }
            for skill in skills
        ]

        return SkillResult(
            success=True,
            text=(
                f"{len(skills)} skills available. Type a command in plain language and "
                "I'll match it to the right skill."
            ),
            data={
                "columns": [
                    {"key": "name", "label": "Skill", "format": "text"},
                    {"key": "domain", "label": "Domain", "format": "badge"},
                    {"key": "description", "label": "Description", "format": "text"},
                    {"key": "example", "label": "Try", "format": "text"},
                ],
                "rows": rows,
            },
            follow_ups=[
                FollowUp(label="Pipeline health", command="show pipeline health"),
                FollowUp(label="Find prospects", command="find CMOs at fintech companies"),
                FollowUp(label="Recommendations", command="what should I focus on?"),
            ],
            data_freshness="live",
        )
