"""
Response Normalizer

Shapes a handler's result into the success envelope the chat surface renders.
"""

from command_center.schemas.dispatch import DispatchSuccess, FollowUpSchema
from command_center.skills.base import BaseSkill, FollowUp, SkillResult

MAX_FOLLOW_UPS = 4

DEFAULT_FOLLOW_UPS: tuple[FollowUp, ...] = (
    FollowUp(label="Pipeline health", command="show pipeline health"),
    FollowUp(label="Find prospects", command="find CMOs at fintech companies"),
    FollowUp(label="Recommendations", command="what should I focus on?"),
)

FRESHNESS_VALUES = frozenset({"live", "cached", "mock"})


class ResponseNormalizer:
    """
    Builds success envelopes

    Handler follow-ups are kept in order and capped at ``max_follow_ups``;
    when a handler supplies none, the default navigation set is used so the
    envelope never carries an empty suggestion list.
    """

    def __init__(
        self,
        max_follow_ups: int = MAX_FOLLOW_UPS,
        default_follow_ups: tuple[FollowUp, ...] = DEFAULT_FOLLOW_UPS,
    ) -> None:
        if max_follow_ups < 1:
            raise ValueError("max_follow_ups must be at least 1")
        if not default_follow_ups:
            raise ValueError("default_follow_ups must not be empty")
        self.max_follow_ups = max_follow_ups
        self.default_follow_ups = default_follow_ups

    def follow_ups_for(self, result: SkillResult) -> list[FollowUpSchema]:
        source = result.follow_ups or self.default_follow_ups
        return [
            FollowUpSchema(label=f.label, command=f.command)
            for f in list(source)[: self.max_follow_ups]
        ]

    def normalize(
        self,
        skill: BaseSkill,
        result: SkillResult,
        execution_ms: int = 0,
        request_id: str | None = None,
    ) -> DispatchSuccess:
        freshness = result.data_freshness if result.data_freshness in FRESHNESS_VALUES else "live"
        return DispatchSuccess(
            skill_id=skill.id,
            response_type=skill.response_type.value,
            text=result.text or f"{skill.name} results",
            payload=result.data,
            follow_ups=self.follow_ups_for(result),
            execution_ms=execution_ms,
            data_freshness=freshness,
            request_id=request_id,
        )
