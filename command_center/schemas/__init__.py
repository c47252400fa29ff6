from command_center.schemas.dispatch import (
    DispatchFailure,
    DispatchRequest,
    DispatchResult,
    DispatchSuccess,
    FollowUpSchema,
    SkillFieldSchema,
    SkillListResponse,
    SkillPublic,
)

__all__ = [
    "DispatchRequest",
    "DispatchResult",
    "DispatchSuccess",
    "DispatchFailure",
    "FollowUpSchema",
    "SkillFieldSchema",
    "SkillPublic",
    "SkillListResponse",
]
