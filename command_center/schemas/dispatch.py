from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FollowUpSchema(CamelModel):
    label: str = Field(..., description="Text shown to the user")
    command: str = Field(..., description="Literal command re-issued as free text when selected")


class DispatchRequest(CamelModel):
    """Either an explicit skill invocation or free text to resolve.

    Exactly one of ``skill_id`` and ``text`` must be supplied.
    """

    skill_id: str | None = Field(None, min_length=1, description="Explicit skill id")
    input: dict[str, Any] = Field(default_factory=dict, description="Structured skill input")
    text: str | None = Field(None, min_length=1, description="Free-form operator request")
    request_id: str | None = Field(None, description="Caller correlation id, echoed back")
    source: Literal["ui", "api", "autonomous"] = Field(
        default="api", description="Where the request originated"
    )
    session_id: str | None = Field(None, description="Chat session the request belongs to")

    @model_validator(mode="after")
    def check_target(self) -> "DispatchRequest":
        if (self.skill_id is None) == (self.text is None):
            raise ValueError('Request must include exactly one of "skillId" or "text"')
        return self

    @property
    def is_free_text(self) -> bool:
        return self.text is not None


class DispatchSuccess(CamelModel):
    status: Literal["success"] = "success"
    skill_id: str
    response_type: str
    text: str
    payload: Any = None
    follow_ups: list[FollowUpSchema] = Field(..., min_length=1)
    execution_ms: int = 0
    data_freshness: Literal["live", "cached", "mock"] = "live"
    request_id: str | None = None


class DispatchFailure(CamelModel):
    status: Literal["error"] = "error"
    error_kind: Literal["not_found", "unresolved_request", "invalid_input", "timeout", "handler_error"]
    message: str
    user_message: str
    skill_id: str | None = None
    invalid_fields: list[str] | None = None
    follow_ups: list[FollowUpSchema] = Field(default_factory=list)
    execution_ms: int = 0
    request_id: str | None = None


DispatchResult = Annotated[DispatchSuccess | DispatchFailure, Field(discriminator="status")]


class SkillFieldSchema(BaseModel):
    type: str
    required: bool
    description: str = ""
    default: Any = None


class SkillPublic(CamelModel):
    """Public catalog entry; never includes the handler itself."""

    id: str
    name: str
    description: str
    domain: str
    input_schema: dict[str, SkillFieldSchema]
    response_type: str
    estimated_ms: int
    examples: list[str]


class SkillListResponse(BaseModel):
    skills: list[SkillPublic]
    count: int
