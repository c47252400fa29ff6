"""
Base classes for the Skills System

Defines the contract every skill must satisfy to be registered and dispatched.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar


class SkillDomain(str, Enum):
    """Coarse category used for grouping, filtering and free-text matching"""

    ANALYTICS = "analytics"
    RESEARCH = "research"
    INTELLIGENCE = "intelligence"
    WORKFLOW = "workflow"
    SYSTEM = "system"


class ResponseType(str, Enum):
    """Shape of a successful result, used by the chat surface to pick a renderer"""

    NARRATIVE = "narrative"
    METRICS = "metrics"
    CHART = "chart"
    TABLE = "table"
    INSIGHT = "insight"


FIELD_TYPES = frozenset({"string", "integer", "number", "boolean", "object", "array"})


@dataclass(frozen=True)
class SkillField:
    """
    Declares one accepted input field

    Attributes:
        name: Field name as supplied by the caller
        type: Type tag (string, integer, number, boolean, object, array)
        description: Human-readable description
        required: Whether the field must be supplied
        default: Value applied when an optional field is omitted
    """

    name: str
    type: str
    description: str = ""
    required: bool = False
    default: Any = None

    def __post_init__(self) -> None:
        if self.type not in FIELD_TYPES:
            raise ValueError(f"Unsupported field type '{self.type}' for field '{self.name}'")

    def to_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {
            "type": self.type,
            "required": self.required,
            "description": self.description,
        }

        if self.default is not None:
            schema["default"] = self.default

        return schema

    def to_jsonschema(self) -> dict[str, Any]:
        """Property schema for JSON Schema validation (requiredness lives on the object)"""
        schema: dict[str, Any] = {"type": self.type, "description": self.description}

        if self.default is not None:
            schema["default"] = self.default

        return schema


@dataclass(frozen=True)
class FollowUp:
    """A suggested next command; ``command`` is re-issued verbatim as free text"""

    label: str
    command: str


@dataclass
class SkillResult:
    """
    Result of skill execution

    Attributes:
        success: Whether the skill executed successfully
        data: Result payload (any JSON-serializable type)
        error: Error message if execution failed
        text: Optional narrative text for the chat surface
        follow_ups: Handler-supplied follow-up suggestions, in priority order
        data_freshness: Where the data came from: live, cached or mock
    """

    success: bool
    data: Any | None = None
    error: str | None = None
    text: str | None = None
    follow_ups: list[FollowUp] | None = None
    data_freshness: str = "live"

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary for JSON serialization"""
        return {
            "success": self.success,
            "data": self.data,
            "error": self.error,
            "text": self.text,
            "follow_ups": (
                [{"label": f.label, "command": f.command} for f in self.follow_ups]
                if self.follow_ups is not None
                else None
            ),
            "data_freshness": self.data_freshness,
        }


class BaseSkill(ABC):
    """
    Abstract base class for all skills

    Subclasses declare their metadata as class attributes and implement
    ``execute``. The dispatcher validates input against ``input_schema``
    before calling ``execute``, so handlers can rely on required fields being
    present and defaults being applied.

    Attributes:
        id: Unique registry key
        name: Display name
        description: What the skill does
        domain: Category used for discovery and matching
        input_schema: Accepted input fields
        allow_extra_fields: Whether unknown input fields are tolerated
        response_type: Shape of a successful result
        estimated_ms: Expected latency, used to size the dispatch timeout
        examples: Example invocations, shown on help surfaces and matched
            against free text
        keywords: Extra vocabulary for free-text matching (not published)
    """

    id: ClassVar[str]
    name: ClassVar[str]
    description: ClassVar[str]
    domain: ClassVar[SkillDomain]
    input_schema: ClassVar[tuple[SkillField, ...]] = ()
    allow_extra_fields: ClassVar[bool] = True
    response_type: ClassVar[ResponseType] = ResponseType.NARRATIVE
    estimated_ms: ClassVar[int] = 1000
    examples: ClassVar[tuple[str, ...]] = ()
    keywords: ClassVar[tuple[str, ...]] = ()

    @abstractmethod
    async def execute(self, args: dict[str, Any]) -> SkillResult:
        """
        Execute the skill with validated arguments

        Args:
            args: Dictionary of arguments matching ``input_schema``

        Returns:
            SkillResult with the payload, or success=False with an error

        Raises:
            Any exception is reported to the caller as a handler error
        """

    def schema_dict(self) -> dict[str, dict[str, Any]]:
        """Input schema as a name -> descriptor mapping"""
        return {field.name: field.to_schema() for field in self.input_schema}

    def minimal_input(self) -> dict[str, Any]:
        """Smallest input that satisfies the schema, using placeholder values"""
        placeholders: dict[str, Any] = {
            "string": "example",
            "integer": 1,
            "number": 1.0,
            "boolean": True,
            "object": {},
            "array": [],
        }
        return {
            field.name: placeholders[field.type] for field in self.input_schema if field.required
        }

    def to_public_dict(self) -> dict[str, Any]:
        """
        Public catalog entry for discovery surfaces

        Only metadata is exposed; the execute function and keywords never
        leave the process.
        """
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "domain": self.domain.value,
            "input_schema": self.schema_dict(),
            "response_type": self.response_type.value,
            "estimated_ms": self.estimated_ms,
            "examples": list(self.examples),
        }
