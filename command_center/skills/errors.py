"""
Error taxonomy for the skills system

Registration errors are raised at startup and are fatal. Dispatch errors carry
an ``error_kind`` and a ``user_message`` so the dispatcher can turn them into
failure envelopes without leaking raw exception text to the chat surface.
"""

from collections.abc import Sequence


class SkillError(Exception):
    """Base class for all skills system errors"""

    error_kind: str = "skill_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def user_message(self) -> str:
        return "Something went wrong. Please try again."


class DuplicateSkillError(SkillError, ValueError):
    """Raised when two skills claim the same id"""

    error_kind = "duplicate_skill"

    def __init__(self, skill_id: str) -> None:
        super().__init__(f"Skill '{skill_id}' is already registered")
        self.skill_id = skill_id


class InvalidSkillError(SkillError, ValueError):
    """Raised when a skill's metadata cannot be registered"""

    error_kind = "invalid_skill"

    def __init__(self, skill_id: object, reason: str) -> None:
        super().__init__(f"Cannot register skill {skill_id!r}: {reason}")
        self.skill_id = skill_id
        self.reason = reason


class RegistryFrozenError(SkillError, RuntimeError):
    """Raised when registering after startup has finished"""

    error_kind = "registry_frozen"

    def __init__(self, skill_id: str) -> None:
        super().__init__(f"Cannot register '{skill_id}': registry is frozen")
        self.skill_id = skill_id


class SkillNotFoundError(SkillError, LookupError):
    error_kind = "not_found"

    def __init__(self, skill_id: str) -> None:
        super().__init__(f"Skill '{skill_id}' not found in registry")
        self.skill_id = skill_id

    @property
    def user_message(self) -> str:
        return 'I don\'t know that skill. Type "help" to see what I can do.'


class UnresolvedRequestError(SkillError):
    error_kind = "unresolved_request"

    def __init__(self, text: str) -> None:
        super().__init__(f"No skill matches request: {text!r}")
        self.text = text

    @property
    def user_message(self) -> str:
        return 'I don\'t have a skill for that yet. Try "help" to see what I can do.'


class InvalidInputError(SkillError, ValueError):
    """Input failed validation against a skill's schema"""

    error_kind = "invalid_input"

    def __init__(self, skill_id: str, fields: Sequence[str], details: Sequence[str] = ()) -> None:
        self.skill_id = skill_id
        self.fields = list(fields)
        self.details = list(details)
        summary = "; ".join(self.details) if self.details else ", ".join(self.fields)
        super().__init__(f"Invalid input for skill '{skill_id}': {summary}")

    @property
    def user_message(self) -> str:
        return f"That request is missing some details: {', '.join(self.fields)}."


class SkillTimeoutError(SkillError):
    error_kind = "timeout"

    def __init__(self, skill_id: str, timeout_ms: int) -> None:
        super().__init__(f"Skill '{skill_id}' timed out after {timeout_ms}ms")
        self.skill_id = skill_id
        self.timeout_ms = timeout_ms

    @property
    def user_message(self) -> str:
        return "That took longer than expected. Please try again."


class HandlerError(SkillError):
    """The handler ran but reported a failure"""

    error_kind = "handler_error"

    def __init__(self, skill_id: str, message: str, skill_name: str | None = None) -> None:
        super().__init__(f"Skill '{skill_id}' failed: {message}")
        self.skill_id = skill_id
        self.skill_name = skill_name or skill_id
        self.handler_message = message

    @property
    def user_message(self) -> str:
        return f"Something went wrong while running {self.skill_name}. Please try again."
