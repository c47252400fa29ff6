"""
Skill Dispatcher

Resolves a request to one skill, validates its input, runs the handler under
a timeout and turns every outcome into a response envelope. No error escapes
``dispatch``; failures come back as ``DispatchFailure``.
"""

import asyncio
import logging
import math
import time
from typing import Any

from command_center.schemas.dispatch import (
    DispatchFailure,
    DispatchRequest,
    DispatchSuccess,
    FollowUpSchema,
)
from command_center.skills.base import BaseSkill, SkillResult
from command_center.skills.errors import (
    HandlerError,
    InvalidInputError,
    SkillError,
    SkillTimeoutError,
    UnresolvedRequestError,
)
from command_center.skills.matcher import KeywordSkillMatcher, SkillMatcher
from command_center.skills.normalizer import ResponseNormalizer
from command_center.skills.registry import SkillRegistry
from command_center.skills.validation import validate_input

logger = logging.getLogger(__name__)

TIMEOUT_MULTIPLIER = 3.0
TIMEOUT_CEILING_MS = 30_000

FAILURE_FOLLOW_UPS = (FollowUpSchema(label="Show help", command="help"),)


class SkillDispatcher:
    """
    Runs dispatch requests against a registry

    Each call is independent: the only shared state is the read-only registry,
    so concurrent dispatches never wait on each other.
    """

    def __init__(
        self,
        registry: SkillRegistry,
        matcher: SkillMatcher | None = None,
        normalizer: ResponseNormalizer | None = None,
        timeout_multiplier: float = TIMEOUT_MULTIPLIER,
        timeout_ceiling_ms: int = TIMEOUT_CEILING_MS,
    ) -> None:
        """
        Args:
            registry: Registry used for lookups
            matcher: Free-text resolver; defaults to KeywordSkillMatcher
            normalizer: Success envelope builder
            timeout_multiplier: Timeout as a multiple of a skill's estimated_ms
            timeout_ceiling_ms: Hard upper bound on any timeout
        """
        if timeout_multiplier <= 0:
            raise ValueError("timeout_multiplier must be positive")
        if timeout_ceiling_ms <= 0:
            raise ValueError("timeout_ceiling_ms must be positive")

        self.registry = registry
        self.matcher = matcher or KeywordSkillMatcher(registry)
        self.normalizer = normalizer or ResponseNormalizer()
        self.timeout_multiplier = timeout_multiplier
        self.timeout_ceiling_ms = timeout_ceiling_ms
        # Timed-out handler tasks, held until they finish cancelling
        self._abandoned: set[asyncio.Task[Any]] = set()

    def timeout_ms_for(self, skill: BaseSkill) -> int:
        return min(math.ceil(skill.estimated_ms * self.timeout_multiplier), self.timeout_ceiling_ms)

    def resolve(self, request: DispatchRequest) -> BaseSkill:
        """
        Find the target skill for a request

        Raises:
            SkillNotFoundError: Explicit id is not registered
            UnresolvedRequestError: Free text matches no skill
        """
        if request.skill_id is not None:
            return self.registry.get(request.skill_id)

        text = request.text or ""
        try:
            skill_id = self.matcher.resolve(text)
        except Exception as e:
            logger.error(f"Matcher failed for {text!r}: {e}", exc_info=True)
            raise UnresolvedRequestError(text) from e
        if skill_id is None:
            raise UnresolvedRequestError(text)
        return self.registry.get(skill_id)

    def build_input(self, skill: BaseSkill, request: DispatchRequest) -> dict[str, Any]:
        """Explicit requests use their input; free text only feeds a declared query field"""
        if not request.is_free_text:
            return dict(request.input)

        args: dict[str, Any] = {}
        if any(field.name == "query" for field in skill.input_schema):
            args["query"] = request.text
        return args

    async def dispatch(self, request: DispatchRequest) -> DispatchSuccess | DispatchFailure:
        start = time.perf_counter()
        skill: BaseSkill | None = None

        try:
            skill = self.resolve(request)
            args = validate_input(skill, self.build_input(skill, request))

            logger.info(
                f"Executing skill: {skill.id} request_id={request.request_id} "
                f"session_id={request.session_id} source={request.source}"
            )
            result = await self._run(skill, args)

            execution_ms = self._elapsed_ms(start)
            envelope = self._normalize(skill, result, execution_ms, request)
            logger.info(f"Skill {skill.id} completed in {execution_ms}ms")
            return envelope

        except SkillError as e:
            execution_ms = self._elapsed_ms(start)
            logger.warning(f"Dispatch failed: kind={e.error_kind} {e.message}")
            return self._failure(e, skill, request, execution_ms)

    async def _run(self, skill: BaseSkill, args: dict[str, Any]) -> SkillResult:
        """
        Execute the handler under its timeout

        The handler runs in its own task so a timeout can be told apart from a
        TimeoutError raised inside the handler.

        Raises:
            SkillTimeoutError: Handler exceeded its allotted time
            HandlerError: Handler raised or returned success=False
        """
        timeout_ms = self.timeout_ms_for(skill)
        task = asyncio.ensure_future(skill.execute(args))

        try:
            done, _ = await asyncio.wait({task}, timeout=timeout_ms / 1000)
        except asyncio.CancelledError:
            task.cancel()
            raise

        if not done:
            self._abandon(task)
            logger.warning(f"Skill {skill.id} exceeded {timeout_ms}ms, abandoning execution")
            raise SkillTimeoutError(skill.id, timeout_ms)

        try:
            raw = task.result()
        except asyncio.CancelledError as e:
            raise HandlerError(skill.id, "execution was cancelled", skill.name) from e
        except Exception as e:
            logger.error(f"Skill {skill.id} failed: {type(e).__name__}: {e}", exc_info=True)
            raise HandlerError(skill.id, f"{type(e).__name__}: {e}", skill.name) from e

        if not isinstance(raw, SkillResult):
            raw = SkillResult(success=True, data=raw)

        if not raw.success:
            raise HandlerError(skill.id, raw.error or "Unknown error", skill.name)

        return raw

    def _normalize(
        self,
        skill: BaseSkill,
        result: SkillResult,
        execution_ms: int,
        request: DispatchRequest,
    ) -> DispatchSuccess:
        """
        Build the success envelope

        Raises:
            HandlerError: The handler's result cannot be shaped into an envelope
        """
        try:
            return self.normalizer.normalize(
                skill, result, execution_ms=execution_ms, request_id=request.request_id
            )
        except Exception as e:
            logger.error(f"Skill {skill.id} returned an invalid result: {e}", exc_info=True)
            raise HandlerError(skill.id, f"invalid result: {e}", skill.name) from e

    def _abandon(self, task: asyncio.Task[Any]) -> None:
        task.cancel()
        self._abandoned.add(task)
        task.add_done_callback(self._discard_abandoned)

    def _discard_abandoned(self, task: asyncio.Task[Any]) -> None:
        self._abandoned.discard(task)
        # Retrieve the outcome so a late result or error is dropped quietly
        if not task.cancelled():
            task.exception()

    @staticmethod
    def _elapsed_ms(start: float) -> int:
        return round((time.perf_counter() - start) * 1000)

    def _failure(
        self,
        error: SkillError,
        skill: BaseSkill | None,
        request: DispatchRequest,
        execution_ms: int,
    ) -> DispatchFailure:
        skill_id = getattr(error, "skill_id", None) or (skill.id if skill else request.skill_id)
        return DispatchFailure(
            error_kind=error.error_kind,
            message=error.message,
            user_message=error.user_message,
            skill_id=skill_id,
            invalid_fields=error.fields if isinstance(error, InvalidInputError) else None,
            follow_ups=list(FAILURE_FOLLOW_UPS),
            execution_ms=execution_ms,
            request_id=request.request_id,
        )
