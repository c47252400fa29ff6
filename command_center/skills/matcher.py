"""
Free-text skill resolution

The dispatcher only depends on the ``SkillMatcher`` protocol, so the keyword
heuristic below can be replaced by a smarter matcher without touching it.
"""

import logging
import re
from collections.abc import Sequence
from typing import NamedTuple, Protocol

from command_center.skills.base import BaseSkill
from command_center.skills.registry import SkillRegistry

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"[^a-z0-9]+")

STOPWORDS = frozenset({"a", "an", "and", "at", "for", "in", "of", "on", "the", "to"})


class SkillMatcher(Protocol):
    """Resolves free text to a registered skill id"""

    def resolve(self, text: str) -> str | None: ...


class MatchScore(NamedTuple):
    """Compared lexicographically; higher is a better match"""

    exact: int
    phrase_length: int
    keyword_hits: int

    @property
    def matched(self) -> bool:
        return any(self)


NO_MATCH = MatchScore(0, 0, 0)


def tokenize(text: str) -> list[str]:
    """Lowercase, drop punctuation and split on whitespace"""
    return _NON_WORD.sub(" ", text.lower()).split()


def contains_phrase(tokens: Sequence[str], phrase: Sequence[str]) -> bool:
    """True if ``phrase`` occurs in ``tokens`` as a contiguous run"""
    if not phrase or len(phrase) > len(tokens):
        return False
    width = len(phrase)
    return any(
        list(tokens[start : start + width]) == list(phrase)
        for start in range(len(tokens) - width + 1)
    )


class KeywordSkillMatcher:
    """
    Matches text against skill examples and vocabulary

    Scoring, per skill:
    1. exact: the text equals one of the skill's examples
    2. phrase_length: token count of the longest example contained in the text
    3. keyword_hits: distinct name, domain and keyword terms found in the text

    The highest score wins. Ties go to the skill registered first.
    """

    def __init__(self, registry: SkillRegistry) -> None:
        self.registry = registry

    def score(self, skill: BaseSkill, tokens: Sequence[str]) -> MatchScore:
        if not tokens:
            return NO_MATCH

        exact = 0
        phrase_length = 0
        for example in skill.examples:
            example_tokens = tokenize(example)
            if example_tokens == list(tokens):
                exact = 1
            if contains_phrase(tokens, example_tokens):
                phrase_length = max(phrase_length, len(example_tokens))

        terms = {
            token
            for token in tokenize(f"{skill.name} {skill.domain.value}")
            if token not in STOPWORDS
        }
        phrases = {tuple(tokenize(keyword)) for keyword in skill.keywords}
        keyword_hits = sum(1 for term in terms if term in tokens)
        keyword_hits += sum(1 for phrase in phrases if phrase and contains_phrase(tokens, phrase))

        return MatchScore(exact, phrase_length, keyword_hits)

    def resolve(self, text: str) -> str | None:
        tokens = tokenize(text)
        best_id: str | None = None
        best_score = NO_MATCH

        for skill in self.registry.list_all():
            score = self.score(skill, tokens)
            # Strict comparison keeps the earliest registered skill on ties
            if score.matched and score > best_score:
                best_id, best_score = skill.id, score

        logger.debug(f"Resolved {text!r} -> {best_id} (score={tuple(best_score)})")
        return best_id
