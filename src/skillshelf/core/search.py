"""Keyword matching of a task query against skill names and descriptions."""

import re

from pydantic import BaseModel

from skillshelf.core.skill_def import SkillDef

STOP_WORDS: frozenset[str] = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "by", "can", "do", "for",
        "from", "how", "i", "in", "into", "is", "it", "me", "my", "of", "on",
        "or", "should", "that", "the", "this", "to", "use", "using", "want",
        "what", "when", "with", "you", "your",
    }
)

TOKEN_PATTERN = re.compile(r"[a-z0-9]+")

NAME_WEIGHT = 3.0
DESCRIPTION_WEIGHT = 1.0


def tokenize(text: str) -> list[str]:
    """Lowercase word tokens with stop words removed."""
    return [
        token
        for token in TOKEN_PATTERN.findall(text.lower())
        if token not in STOP_WORDS and len(token) > 1
    ]


def _stem(token: str) -> str:
    # Plural-insensitive matching: "wallets" -> "wallet"
    if len(token) > 3 and token.endswith("s") and not token.endswith("ss"):
        return token[:-1]
    return token


class SkillMatch(BaseModel):
    """A skill scored against a query."""

    skill: SkillDef
    score: float
    matched_terms: list[str]


class SkillMatcher:
    """Rank skills the way a host assistant would shortlist them by description."""

    def __init__(
        self,
        name_weight: float = NAME_WEIGHT,
        description_weight: float = DESCRIPTION_WEIGHT,
    ):
        self.name_weight = name_weight
        self.description_weight = description_weight

    def score(self, query_terms: set[str], skill: SkillDef) -> tuple[float, list[str]]:
        name_terms = {_stem(t) for t in tokenize(skill.name)}
        description_terms = {_stem(t) for t in tokenize(skill.description)}

        score = 0.0
        matched = []
        for term in sorted(query_terms):
            hit = False
            if term in name_terms:
                score += self.name_weight
                hit = True
            if term in description_terms:
                score += self.description_weight
                hit = True
            if hit:
                matched.append(term)

        # Normalize by query size so long queries don't dominate
        if query_terms:
            score /= len(query_terms)
        return round(score, 4), matched

    def rank(
        self, query: str, skills: list[SkillDef], limit: int | None = None
    ) -> list[SkillMatch]:
        """
        Score skills against a free-text query.

        Args:
            query: Task description, e.g. "sign a transaction with wallet core"
            skills: Candidate skills
            limit: Maximum number of matches to return

        Returns:
            Matches with a positive score, best first, ties broken by skill id
        """
        query_terms = {_stem(t) for t in tokenize(query)}
        if not query_terms:
            return []

        matches = []
        for skill in skills:
            score, matched = self.score(query_terms, skill)
            if score > 0:
                matches.append(SkillMatch(skill=skill, score=score, matched_terms=matched))

        matches.sort(key=lambda m: (-m.score, m.skill.id))
        if limit is not None:
            matches = matches[:limit]
        return matches
