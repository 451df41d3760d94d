"""Tests for skill activation matching."""

from skillshelf.core.search import SkillMatcher, tokenize
from skillshelf.core.skill_def import SkillDef


def _skill(skill_id: str, description: str) -> SkillDef:
    return SkillDef(id=skill_id, name=skill_id, description=description, content="")


SKILLS = [
    _skill("trust-web3-provider", "Integrate the Trust Wallet Web3 provider into a dApp"),
    _skill("wallet-core", "Derive addresses and sign transactions with wallet-core"),
    _skill("deep-links", "Build Trust Wallet deep links for payments"),
    _skill("assets", "Add token logos and info to the Trust Wallet assets repository"),
]


def test_tokenize_drops_stop_words_and_punctuation():
    assert tokenize("How do I sign a Transaction, with wallet-core?") == [
        "sign",
        "transaction",
        "wallet",
        "core",
    ]


def test_name_hits_rank_above_description_hits():
    matches = SkillMatcher().rank("wallet core signing transactions", SKILLS)

    assert matches[0].skill.id == "wallet-core"
    assert "transaction" in matches[0].matched_terms


def test_plural_insensitive():
    matches = SkillMatcher().rank("deep link", SKILLS)

    assert matches[0].skill.id == "deep-links"


def test_zero_scores_are_omitted():
    matches = SkillMatcher().rank("token logos", SKILLS)

    assert [m.skill.id for m in matches] == ["assets"]


def test_ties_break_by_id_and_limit_applies():
    matches = SkillMatcher().rank("trust", SKILLS)

    assert [m.skill.id for m in matches] == [
        "trust-web3-provider",
        "assets",
        "deep-links",
    ]
    assert len(SkillMatcher().rank("trust", SKILLS, limit=2)) == 2


def test_empty_query_returns_nothing():
    assert SkillMatcher().rank("the a of", SKILLS) == []
