"""Tests for the keyword relevance filter."""

import pytest

from filtering.keywords import (
    ALLOW,
    EXCLUDE,
    REQUIRE,
    KeywordRules,
    is_relevant,
    matches_required_groups,
    relevance_score,
)


@pytest.fixture
def rules():
    return KeywordRules.from_lists(
        exclude=["nba", "celebrity", "real estate"],
        allow=["nonprofit", "foundation"],
    )


def test_exclude_keyword_drops_item(rules):
    assert not is_relevant("NBA finals recap", "Warriors win in overtime", rules, "general")


def test_allow_keyword_vetoes_exclude(rules):
    assert is_relevant("NBA star launches nonprofit", "New youth program", rules, "general")


def test_neutral_item_kept(rules):
    assert is_relevant("City council approves budget", "Funding for libraries", rules, "general")


def test_score_counts_each_keyword(rules):
    assert relevance_score("nba celebrity gossip", rules) == 2
    assert relevance_score("nba celebrity nonprofit foundation", rules) == 0
    assert relevance_score("foundation news", rules) == -1


def test_word_boundary(rules):
    # "nba" inside another word is not a match
    assert relevance_score("snbax release notes", rules) == 0
    assert relevance_score("the nba's new season", rules) == 1


def test_multiword_keyword(rules):
    assert not is_relevant("Real Estate roundup", None, rules)


def test_case_insensitive(rules):
    assert not is_relevant("CELEBRITY wedding", "", rules)


def test_none_inputs(rules):
    assert is_relevant(None, None, rules)


def test_required_groups_are_conjunctive():
    rules = KeywordRules.from_lists(
        exclude=[],
        allow=[],
        required={"funder": {"geography": ["california", "oakland"], "subject": ["philanthrop", "grant"]}},
    )
    assert is_relevant("Oakland foundation announces grant", "", rules, "funder")
    assert not is_relevant("Oakland opens new park", "", rules, "funder")
    assert not is_relevant("National grant program expands", "", rules, "funder")
    # Other categories have no required groups
    assert is_relevant("Oakland opens new park", "", rules, "general")


def test_required_groups_match_stems():
    rules = KeywordRules.from_lists(
        exclude=[], allow=[], required={"nonprofit": {"geo": ["california"], "subject": ["philanthrop"]}}
    )
    assert matches_required_groups("california philanthropy leaders meet", rules, "nonprofit")
    # Stems still need a leading word boundary
    assert not matches_required_groups("california nonphilanthropic", rules, "nonprofit")


def test_category_scoped_rule():
    rules = KeywordRules()
    rules.add("election", EXCLUDE, category="funder")
    assert relevance_score("election results", rules, "funder") == 1
    assert relevance_score("election results", rules, "general") == 0


def test_allow_rule_scoped():
    rules = KeywordRules()
    rules.add("sports", EXCLUDE)
    rules.add("youth", ALLOW, category="nonprofit")
    assert is_relevant("Youth sports league funded", "", rules, "nonprofit")
    assert not is_relevant("Youth sports league funded", "", rules, "general")


def test_require_rule_needs_group():
    rules = KeywordRules()
    with pytest.raises(ValueError):
        rules.add("california", REQUIRE, category="funder")


def test_unknown_polarity():
    with pytest.raises(ValueError):
        KeywordRules().add("x", "maybe")


def test_blank_keyword_ignored():
    rules = KeywordRules()
    rules.add("   ", EXCLUDE)
    assert rules.exclude == []
