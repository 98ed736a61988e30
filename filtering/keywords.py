"""Keyword relevance filter for feed items.

Exclude keywords push an item out (+1 each), allow keywords pull it back
(-1 each); an item is dropped when the net score is positive. Categories
can also demand conjunctive matches across term groups, e.g. a geography
term AND a philanthropy term.
"""

import re
from dataclasses import dataclass, field

EXCLUDE = "exclude"
ALLOW = "allow"
REQUIRE = "require"
POLARITIES = (EXCLUDE, ALLOW, REQUIRE)


def _word_pattern(keyword: str) -> re.Pattern:
    """Whole-word match, tolerant of punctuation inside the keyword."""
    return re.compile(r"(?<!\w)" + re.escape(keyword.lower()) + r"(?!\w)", re.IGNORECASE)


def _stem_pattern(keyword: str) -> re.Pattern:
    """Leading-boundary match so 'philanthrop' hits 'philanthropy'."""
    return re.compile(r"(?<!\w)" + re.escape(keyword.lower()), re.IGNORECASE)


@dataclass
class _ScopedPattern:
    pattern: re.Pattern
    category: str | None = None  # None applies to every category

    def applies_to(self, category: str | None) -> bool:
        return self.category is None or self.category == category


@dataclass
class KeywordRules:
    """Compiled keyword rules, ready for scoring."""

    exclude: list[_ScopedPattern] = field(default_factory=list)
    allow: list[_ScopedPattern] = field(default_factory=list)
    # category -> group name -> patterns
    required: dict[str, dict[str, list[re.Pattern]]] = field(default_factory=dict)

    def add(self, keyword: str, polarity: str, category: str | None = None, term_group: str | None = None) -> None:
        """Compile and register one rule."""
        keyword = keyword.strip()
        if not keyword:
            return
        if polarity == EXCLUDE:
            self.exclude.append(_ScopedPattern(_word_pattern(keyword), category))
        elif polarity == ALLOW:
            self.allow.append(_ScopedPattern(_word_pattern(keyword), category))
        elif polarity == REQUIRE:
            if not category or not term_group:
                raise ValueError(f"Require rule {keyword!r} needs a category and a term group")
            groups = self.required.setdefault(category, {})
            groups.setdefault(term_group, []).append(_stem_pattern(keyword))
        else:
            raise ValueError(f"Unknown keyword polarity {polarity!r}")

    @classmethod
    def from_lists(
        cls,
        exclude: list[str],
        allow: list[str],
        required: dict[str, dict[str, list[str]]] | None = None,
    ) -> "KeywordRules":
        """Build rules from plain keyword lists (the static configuration)."""
        rules = cls()
        for kw in exclude:
            rules.add(kw, EXCLUDE)
        for kw in allow:
            rules.add(kw, ALLOW)
        for category, groups in (required or {}).items():
            for group, terms in groups.items():
                for kw in terms:
                    rules.add(kw, REQUIRE, category=category, term_group=group)
        return rules


def relevance_score(text: str, rules: KeywordRules, category: str | None = None) -> int:
    """+1 per matching exclude keyword, -1 per matching allow keyword."""
    text = (text or "").lower()
    score = 0
    for scoped in rules.exclude:
        if scoped.applies_to(category) and scoped.pattern.search(text):
            score += 1
    for scoped in rules.allow:
        if scoped.applies_to(category) and scoped.pattern.search(text):
            score -= 1
    return score


def matches_required_groups(text: str, rules: KeywordRules, category: str | None) -> bool:
    """True when every term group configured for the category has a match."""
    groups = rules.required.get(category or "", {})
    text = (text or "").lower()
    return all(
        any(p.search(text) for p in patterns)
        for patterns in groups.values()
    )


def is_relevant(title: str | None, snippet: str | None, rules: KeywordRules, category: str | None = None) -> bool:
    """Decide whether an item belongs in a category's output."""
    text = f"{title or ''} {snippet or ''}".lower()
    if relevance_score(text, rules, category) > 0:
        return False
    return matches_required_groups(text, rules, category)
