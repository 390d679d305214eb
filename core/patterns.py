"""Pattern registry: the four ordered categories of substitution rules.

A rule key is a regular-expression fragment anchored on word boundaries and
matched case-insensitively, so plain words and phrases match literally.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import NamedTuple

# Application order: phrases contain spaces and must run before single-word
# tokens split them; errata undo false matches of the first two; extra holds
# grammatical and stylistic fixes.
CATEGORIES = ("phrases", "tokens", "errata", "extra")

RULE_FLAGS = re.IGNORECASE | re.MULTILINE


class SubstitutionRule(NamedTuple):
    key: str
    pattern: re.Pattern
    replacement: str


def make_pattern(key: str) -> re.Pattern:
    """Compile *key* into a word-boundary pattern.  Raises re.error."""
    return re.compile(rf"\b{key}\b", RULE_FLAGS)


def make_rule(key: str, replacement: str) -> SubstitutionRule:
    return SubstitutionRule(key, make_pattern(key), replacement)


@dataclass(frozen=True)
class PatternRegistry:
    phrases: tuple[SubstitutionRule, ...] = ()
    tokens: tuple[SubstitutionRule, ...] = ()
    errata: tuple[SubstitutionRule, ...] = ()
    extra: tuple[SubstitutionRule, ...] = ()

    def categories(self) -> list[tuple[str, tuple[SubstitutionRule, ...]]]:
        return [(name, getattr(self, name)) for name in CATEGORIES]

    def __len__(self) -> int:
        return sum(len(rules) for _, rules in self.categories())


def build_registry(table: dict) -> PatternRegistry:
    """Compile a validated rule table ``{category: [[key, replacement], ...]}``.

    Rule order inside each category is kept exactly as given.
    """
    return PatternRegistry(
        **{
            name: tuple(make_rule(key, replacement) for key, replacement in table.get(name, []))
            for name in CATEGORIES
        }
    )
