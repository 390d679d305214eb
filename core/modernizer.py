"""Modernizer: case-preserving substitution of archaic words and phrases.

Each verse goes through every rule of every category, in registry order,
and the whole sequence runs twice.  The second pass lets errata and extra
rules catch text that only became matchable after a later phrase or token
rule of the first pass ran.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from core.patterns import PatternRegistry
from core.records import Verse

MODERNIZE_PASSES = 2


def replace_case(text: str, pattern: re.Pattern, replacement: str | None) -> str:
    """Replace every match of *pattern*, copying the case of its first letter.

    Only the first character of the match is inspected: an uppercase letter
    capitalizes the replacement, anything else lower-cases its first letter.
    The rest of the replacement is emitted as written.
    """
    if not replacement:
        return text

    upper = replacement[:1].upper() + replacement[1:]
    lower = replacement[:1].lower() + replacement[1:]

    def _sub(match: re.Match) -> str:
        return upper if match.group(0)[:1].isupper() else lower

    return pattern.sub(_sub, text)


def modernize_text(text: str, registry: PatternRegistry) -> str:
    """Run one full pass of all four categories over *text*."""
    for _, rules in registry.categories():
        for rule in rules:
            text = replace_case(text, rule.pattern, rule.replacement)
    return text


def modernize(
    verses: Iterable[Verse],
    registry: PatternRegistry,
    passes: int = MODERNIZE_PASSES,
) -> list[Verse]:
    """Modernize a whole corpus.  Returns new verses; ids are kept as-is."""
    if passes < 1:
        raise ValueError(f"passes must be >= 1, got {passes}")

    result = [Verse(*v) for v in verses]
    for _ in range(passes):
        result = [Verse(v.id, modernize_text(v.text, registry)) for v in result]
    return result
