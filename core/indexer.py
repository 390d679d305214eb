"""Indexer: normalizes and tokenizes verses, builds the token → verse-ids
inverted index, and ranks it by the number of verses per token.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from core.records import Verse
from core.text import DEFAULT_LOCALE, normalize, tokenize

TIE_BREAKS = ("first-seen", "token")


@dataclass
class IndexEntry:
    token: str
    verse_ids: list[str]

    @property
    def count(self) -> int:
        return len(self.verse_ids)


# ── Tokenizing ──────────────────────────────────────────────────────

def tokenize_verse(verse: Verse, locale: str = DEFAULT_LOCALE) -> tuple[str, list[str]]:
    """Return (verse id, distinct tokens in first-occurrence order)."""
    return verse.id, tokenize(normalize(verse.text, locale))


# ── Inverted Index ──────────────────────────────────────────────────

def build_index(
    verse_tokens: Iterable[tuple[str, Iterable[str]]],
    stopwords: frozenset[str] = frozenset(),
) -> dict[str, list[str]]:
    """Fold (verse id, tokens) pairs into ``{token: [verse ids]}``.

    Stopwords are skipped.  Each verse id is recorded at most once per token,
    so the list length is the number of distinct verses containing the token.
    Tokens and ids keep their first-seen order.
    """
    index: dict[str, dict[str, None]] = {}
    for verse_id, tokens in verse_tokens:
        for token in tokens:
            if token in stopwords:
                continue
            index.setdefault(token, {}).setdefault(verse_id, None)
    return {token: list(ids) for token, ids in index.items()}


# ── Ranking ─────────────────────────────────────────────────────────

def rank_index(index: dict[str, list[str]], tie_break: str = "first-seen") -> list[IndexEntry]:
    """Sort entries by verse count, descending.

    Equal counts keep first-seen token order (``"first-seen"``, relies on a
    stable sort over the index's insertion order) or are ordered by token
    (``"token"``).
    """
    if tie_break not in TIE_BREAKS:
        raise ValueError(f"tie_break must be one of {list(TIE_BREAKS)}, got '{tie_break}'")

    entries = [IndexEntry(token, ids) for token, ids in index.items()]
    if tie_break == "token":
        return sorted(entries, key=lambda e: (-e.count, e.token))
    return sorted(entries, key=lambda e: e.count, reverse=True)


def index_verses(
    verses: Iterable[Verse],
    stopwords: frozenset[str] = frozenset(),
    locale: str = DEFAULT_LOCALE,
    tie_break: str = "first-seen",
) -> list[IndexEntry]:
    """Tokenize every verse, index the whole corpus and rank it."""
    verse_tokens = [tokenize_verse(v, locale) for v in verses]
    return rank_index(build_index(verse_tokens, stopwords), tie_break)
