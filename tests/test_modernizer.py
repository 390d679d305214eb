from __future__ import annotations

import dataclasses
import random

import pytest

from conftest import make_registry
from core.config import load_registry
from core.modernizer import modernize, modernize_text, replace_case
from core.patterns import make_pattern
from core.records import Verse


# ── replace_case ────────────────────────────────────────────────────

def test_capitalized_match_capitalizes_replacement():
    assert replace_case("Thou shalt not", make_pattern("thou"), "you") == "You shalt not"


def test_lowercase_match_lowercases_replacement():
    assert replace_case("and thou shalt", make_pattern("thou"), "You") == "and you shalt"


def test_only_first_character_of_match_is_inspected():
    assert replace_case("THOU", make_pattern("thou"), "you") == "You"
    assert replace_case("tHOU", make_pattern("thou"), "You") == "you"


def test_multi_word_replacement_inherits_single_case_signal():
    pattern = make_pattern("whence")
    assert replace_case("Whence comest", pattern, "where from") == "Where from comest"
    assert replace_case("whence comest", pattern, "Where From") == "where From comest"


def test_empty_replacement_is_a_no_op():
    pattern = make_pattern("thou")
    assert replace_case("Thou art", pattern, "") == "Thou art"
    assert replace_case("Thou art", pattern, None) == "Thou art"


def test_matches_whole_words_only():
    assert replace_case("a thousand thou", make_pattern("thou"), "you") == "a thousand you"


def test_every_line_is_matched():
    assert replace_case("thou\nThou", make_pattern("thou"), "you") == "you\nYou"


# ── category order ──────────────────────────────────────────────────

def test_phrases_run_before_tokens():
    registry = make_registry(phrases=[("thou art", "you are")], tokens=[("art", "is")])
    assert modernize_text("Thou art wise", registry) == "You are wise"


def test_token_rule_would_fragment_phrase_if_run_first():
    registry = make_registry(tokens=[("art", "is"), ("thou art", "you are")])
    assert modernize_text("Thou art wise", registry) == "Thou is wise"


def test_errata_correct_token_overshoot():
    registry = make_registry(tokens=[("art", "are")], errata=[("the are of", "the art of")])
    assert modernize_text("The art of war", registry) == "The art of war"
    assert modernize_text("Thou art", registry) == "Thou are"


def test_extra_runs_last():
    registry = make_registry(tokens=[("thou", "you"), ("hath", "has")], extra=[("you has", "you have")])
    assert modernize_text("Thou hath spoken", registry) == "You have spoken"


# ── two passes ──────────────────────────────────────────────────────

def test_second_pass_resolves_text_exposed_by_later_rule():
    registry = make_registry(tokens=[("c", "d"), ("a", "c")])
    verses = [Verse("1", "a")]
    assert modernize(verses, registry, passes=1) == [Verse("1", "c")]
    assert modernize(verses, registry) == [Verse("1", "d")]


# Keys only use the first half of the alphabet and replacements only the
# second, so no replacement can ever form a key match.
KEY_LETTERS = "abcdefghijklm"
OUTPUT_LETTERS = "nopqrstuvwxyz"


def _word(rng: random.Random, letters: str) -> str:
    return "".join(rng.choice(letters) for _ in range(rng.randint(2, 5)))


def _phrase(rng: random.Random, letters: str, words: int) -> str:
    return " ".join(_word(rng, letters) for _ in range(words))


def _stable_case(seed: int):
    rng = random.Random(seed)
    table = {
        name: [
            (_phrase(rng, KEY_LETTERS, words), _phrase(rng, OUTPUT_LETTERS, rng.randint(1, 3)))
            for _ in range(rng.randint(1, 6))
        ]
        for name, words in (("phrases", 2), ("tokens", 1), ("errata", 2), ("extra", 1))
    }
    keys = [key for rules in table.values() for key, _ in rules]
    verses = []
    for i in range(8):
        parts = []
        for _ in range(rng.randint(3, 10)):
            part = rng.choice(keys) if rng.random() < 0.6 else _word(rng, OUTPUT_LETTERS)
            if rng.random() < 0.3:
                part = part.capitalize()
            parts.append(part + rng.choice(["", "", ",", ".", ";"]))
        verses.append(Verse(str(i), " ".join(parts)))
    return make_registry(**table), verses


@pytest.mark.parametrize("seed", range(10))
def test_stable_rules_are_idempotent(seed):
    registry, verses = _stable_case(seed)
    once = modernize(verses, registry)
    assert modernize(once, registry) == once
    assert once != verses


def test_archaic_sentence_is_idempotent():
    registry = make_registry(
        phrases=[("art thou", "are you")],
        tokens=[("thou", "you"), ("art", "are"), ("hath", "has"), ("unto", "to")],
    )
    verses = [
        Verse("1", "Art thou he that hath come unto us?"),
        Verse("2", "THOU art; thou ART."),
        Verse("3", "Nothing archaic here."),
    ]
    once = modernize(verses, registry)
    assert modernize(once, registry) == once


def test_passes_must_be_positive():
    with pytest.raises(ValueError):
        modernize([Verse("1", "a")], make_registry(), passes=0)


# ── corpus ──────────────────────────────────────────────────────────

def test_end_to_end_example(archaic_registry):
    verses = [Verse("1", "Thou art wise"), Verse("2", "Thou art kind")]
    assert modernize(verses, archaic_registry) == [
        Verse("1", "You are wise"),
        Verse("2", "You are kind"),
    ]


def test_empty_ids_are_kept(archaic_registry):
    result = modernize([("", "thou art"), ("2", "art")], archaic_registry)
    assert result == [Verse("", "you are"), Verse("2", "are")]


def test_registry_is_immutable(archaic_registry):
    with pytest.raises(dataclasses.FrozenInstanceError):
        archaic_registry.tokens = ()


def test_bundled_rules():
    registry = load_registry()
    assert len(registry) > 0
    assert modernize_text("Wherefore art thou weeping?", registry) == "Why are you weeping?"
    verses = modernize([Verse("1", "Thou hath spoken unto thy brethren.")], registry)
    assert verses[0].text == "You have spoken to your brothers."


def test_bundled_rules_keep_sentence_case_mid_sentence():
    registry = load_registry()
    assert modernize_text("and I pray thee, hear", registry) == "and I pray you, hear"
