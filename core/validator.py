"""Two-level validation of the static configuration: syntactic, semantic.

Syntactic = structure and types of the rule table and stopword list.
Semantic  = every rule key compiles, keys are unique within a category,
            stopwords are already in normalized token form.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

from core.patterns import CATEGORIES, make_pattern
from core.text import DEFAULT_LOCALE, is_locale_tag, normalize


# ── Rule tables ─────────────────────────────────────────────────────

def validate_rules_syntactic(table: object) -> list[str]:
    """Check the ``{category: [[key, replacement], ...]}`` shape."""
    errors: list[str] = []

    if not isinstance(table, dict):
        return ["Rule table must be an object keyed by category."]

    unknown = sorted(set(table) - set(CATEGORIES))
    if unknown:
        errors.append(f"Unknown categories {unknown}. Expected {list(CATEGORIES)}.")

    for name in CATEGORIES:
        rules = table.get(name)
        if not isinstance(rules, list):
            errors.append(f"'{name}' is required and must be a list of [key, replacement] pairs.")
            continue
        for i, rule in enumerate(rules):
            if (
                not isinstance(rule, list)
                or len(rule) != 2
                or not all(isinstance(part, str) for part in rule)
            ):
                errors.append(f"'{name}[{i}]' must be a [key, replacement] pair of strings.")
            elif not rule[0]:
                errors.append(f"'{name}[{i}]' has an empty key.")

    return errors


def validate_rules_semantic(table: dict) -> list[str]:
    """Compile every key and reject duplicate keys within a category."""
    errors: list[str] = []

    for name in CATEGORIES:
        seen: set[str] = set()
        for i, (key, _) in enumerate(table[name]):
            try:
                make_pattern(key)
            except re.error as e:
                errors.append(f"'{name}[{i}]' key '{key}' does not compile: {e}.")
            folded = key.lower()
            if folded in seen:
                errors.append(f"'{name}[{i}]' repeats key '{key}'.")
            seen.add(folded)

    return errors


# ── Stopwords ───────────────────────────────────────────────────────

def validate_stopwords(words: object, locale: str = DEFAULT_LOCALE) -> list[str]:
    if not isinstance(words, list) or not all(isinstance(w, str) for w in words):
        return ["Stopwords must be a list of strings."]
    if not is_locale_tag(locale):
        return [f"'{locale}' is not a valid locale tag."]

    # A stopword that normalization would change can never match a token.
    return [
        f"Stopword '{w}' is not normalized (expected '{normalize(w, locale)}')."
        for w in words
        if normalize(w, locale) != w
    ]


# ── Top-level validate ──────────────────────────────────────────────

def _load_json(path: str) -> tuple[object, list[str]]:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8")), []
    except json.JSONDecodeError as e:
        return None, [f"Invalid JSON: {e}"]
    except FileNotFoundError:
        return None, [f"File not found: {path}"]
    except OSError as e:
        return None, [f"Could not read {path}: {e}"]


def validate_rules_file(rules_path: str) -> tuple[object, list[str]]:
    """Load and validate a rule table.  Returns (table, errors)."""
    table, errors = _load_json(rules_path)
    if errors:
        return None, errors
    errors = validate_rules_syntactic(table)
    if errors:
        return None, errors
    errors = validate_rules_semantic(table)
    if errors:
        return None, errors
    return table, []


def validate_stopwords_file(
    stopwords_path: str,
    locale: str = DEFAULT_LOCALE,
) -> tuple[object, list[str]]:
    """Load and validate a stopword list.  Returns (words, errors)."""
    words, errors = _load_json(stopwords_path)
    if errors:
        return None, errors
    errors = validate_stopwords(words, locale)
    if errors:
        return None, errors
    return words, []


def validate_config(
    rules_path: str,
    stopwords_path: str,
    locale: str = DEFAULT_LOCALE,
) -> tuple[bool, list[str]]:
    """Validate every piece of static configuration.

    Returns (passed, errors); errors are prefixed with the offending file.
    """
    errors: list[str] = []
    if not is_locale_tag(locale):
        errors.append(f"locale: '{locale}' is not a valid locale tag.")
    _, rule_errors = validate_rules_file(rules_path)
    errors.extend(f"{rules_path}: {e}" for e in rule_errors)
    if is_locale_tag(locale):
        _, stop_errors = validate_stopwords_file(stopwords_path, locale)
        errors.extend(f"{stopwords_path}: {e}" for e in stop_errors)
    return not errors, errors
