"""Static configuration: bundled data paths and the validated loaders.

Both loaders raise ConfigError before any verse is read, so a bad table
never produces partial output.
"""

from __future__ import annotations

from pathlib import Path

from core.errors import ConfigError
from core.patterns import PatternRegistry, build_registry
from core.text import DEFAULT_LOCALE
from core.validator import validate_rules_file, validate_stopwords_file

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_RULES_PATH = str(DATA_DIR / "archaisms.json")
DEFAULT_STOPWORDS_PATH = str(DATA_DIR / "stopwords.json")


def load_registry(rules_path: str = DEFAULT_RULES_PATH) -> PatternRegistry:
    table, errors = validate_rules_file(rules_path)
    if errors:
        raise ConfigError(rules_path, errors)
    return build_registry(table)


def load_stopwords(
    stopwords_path: str = DEFAULT_STOPWORDS_PATH,
    locale: str = DEFAULT_LOCALE,
) -> frozenset[str]:
    words, errors = validate_stopwords_file(stopwords_path, locale)
    if errors:
        raise ConfigError(stopwords_path, errors)
    return frozenset(words)
