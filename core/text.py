"""Shared text normalization and tokenization for the token index.

normalize() must run before tokenize(): the tokenizer assumes lowercase,
symbol-free input, and stopwords are compared against its output.
"""

from __future__ import annotations

import re
import unicodedata

from nltk.tokenize import TweetTokenizer

from core.errors import ConfigError

DEFAULT_LOCALE = "en-gb"

_LOCALE_TAG = re.compile(r"^[A-Za-z]{2,8}(?:[-_][A-Za-z0-9]{1,8})*$")

# Letters whose lowercase form differs from the Unicode default, by language.
_LOCALE_LOWER = {
    "tr": {"I": "ı", "İ": "i"},
    "az": {"I": "ı", "İ": "i"},
}

_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")
_SYMBOLS = re.compile(r"[^a-z0-9\s\u00c0-\u017f]", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")

_tokenizer = TweetTokenizer(preserve_case=False, match_phone_numbers=False)


def is_locale_tag(locale: str) -> bool:
    return bool(_LOCALE_TAG.match(locale or ""))


def case_fold(text: str, locale: str = DEFAULT_LOCALE) -> str:
    """Lowercase *text* using the casing rules of *locale*."""
    if not is_locale_tag(locale):
        raise ConfigError("locale", [f"'{locale}' is not a valid locale tag."])
    language = re.split(r"[-_]", locale)[0].lower()
    special = _LOCALE_LOWER.get(language)
    if special:
        text = "".join(special.get(ch, ch) for ch in text)
    return text.lower()


def normalize(text: str, locale: str = DEFAULT_LOCALE) -> str:
    """Decompose → strip diacritics → case-fold → strip symbols → squeeze spaces.

    Letters in U+00C0–U+017F that have no canonical decomposition (ø, ł, æ,
    ß...) survive the diacritic strip and are kept by the symbol filter.
    """
    text = unicodedata.normalize("NFD", text)
    text = _COMBINING_MARKS.sub("", text)
    text = case_fold(text, locale)
    text = _SYMBOLS.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def tokenize(text: str) -> list[str]:
    """Split normalized text into words, keeping the first occurrence of each."""
    return list(dict.fromkeys(_tokenizer.tokenize(text)))
