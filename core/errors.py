"""Error taxonomy shared by the pipeline and the CLI.

Every failure is fatal for the run: the CLI reports the message and exits
without writing output.
"""

from __future__ import annotations


class VersoError(Exception):
    """Base class for all errors raised by verso."""


class ConfigError(VersoError):
    """Substitution tables, stopwords or locale are missing or malformed."""

    def __init__(self, source: str, errors: list[str]):
        self.source = source
        self.errors = errors
        super().__init__(f"{source}: " + "; ".join(errors))


class InputError(VersoError):
    """The input CSV is unreadable or has a malformed row."""


class OutputError(VersoError):
    """The output destination could not be written."""
