"""Errors raised by the charades engine."""


class InvalidConfiguration(ValueError):
    """Session could not be built from the given phrases or settings."""


class IndexOutOfRange(IndexError):
    """Phrase index outside [0, phrase_count)."""
