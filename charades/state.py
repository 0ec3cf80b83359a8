"""Game state types for charades."""

from dataclasses import dataclass, field
from typing import Iterator, Optional

from charades.errors import IndexOutOfRange, InvalidConfiguration
from charades.rules import EventKind, Variant


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only copy of a finished (or torn down) game, handed to the results view."""

    phrases: tuple[str, ...]
    guessed: tuple[bool, ...]
    score: int
    phrase_count: int

    def results(self) -> Iterator[tuple[str, bool]]:
        """Yield (phrase, guessed) rows in play order."""
        return iter(zip(self.phrases, self.guessed))

    def unguessed_phrases(self) -> list[str]:
        return [p for p, g in zip(self.phrases, self.guessed) if not g]


class PhraseSequence:
    """
    The phrases of one game, which of them have been guessed, and which one
    is currently shown. Scoring or passing moves to the next unguessed phrase,
    wrapping around the end of the list.
    """

    def __init__(self, phrases: tuple[str, ...]):
        self._phrases = phrases
        self._guessed = [False] * len(phrases)
        self._score = 0
        self._current_index = 0

    @classmethod
    def create(cls, phrases) -> "PhraseSequence":
        """Build a sequence from a non-empty ordered list of phrases."""
        phrases = tuple(phrases or ())
        if not phrases:
            raise InvalidConfiguration("phrases must contain at least one phrase")
        if not all(isinstance(p, str) for p in phrases):
            raise InvalidConfiguration("every phrase must be a string")
        return cls(phrases)

    @property
    def score(self) -> int:
        return self._score

    @property
    def current_index(self) -> int:
        return self._current_index

    def phrase_count(self) -> int:
        return len(self._phrases)

    def current_phrase(self) -> str:
        return self._phrases[self._current_index]

    def phrase_at(self, index: int) -> str:
        self._check_index(index)
        return self._phrases[index]

    def is_guessed_at(self, index: int) -> bool:
        self._check_index(index)
        return self._guessed[index]

    def all_guessed(self) -> bool:
        return self._score == len(self._phrases)

    def mark_guessed(self) -> bool:
        """
        Mark the current phrase guessed and advance to the next unguessed one.
        Returns True if every phrase has now been guessed.
        """
        if self.all_guessed():
            raise InvalidConfiguration("all phrases are already guessed")
        self._guessed[self._current_index] = True
        self._score += 1
        return self._advance()

    def pass_phrase(self) -> bool:
        """Skip the current phrase without scoring it. Returns the advance result."""
        return self._advance()

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            phrases=self._phrases,
            guessed=tuple(self._guessed),
            score=self._score,
            phrase_count=len(self._phrases),
        )

    def _advance(self) -> bool:
        # Terminal: nothing left to move to, index stays where the last phrase was guessed
        if self.all_guessed():
            return True
        count = len(self._phrases)
        self._current_index = (self._current_index + 1) % count
        while self._guessed[self._current_index]:
            self._current_index = (self._current_index + 1) % count
        return False

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._phrases):
            raise IndexOutOfRange(f"phrase index {index} outside [0, {len(self._phrases)})")


@dataclass
class Event:
    """A single emitted signal, kept in the controller's history."""

    kind: EventKind
    at_ms: int
    phrase_index: int
    remaining_seconds: Optional[int] = None
    snapshot: Optional[GameSnapshot] = None


@dataclass
class GameSession:
    """Everything one game owns. Mutated only by its GameController."""

    sequence: PhraseSequence
    variant: Variant = Variant.NORMAL
    input_enabled: bool = True
    seconds_remaining: Optional[int] = None
    ended: bool = False
    events: list[Event] = field(default_factory=list)
