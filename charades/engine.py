"""Turn engine: maps gestures onto the phrase sequence, gates input, ends the game."""

import logging
from typing import Callable, Optional

from charades.errors import InvalidConfiguration
from charades.rules import (
    EventKind,
    Gesture,
    SCORED_PHRASE_DELAY_MS,
    Variant,
    is_gesture_accepted,
    should_terminate_after,
)
from charades.scheduler import Scheduler, TaskHandle
from charades.state import Event, GameSession, GameSnapshot, PhraseSequence
from charades.timer import CountdownTimer

logger = logging.getLogger(__name__)

Listener = Callable[[Event], None]


class GameController:
    """
    Owns one GameSession and is the only thing that mutates it.

    Gestures are applied synchronously. Scoring disables input until the
    post-score delay has elapsed on the scheduler; gestures arriving in that
    window are dropped, not queued. Normal games also run a countdown on the
    same scheduler. Once the game has ended nothing else is emitted.
    """

    def __init__(
        self,
        session: GameSession,
        scheduler: Optional[Scheduler] = None,
        listener: Optional[Listener] = None,
    ):
        if session.variant == Variant.NORMAL:
            if not session.seconds_remaining or session.seconds_remaining <= 0:
                raise InvalidConfiguration("normal games need a positive number of seconds")
        else:
            session.seconds_remaining = None
        self.session = session
        self.scheduler = scheduler or Scheduler()
        self.listener = listener
        self._score_handle: Optional[TaskHandle] = None
        self._timer: Optional[CountdownTimer] = None
        if session.variant == Variant.NORMAL:
            self._timer = CountdownTimer(self.scheduler, self._on_tick, self._on_time_expired)
        self._started = False

    @property
    def sequence(self) -> PhraseSequence:
        return self.session.sequence

    @property
    def ended(self) -> bool:
        return self.session.ended

    @property
    def input_enabled(self) -> bool:
        return self.session.input_enabled

    @property
    def events(self) -> list[Event]:
        return self.session.events

    def events_since(self, cursor: int) -> list[Event]:
        """Events emitted after the first `cursor` ones."""
        return self.session.events[max(cursor, 0):]

    def snapshot(self) -> GameSnapshot:
        return self.session.sequence.snapshot()

    def start(self) -> None:
        """Start the countdown (normal games). Calling it again does nothing."""
        if self._started or self.session.ended:
            return
        self._started = True
        if self._timer is not None:
            self._timer.start(self.session.seconds_remaining)
        logger.info(
            "Started %s game with %d phrases",
            self.session.variant.value,
            self.sequence.phrase_count(),
        )

    def handle_gesture(self, gesture: Gesture) -> bool:
        """
        Process one gesture. Returns True if it scored or passed a phrase.
        Swipe backward always tugs (REJECT) and never reaches the policy.
        """
        gesture = Gesture(gesture)
        session = self.session
        if session.ended or not session.input_enabled:
            logger.debug("Dropped %s: input disabled", gesture.value)
            return False
        if gesture == Gesture.SWIPE_BACKWARD:
            self._emit(EventKind.REJECT)
            return False
        if not is_gesture_accepted(session.variant, gesture, session.sequence):
            logger.debug(
                "Ignored %s at phrase %d (%s rules)",
                gesture.value,
                session.sequence.current_index,
                session.variant.value,
            )
            return False

        previous_index = session.sequence.current_index
        if gesture == Gesture.TAP:
            self._score()
        else:
            self._pass()

        if not session.ended and should_terminate_after(session.variant, previous_index, session.sequence):
            self._end_game()
        return True

    def teardown(self) -> None:
        """Cancel the countdown and any pending score callback; the session is discarded."""
        self._cancel_scheduled()
        self.session.input_enabled = False
        self.session.ended = True

    def _score(self) -> None:
        session = self.session
        session.input_enabled = False
        scored_index = session.sequence.current_index
        session.sequence.mark_guessed()
        self._emit(EventKind.SCORE, phrase_index=scored_index)
        self._score_handle = self.scheduler.call_later(SCORED_PHRASE_DELAY_MS, self._after_score_delay)

    def _after_score_delay(self) -> None:
        self._score_handle = None
        if self.session.ended:
            return
        if self.session.sequence.all_guessed():
            self._end_game()
            return
        self._emit(EventKind.ADVANCE)
        self.session.input_enabled = True

    def _pass(self) -> None:
        passed_index = self.session.sequence.current_index
        self.session.sequence.pass_phrase()
        self._emit(EventKind.PASS, phrase_index=passed_index)
        self._emit(EventKind.ADVANCE)

    def _on_tick(self, remaining_seconds: int) -> None:
        if self.session.ended:
            return
        self.session.seconds_remaining = remaining_seconds
        self._emit(EventKind.TICK, remaining_seconds=remaining_seconds)

    def _on_time_expired(self) -> None:
        if self.session.ended:
            return
        self.session.seconds_remaining = 0
        self._emit(EventKind.TIME_EXPIRED, remaining_seconds=0)
        self._end_game()

    def _end_game(self) -> None:
        session = self.session
        if session.ended:
            return
        session.ended = True
        session.input_enabled = False
        self._cancel_scheduled()
        snapshot = session.sequence.snapshot()
        self._emit(EventKind.GAME_END, snapshot=snapshot)
        logger.info(
            "Game ended: %d/%d guessed (%s)",
            snapshot.score,
            snapshot.phrase_count,
            session.variant.value,
        )

    def _cancel_scheduled(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        if self._score_handle is not None:
            self._score_handle.cancel()
            self._score_handle = None

    def _emit(
        self,
        kind: EventKind,
        phrase_index: Optional[int] = None,
        remaining_seconds: Optional[int] = None,
        snapshot: Optional[GameSnapshot] = None,
    ) -> None:
        """Append event to the session history and hand it to the listener."""
        event = Event(
            kind=kind,
            at_ms=self.scheduler.now_ms,
            phrase_index=self.session.sequence.current_index if phrase_index is None else phrase_index,
            remaining_seconds=remaining_seconds,
            snapshot=snapshot,
        )
        self.session.events.append(event)
        if self.listener is not None:
            self.listener(event)


def new_game(
    phrases: list[str],
    game_seconds: int,
    scheduler: Optional[Scheduler] = None,
    listener: Optional[Listener] = None,
) -> GameController:
    """Build a timed game over the given phrases. Call start() to begin the countdown."""
    sequence = PhraseSequence.create(phrases)
    session = GameSession(sequence=sequence, variant=Variant.NORMAL, seconds_remaining=game_seconds)
    return GameController(session, scheduler=scheduler, listener=listener)


def new_tutorial(
    phrases: list[str],
    scheduler: Optional[Scheduler] = None,
    listener: Optional[Listener] = None,
) -> GameController:
    """Build an untimed tutorial over a fixed, ordered phrase list."""
    sequence = PhraseSequence.create(phrases)
    session = GameSession(sequence=sequence, variant=Variant.TUTORIAL)
    return GameController(session, scheduler=scheduler, listener=listener)
