"""Unit tests for the game controller."""

import pytest

from charades.engine import GameController, new_game, new_tutorial
from charades.errors import InvalidConfiguration
from charades.rules import EventKind, Gesture, SCORED_PHRASE_DELAY_MS, Variant
from charades.scheduler import Scheduler
from charades.state import GameSession, PhraseSequence


def _kinds(controller: GameController) -> list[EventKind]:
    return [e.kind for e in controller.events]


def _make_game(phrases=("A", "B", "C"), seconds: int = 60) -> GameController:
    controller = new_game(list(phrases), seconds, scheduler=Scheduler())
    controller.start()
    return controller


def _make_tutorial(phrases=("Tap", "Swipe", "Finish")) -> GameController:
    return new_tutorial(list(phrases), scheduler=Scheduler())


def test_new_game():
    controller = _make_game()
    assert controller.session.variant == Variant.NORMAL
    assert controller.session.seconds_remaining == 60
    assert controller.input_enabled
    assert not controller.ended
    assert controller.events == []


def test_new_game_rejects_bad_config():
    with pytest.raises(InvalidConfiguration):
        new_game([], 60)
    with pytest.raises(InvalidConfiguration):
        new_game(["A"], 0)


def test_tutorial_has_no_timer():
    controller = _make_tutorial()
    controller.start()
    assert controller.session.seconds_remaining is None
    assert controller.scheduler.pending_count() == 0


def test_tap_scores_and_gates_input():
    controller = _make_game()
    assert controller.handle_gesture(Gesture.TAP) is True
    assert controller.sequence.score == 1
    assert controller.sequence.current_index == 1
    assert not controller.input_enabled
    assert _kinds(controller) == [EventKind.SCORE]
    assert controller.events[0].phrase_index == 0

    controller.scheduler.advance(SCORED_PHRASE_DELAY_MS - 1)
    assert not controller.input_enabled
    controller.scheduler.advance(1)
    assert controller.input_enabled
    assert _kinds(controller) == [EventKind.SCORE, EventKind.ADVANCE]
    assert controller.events[1].phrase_index == 1


def test_gestures_dropped_during_score_delay():
    controller = _make_game()
    controller.handle_gesture(Gesture.TAP)
    before = list(controller.events)
    for gesture in (Gesture.TAP, Gesture.SWIPE_FORWARD, Gesture.SWIPE_BACKWARD, Gesture.TAP):
        assert controller.handle_gesture(gesture) is False
    assert controller.events == before
    assert controller.sequence.score == 1
    assert controller.sequence.current_index == 1


def test_swipe_forward_passes_immediately():
    controller = _make_game()
    assert controller.handle_gesture(Gesture.SWIPE_FORWARD) is True
    assert controller.sequence.current_index == 1
    assert controller.sequence.score == 0
    assert controller.input_enabled
    assert _kinds(controller) == [EventKind.PASS, EventKind.ADVANCE]
    assert controller.events[0].phrase_index == 0


def test_swipe_backward_rejects_without_mutation():
    controller = _make_game()
    assert controller.handle_gesture(Gesture.SWIPE_BACKWARD) is False
    assert controller.sequence.current_index == 0
    assert controller.sequence.score == 0
    assert _kinds(controller) == [EventKind.REJECT]


def test_gesture_accepts_string_value():
    controller = _make_game()
    controller.handle_gesture("swipe_forward")
    assert controller.sequence.current_index == 1


def test_all_guessed_ends_after_delay():
    controller = _make_game(phrases=("A", "B"))
    controller.handle_gesture(Gesture.TAP)
    controller.scheduler.advance(SCORED_PHRASE_DELAY_MS)
    controller.handle_gesture(Gesture.TAP)
    assert controller.sequence.all_guessed()
    assert not controller.ended
    controller.scheduler.advance(SCORED_PHRASE_DELAY_MS)
    assert controller.ended
    assert not controller.input_enabled
    # the first countdown tick lands on the same millisecond as the second delay
    assert [k for k in _kinds(controller) if k != EventKind.TICK] == [
        EventKind.SCORE,
        EventKind.ADVANCE,
        EventKind.SCORE,
        EventKind.GAME_END,
    ]
    end = controller.events[-1]
    assert end.snapshot.score == 2
    assert end.snapshot.guessed == (True, True)
    # countdown was cancelled with the game
    assert controller.scheduler.pending_count() == 0


def test_listener_receives_events():
    received = []
    controller = new_game(["A", "B"], 30, scheduler=Scheduler(), listener=received.append)
    controller.start()
    controller.handle_gesture(Gesture.SWIPE_FORWARD)
    assert [e.kind for e in received] == [EventKind.PASS, EventKind.ADVANCE]


def test_countdown_ticks_and_expires():
    controller = _make_game(seconds=2)
    controller.scheduler.advance(1000)
    assert controller.session.seconds_remaining == 1
    assert _kinds(controller) == [EventKind.TICK]
    assert controller.events[0].remaining_seconds == 1
    controller.scheduler.advance(1000)
    assert controller.ended
    assert controller.session.seconds_remaining == 0
    assert _kinds(controller) == [EventKind.TICK, EventKind.TIME_EXPIRED, EventKind.GAME_END]
    controller.scheduler.advance(5000)
    assert len(controller.events) == 3


def test_time_expiry_during_score_delay_ends_once():
    controller = _make_game(phrases=("A", "B", "C"), seconds=1)
    controller.scheduler.advance(800)
    controller.handle_gesture(Gesture.TAP)
    controller.scheduler.advance(1000)
    assert controller.ended
    assert _kinds(controller) == [EventKind.SCORE, EventKind.TIME_EXPIRED, EventKind.GAME_END]
    assert controller.snapshot().score == 1


def test_start_is_idempotent():
    controller = _make_game(seconds=5)
    controller.start()
    assert controller.scheduler.pending_count() == 1


def test_no_events_after_end():
    controller = _make_game(phrases=("Only",))
    controller.handle_gesture(Gesture.TAP)
    controller.scheduler.advance(SCORED_PHRASE_DELAY_MS)
    assert controller.ended
    count = len(controller.events)
    for gesture in Gesture:
        assert controller.handle_gesture(gesture) is False
    controller.scheduler.advance(120_000)
    assert len(controller.events) == count
    assert _kinds(controller).count(EventKind.GAME_END) == 1


def test_teardown_cancels_timer_and_score_callback():
    controller = _make_game()
    controller.handle_gesture(Gesture.TAP)
    assert controller.scheduler.pending_count() == 2
    controller.teardown()
    assert controller.scheduler.pending_count() == 0
    controller.scheduler.advance(120_000)
    assert _kinds(controller) == [EventKind.SCORE]
    assert controller.handle_gesture(Gesture.SWIPE_FORWARD) is False
    assert controller.sequence.current_index == 1


def test_rejected_by_policy_is_silent():
    controller = _make_tutorial()
    assert controller.handle_gesture(Gesture.SWIPE_FORWARD) is False
    assert controller.events == []
    assert controller.sequence.current_index == 0


def test_tutorial_walkthrough():
    controller = _make_tutorial()
    # card 0: only tap
    assert controller.handle_gesture(Gesture.SWIPE_FORWARD) is False
    assert controller.handle_gesture(Gesture.TAP) is True
    controller.scheduler.advance(SCORED_PHRASE_DELAY_MS)
    assert controller.sequence.current_index == 1

    # card 1: only swipe forward
    assert controller.handle_gesture(Gesture.TAP) is False
    assert controller.sequence.score == 1
    assert controller.handle_gesture(Gesture.SWIPE_FORWARD) is True
    assert controller.sequence.current_index == 2
    assert not controller.ended

    # final card: tapping moves away from it and ends the tutorial without waiting
    assert controller.handle_gesture(Gesture.TAP) is True
    assert controller.ended
    assert controller.sequence.score == 2
    assert not controller.sequence.all_guessed()
    assert _kinds(controller)[-2:] == [EventKind.SCORE, EventKind.GAME_END]

    # the pending score callback was cancelled; no ADVANCE after the end
    controller.scheduler.advance(SCORED_PHRASE_DELAY_MS)
    assert _kinds(controller)[-1] == EventKind.GAME_END
    assert _kinds(controller).count(EventKind.GAME_END) == 1


def test_tutorial_swipe_backward_on_final_card_does_not_end():
    controller = _make_tutorial()
    controller.handle_gesture(Gesture.TAP)
    controller.scheduler.advance(SCORED_PHRASE_DELAY_MS)
    controller.handle_gesture(Gesture.SWIPE_FORWARD)
    assert controller.sequence.current_index == 2
    controller.handle_gesture(Gesture.SWIPE_BACKWARD)
    assert not controller.ended
    assert _kinds(controller)[-1] == EventKind.REJECT


def test_tutorial_single_card_ends_on_tap():
    controller = _make_tutorial(phrases=("Tap to finish",))
    controller.handle_gesture(Gesture.TAP)
    assert controller.ended
    assert controller.snapshot().score == 1
    controller.scheduler.advance(SCORED_PHRASE_DELAY_MS)
    assert _kinds(controller) == [EventKind.SCORE, EventKind.GAME_END]


def test_controller_rejects_normal_session_without_seconds():
    session = GameSession(sequence=PhraseSequence.create(["A"]), variant=Variant.NORMAL)
    with pytest.raises(InvalidConfiguration):
        GameController(session)


def test_events_since():
    controller = _make_game()
    controller.handle_gesture(Gesture.SWIPE_FORWARD)
    controller.handle_gesture(Gesture.SWIPE_BACKWARD)
    assert [e.kind for e in controller.events_since(2)] == [EventKind.REJECT]
    assert controller.events_since(10) == []
