"""Game rules, constants and gesture policies for charades."""

from enum import Enum


class Gesture(str, Enum):
    """Discrete input signals from the input layer."""

    TAP = "tap"
    SWIPE_FORWARD = "swipe_forward"
    SWIPE_BACKWARD = "swipe_backward"


class Variant(str, Enum):
    """Which rule set a session plays under."""

    NORMAL = "normal"
    TUTORIAL = "tutorial"


class EventKind(str, Enum):
    """Signals emitted by the controller to the presentation layer."""

    SCORE = "score"
    PASS = "pass"
    REJECT = "reject"
    ADVANCE = "advance"
    TICK = "tick"
    TIME_EXPIRED = "time_expired"
    GAME_END = "game_end"


# Game-clock time a scored phrase stays on screen before the next one is shown
SCORED_PHRASE_DELAY_MS = 500

# Countdown resolution
TICK_INTERVAL_MS = 1000

# Index of the "swipe to pass" card in the tutorial phrase list
SWIPE_TO_PASS_INDEX = 1

# Gestures that are forwarded to the active policy (swipe backward never is)
GAME_GESTURES = (Gesture.TAP, Gesture.SWIPE_FORWARD)


def is_gesture_accepted(variant: Variant, gesture: Gesture, sequence) -> bool:
    """
    Return True if the active policy lets this gesture reach the model.
    Normal accepts tap and swipe forward anywhere; the tutorial only accepts
    swipe forward on the swipe-to-pass card and tap everywhere else.
    """
    if gesture not in GAME_GESTURES:
        return False
    if variant == Variant.NORMAL:
        return True
    if variant == Variant.TUTORIAL:
        on_swipe_card = sequence.current_index == SWIPE_TO_PASS_INDEX
        if gesture == Gesture.TAP:
            return not on_swipe_card
        return on_swipe_card
    raise ValueError(f"Unknown variant: {variant!r}")


def should_terminate_after(variant: Variant, previous_index: int, sequence) -> bool:
    """
    Checked after every accepted gesture. Only the tutorial ends here: it
    finishes as soon as the player moves off the final card, guessed or not.
    Normal games end through the post-score delay or the countdown instead.
    """
    if variant == Variant.NORMAL:
        return False
    if variant == Variant.TUTORIAL:
        return previous_index == sequence.phrase_count() - 1
    raise ValueError(f"Unknown variant: {variant!r}")
