"""Turn and state engine for charades."""

from charades.engine import GameController, new_game, new_tutorial
from charades.errors import IndexOutOfRange, InvalidConfiguration
from charades.rules import EventKind, Gesture, Variant, SWIPE_TO_PASS_INDEX
from charades.scheduler import Scheduler, TaskHandle
from charades.state import Event, GameSession, GameSnapshot, PhraseSequence
from charades.timer import CountdownTimer

__all__ = [
    "GameController",
    "new_game",
    "new_tutorial",
    "IndexOutOfRange",
    "InvalidConfiguration",
    "EventKind",
    "Gesture",
    "Variant",
    "SWIPE_TO_PASS_INDEX",
    "Scheduler",
    "TaskHandle",
    "Event",
    "GameSession",
    "GameSnapshot",
    "PhraseSequence",
    "CountdownTimer",
]
