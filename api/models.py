"""Pydantic request/response models for the API."""

from pydantic import BaseModel, Field, model_validator

from charades.engine import GameController
from charades.rules import Gesture, Variant
from charades.state import Event, GameSnapshot

# Validation constants (no magic numbers in validation)
MAX_PHRASES = 100
MAX_PHRASE_LENGTH = 120
MAX_GAME_SECONDS = 60 * 60
MAX_CLOCK_STEP_MS = 60 * 60 * 1000

HOLLOW_CIRCLE = "○"
FILLED_CIRCLE = "●"


class SessionCreateRequest(BaseModel):
    """Body for POST /sessions."""

    variant: Variant = Field(default=Variant.NORMAL, description="normal (timed) or tutorial")
    phrases: list[str] | None = Field(
        default=None,
        min_length=1,
        max_length=MAX_PHRASES,
        description="Phrases to play in order. Normal games sample from the default bank if omitted; "
        "the tutorial uses its fixed script if omitted.",
    )
    game_seconds: int | None = Field(
        default=None,
        ge=1,
        le=MAX_GAME_SECONDS,
        description="Normal games only. Defaults to CHARADES_GAME_SECONDS.",
    )
    seed: int | None = Field(default=None, description="Seed for sampling phrases from the bank")

    @model_validator(mode="after")
    def check_phrases_and_timer(self) -> "SessionCreateRequest":
        if self.phrases is not None:
            cleaned = [p.strip() for p in self.phrases]
            if any(not p for p in cleaned):
                raise ValueError("phrases must be non-empty strings")
            if any(len(p) > MAX_PHRASE_LENGTH for p in cleaned):
                raise ValueError(f"phrases must be at most {MAX_PHRASE_LENGTH} characters")
            self.phrases = cleaned
        if self.variant == Variant.TUTORIAL and self.game_seconds is not None:
            raise ValueError("game_seconds only applies to normal games")
        return self


class GestureRequest(BaseModel):
    """Body for POST /sessions/{id}/gestures."""

    gesture: Gesture


class ClockRequest(BaseModel):
    """Body for POST /sessions/{id}/clock: how much game-clock time has passed."""

    elapsed_ms: int = Field(..., ge=0, le=MAX_CLOCK_STEP_MS)


class EventPublic(BaseModel):
    kind: str
    at_ms: int
    phrase_index: int
    remaining_seconds: int | None = None


class SessionStateResponse(BaseModel):
    """Public session state for GET /sessions/{id}."""

    session_id: str
    variant: str
    current_phrase: str
    current_index: int
    score: int
    phrase_count: int
    guessed: list[bool]
    input_enabled: bool
    ended: bool
    seconds_remaining: int | None = Field(default=None, description="Normal games only")
    timer_text: str | None = Field(default=None, description="Remaining time as m:ss (normal games only)")
    score_bar: str = Field(description="One circle per phrase: filled when guessed, current phrase in brackets")
    event_cursor: int = Field(description="Total events so far; pass as ?since= to poll for new ones")
    events: list[EventPublic] = Field(default_factory=list, description="Events emitted by this request")


class ResultRowPublic(BaseModel):
    phrase: str
    guessed: bool


class ResultsResponse(BaseModel):
    """Final results for GET /sessions/{id}/results."""

    session_id: str
    score: int
    phrase_count: int
    results: list[ResultRowPublic]


def format_timer(seconds: int) -> str:
    """Render seconds as m:ss."""
    seconds = max(seconds, 0)
    return f"{seconds // 60}:{seconds % 60:02d}"


def build_score_bar(controller: GameController) -> str:
    """Hollow/filled circles for each phrase; the current one is bracketed while the game runs."""
    sequence = controller.sequence
    parts = []
    for i in range(sequence.phrase_count()):
        circle = FILLED_CIRCLE if sequence.is_guessed_at(i) else HOLLOW_CIRCLE
        if i == sequence.current_index and not controller.ended:
            circle = f"[{circle}]"
        parts.append(circle)
    return " ".join(parts)


def event_to_public(event: Event) -> EventPublic:
    return EventPublic(
        kind=event.kind.value,
        at_ms=event.at_ms,
        phrase_index=event.phrase_index,
        remaining_seconds=event.remaining_seconds,
    )


def session_to_public(
    session_id: str,
    controller: GameController,
    new_events: list[Event] | None = None,
) -> SessionStateResponse:
    """Build public response from a controller and the events one request produced."""
    session = controller.session
    sequence = session.sequence
    seconds = session.seconds_remaining
    return SessionStateResponse(
        session_id=session_id,
        variant=session.variant.value,
        current_phrase=sequence.current_phrase(),
        current_index=sequence.current_index,
        score=sequence.score,
        phrase_count=sequence.phrase_count(),
        guessed=[sequence.is_guessed_at(i) for i in range(sequence.phrase_count())],
        input_enabled=session.input_enabled,
        ended=session.ended,
        seconds_remaining=seconds,
        timer_text=format_timer(seconds) if seconds is not None else None,
        score_bar=build_score_bar(controller),
        event_cursor=len(session.events),
        events=[event_to_public(e) for e in (new_events or [])],
    )


def snapshot_to_results(session_id: str, snapshot: GameSnapshot) -> ResultsResponse:
    return ResultsResponse(
        session_id=session_id,
        score=snapshot.score,
        phrase_count=snapshot.phrase_count,
        results=[ResultRowPublic(phrase=p, guessed=g) for p, g in snapshot.results()],
    )
