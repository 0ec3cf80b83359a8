"""FastAPI app: create sessions, deliver gestures, drive the game clock, read results."""

import logging
import uuid

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from charades.engine import GameController, new_game, new_tutorial
from charades.errors import InvalidConfiguration
from charades.rules import Variant
from api.game_store import (
    create as store_create,
    delete as store_delete,
    get_controller as store_get_controller,
    list_sessions,
)
from api.models import (
    ClockRequest,
    EventPublic,
    GestureRequest,
    ResultsResponse,
    SessionCreateRequest,
    SessionStateResponse,
    event_to_public,
    session_to_public,
    snapshot_to_results,
)
from api.phrases import TUTORIAL_PHRASES, sample_phrases
from api.settings import get_game_seconds, get_log_level, get_phrases_per_game

logging.basicConfig(level=get_log_level())
logger = logging.getLogger(__name__)

app = FastAPI(title="Charades API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_or_404(session_id: str) -> GameController:
    controller = store_get_controller(session_id)
    if controller is None:
        raise HTTPException(404, "Session not found")
    return controller


def _build_controller(body: SessionCreateRequest) -> GameController:
    if body.variant == Variant.TUTORIAL:
        phrases = body.phrases or list(TUTORIAL_PHRASES)
        return new_tutorial(phrases)
    phrases = body.phrases or sample_phrases(get_phrases_per_game(), seed=body.seed)
    game_seconds = body.game_seconds or get_game_seconds()
    return new_game(phrases, game_seconds)


@app.post("/sessions", response_model=dict, tags=["Sessions"], summary="Create session")
def create_session(body: SessionCreateRequest):
    """Create and start a normal game or the tutorial. Returns session_id."""
    try:
        controller = _build_controller(body)
    except InvalidConfiguration as e:
        raise HTTPException(400, str(e))
    session_id = str(uuid.uuid4())
    controller.start()
    store_create(session_id, controller)
    logger.info("Created %s session %s", body.variant.value, session_id)
    return {"session_id": session_id}


@app.get("/sessions", response_model=list[str], tags=["Sessions"], summary="List session IDs")
def list_sessions_route():
    return list_sessions()


@app.get("/sessions/{session_id}", response_model=SessionStateResponse, tags=["Sessions"], summary="Get session state")
def get_session(session_id: str):
    controller = _get_or_404(session_id)
    return session_to_public(session_id, controller)


@app.post(
    "/sessions/{session_id}/gestures",
    response_model=SessionStateResponse,
    tags=["Sessions"],
    summary="Deliver a gesture",
)
def post_gesture(session_id: str, body: GestureRequest):
    """Apply tap / swipe_forward / swipe_backward. Dropped gestures produce no events."""
    controller = _get_or_404(session_id)
    cursor = len(controller.events)
    controller.handle_gesture(body.gesture)
    return session_to_public(session_id, controller, controller.events_since(cursor))


@app.post(
    "/sessions/{session_id}/clock",
    response_model=SessionStateResponse,
    tags=["Sessions"],
    summary="Advance the game clock",
)
def post_clock(session_id: str, body: ClockRequest):
    """Run timer ticks and post-score callbacks that fall due in the next elapsed_ms."""
    controller = _get_or_404(session_id)
    cursor = len(controller.events)
    controller.scheduler.advance(body.elapsed_ms)
    return session_to_public(session_id, controller, controller.events_since(cursor))


@app.get(
    "/sessions/{session_id}/events",
    response_model=list[EventPublic],
    tags=["Sessions"],
    summary="Poll events",
)
def get_events(session_id: str, since: int = Query(default=0, ge=0)):
    controller = _get_or_404(session_id)
    return [event_to_public(e) for e in controller.events_since(since)]


@app.get(
    "/sessions/{session_id}/results",
    response_model=ResultsResponse,
    tags=["Sessions"],
    summary="Get final results",
)
def get_results(session_id: str):
    """Final snapshot for the results screen; only available once the game has ended."""
    controller = _get_or_404(session_id)
    if not controller.ended:
        raise HTTPException(409, "Game is still in progress")
    return snapshot_to_results(session_id, controller.snapshot())


@app.delete("/sessions/{session_id}", response_model=dict, tags=["Sessions"], summary="Tear down session")
def delete_session(session_id: str):
    """Cancel the session's timer and pending callbacks and forget it."""
    if store_delete(session_id) is None:
        raise HTTPException(404, "Session not found")
    return {"deleted": session_id}


@app.get("/health", tags=["System"], summary="Health check")
def health():
    return {"status": "ok"}
