"""Game API routes."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, Field

from eights_engine.cards import Suit
from web.api.session_manager import (
    GameSession,
    notification_to_dict,
    session_manager,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["games"])


# Request models
class CreateGameRequest(BaseModel):
    """Request to create a new game."""

    seed: int | None = Field(None, description="Random seed for reproducibility")


class PlayCardRequest(BaseModel):
    """Request to play a card from the player's hand."""

    card_id: str = Field(..., description="Id of the card to play, e.g. 'hearts-7'")


class ChooseSuitRequest(BaseModel):
    """Request to name the suit after playing an eight."""

    suit: str = Field(..., description="'hearts', 'diamonds', 'clubs' or 'spades'")


def _get_session(game_id: str) -> GameSession:
    session = session_manager.get_session(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")
    return session


def _parse_suit(text: str) -> Suit:
    try:
        return Suit.from_label(text)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _response(session: GameSession) -> dict:
    return {
        "state": session.to_client_state(),
        "notification": notification_to_dict(session.last_notification),
    }


# REST Endpoints


@router.post("/games", response_model=dict)
async def create_game(request: CreateGameRequest | None = None):
    """Create a new game session."""
    seed = request.seed if request else None
    session = session_manager.create_session(seed=seed)
    return {"game_id": session.id, **_response(session)}


@router.get("/games", response_model=list[dict])
async def list_games():
    """List all active game sessions."""
    return session_manager.list_sessions()


@router.get("/games/{game_id}")
async def get_game(game_id: str):
    """Get current state of a game."""
    session = _get_session(game_id)
    return {**_response(session), "history": session.history}


@router.get("/games/{game_id}/playable")
async def get_playable(game_id: str):
    """Ids of the player's cards that are legal to play now."""
    session = _get_session(game_id)
    return {"playable": session.playable_ids}


@router.post("/games/{game_id}/play")
async def play(game_id: str, request: PlayCardRequest):
    """Play a card. Illegal or out-of-turn plays leave the game unchanged."""
    session = _get_session(game_id)
    await session_manager.play_card(session, request.card_id)
    return _response(session)


@router.post("/games/{game_id}/draw")
async def draw(game_id: str):
    """Draw a card, or skip the turn if the draw pile is empty."""
    session = _get_session(game_id)
    await session_manager.draw_card(session)
    return _response(session)


@router.post("/games/{game_id}/suit")
async def pick_suit(game_id: str, request: ChooseSuitRequest):
    """Name the new suit after the player's eight."""
    session = _get_session(game_id)
    await session_manager.choose_suit(session, _parse_suit(request.suit))
    return _response(session)


@router.post("/games/{game_id}/restart")
async def restart_game(game_id: str, request: CreateGameRequest | None = None):
    """Deal a new game in the same session."""
    session = _get_session(game_id)
    session_manager.restart(session, seed=request.seed if request else None)
    return _response(session)


@router.delete("/games/{game_id}")
async def delete_game(game_id: str):
    """Delete a game session."""
    if session_manager.delete_session(game_id):
        return {"deleted": True}
    raise HTTPException(status_code=404, detail="Game not found")


# WebSocket endpoint for real-time game play


@router.websocket("/games/{game_id}/ws")
async def game_websocket(websocket: WebSocket, game_id: str):
    """WebSocket endpoint for real-time game updates.

    Protocol:
    Server -> Client messages:
        - game_state: Full state plus the notification that produced it
        - ai_thinking: The opponent's move has been scheduled
        - error: Error message

    Client -> Server messages:
        - play_card: {card_id: str}
        - draw_card
        - choose_suit: {suit: str}
        - restart: {seed: int | None}
        - get_state
    """
    session = session_manager.get_session(game_id)
    if not session:
        logger.warning("WebSocket: Game not found: %s", game_id)
        await websocket.close(code=4004, reason="Game not found")
        return

    await websocket.accept()
    logger.info("WebSocket connected: game_id=%s", game_id)

    event_queue: asyncio.Queue = asyncio.Queue()
    session.add_listener(event_queue.put_nowait)

    async def forward_events():
        while True:
            event = await event_queue.get()
            await websocket.send_json(event)

    await websocket.send_json({"type": "game_state", **_response(session)})
    event_task = asyncio.create_task(forward_events())

    try:
        while True:
            data = await websocket.receive_json()
            msg_type = data.get("type", "")

            if msg_type == "play_card":
                await session_manager.play_card(session, str(data.get("card_id", "")))
            elif msg_type == "draw_card":
                await session_manager.draw_card(session)
            elif msg_type == "choose_suit":
                try:
                    suit = Suit.from_label(str(data.get("suit", "")))
                except ValueError as e:
                    await websocket.send_json({"type": "error", "message": str(e)})
                    continue
                await session_manager.choose_suit(session, suit)
            elif msg_type == "restart":
                session_manager.restart(session, seed=data.get("seed"))
            elif msg_type == "get_state":
                await websocket.send_json({"type": "game_state", **_response(session)})
                continue
            else:
                await websocket.send_json(
                    {"type": "error", "message": f"Unknown message type: {msg_type}"}
                )
                continue

            # Rejected and ignored requests produce no listener event
            notification = session.last_notification
            if notification is not None and not notification.changed_state:
                await websocket.send_json({"type": "game_state", **_response(session)})

    except WebSocketDisconnect:
        logger.info("WebSocket disconnected: game_id=%s", game_id)
    finally:
        session.remove_listener(event_queue.put_nowait)
        event_task.cancel()
