from typing import Optional

import jwt
from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect
from sqlalchemy import select

from voyagehub.exceptions import NotFoundError
from voyagehub.logging_config import get_logger
from voyagehub.models.user import User
from voyagehub.realtime import RoomHub
from voyagehub.services.vacation_service import get_visible_vacation
from voyagehub.utils.jwt import decode_access_token

logger = get_logger(__name__)
router = APIRouter(tags=["realtime"])

POLICY_UNAUTHORIZED = 4401

JOIN_VACATION = "join-vacation"
LEAVE_VACATION = "leave-vacation"


async def _authenticate(websocket: WebSocket, token: Optional[str]) -> Optional[User]:
    if not token:
        return None
    try:
        payload = decode_access_token(token, websocket.app.state.settings)
    except jwt.InvalidTokenError:
        return None

    async with websocket.app.state.db.session_factory() as db:
        result = await db.execute(select(User).where(User.id == payload.get("sub")))
        return result.scalar_one_or_none()


@router.websocket("/ws")
async def vacation_socket(websocket: WebSocket, token: Optional[str] = Query(None)):
    """
    Real-time channel. Clients join a vacation's room and receive its
    ``task-updated`` and ``budget-updated`` events.
    """
    user = await _authenticate(websocket, token)
    if user is None:
        await websocket.close(code=POLICY_UNAUTHORIZED)
        return

    hub: RoomHub = websocket.app.state.hub
    await websocket.accept()
    logger.info(f"Socket connected for user {user.id}")

    try:
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                await websocket.send_json({"event": "error", "message": "Invalid message"})
                continue

            event = message.get("event") if isinstance(message, dict) else None
            vacation_id = message.get("vacationId") if isinstance(message, dict) else None
            if event not in (JOIN_VACATION, LEAVE_VACATION) or not vacation_id:
                await websocket.send_json({"event": "error", "message": "Unknown event"})
                continue

            if event == LEAVE_VACATION:
                await hub.leave(vacation_id, websocket)
                await websocket.send_json({"event": "left", "vacationId": vacation_id})
                continue

            async with websocket.app.state.db.session_factory() as db:
                try:
                    await get_visible_vacation(db, vacation_id, user)
                except NotFoundError:
                    await websocket.send_json(
                        {"event": "error", "vacationId": vacation_id, "message": "Vacation not found"}
                    )
                    continue
            await hub.join(vacation_id, websocket)
            await websocket.send_json({"event": "joined", "vacationId": vacation_id})

    except WebSocketDisconnect:
        logger.info(f"Socket disconnected for user {user.id}")
    finally:
        await hub.disconnect(websocket)
