"""
Vacation-scoped broadcast rooms over websockets.

Events are fire-and-forget notifications (``task-updated``,
``budget-updated``); clients refetch over REST for the source of truth.
"""
from collections import defaultdict
from typing import Any, Dict, Set

from fastapi import WebSocket
from fastapi.encoders import jsonable_encoder

from voyagehub.logging_config import get_logger

logger = get_logger(__name__)

TASK_UPDATED = "task-updated"
BUDGET_UPDATED = "budget-updated"


def room_name(vacation_id: str) -> str:
    return f"vacation-{vacation_id}"


class RoomHub:
    def __init__(self) -> None:
        self._rooms: Dict[str, Set[WebSocket]] = defaultdict(set)

    async def join(self, vacation_id: str, websocket: WebSocket) -> None:
        self._rooms[room_name(vacation_id)].add(websocket)
        logger.info(f"Socket joined {room_name(vacation_id)}")

    async def leave(self, vacation_id: str, websocket: WebSocket) -> None:
        self._discard(room_name(vacation_id), websocket)
        logger.info(f"Socket left {room_name(vacation_id)}")

    async def disconnect(self, websocket: WebSocket) -> None:
        for name in list(self._rooms):
            self._discard(name, websocket)

    def _discard(self, name: str, websocket: WebSocket) -> None:
        members = self._rooms.get(name)
        if members is None:
            return
        members.discard(websocket)
        if not members:
            del self._rooms[name]

    def members(self, vacation_id: str) -> int:
        return len(self._rooms.get(room_name(vacation_id), ()))

    async def broadcast(self, vacation_id: str, event: str, data: Any = None) -> int:
        """
        Send ``event`` to everyone in the vacation's room.

        Returns the number of sockets reached. Dead sockets are dropped and
        errors never propagate to the caller.
        """
        targets = list(self._rooms.get(room_name(vacation_id), ()))

        message = jsonable_encoder({"event": event, "vacationId": vacation_id, "data": data})
        delivered = 0
        stale = []
        for websocket in targets:
            try:
                await websocket.send_json(message)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping socket from {room_name(vacation_id)}: {e}")
                stale.append(websocket)

        for websocket in stale:
            self._discard(room_name(vacation_id), websocket)
        return delivered
