import asyncio
import json
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class RealtimeEvent(str, Enum):
    HELLO = "hello"
    CONFIG_CHANGED = "config_changed"
    TV_STATUS_CHANGED = "tv_status_changed"


def resource_from_path(path: str) -> str:
    """First path segment, e.g. ``/tvs/3/rotacao`` -> ``tvs``."""
    return path.strip("/").split("/", 1)[0]


class RealtimeHub:
    """Fan-out of change events to TV players and open consoles.

    Every published event bumps the revision; players compare it with the
    one they last rendered to decide whether to refetch their feed.
    """

    def __init__(self) -> None:
        self._clients: set[WebSocket] = set()
        self._lock = asyncio.Lock()
        self._revision = 0

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            self._clients.add(websocket)
        await websocket.send_text(self._encode(RealtimeEvent.HELLO, None))

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self._lock:
            self._clients.discard(websocket)

    def _encode(self, event: RealtimeEvent, payload: dict[str, Any] | None) -> str:
        message: dict[str, Any] = {
            "type": event.value,
            "revision": self._revision,
            "ts": datetime.now(timezone.utc).isoformat(),
        }
        if payload is not None:
            message["payload"] = payload
        return json.dumps(message)

    async def publish(self, event: RealtimeEvent, payload: dict[str, Any] | None = None) -> int:
        self._revision += 1
        message = self._encode(RealtimeEvent(event), payload or {})
        async with self._lock:
            clients = list(self._clients)

        stale: list[WebSocket] = []
        for client in clients:
            try:
                await client.send_text(message)
            except Exception:
                stale.append(client)

        if stale:
            logger.debug("dropping %d stale realtime clients", len(stale))
            async with self._lock:
                for client in stale:
                    self._clients.discard(client)
        return self._revision

    async def config_changed(self, method: str, path: str) -> int:
        return await self.publish(
            RealtimeEvent.CONFIG_CHANGED,
            {"resource": resource_from_path(path), "path": path, "method": method},
        )

    async def tv_status_changed(self, changes: list[dict[str, Any]], offline_after_sec: int) -> int:
        return await self.publish(
            RealtimeEvent.TV_STATUS_CHANGED,
            {
                "changes": changes,
                "online": [item["tv_id"] for item in changes if item["status"] == "online"],
                "offline": [item["tv_id"] for item in changes if item["status"] == "offline"],
                "offline_after_sec": offline_after_sec,
            },
        )

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def client_count(self) -> int:
        return len(self._clients)


hub = RealtimeHub()
