"""In-memory registry of viewer sessions, one controller per client."""
from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Any

from api.config import VIEWER_SESSION_LIMIT
from core.controller import TestSource, TextGateway, ViewerController
from core.errors import NotFound

log = logging.getLogger(__name__)


class ViewerSessionRegistry:
    def __init__(
        self,
        test_source: TestSource,
        gateway: TextGateway,
        limit: int = VIEWER_SESSION_LIMIT,
    ) -> None:
        self.test_source = test_source
        self.gateway = gateway
        self.limit = max(1, limit)
        self._sessions: OrderedDict[str, ViewerController] = OrderedDict()
        self._created_at: dict[str, str] = {}
        self._pinned: set[str] = set()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def create(self, pinned: bool = False) -> tuple[str, ViewerController]:
        """Register a new session, evicting the oldest unpinned ones past the limit.

        A pinned session is never evicted until ``unpin`` is called.
        """
        session_id = uuid.uuid4().hex
        controller = ViewerController(self.test_source, self.gateway)
        self._sessions[session_id] = controller
        self._created_at[session_id] = datetime.now(timezone.utc).isoformat()
        if pinned:
            self._pinned.add(session_id)
        self._evict(keep=session_id)
        return session_id, controller

    def unpin(self, session_id: str) -> None:
        self._pinned.discard(session_id)

    def _evict(self, keep: str) -> None:
        candidates = [
            sid for sid in self._sessions if sid != keep and sid not in self._pinned
        ]
        while len(self._sessions) > self.limit and candidates:
            evicted = candidates.pop(0)
            del self._sessions[evicted]
            self._created_at.pop(evicted, None)
            log.info("Evicted viewer session %s", evicted)

    def get(self, session_id: str) -> ViewerController:
        controller = self._sessions.get(session_id)
        if controller is None:
            raise NotFound("Session not found")
        return controller

    def discard(self, session_id: str) -> None:
        controller = self._sessions.pop(session_id, None)
        if controller is None:
            raise NotFound("Session not found")
        self._created_at.pop(session_id, None)
        self._pinned.discard(session_id)
        controller.close_test()

    def snapshot(self, session_id: str, applied: bool | None = None) -> dict[str, Any]:
        controller = self.get(session_id)
        result: dict[str, Any] = {
            "sessionId": session_id,
            "createdAt": self._created_at.get(session_id),
            **controller.snapshot(),
        }
        if applied is not None:
            result["applied"] = applied
        return result
