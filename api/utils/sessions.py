# api/utils/sessions.py
import logging
import threading
from collections import OrderedDict
from typing import List, Optional

from src.curtain_wall.grid.grid_config import GridConfig
from src.curtain_wall.grid.session import DesignSession

from api.utils.config import Config
from api.utils.errors import ResourceNotFoundError

logger = logging.getLogger("curtain_wall.api")


class SessionStore:
    """
    Process-local store of design sessions.

    The store may be shared by several server threads, so every access
    goes through one lock. When the store is full the least recently used
    session is evicted.
    """

    def __init__(self, max_sessions: int = 100, config: Optional[GridConfig] = None):
        self.max_sessions = max(1, max_sessions)
        self.config = config or GridConfig()
        self._sessions: "OrderedDict[str, DesignSession]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self) -> DesignSession:
        """Create and register a session with the default grid."""
        session = DesignSession(config=self.config)
        with self._lock:
            while len(self._sessions) >= self.max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                logger.warning(f"Session limit {self.max_sessions} reached; evicted {evicted_id}")
            self._sessions[session.id] = session
        logger.info(f"Created design session {session.id}")
        return session

    def get(self, session_id: str) -> DesignSession:
        """
        Look up a session and mark it as recently used.

        Raises:
            ResourceNotFoundError: If no session has this id
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise ResourceNotFoundError("design", session_id)
            self._sessions.move_to_end(session_id)
            return session

    def list(self, limit: int = 10, offset: int = 0) -> List[DesignSession]:
        """Sessions ordered from most to least recently used."""
        with self._lock:
            sessions = list(reversed(self._sessions.values()))
        return sessions[offset:offset + limit]

    def delete(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise ResourceNotFoundError("design", session_id)
        logger.info(f"Deleted design session {session_id}")

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()


session_store = SessionStore(max_sessions=Config.MAX_SESSIONS)


def get_session_store() -> SessionStore:
    """FastAPI dependency returning the shared session store."""
    return session_store
