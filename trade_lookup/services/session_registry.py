"""Per-session search controllers."""

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable, Optional

from trade_lookup.datasources import TradeSource
from trade_lookup.models import UserSession
from .query_builder import DEFAULT_PAGE_SIZE
from .search_controller import SearchController
from .trade_lookup_service import TradeLookupService

logger = logging.getLogger(__name__)

DEFAULT_IDLE_TIMEOUT = 1800.0
DEFAULT_MAX_SESSIONS = 1000


@dataclass
class SearchSession:
    """A UI session: the signed-in user plus its own controller."""
    session_id: str
    user: UserSession
    controller: SearchController
    lookup: TradeLookupService
    last_used: float = field(default=0.0)


class SessionRegistry:
    """
    Holds one SearchController per UI session.

    Sessions share the datasource but never share controller state.
    Nothing is persisted.

    Lifecycle: create() opens a session and get() marks it as used. A
    session ends on remove(), or once it has not been used for
    idle_timeout seconds; expired sessions are swept on every create()
    and get(). When max_sessions are open, create() evicts the least
    recently used one. Pass None to disable either limit.
    """

    def __init__(
        self,
        datasource: TradeSource,
        page_size: int = DEFAULT_PAGE_SIZE,
        idle_timeout: Optional[float] = DEFAULT_IDLE_TIMEOUT,
        max_sessions: Optional[int] = DEFAULT_MAX_SESSIONS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_sessions is not None and max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.datasource = datasource
        self.page_size = page_size
        self.idle_timeout = idle_timeout
        self.max_sessions = max_sessions
        self._clock = clock
        # Insertion order doubles as recency order; get() moves a session to the end
        self._sessions: dict[str, SearchSession] = {}

    def create(self, user: UserSession) -> SearchSession:
        """Open a new session for user with an IDLE controller."""
        now = self._clock()
        self._expire(now)
        if self.max_sessions is not None:
            while len(self._sessions) >= self.max_sessions:
                oldest = next(iter(self._sessions))
                self._sessions.pop(oldest)
                logger.warning(
                    f"Session limit {self.max_sessions} reached; evicted session {oldest}"
                )

        session_id = uuid.uuid4().hex
        session = SearchSession(
            session_id=session_id,
            user=user,
            controller=SearchController(
                self.datasource,
                session=user,
                page_size=self.page_size,
            ),
            lookup=TradeLookupService(self.datasource, session=user),
            last_used=now,
        )
        self._sessions[session_id] = session
        logger.info(f"Opened search session {session_id} for user {user.userId}")
        return session

    def get(self, session_id: str) -> SearchSession:
        """
        Return the session with this id and mark it as used.

        Raises:
            KeyError: if no such session is open or it has expired
        """
        now = self._clock()
        self._expire(now)
        session = self._sessions.pop(session_id)
        session.last_used = now
        self._sessions[session_id] = session
        return session

    def remove(self, session_id: str) -> bool:
        """Close a session. Returns False if it was not open."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        logger.info(f"Closed search session {session_id}")
        return True

    def _expire(self, now: float) -> None:
        if self.idle_timeout is None:
            return
        expired = [
            session_id
            for session_id, session in self._sessions.items()
            if now - session.last_used >= self.idle_timeout
        ]
        for session_id in expired:
            del self._sessions[session_id]
        if expired:
            logger.info(f"Expired {len(expired)} idle search session(s)")

    def __len__(self) -> int:
        return len(self._sessions)
