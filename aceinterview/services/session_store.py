import logging
import threading
from datetime import datetime
from typing import Dict, Optional

from aceinterview.core.config import settings
from aceinterview.core.exceptions import SessionNotFoundError
from aceinterview.models.session import CurrentStep
from aceinterview.services.session_service import InterviewSession

logger = logging.getLogger(__name__)


class SessionStore:
    """In-memory interview sessions keyed by session id"""
    def __init__(self, session_timeout_seconds: Optional[int] = None):
        self.sessions: Dict[str, InterviewSession] = {}
        self.session_timeout = (
            settings.SESSION_TIMEOUT_SECONDS if session_timeout_seconds is None else session_timeout_seconds
        )
        self._lock = threading.Lock()

    def create(self, speech_supported: Optional[bool] = None) -> InterviewSession:
        session = InterviewSession(speech_supported=speech_supported)
        with self._lock:
            self.sessions[session.session_id] = session
        logger.info(f"✅ [SESSIONS] Created session {session.session_id} ({len(self.sessions)} active)")
        return session

    def get(self, session_id: str) -> InterviewSession:
        with self._lock:
            session = self.sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"No interview session found with id {session_id}.")
        session.touch()
        return session

    def delete(self, session_id: str) -> bool:
        with self._lock:
            session = self.sessions.pop(session_id, None)
        if session is None:
            return False
        session.start_over()
        logger.info(f"🧹 [SESSIONS] Cleaned up session: {session_id}")
        return True

    def cleanup_expired(self) -> int:
        """Drop sessions idle longer than the timeout"""
        now = datetime.now()
        with self._lock:
            expired = [
                session_id for session_id, session in self.sessions.items()
                if (now - session.last_accessed).total_seconds() > self.session_timeout
            ]
            for session_id in expired:
                del self.sessions[session_id]
                logger.info(f"🧹 [SESSIONS] Expired session cleaned: {session_id}")

        if expired:
            logger.info(f"🧹 [SESSIONS] Cleaned up {len(expired)} expired sessions")
        return len(expired)

    def force_cleanup_all(self) -> int:
        with self._lock:
            count = len(self.sessions)
            self.sessions.clear()
        logger.warning(f"🧹 [SESSIONS] Force cleaned all {count} sessions")
        return count

    def get_stats(self) -> dict:
        with self._lock:
            sessions = list(self.sessions.values())

        now = datetime.now()
        by_step = {step.value: 0 for step in CurrentStep}
        for session in sessions:
            by_step[session.step.value] += 1
        ages = [(now - session.created_at).total_seconds() for session in sessions]

        return {
            "active_sessions": len(sessions),
            "sessions_by_step": by_step,
            "recording_sessions": sum(1 for s in sessions if s.recorder.is_recording),
            "total_rounds": sum(len(s.rounds) for s in sessions),
            "oldest_session_age_seconds": max(ages) if ages else 0,
            "session_timeout_seconds": self.session_timeout,
        }
