"""Interview orchestration: load a snapshot, run a turn, save it back."""

import asyncio
import logging
import weakref
from contextlib import asynccontextmanager
from typing import Any, Dict, List, MutableMapping, Optional
from adaptive_interview.agents.interview_graph import (
    ask_followup,
    retry_turn,
    start_interview,
    submit_answer,
)
from adaptive_interview.engine.report import InterviewReport, build_report
from adaptive_interview.models.evidence import Profile
from adaptive_interview.models.session import InterviewSession
from adaptive_interview.oracle.base import ReasoningOracle
from adaptive_interview.services.session_service import SessionService

logger = logging.getLogger(__name__)


class SessionNotFoundError(Exception):
    """No stored session has the requested id."""


# One lock per session id, shared by every service instance in the process.
# Entries vanish once no turn holds or waits on the lock.
_session_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = (
    weakref.WeakValueDictionary()
)


class InterviewService:
    """
    Runs interview turns against stored sessions.

    Turns for the same session are serialised: a second answer waits until
    the previous turn's oracle round-trip has been saved.
    """

    def __init__(
        self,
        session_service: SessionService,
        oracle: ReasoningOracle,
        locks: Optional[MutableMapping[str, asyncio.Lock]] = None,
    ):
        self.session_service = session_service
        self.oracle = oracle
        self._locks = _session_locks if locks is None else locks

    def _lock_for(self, session_id: str) -> asyncio.Lock:
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock

    @asynccontextmanager
    async def _locked_session(self, session_id: str):
        async with self._lock_for(session_id):
            session = await self.session_service.get_session(session_id)
            if session is None:
                raise SessionNotFoundError(f"Session {session_id} not found")
            yield session

    async def start(
        self,
        profile: Profile,
        language: Optional[str] = None,
        max_questions: Optional[int] = None,
        target_confidence: Optional[float] = None,
    ) -> InterviewSession:
        """Start an interview and store it with its first question."""
        session = await start_interview(
            profile, self.oracle, language, max_questions, target_confidence
        )
        await self.session_service.create_session(session)
        return session

    async def answer(self, session_id: str, answer: Any) -> InterviewSession:
        """Run one turn for the answer and store the result."""
        async with self._locked_session(session_id) as session:
            session = await submit_answer(session, answer, self.oracle)
            await self.session_service.save_session(session)
            return session

    async def retry(self, session_id: str) -> InterviewSession:
        """Re-run the oracle steps of the current turn."""
        async with self._locked_session(session_id) as session:
            session = await retry_turn(session, self.oracle)
            await self.session_service.save_session(session)
            return session

    async def get(self, session_id: str) -> InterviewSession:
        session = await self.session_service.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session {session_id} not found")
        return session

    async def report(self, session_id: str) -> InterviewReport:
        return build_report(await self.get(session_id))

    async def followup(
        self,
        session_id: str,
        question: str,
        chat_history: Optional[List[Dict[str, str]]] = None,
    ) -> str:
        """Answer a follow-up question about a finished interview."""
        session = await self.get(session_id)
        return await ask_followup(session, question, self.oracle, chat_history)

    async def delete(self, session_id: str) -> bool:
        async with self._lock_for(session_id):
            return await self.session_service.delete_session(session_id)
