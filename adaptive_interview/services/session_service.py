"""Interview session snapshot storage."""

from adaptive_interview.models.session import InterviewSession
from adaptive_interview.config.database import get_sessions_collection
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class SessionService:
    """Service for persisting interview session snapshots in MongoDB."""

    async def create_session(self, session: InterviewSession) -> InterviewSession:
        """
        Store a newly started session.

        Args:
            session: Session returned by the first interview turn

        Returns:
            The stored session
        """
        collection = await get_sessions_collection()
        await collection.insert_one(session.to_snapshot())

        logger.info(f"Created session {session.session_id}")
        return session

    async def get_session(self, session_id: str) -> Optional[InterviewSession]:
        """
        Get a session by ID.

        Args:
            session_id: Session identifier

        Returns:
            InterviewSession or None if not found
        """
        collection = await get_sessions_collection()
        doc = await collection.find_one({"session_id": session_id})

        if doc:
            return InterviewSession.from_snapshot(doc)
        return None

    async def save_session(self, session: InterviewSession) -> bool:
        """
        Replace the stored snapshot with the given session.

        Args:
            session: Session after a turn

        Returns:
            True if a document was written
        """
        collection = await get_sessions_collection()
        result = await collection.replace_one(
            {"session_id": session.session_id},
            session.to_snapshot(),
            upsert=True,
        )

        if result.modified_count > 0 or result.upserted_id is not None:
            logger.info(f"Saved session {session.session_id} ({session.status.value})")
            return True
        return False

    async def delete_session(self, session_id: str) -> bool:
        """
        Delete a session snapshot.

        Args:
            session_id: Session identifier

        Returns:
            True if a document was removed
        """
        collection = await get_sessions_collection()
        result = await collection.delete_one({"session_id": session_id})

        if result.deleted_count > 0:
            logger.info(f"Deleted session {session_id}")
            return True
        return False


# Global service instance
_session_service: SessionService = None


def get_session_service() -> SessionService:
    """Get or create SessionService instance."""
    global _session_service
    if _session_service is None:
        _session_service = SessionService()
    return _session_service
