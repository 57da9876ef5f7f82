"""FastAPI dependencies for storage and the reasoning oracle.

Tests replace these through ``app.dependency_overrides``.
"""

from fastapi import Depends
from adaptive_interview.oracle.base import ReasoningOracle
from adaptive_interview.oracle.llm_oracle import LLMOracle
from adaptive_interview.services.interview_service import InterviewService
from adaptive_interview.services.session_service import (
    SessionService,
    get_session_service,
)
import logging

logger = logging.getLogger(__name__)

_oracle: ReasoningOracle = None


def get_oracle() -> ReasoningOracle:
    """Get or create the LLM-backed oracle."""
    global _oracle
    if _oracle is None:
        _oracle = LLMOracle()
        logger.info("Reasoning oracle initialised")
    return _oracle


def get_interview_service(
    session_service: SessionService = Depends(get_session_service),
    oracle: ReasoningOracle = Depends(get_oracle),
) -> InterviewService:
    """Interview service bound to the configured store and oracle."""
    return InterviewService(session_service, oracle)
