"""LangGraph state definition for one interview turn."""

from typing import Any, Optional, TypedDict
from adaptive_interview.models.session import InterviewSession


class InterviewTurnState(TypedDict):
    """State carried through a single turn of the interview workflow."""

    # Session snapshot; every node replaces it with a new instance
    session: InterviewSession

    # Turn input
    answer: Any
    has_answer: bool  # False on the first turn and on retries

    # Stop control
    stop: bool
    stop_reason: Optional[str]
