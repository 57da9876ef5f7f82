"""Adaptive interview turn workflow.

One compiled LangGraph runs every turn:

    extract_answer → diagnose → analyze → stop_check → next_question
                                                     ↘ guidance

The first turn has no answers yet and goes straight to ``analyze``.
"""

from typing import Any, Dict, List, Optional, Sequence
from langgraph.graph import StateGraph, END
from adaptive_interview.agents.state import InterviewTurnState
from adaptive_interview.agents.nodes import (
    extract_answer_node,
    diagnose_node,
    analyze_node,
    stop_check_node,
    next_question_node,
    guidance_node,
    route_after_extract,
    route_after_stop_check,
    route_after_question,
)
from adaptive_interview.engine.session import InterviewStateError, start_session
from adaptive_interview.models.evidence import Profile
from adaptive_interview.models.session import InterviewSession, SessionStatus
from adaptive_interview.oracle.base import ReasoningOracle
import logging

logger = logging.getLogger(__name__)


def build_interview_graph():
    """
    Build and compile the interview turn workflow.

    Flow:
    1. extract_answer: record the answer and extract evidence
    2. diagnose: oracle differential (skipped before the first answer)
    3. analyze: completeness, red flags, strategy
    4. stop_check: stop conditions
    5. next_question or guidance
    """
    workflow = StateGraph(InterviewTurnState)

    workflow.add_node("extract_answer", extract_answer_node)
    workflow.add_node("diagnose", diagnose_node)
    workflow.add_node("analyze", analyze_node)
    workflow.add_node("stop_check", stop_check_node)
    workflow.add_node("next_question", next_question_node)
    workflow.add_node("guidance", guidance_node)

    workflow.set_entry_point("extract_answer")

    workflow.add_conditional_edges(
        "extract_answer",
        route_after_extract,
        {"diagnose": "diagnose", "analyze": "analyze"},
    )
    workflow.add_edge("diagnose", "analyze")
    workflow.add_edge("analyze", "stop_check")

    workflow.add_conditional_edges(
        "stop_check",
        route_after_stop_check,
        {"guidance": "guidance", "next_question": "next_question"},
    )

    # A question waits for the user; no question means the oracle voted to stop
    workflow.add_conditional_edges(
        "next_question",
        route_after_question,
        {"guidance": "guidance", "end": END},
    )
    workflow.add_edge("guidance", END)

    graph = workflow.compile()
    logger.info("Interview workflow compiled successfully")

    return graph


# Global graph instance
_interview_graph = None


def get_interview_graph():
    """Get or create the compiled interview workflow."""
    global _interview_graph
    if _interview_graph is None:
        _interview_graph = build_interview_graph()
    return _interview_graph


async def _run_turn(
    session: InterviewSession,
    oracle: ReasoningOracle,
    answer: Any = None,
    has_answer: bool = False,
) -> InterviewSession:
    state: InterviewTurnState = {
        "session": session,
        "answer": answer,
        "has_answer": has_answer,
        "stop": False,
        "stop_reason": None,
    }
    result = await get_interview_graph().ainvoke(
        state, config={"configurable": {"oracle": oracle}}
    )
    return result["session"]


async def start_interview(
    profile: Profile,
    oracle: ReasoningOracle,
    language: Optional[str] = None,
    max_questions: Optional[int] = None,
    target_confidence: Optional[float] = None,
) -> InterviewSession:
    """Create a session and run its first turn (asks the first question)."""
    session = start_session(profile, language, max_questions, target_confidence)
    return await _run_turn(session, oracle)


async def submit_answer(
    session: InterviewSession, answer: Any, oracle: ReasoningOracle
) -> InterviewSession:
    """
    Run one full turn for the subject's answer.

    Raises:
        InterviewStateError: If the session has already stopped
        OracleAuthError: If the oracle rejects our credentials
    """
    return await _run_turn(session, oracle, answer=answer, has_answer=True)


async def retry_turn(
    session: InterviewSession, oracle: ReasoningOracle
) -> InterviewSession:
    """Re-run the oracle steps of the current turn without a new answer."""
    if session.status == SessionStatus.STOPPED:
        raise InterviewStateError(f"Session {session.session_id} has already stopped")

    logger.info(f"Retrying turn for session {session.session_id}")
    return await _run_turn(session, oracle)


async def ask_followup(
    session: InterviewSession,
    question: str,
    oracle: ReasoningOracle,
    chat_history: Optional[Sequence[Dict[str, str]]] = None,
) -> str:
    """
    Answer a free-form question once the interview has finished.

    Raises:
        InterviewStateError: If the interview is still running
    """
    if session.status != SessionStatus.STOPPED:
        raise InterviewStateError(
            f"Session {session.session_id} is still collecting answers"
        )

    history: List[Dict[str, str]] = list(chat_history or [])
    return await oracle.answer_followup(
        question,
        session.progress.candidates,
        session.profile,
        history,
        session.language,
    )
