"""Node implementations for the interview turn workflow.

Nodes sequence the pure transitions from ``adaptive_interview.engine.session``
around oracle calls. The oracle is supplied per invocation through
``config["configurable"]["oracle"]`` so one compiled graph serves every
session.
"""

from typing import Any, Dict
from langchain_core.runnables import RunnableConfig
from adaptive_interview.agents.state import InterviewTurnState
from adaptive_interview.engine.session import (
    ORACLE_STOP_REASON,
    apply_diagnoses,
    degrade_turn,
    fallback_guidance,
    finish_session,
    hold_for_retry,
    present_question,
    record_answer,
    record_oracle_failure,
    refresh_analysis,
    refresh_strategy,
    stop_session,
)
from adaptive_interview.engine.stop import should_stop
from adaptive_interview.models.session import InterviewSession
from adaptive_interview.oracle.base import OracleUnavailableError, ReasoningOracle
import logging

logger = logging.getLogger(__name__)


def _oracle(config: RunnableConfig) -> ReasoningOracle:
    oracle = (config or {}).get("configurable", {}).get("oracle")
    if oracle is None:
        raise ValueError("Interview graph invoked without an oracle")
    return oracle


def question_context(session: InterviewSession) -> Dict[str, Any]:
    """Progress and analysis details shown to the oracle with each question request."""
    progress = session.progress
    return {
        "answers": session.answers,
        "current_confidence": progress.current_confidence,
        "target_confidence": progress.target_confidence,
        "questions_asked": progress.total_questions_asked,
        "max_questions": progress.max_questions,
        "candidates": progress.candidates,
        "missing_information": session.analysis.missing_information,
        "red_flags": session.analysis.red_flags,
    }


async def extract_answer_node(state: InterviewTurnState) -> dict:
    """Record the incoming answer, if any, and extract evidence from it."""
    session = state["session"]
    if not state.get("has_answer"):
        return {"session": session}

    logger.info(f"Extract node for session: {session.session_id}")
    return {"session": record_answer(session, state.get("answer"))}


async def diagnose_node(state: InterviewTurnState, config: RunnableConfig) -> dict:
    """Ask the oracle for an updated differential."""
    session = state["session"]
    logger.info(f"Diagnose node for session: {session.session_id}")

    try:
        diagnoses = await _oracle(config).generate_diagnoses(
            session.profile, session.answers, session.language
        )
    except OracleUnavailableError as e:
        logger.warning(f"Degrading turn for session {session.session_id}: {e}")
        return {"session": degrade_turn(session, f"Diagnosis request failed: {e}")}

    return {"session": apply_diagnoses(session, diagnoses)}


async def analyze_node(state: InterviewTurnState) -> dict:
    """Refresh rule-based analysis, then pick the next strategy."""
    session = refresh_strategy(refresh_analysis(state["session"]))
    logger.info(
        f"Session {session.session_id}: completeness "
        f"{session.analysis.completeness}%, strategy {session.progress.strategy.value}"
    )
    return {"session": session}


async def stop_check_node(state: InterviewTurnState) -> dict:
    """Evaluate the stop conditions."""
    decision = should_stop(state["session"].progress)
    return {"stop": decision.stop, "stop_reason": decision.reason}


async def next_question_node(state: InterviewTurnState, config: RunnableConfig) -> dict:
    """Ask the oracle for the next question; a None question votes to stop."""
    session = state["session"]
    logger.info(f"Next question node for session: {session.session_id}")

    try:
        question = await _oracle(config).generate_next_question(
            session.profile,
            session.question_history,
            session.progress.strategy,
            question_context(session),
            session.language,
        )
    except OracleUnavailableError as e:
        return {
            "session": hold_for_retry(session, f"Question request failed: {e}"),
            "stop": False,
        }

    if question is None:
        return {"stop": True, "stop_reason": ORACLE_STOP_REASON}

    return {"session": present_question(session, question), "stop": False}


async def guidance_node(state: InterviewTurnState, config: RunnableConfig) -> dict:
    """Stop the interview and attach final guidance."""
    session = stop_session(state["session"], state.get("stop_reason") or "Stopped")

    try:
        guidance = await _oracle(config).generate_guidance(
            session.progress.candidates, session.profile, session.language
        )
    except OracleUnavailableError as e:
        session = record_oracle_failure(session, f"Guidance request failed: {e}")
        guidance = fallback_guidance()

    return {"session": finish_session(session, guidance)}


# ==============================================================================
# ROUTING
# ==============================================================================


def route_after_extract(state: InterviewTurnState) -> str:
    """Skip the diagnosis call until there is at least one answer."""
    if state["session"].answers:
        return "diagnose"
    return "analyze"


def route_after_stop_check(state: InterviewTurnState) -> str:
    if state.get("stop"):
        return "guidance"
    return "next_question"


def route_after_question(state: InterviewTurnState) -> str:
    if state.get("stop"):
        return "guidance"
    return "end"
