"""Adaptive interview API endpoints.

A client starts an interview with a profile, then answers one question per
request until the interview stops with guidance. Finished interviews can be
exported as a report and discussed through follow-up questions.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from adaptive_interview.api.dependencies import get_interview_service
from adaptive_interview.engine.report import InterviewReport
from adaptive_interview.engine.session import InterviewStateError
from adaptive_interview.models.messages import (
    AnswerRequest,
    FollowupRequest,
    FollowupResponse,
    StartInterviewRequest,
    TurnResponse,
)
from adaptive_interview.models.session import InterviewSession
from adaptive_interview.oracle.base import OracleAuthError
from adaptive_interview.services.interview_service import (
    InterviewService,
    SessionNotFoundError,
)
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/interview", tags=["Interview"])


def _http_error(e: Exception, action: str) -> HTTPException:
    """Map service exceptions to HTTP errors."""
    if isinstance(e, SessionNotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Session not found"
        )
    if isinstance(e, InterviewStateError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if isinstance(e, OracleAuthError):
        logger.error(f"Oracle authentication failed while trying to {action}: {e}")
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Reasoning service rejected the configured credentials",
        )

    logger.error(f"Error trying to {action}: {str(e)}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}: {str(e)}",
    )


@router.post("/start", response_model=TurnResponse)
async def start_interview(
    request: StartInterviewRequest,
    service: InterviewService = Depends(get_interview_service),
):
    """
    Start a new interview.

    Returns the session ID, the first question and the initial progress.
    """
    try:
        session = await service.start(
            request.profile,
            language=request.language,
            max_questions=request.max_questions,
            target_confidence=request.target_confidence,
        )
    except Exception as e:
        raise _http_error(e, "start interview")

    return TurnResponse.from_session(session)


@router.post("/answer", response_model=TurnResponse)
async def answer_question(
    request: AnswerRequest,
    service: InterviewService = Depends(get_interview_service),
):
    """
    Answer the current question.

    Returns the next question, or the final candidates and guidance once the
    interview stops.
    """
    try:
        session = await service.answer(request.session_id, request.answer)
    except Exception as e:
        raise _http_error(e, "process answer")

    return TurnResponse.from_session(session)


@router.post("/{session_id}/retry", response_model=TurnResponse)
async def retry_turn(
    session_id: str, service: InterviewService = Depends(get_interview_service)
):
    """Re-run the current turn, e.g. after the reasoning service was unavailable."""
    try:
        session = await service.retry(session_id)
    except Exception as e:
        raise _http_error(e, "retry turn")

    return TurnResponse.from_session(session)


@router.get("/{session_id}", response_model=InterviewSession)
async def get_session(
    session_id: str, service: InterviewService = Depends(get_interview_service)
):
    """Get the full session snapshot."""
    try:
        return await service.get(session_id)
    except Exception as e:
        raise _http_error(e, "load session")


@router.get("/{session_id}/report", response_model=InterviewReport)
async def get_report(
    session_id: str, service: InterviewService = Depends(get_interview_service)
):
    """Export the interview report."""
    try:
        return await service.report(session_id)
    except Exception as e:
        raise _http_error(e, "build report")


@router.post("/{session_id}/followup", response_model=FollowupResponse)
async def ask_followup(
    session_id: str,
    request: FollowupRequest,
    service: InterviewService = Depends(get_interview_service),
):
    """Ask a follow-up question about a finished interview."""
    try:
        answer = await service.followup(
            session_id,
            request.question,
            [turn.model_dump() for turn in request.chat_history],
        )
    except Exception as e:
        raise _http_error(e, "answer follow-up")

    return FollowupResponse(session_id=session_id, answer=answer)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: str, service: InterviewService = Depends(get_interview_service)
):
    """Delete a stored session."""
    try:
        deleted = await service.delete(session_id)
    except Exception as e:
        raise _http_error(e, "delete session")

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Session not found"
        )
