"""API request and response models."""

from pydantic import BaseModel, Field
from typing import List, Literal, Optional, Union
from adaptive_interview.models.evidence import Profile
from adaptive_interview.models.progress import Progress
from adaptive_interview.models.question import Question
from adaptive_interview.models.session import (
    EvidenceAnalysis,
    Guidance,
    InterviewSession,
    SessionStatus,
)


class StartInterviewRequest(BaseModel):
    """Request to start a new interview."""

    profile: Profile
    language: Optional[str] = Field(None, description="Language code, e.g. en or zh-TW")
    max_questions: Optional[int] = Field(None, ge=1)
    target_confidence: Optional[float] = Field(None, ge=0.0, le=85.0)


class AnswerRequest(BaseModel):
    """Answer to the current question."""

    session_id: str = Field(..., description="Session ID")
    answer: Union[int, float, str, List[str]] = Field(
        ..., description="Scale value, option, free text or list of selected options"
    )


class TurnResponse(BaseModel):
    """State of the interview after a turn."""

    session_id: str
    status: SessionStatus
    question: Optional[Question] = None
    progress: Progress
    analysis: EvidenceAnalysis
    stop_reason: Optional[str] = None
    guidance: Optional[Guidance] = None
    last_error: Optional[str] = None

    @classmethod
    def from_session(cls, session: InterviewSession) -> "TurnResponse":
        return cls(
            session_id=session.session_id,
            status=session.status,
            question=session.current_question,
            progress=session.progress,
            analysis=session.analysis,
            stop_reason=session.stop_reason,
            guidance=session.guidance,
            last_error=session.last_error,
        )


class ChatTurn(BaseModel):
    """One message of the follow-up conversation."""

    role: Literal["user", "assistant"]
    content: str


class FollowupRequest(BaseModel):
    """Free-form question asked after the interview finished."""

    question: str = Field(..., min_length=1, max_length=2000)
    chat_history: List[ChatTurn] = Field(default_factory=list)


class FollowupResponse(BaseModel):
    """Oracle reply to a follow-up question."""

    session_id: str
    answer: str
