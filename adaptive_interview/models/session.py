"""Interview session state and its persisted snapshot shape."""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime
from enum import Enum
from adaptive_interview.models.evidence import BodySystem, Profile
from adaptive_interview.models.progress import Progress
from adaptive_interview.models.question import Question
import uuid


class SessionStatus(str, Enum):
    """Interview state machine states."""

    COLLECTING = "collecting"
    AWAITING_ORACLE = "awaiting_oracle"
    STOPPED = "stopped"


class EventType(str, Enum):
    """Audit timeline event kinds."""

    NEW_EVIDENCE = "new_evidence"
    DIAGNOSES_UPDATED = "diagnoses_updated"
    ORACLE_FAILURE = "oracle_failure"
    QUESTION_ASKED = "question_asked"
    INTERVIEW_STOPPED = "interview_stopped"


class AnswerRecord(BaseModel):
    """One answer together with the question that produced it."""

    question_id: int
    question: str
    answer: Any
    answered_at: datetime = Field(default_factory=datetime.utcnow)


class InterviewEvent(BaseModel):
    """Audit timeline entry."""

    type: EventType
    details: str
    confidence_change: Optional[float] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class EvidenceAnalysis(BaseModel):
    """Rule-based view over the evidence list, refreshed every turn."""

    completeness: int = 0
    body_system_coverage: List[BodySystem] = Field(default_factory=list)
    critical: List[str] = Field(default_factory=list)
    red_flags: List[str] = Field(default_factory=list)
    missing_information: List[str] = Field(default_factory=list)


class Guidance(BaseModel):
    """Final guidance returned when the interview stops."""

    next_steps: List[str] = Field(default_factory=list)
    self_care_recommendations: List[str] = Field(default_factory=list)
    when_to_seek_care: List[str] = Field(default_factory=list)
    emergency_indicators: List[str] = Field(default_factory=list)


class InterviewSession(BaseModel):
    """Complete state of one interview.

    Holds plain data only, so the model itself is the persisted snapshot:
    resuming an interview is ``InterviewSession.from_snapshot(doc)``.
    """

    session_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    status: SessionStatus = SessionStatus.COLLECTING
    language: str = "en"

    profile: Profile
    progress: Progress = Field(default_factory=Progress)

    question_history: List[str] = Field(default_factory=list)
    answers: List[AnswerRecord] = Field(default_factory=list)
    current_question: Optional[Question] = None

    analysis: EvidenceAnalysis = Field(default_factory=EvidenceAnalysis)
    stop_reason: Optional[str] = None
    guidance: Optional[Guidance] = None
    last_error: Optional[str] = None
    events: List[InterviewEvent] = Field(default_factory=list)

    def to_snapshot(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible document."""
        return self.model_dump(mode="json")

    @classmethod
    def from_snapshot(cls, document: Dict[str, Any]) -> "InterviewSession":
        """Rebuild a session from a stored document (extra keys like ``_id`` ignored)."""
        return cls.model_validate(
            {key: value for key, value in document.items() if key != "_id"}
        )

    class Config:
        json_schema_extra = {
            "example": {
                "session_id": "123e4567-e89b-12d3-a456-426614174000",
                "status": "collecting",
                "language": "en",
                "profile": {"age": 42, "gender": "female", "primary_complaint": "headache"},
                "question_history": ["On a scale of 1-10, how severe is your headache?"],
            }
        }
