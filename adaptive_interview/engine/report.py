"""Interview report export."""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from adaptive_interview.models.diagnosis import CandidateDiagnosis, ExcludedCandidate
from adaptive_interview.models.evidence import BodySystem, Profile
from adaptive_interview.models.session import (
    AnswerRecord,
    Guidance,
    InterviewEvent,
    InterviewSession,
    SessionStatus,
)


class ReportSummary(BaseModel):
    """Headline numbers of an interview."""

    total_questions: int
    final_confidence: float
    body_systems_covered: List[BodySystem] = Field(default_factory=list)
    completeness: int = 0
    information_gain: float = 0.0
    critical_findings: List[str] = Field(default_factory=list)
    red_flags: List[str] = Field(default_factory=list)
    stop_reason: Optional[str] = None


class InterviewReport(BaseModel):
    """Exportable record of a whole interview."""

    session_id: str
    generated_at: datetime = Field(default_factory=datetime.utcnow)
    status: SessionStatus
    language: str

    profile: Profile
    final_candidates: List[CandidateDiagnosis] = Field(default_factory=list)
    excluded_candidates: List[ExcludedCandidate] = Field(default_factory=list)
    answers: List[AnswerRecord] = Field(default_factory=list)
    events: List[InterviewEvent] = Field(default_factory=list)
    guidance: Optional[Guidance] = None

    summary: ReportSummary


def build_report(session: InterviewSession) -> InterviewReport:
    """Build the report from the session as it stands (stopped or not)."""
    progress = session.progress
    analysis = session.analysis

    return InterviewReport(
        session_id=session.session_id,
        status=session.status,
        language=session.language,
        profile=session.profile,
        final_candidates=list(progress.candidates),
        excluded_candidates=list(progress.excluded),
        answers=list(session.answers),
        events=list(session.events),
        guidance=session.guidance,
        summary=ReportSummary(
            total_questions=progress.total_questions_asked,
            final_confidence=progress.current_confidence,
            body_systems_covered=list(analysis.body_system_coverage),
            completeness=analysis.completeness,
            information_gain=progress.information_gain,
            critical_findings=list(analysis.critical),
            red_flags=list(analysis.red_flags),
            stop_reason=session.stop_reason,
        ),
    )
