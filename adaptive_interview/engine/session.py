"""Pure state transitions for an interview session.

Every function takes an ``InterviewSession`` and returns a new one; nothing
here performs I/O or keeps hidden state. The turn workflow in
``adaptive_interview.agents`` sequences these transitions around oracle calls.
"""

from typing import Any, Optional, Sequence
from datetime import datetime
from adaptive_interview.config.settings import settings
from adaptive_interview.engine.answer_extractor import extract_evidence
from adaptive_interview.engine.completeness import (
    body_system_coverage,
    identify_missing_information,
    score_completeness,
)
from adaptive_interview.engine.diagnoses import information_gain, merge_diagnoses
from adaptive_interview.engine.red_flags import detect_critical_findings
from adaptive_interview.engine.sanitizer import normalize_question
from adaptive_interview.engine.strategy import select_strategy
from adaptive_interview.models.diagnosis import OracleDiagnosis
from adaptive_interview.models.evidence import Profile
from adaptive_interview.models.progress import Progress
from adaptive_interview.models.question import Question
from adaptive_interview.models.session import (
    AnswerRecord,
    EventType,
    EvidenceAnalysis,
    Guidance,
    InterviewEvent,
    InterviewSession,
    SessionStatus,
)
import logging

logger = logging.getLogger(__name__)

ORACLE_STOP_REASON = "Oracle reported no further questions needed"


class InterviewStateError(Exception):
    """Raised when an operation is not valid in the session's current state."""


def _update(session: InterviewSession, **changes) -> InterviewSession:
    changes["updated_at"] = datetime.utcnow()
    return session.model_copy(update=changes)


def _event(
    session: InterviewSession,
    event_type: EventType,
    details: str,
    confidence_change: Optional[float] = None,
):
    return [
        *session.events,
        InterviewEvent(
            type=event_type, details=details, confidence_change=confidence_change
        ),
    ]


def start_session(
    profile: Profile,
    language: Optional[str] = None,
    max_questions: Optional[int] = None,
    target_confidence: Optional[float] = None,
) -> InterviewSession:
    """Create a fresh session; unset limits come from settings."""
    progress = Progress(
        max_questions=max_questions or settings.max_questions,
        target_confidence=(
            settings.target_confidence
            if target_confidence is None
            else target_confidence
        ),
    )
    session = InterviewSession(
        profile=profile.model_copy(update={"evidence": list(profile.evidence)}),
        progress=progress,
        language=language or settings.default_language,
    )
    logger.info(
        f"Started session {session.session_id} for complaint "
        f"'{profile.primary_symptom}' (target={progress.target_confidence}, "
        f"max_questions={progress.max_questions})"
    )
    return session


def record_answer(session: InterviewSession, answer: Any) -> InterviewSession:
    """
    Store the answer and append any evidence extracted from it.

    The session moves to ``awaiting_oracle`` until the turn completes.

    Raises:
        InterviewStateError: If the interview has already stopped
    """
    if session.status == SessionStatus.STOPPED:
        raise InterviewStateError(f"Session {session.session_id} has already stopped")

    question_text = session.question_history[-1] if session.question_history else ""
    question_id = (
        session.current_question.id
        if session.current_question
        else len(session.question_history)
    )
    answers = [
        *session.answers,
        AnswerRecord(question_id=question_id, question=question_text, answer=answer),
    ]

    profile = session.profile
    progress = session.progress
    events = session.events

    evidence = extract_evidence(
        answer, session.question_history, profile.primary_symptom
    )
    if evidence is not None:
        profile = profile.model_copy(update={"evidence": [*profile.evidence, evidence]})
        progress = progress.model_copy(
            update={"total_questions_asked": progress.total_questions_asked + 1}
        )
        events = _event(
            session,
            EventType.NEW_EVIDENCE,
            f'Evidence "{evidence.name}" collected for analysis',
        )
        logger.info(
            f"Session {session.session_id}: evidence '{evidence.name}' recorded "
            f"({progress.total_questions_asked}/{progress.max_questions})"
        )

    return _update(
        session,
        answers=answers,
        profile=profile,
        progress=progress,
        events=events,
        current_question=None,
        status=SessionStatus.AWAITING_ORACLE,
    )


def apply_diagnoses(
    session: InterviewSession, raw: Sequence[OracleDiagnosis]
) -> InterviewSession:
    """Replace the candidate list with the oracle's latest differential."""
    previous = session.progress
    candidates = merge_diagnoses(
        raw, session.profile.evidence, session.profile.primary_symptom
    )
    confidence = candidates[0].confidence if candidates else 0.0

    progress = previous.model_copy(
        update={
            "candidates": candidates,
            "current_confidence": confidence,
            "information_gain": information_gain(previous.candidates, candidates),
        }
    )
    change = confidence - previous.current_confidence
    top = candidates[0].name if candidates else "none"
    logger.info(
        f"Session {session.session_id}: {len(candidates)} candidates, "
        f"top={top} ({confidence:g}%, change {change:+g})"
    )
    return _update(
        session,
        progress=progress,
        last_error=None,
        events=_event(
            session,
            EventType.DIAGNOSES_UPDATED,
            f"Oracle provided {len(candidates)} candidates; top: {top}",
            confidence_change=change,
        ),
    )


def record_oracle_failure(session: InterviewSession, reason: str) -> InterviewSession:
    """Log and store an oracle failure without touching the belief state."""
    logger.error(f"Session {session.session_id}: oracle failure - {reason}")
    return _update(
        session,
        last_error=reason,
        events=_event(session, EventType.ORACLE_FAILURE, reason),
    )


def degrade_turn(session: InterviewSession, reason: str) -> InterviewSession:
    """Fall back to an empty belief (confidence 0, no candidates) for this turn."""
    session = record_oracle_failure(session, reason)
    progress = session.progress.model_copy(
        update={"candidates": [], "current_confidence": 0.0, "information_gain": 0.0}
    )
    return _update(session, progress=progress)


def hold_for_retry(session: InterviewSession, reason: str) -> InterviewSession:
    """No question could be produced: wait for the next user action."""
    session = record_oracle_failure(session, reason)
    return _update(session, status=SessionStatus.COLLECTING, current_question=None)


def refresh_analysis(session: InterviewSession) -> InterviewSession:
    """Recompute completeness, coverage, critical findings and red flags."""
    evidence = session.profile.evidence
    primary = session.profile.primary_symptom
    critical, red_flags = detect_critical_findings(evidence)

    if red_flags:
        logger.warning(f"Session {session.session_id}: red flags {red_flags}")

    analysis = EvidenceAnalysis(
        completeness=score_completeness(evidence, primary),
        body_system_coverage=body_system_coverage(evidence),
        critical=critical,
        red_flags=red_flags,
        missing_information=identify_missing_information(evidence, primary),
    )
    return _update(session, analysis=analysis)


def refresh_strategy(session: InterviewSession) -> InterviewSession:
    """Store the strategy for the next question on the progress record."""
    strategy = select_strategy(session.progress, session.profile.evidence)
    progress = session.progress.model_copy(update={"strategy": strategy})
    return _update(session, progress=progress)


def present_question(session: InterviewSession, question: Question) -> InterviewSession:
    """Clean, number and show the next question."""
    question = normalize_question(question, session.language).model_copy(
        update={"id": len(session.question_history) + 1}
    )
    logger.info(
        f"Session {session.session_id}: asking #{question.id} "
        f"({session.progress.strategy.value}): {question.text}"
    )
    return _update(
        session,
        current_question=question,
        question_history=[*session.question_history, question.text],
        status=SessionStatus.COLLECTING,
        events=_event(session, EventType.QUESTION_ASKED, question.text),
    )


def stop_session(session: InterviewSession, reason: str) -> InterviewSession:
    """Enter the terminal state; guidance is attached afterwards."""
    logger.info(f"Session {session.session_id}: stopped - {reason}")
    return _update(
        session,
        status=SessionStatus.STOPPED,
        stop_reason=reason,
        current_question=None,
        events=_event(session, EventType.INTERVIEW_STOPPED, reason),
    )


def finish_session(session: InterviewSession, guidance: Guidance) -> InterviewSession:
    """Attach the final guidance to a stopped session."""
    return _update(session, guidance=guidance)


def fallback_guidance() -> Guidance:
    """Minimal guidance used when the oracle cannot provide any."""
    return Guidance(
        next_steps=[
            "Consult a healthcare professional to review your symptoms in person."
        ],
        self_care_recommendations=[
            "Rest, stay hydrated and monitor how your symptoms change."
        ],
        when_to_seek_care=[
            "Seek medical care if symptoms persist, worsen or new symptoms appear."
        ],
        emergency_indicators=[],
    )
