"""
Pytest fixtures shared by the interview engine tests.

Provides a scripted in-memory oracle and an in-memory snapshot store so the
workflow, service and API can run without a model endpoint or MongoDB.
"""

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from adaptive_interview.engine.diagnoses import confidence_bucket
from adaptive_interview.models.diagnosis import CandidateDiagnosis, OracleDiagnosis
from adaptive_interview.models.evidence import Profile
from adaptive_interview.models.question import Question, QuestionType
from adaptive_interview.models.session import Guidance, InterviewSession
from adaptive_interview.oracle.base import ReasoningOracle
from adaptive_interview.services.session_service import SessionService


class FakeOracle(ReasoningOracle):
    """Oracle that replays scripted results.

    Each queue entry is returned in order; an exception instance is raised
    instead. When a queue is empty a neutral default is used.
    """

    def __init__(
        self,
        diagnoses: Optional[List[Any]] = None,
        questions: Optional[List[Any]] = None,
        guidance: Any = None,
        followup: Any = "Please see a doctor if it gets worse.",
        delay: float = 0.0,
    ):
        self.diagnoses = list(diagnoses or [])
        self.questions = list(questions or [])
        self.guidance = guidance or Guidance(
            next_steps=["Book a GP appointment"],
            self_care_recommendations=["Rest"],
            when_to_seek_care=["If the pain gets worse"],
            emergency_indicators=["Sudden weakness"],
        )
        self.followup = followup
        self.delay = delay
        self.calls: List[Dict[str, Any]] = []

    @staticmethod
    def _resolve(value):
        if isinstance(value, Exception):
            raise value
        return value

    async def generate_diagnoses(self, profile, answers, language):
        self.calls.append(
            {"method": "diagnoses", "answers": list(answers), "language": language}
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        return self._resolve(self.diagnoses.pop(0) if self.diagnoses else [])

    async def generate_next_question(self, profile, history, strategy, context, language):
        self.calls.append(
            {
                "method": "question",
                "history": list(history),
                "strategy": strategy,
                "context": context,
                "language": language,
            }
        )
        if self.questions:
            return self._resolve(self.questions.pop(0))
        return Question(text=f"Anything else about question {len(history) + 1}?")

    async def generate_guidance(self, candidates, profile, language):
        self.calls.append({"method": "guidance", "candidates": list(candidates)})
        return self._resolve(self.guidance)

    async def answer_followup(self, question, candidates, profile, chat_history, language):
        self.calls.append(
            {"method": "followup", "question": question, "chat_history": list(chat_history)}
        )
        return self._resolve(self.followup)

    def methods(self) -> List[str]:
        return [call["method"] for call in self.calls]


class InMemorySessionService(SessionService):
    """SessionService that keeps JSON snapshots in a dict."""

    def __init__(self):
        self.documents: Dict[str, Dict[str, Any]] = {}

    async def create_session(self, session: InterviewSession) -> InterviewSession:
        self.documents[session.session_id] = session.to_snapshot()
        return session

    async def get_session(self, session_id: str) -> Optional[InterviewSession]:
        await asyncio.sleep(0)
        doc = self.documents.get(session_id)
        return InterviewSession.from_snapshot(doc) if doc else None

    async def save_session(self, session: InterviewSession) -> bool:
        self.documents[session.session_id] = session.to_snapshot()
        return True

    async def delete_session(self, session_id: str) -> bool:
        return self.documents.pop(session_id, None) is not None


def diagnosis(condition: str, probability: float, urgency: str = "routine") -> OracleDiagnosis:
    return OracleDiagnosis(
        condition=condition,
        probability=probability,
        confidence="medium",
        reasoning=f"{condition} fits the reported symptoms",
        urgencyLevel=urgency,
    )


def candidate(name: str, confidence: float, urgency: str = "moderate") -> CandidateDiagnosis:
    return CandidateDiagnosis(
        name=name,
        confidence=confidence,
        likelihood=confidence_bucket(confidence),
        urgency=urgency,
    )


@pytest.fixture
def profile():
    """A 42 year old with a headache."""
    return Profile(age=42, gender="female", primary_complaint="Headache")


@pytest.fixture
def make_oracle():
    """Factory for scripted oracles."""
    return FakeOracle


@pytest.fixture
def make_diagnosis():
    """Factory for oracle differential rows."""
    return diagnosis


@pytest.fixture
def make_candidate():
    """Factory for ranked candidates."""
    return candidate


@pytest.fixture
def session_store():
    """Empty in-memory snapshot store."""
    return InMemorySessionService()


@pytest.fixture
def severity_question():
    return Question(
        text="On a scale of 1-10, how severe is your headache?",
        type=QuestionType.SCALE,
        topic="severity",
    )
