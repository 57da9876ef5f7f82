"""Reasoning oracle contract and its error hierarchy."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence
from adaptive_interview.models.diagnosis import CandidateDiagnosis, OracleDiagnosis
from adaptive_interview.models.evidence import Profile
from adaptive_interview.models.progress import Strategy
from adaptive_interview.models.question import Question
from adaptive_interview.models.session import AnswerRecord, Guidance


class OracleError(Exception):
    """Base class for oracle failures."""


class OracleAuthError(OracleError):
    """The oracle rejected our credentials. Never retried."""


class OracleUnavailableError(OracleError):
    """Retries exhausted or the call timed out."""


class OracleResponseError(OracleUnavailableError):
    """The oracle answered, but not with anything we can use."""


class ReasoningOracle(ABC):
    """
    External reasoning service consulted by the interview.

    The engine never judges medical content itself: diagnoses, question
    wording and guidance all come from an oracle. Every call takes the
    session language explicitly.
    """

    @abstractmethod
    async def generate_diagnoses(
        self,
        profile: Profile,
        answers: Sequence[AnswerRecord],
        language: str,
    ) -> List[OracleDiagnosis]:
        """Return the current differential for the profile and answers."""

    @abstractmethod
    async def generate_next_question(
        self,
        profile: Profile,
        history: Sequence[str],
        strategy: Strategy,
        context: Optional[Dict[str, Any]],
        language: str,
    ) -> Optional[Question]:
        """Return the next question, or None when nothing more should be asked."""

    @abstractmethod
    async def generate_guidance(
        self,
        candidates: Sequence[CandidateDiagnosis],
        profile: Profile,
        language: str,
    ) -> Guidance:
        """Return final guidance for the ranked candidates."""

    @abstractmethod
    async def answer_followup(
        self,
        question: str,
        candidates: Sequence[CandidateDiagnosis],
        profile: Profile,
        chat_history: Sequence[Dict[str, str]],
        language: str,
    ) -> str:
        """Answer a free-form question asked after the interview finished."""
