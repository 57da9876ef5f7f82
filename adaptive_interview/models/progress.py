"""Interview progress tracking."""

from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum
from adaptive_interview.models.diagnosis import CandidateDiagnosis, ExcludedCandidate


class Strategy(str, Enum):
    """Questioning intent for the next oracle question."""

    DISCRIMINATIVE = "discriminative"
    CONFIRMATION = "confirmation"
    RED_FLAG_CHECK = "red_flag_check"
    COMPLETENESS = "completeness"


class Progress(BaseModel):
    """Counters, confidence and ranked candidates for one interview."""

    total_questions_asked: int = Field(default=0, ge=0)
    max_questions: int = Field(default=20, ge=1)
    current_confidence: float = Field(default=0.0, ge=0.0, le=100.0)
    target_confidence: float = Field(default=70.0, ge=0.0, le=85.0)
    strategy: Strategy = Strategy.DISCRIMINATIVE
    information_gain: float = 0.0  # advisory only

    candidates: List[CandidateDiagnosis] = Field(default_factory=list)
    excluded: List[ExcludedCandidate] = Field(default_factory=list)

    @property
    def top_candidate(self) -> Optional[CandidateDiagnosis]:
        return self.candidates[0] if self.candidates else None


class StopDecision(BaseModel):
    """Outcome of the stop evaluation."""

    stop: bool
    reason: Optional[str] = None
