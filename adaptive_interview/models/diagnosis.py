"""Candidate diagnosis models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from enum import Enum


class Likelihood(str, Enum):
    """Confidence bucket for a candidate."""

    VERY_LOW = "very_low"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very_high"


class Urgency(str, Enum):
    """Internal urgency levels."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    EMERGENCY = "emergency"


class OracleDiagnosis(BaseModel):
    """A differential row exactly as the oracle returns it."""

    model_config = ConfigDict(populate_by_name=True)

    condition: str = Field(..., min_length=1)
    probability: float = Field(..., allow_inf_nan=False)
    confidence: Optional[str] = None  # "high" | "medium" | "low"
    reasoning: str = ""
    urgency_level: str = Field(default="routine", alias="urgencyLevel")

    @field_validator("probability", mode="before")
    @classmethod
    def _strip_percent(cls, value):
        if isinstance(value, str):
            return value.strip().rstrip("%").strip()
        return value


class CandidateDiagnosis(BaseModel):
    """A ranked candidate explanation held by the session."""

    name: str
    confidence: float = Field(..., ge=0.0, le=100.0)
    likelihood: Likelihood
    urgency: Urgency = Urgency.MODERATE
    supporting_evidence: List[str] = Field(default_factory=list)
    reasoning: str = ""


class ExcludedCandidate(BaseModel):
    """A ruled-out candidate. Reserved; nothing populates it yet."""

    name: str
    reason: str
    evidence: str
    exclusion_confidence: float = Field(..., ge=0.0, le=100.0)
