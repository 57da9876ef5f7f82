"""Interview question models."""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from enum import Enum


class QuestionType(str, Enum):
    """How the question expects to be answered."""

    SCALE = "scale"
    MULTIPLE_CHOICE = "multiple_choice"
    YES_NO = "yes_no"
    TEXT = "text"
    LOCATION = "location"
    DURATION = "duration"


class QuestionPurpose(str, Enum):
    """Why the question is being asked."""

    DISCRIMINATIVE = "discriminative"
    CONFIRMATION = "confirmation"
    RED_FLAG = "red_flag"
    COMPLETENESS = "completeness"


class ScaleRange(BaseModel):
    """Bounds and optional labels for scale questions."""

    min: int = 1
    max: int = 10
    labels: Dict[int, str] = Field(default_factory=dict)


class Question(BaseModel):
    """A single question shown to the subject."""

    id: int = 0
    text: str = Field(..., min_length=1)
    type: QuestionType = QuestionType.TEXT
    options: List[str] = Field(default_factory=list)
    scale_range: Optional[ScaleRange] = None
    purpose: QuestionPurpose = QuestionPurpose.COMPLETENESS
    targeted_symptom: Optional[str] = None

    # Oracle topic, e.g. "duration", "location", "frequency", "triggers"
    topic: Optional[str] = None
