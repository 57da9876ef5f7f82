"""Subject profile and evidence records."""

from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum
import re


def symptom_key(text: str) -> str:
    """Normalise a complaint or location to a snake_case key.

    "Chest pain" -> "chest_pain", "Right lower-quadrant" -> "right_lower_quadrant".
    """
    return re.sub(r"[^\w]+", "_", (text or "").strip().lower()).strip("_")


class BodySystem(str, Enum):
    """Body systems an evidence record can touch."""

    GENERAL = "general"
    NEUROLOGICAL = "neurological"
    CARDIOVASCULAR = "cardiovascular"
    RESPIRATORY = "respiratory"
    GASTROINTESTINAL = "gastrointestinal"
    MUSCULOSKELETAL = "musculoskeletal"
    DERMATOLOGICAL = "dermatological"
    ENDOCRINE = "endocrine"
    PSYCHIATRIC = "psychiatric"
    GENITOURINARY = "genitourinary"
    HEMATOLOGIC = "hematologic"
    IMMUNOLOGIC = "immunologic"


class Onset(str, Enum):
    """How the symptom started."""

    SUDDEN = "sudden"
    GRADUAL = "gradual"
    INTERMITTENT = "intermittent"


class Gender(str, Enum):
    """Subject gender as reported."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    PREFER_NOT_TO_SAY = "prefer_not_to_say"


class Evidence(BaseModel):
    """One structured fact extracted from a single answer."""

    name: str
    severity: int = Field(default=0, ge=0, le=10)  # 0 = unknown
    duration: str = ""
    onset: Optional[Onset] = None

    location: Optional[str] = None
    frequency: Optional[str] = None
    timing: List[str] = Field(default_factory=list)  # "morning", "after meals"
    pattern: Optional[str] = None  # "worse with movement"

    triggers: List[str] = Field(default_factory=list)
    relieving_factors: List[str] = Field(default_factory=list)
    associated_symptoms: List[str] = Field(default_factory=list)

    body_systems: List[BodySystem] = Field(default_factory=list)
    notes: Optional[str] = None


class Profile(BaseModel):
    """Subject descriptor plus the evidence gathered so far.

    Evidence is append-only and owned by a single interview session.
    """

    age: int = Field(..., ge=0, le=130)
    gender: Gender = Gender.PREFER_NOT_TO_SAY
    name: Optional[str] = None
    primary_complaint: str = Field(..., min_length=1, max_length=500)

    medications: List[str] = Field(default_factory=list)
    allergies: List[str] = Field(default_factory=list)
    past_medical_history: List[str] = Field(default_factory=list)
    family_history: List[str] = Field(default_factory=list)

    evidence: List[Evidence] = Field(default_factory=list)

    @property
    def primary_symptom(self) -> str:
        """Primary complaint as an evidence name."""
        return symptom_key(self.primary_complaint)

    class Config:
        json_schema_extra = {
            "example": {
                "age": 42,
                "gender": "female",
                "primary_complaint": "headache",
                "medications": ["ibuprofen"],
            }
        }
