"""Turn one raw answer into a structured evidence record."""

import re
import logging
from typing import Any, List, Optional, Sequence
from adaptive_interview.models.evidence import BodySystem, Evidence, Onset, symptom_key

logger = logging.getLogger(__name__)

DEFAULT_SEVERITY = 5

SEVERITY_CUES = ("severity", "scale", "1-10")
DURATION_CUES = ("how long", "duration")
LOCATION_CUES = ("where", "location")

# Scan order matters: only the first match becomes evidence.
COMMON_SYMPTOMS = [
    "headache",
    "fever",
    "cough",
    "nausea",
    "vomiting",
    "diarrhea",
    "chest pain",
    "abdominal pain",
    "back pain",
    "fatigue",
    "dizziness",
    "shortness of breath",
    "sore throat",
    "runny nose",
    "sneezing",
    "muscle aches",
    "joint pain",
    "rash",
    "itching",
    "swelling",
    "urinary frequency",
    "burning urination",
    "constipation",
    "bloating",
]

# Substring of the evidence name -> body system, first match wins
BODY_SYSTEM_MAP = [
    ("chest_pain", BodySystem.CARDIOVASCULAR),
    ("headache", BodySystem.NEUROLOGICAL),
    ("dizziness", BodySystem.NEUROLOGICAL),
    ("cough", BodySystem.RESPIRATORY),
    ("shortness_of_breath", BodySystem.RESPIRATORY),
    ("sore_throat", BodySystem.RESPIRATORY),
    ("runny_nose", BodySystem.RESPIRATORY),
    ("sneezing", BodySystem.RESPIRATORY),
    ("abdominal_pain", BodySystem.GASTROINTESTINAL),
    ("nausea", BodySystem.GASTROINTESTINAL),
    ("vomiting", BodySystem.GASTROINTESTINAL),
    ("diarrhea", BodySystem.GASTROINTESTINAL),
    ("constipation", BodySystem.GASTROINTESTINAL),
    ("bloating", BodySystem.GASTROINTESTINAL),
    ("rash", BodySystem.DERMATOLOGICAL),
    ("itching", BodySystem.DERMATOLOGICAL),
    ("joint_pain", BodySystem.MUSCULOSKELETAL),
    ("back_pain", BodySystem.MUSCULOSKELETAL),
    ("muscle_aches", BodySystem.MUSCULOSKELETAL),
    ("urinary", BodySystem.GENITOURINARY),
    ("fever", BodySystem.GENERAL),
]


def infer_body_systems(name: str) -> List[BodySystem]:
    """Body system tags for an evidence name (general when unknown)."""
    for fragment, system in BODY_SYSTEM_MAP:
        if fragment in name:
            return [system]
    return [BodySystem.GENERAL]


def _is_empty(answer: Any) -> bool:
    if answer is None:
        return True
    if isinstance(answer, str):
        return not answer.strip()
    if isinstance(answer, (list, tuple, dict)):
        return len(answer) == 0
    return False


def _answer_text(answer: Any) -> str:
    if isinstance(answer, (list, tuple)):
        return ", ".join(str(part) for part in answer)
    return str(answer)


def coerce_severity(answer: Any) -> int:
    """Read a 1-10 severity from an answer, defaulting to 5."""
    if isinstance(answer, (int, float)) and not isinstance(answer, bool):
        value = int(answer)
    else:
        text = _answer_text(answer).strip()
        try:
            value = int(text)
        except ValueError:
            numbers = re.findall(r"\b(10|[1-9])\b", text)
            value = int(numbers[0]) if numbers else DEFAULT_SEVERITY

    if value < 1:
        return DEFAULT_SEVERITY
    return min(10, value)


def find_mentioned_symptoms(text: str) -> List[str]:
    """Common symptom keywords present in the text, in scan order."""
    lowered = text.lower()
    return [symptom for symptom in COMMON_SYMPTOMS if symptom in lowered]


def _record(name: str, **fields) -> Evidence:
    return Evidence(
        name=name,
        onset=Onset.GRADUAL,
        body_systems=infer_body_systems(name),
        **fields,
    )


def extract_evidence(
    answer: Any, question_history: Sequence[str], primary_symptom: str
) -> Optional[Evidence]:
    """
    Build at most one evidence record from the latest answer.

    The last asked question decides what the answer describes (severity,
    duration, location). Otherwise a newly volunteered common symptom becomes
    its own record, and anything else is kept as an associated-symptom note
    on the primary complaint.

    Args:
        answer: Raw answer (text, number, or list of selected options)
        question_history: Questions asked so far, oldest first
        primary_symptom: Normalised primary complaint name

    Returns:
        Evidence record, or None when there is no question or no answer
    """
    if not question_history or _is_empty(answer):
        return None

    last_question = question_history[-1].lower()

    if any(cue in last_question for cue in SEVERITY_CUES):
        return _record(primary_symptom, severity=coerce_severity(answer))

    if any(cue in last_question for cue in DURATION_CUES):
        return _record(
            primary_symptom, duration=answer if isinstance(answer, str) else ""
        )

    if any(cue in last_question for cue in LOCATION_CUES):
        return _record(
            primary_symptom, location=answer if isinstance(answer, str) else None
        )

    mentioned = find_mentioned_symptoms(_answer_text(answer))
    if mentioned:
        logger.info(
            f"New symptom volunteered in answer: {mentioned[0]} (also found: {mentioned[1:]})"
        )
        return _record(symptom_key(mentioned[0]), severity=DEFAULT_SEVERITY)

    return _record(
        primary_symptom,
        associated_symptoms=[answer] if isinstance(answer, str) else [],
    )
