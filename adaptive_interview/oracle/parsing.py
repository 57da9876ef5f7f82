"""Turn raw oracle text into validated models."""

import json
import re
import logging
from typing import Any, List, Optional
from pydantic import ValidationError
from adaptive_interview.engine.strategy import purpose_for_strategy
from adaptive_interview.models.diagnosis import OracleDiagnosis
from adaptive_interview.models.progress import Strategy
from adaptive_interview.models.question import Question, QuestionType
from adaptive_interview.models.session import Guidance
from adaptive_interview.oracle.base import OracleResponseError

logger = logging.getLogger(__name__)

DIAGNOSIS_KEYS = ("diagnoses", "data", "results", "diagnosis", "differential")

GUIDANCE_FIELDS = {
    "next_steps": "nextSteps",
    "self_care_recommendations": "selfCareRecommendations",
    "when_to_seek_care": "whenToSeekCare",
    "emergency_indicators": "emergencyIndicators",
}


def strip_md_fences(text: str) -> str:
    """Strip markdown code fences that the LLM sometimes wraps JSON in.

    Handles patterns like:
        ```json\\n{...}\\n```
        ```\\n{...}\\n```
    """
    stripped = text.strip()
    match = re.match(r"^```(?:json)?\s*\n?(.*?)\n?```\s*$", stripped, re.DOTALL)
    if match:
        return match.group(1).strip()
    return stripped


def load_json(text: str) -> Any:
    """Parse oracle output as JSON, tolerating code fences."""
    try:
        return json.loads(strip_md_fences(text))
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse oracle response: {e}, content: {text[:500]}")
        raise OracleResponseError(f"Oracle returned invalid JSON: {e}") from e


def extract_diagnosis_array(payload: Any) -> List[Any]:
    """
    Find the diagnosis list in whatever shape the model produced.

    Tries a top-level array, then the well-known wrapper keys, then the first
    list-valued field of an object.

    Raises:
        OracleResponseError: If no list can be found
    """
    if isinstance(payload, list):
        return payload

    if isinstance(payload, dict):
        for key in DIAGNOSIS_KEYS:
            if isinstance(payload.get(key), list):
                logger.info(f"Found diagnoses under '{key}' key")
                return payload[key]

        for key, value in payload.items():
            if isinstance(value, list):
                logger.info(f"Using first array field '{key}' as diagnoses")
                return value

    raise OracleResponseError(
        f"Expected a diagnosis array, got {type(payload).__name__}"
    )


def parse_diagnoses(payload: Any) -> List[OracleDiagnosis]:
    """Validate each diagnosis row; invalid rows are dropped and logged."""
    rows = extract_diagnosis_array(payload)
    diagnoses = []

    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            logger.warning(f"Dropping diagnosis row {index}: not an object ({row!r})")
            continue
        try:
            diagnoses.append(OracleDiagnosis.model_validate(row))
        except ValidationError as e:
            logger.warning(f"Dropping invalid diagnosis row {index}: {e.errors()}")

    if rows and not diagnoses:
        raise OracleResponseError("No valid diagnoses in oracle response")

    return diagnoses


def _question_type(response_type: Optional[str], topic: Optional[str]) -> QuestionType:
    if response_type:
        try:
            return QuestionType(response_type.strip().lower())
        except ValueError:
            logger.warning(f"Unknown response type '{response_type}', using text")
    if topic == "severity":
        return QuestionType.SCALE
    return QuestionType.TEXT


def parse_question(payload: Any, strategy: Strategy) -> Optional[Question]:
    """
    Build the next question from the oracle payload.

    Returns:
        Question, or None when the oracle says no further question is needed

    Raises:
        OracleResponseError: If the payload carries a question without text
    """
    if not isinstance(payload, dict):
        raise OracleResponseError(
            f"Expected a question object, got {type(payload).__name__}"
        )

    raw = payload.get("question")
    if payload.get("shouldStop") is True or raw is None:
        logger.info(f"Oracle requested stop: {payload.get('reasoning', 'no reason given')}")
        return None

    if isinstance(raw, str):
        raw = {"question": raw}

    text = raw.get("question") or raw.get("text") if isinstance(raw, dict) else None
    if not text or not isinstance(text, str):
        raise OracleResponseError("Oracle question has no text")

    topic = raw.get("questionType") or raw.get("topic")
    options = raw.get("options") if isinstance(raw.get("options"), list) else []

    return Question(
        text=text,
        type=_question_type(raw.get("responseType") or raw.get("type"), topic),
        options=[str(option) for option in options],
        purpose=purpose_for_strategy(strategy),
        targeted_symptom=raw.get("targetedSymptom"),
        topic=topic,
    )


def _string_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(item) for item in value if item]
    return []


def parse_guidance(payload: Any) -> Guidance:
    """Read guidance lists, accepting camelCase or snake_case keys."""
    if not isinstance(payload, dict):
        raise OracleResponseError(
            f"Expected a guidance object, got {type(payload).__name__}"
        )

    fields = {
        field: _string_list(payload.get(camel, payload.get(field)))
        for field, camel in GUIDANCE_FIELDS.items()
    }
    if not any(fields.values()):
        raise OracleResponseError("Oracle guidance is empty")

    return Guidance(**fields)
