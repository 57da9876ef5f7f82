"""Symptom profile completeness scoring."""

from typing import List, Optional, Sequence
from adaptive_interview.models.evidence import BodySystem, Evidence

LOCATION_REQUIRED_SYMPTOMS = [
    "pain",
    "headache",
    "chest_pain",
    "abdominal_pain",
    "rash",
    "swelling",
]

MAX_SCORE = 100


def requires_location(symptom: str) -> bool:
    """True when the symptom name implies a body location should be asked."""
    return any(required in symptom for required in LOCATION_REQUIRED_SYMPTOMS)


def find_primary_evidence(
    evidence: Sequence[Evidence], primary_symptom: str
) -> Optional[Evidence]:
    """First evidence record named after the primary symptom."""
    for item in evidence:
        if item.name == primary_symptom:
            return item
    return None


def score_completeness(evidence: Sequence[Evidence], primary_symptom: str) -> int:
    """
    Point-additive completeness of the primary symptom, capped at 100.

    Args:
        evidence: Full evidence list of the session
        primary_symptom: Normalised primary complaint name

    Returns:
        Score between 0 and 100 (0 when the primary symptom has no record)
    """
    primary = find_primary_evidence(evidence, primary_symptom)
    if primary is None:
        return 0

    score = 0

    # Basic characteristics
    if primary.severity > 0:
        score += 10
    if primary.duration:
        score += 10
    if primary.location or not requires_location(primary_symptom):
        score += 10
    if primary.frequency:
        score += 10

    # Advanced characteristics
    if primary.triggers:
        score += 10
    if primary.associated_symptoms:
        score += 10
    if primary.onset:
        score += 10

    # Additional symptoms
    if len(evidence) > 1:
        score += 20

    # Pattern recognition
    if primary.pattern or primary.timing:
        score += 10

    return min(MAX_SCORE, score)


def identify_missing_information(
    evidence: Sequence[Evidence], primary_symptom: str
) -> List[str]:
    """Describe what is still unknown about the primary symptom."""
    missing = []

    primary = find_primary_evidence(evidence, primary_symptom)
    if primary is None:
        missing.append("Primary symptom details")
    else:
        if primary.severity == 0:
            missing.append("Severity of primary symptom")
        if not primary.duration:
            missing.append("Duration of primary symptom")
        if not primary.location and requires_location(primary_symptom):
            missing.append("Location of primary symptom")
        if not primary.frequency:
            missing.append("Frequency of primary symptom")

    has_associated = any(item.associated_symptoms for item in evidence)
    if not has_associated and len(evidence) < 3:
        missing.append("Associated symptoms")

    return missing


def body_system_coverage(evidence: Sequence[Evidence]) -> List[BodySystem]:
    """Body systems touched by any evidence, in first-seen order."""
    systems: List[BodySystem] = []
    for item in evidence:
        for system in item.body_systems:
            if system not in systems:
                systems.append(system)
    return systems
