"""Merging oracle differentials into the ranked candidate list."""

from typing import Iterable, List, Sequence
from adaptive_interview.models.diagnosis import (
    CandidateDiagnosis,
    Likelihood,
    OracleDiagnosis,
    Urgency,
)
from adaptive_interview.models.evidence import Evidence

# Oracle urgency vocabulary -> internal urgency. Anything else is moderate.
URGENCY_MAP = {
    "emergency": Urgency.EMERGENCY,
    "urgent": Urgency.HIGH,
    "routine": Urgency.MODERATE,
    "self_care": Urgency.LOW,
}

# Changes at or below this many points count as "no change".
IMPACT_THRESHOLD = 5.0


def confidence_bucket(confidence: float) -> Likelihood:
    """Bucket a 0-100 confidence score."""
    if confidence < 20:
        return Likelihood.VERY_LOW
    if confidence < 40:
        return Likelihood.LOW
    if confidence < 60:
        return Likelihood.MODERATE
    if confidence < 80:
        return Likelihood.HIGH
    return Likelihood.VERY_HIGH


def map_urgency(urgency_level: str) -> Urgency:
    """Map the oracle urgency label to internal urgency."""
    key = (urgency_level or "").strip().lower().replace("-", "_").replace(" ", "_")
    return URGENCY_MAP.get(key, Urgency.MODERATE)


def _clamp(value: float) -> float:
    return max(0.0, min(100.0, float(value)))


def _supporting_names(primary_symptom: str, evidence: Iterable[Evidence]) -> List[str]:
    names: List[str] = []
    for name in [primary_symptom, *(item.name for item in evidence)]:
        if name and name not in names:
            names.append(name)
    return names


def merge_diagnoses(
    raw: Sequence[OracleDiagnosis],
    evidence: Sequence[Evidence],
    primary_symptom: str,
) -> List[CandidateDiagnosis]:
    """Replace the candidate list with the oracle's latest differential.

    No incremental merge happens across calls: the result is built only from
    ``raw`` and sorted descending by confidence.
    """
    supporting = _supporting_names(primary_symptom, evidence)

    candidates = []
    for row in raw:
        confidence = _clamp(row.probability)
        candidates.append(
            CandidateDiagnosis(
                name=row.condition,
                confidence=confidence,
                likelihood=confidence_bucket(confidence),
                urgency=map_urgency(row.urgency_level),
                supporting_evidence=list(supporting),
                reasoning=row.reasoning or "",
            )
        )

    # sorted() is stable, so equal scores keep oracle order
    return sorted(candidates, key=lambda c: c.confidence, reverse=True)


def information_gain(
    before: Sequence[CandidateDiagnosis], after: Sequence[CandidateDiagnosis]
) -> float:
    """Total confidence movement of previously known candidates.

    A candidate missing from ``after`` counts as dropped to 0. Movements of
    ``IMPACT_THRESHOLD`` points or less are ignored.
    """
    after_by_name = {candidate.name: candidate.confidence for candidate in after}

    total = 0.0
    for candidate in before:
        difference = after_by_name.get(candidate.name, 0.0) - candidate.confidence
        if abs(difference) > IMPACT_THRESHOLD or candidate.name not in after_by_name:
            total += abs(difference)
    return total
