"""Critical symptom and red flag detection over evidence records."""

from typing import List, Sequence, Tuple
from adaptive_interview.models.evidence import Evidence, Onset, symptom_key


CHEST_PAIN = "chest_pain"
SHORTNESS_OF_BREATH = "shortness_of_breath"
HEADACHE = "headache"
ABDOMINAL_PAIN = "abdominal_pain"
RIGHT_LOWER_QUADRANT = "right_lower_quadrant"

# Thresholds are inclusive
HIGH_SEVERITY = 8
SEVERE = 9


def check_critical_symptoms(evidence: Sequence[Evidence]) -> List[str]:
    """
    List critical findings, in evidence order.

    Args:
        evidence: Full evidence list of the session

    Returns:
        Human-readable critical findings (may repeat for duplicate records)
    """
    critical = []

    for item in evidence:
        if item.severity >= HIGH_SEVERITY:
            critical.append(f"High severity {item.name} ({item.severity}/10)")

        if item.name == CHEST_PAIN and item.severity >= 6:
            critical.append("Moderate to severe chest pain")

        if item.name == SHORTNESS_OF_BREATH and item.severity >= 6:
            critical.append("Moderate to severe shortness of breath")

        if (
            item.name == HEADACHE
            and item.onset == Onset.SUDDEN
            and item.severity >= HIGH_SEVERITY
        ):
            critical.append("Sudden severe headache")

    return critical


def check_red_flags(evidence: Sequence[Evidence]) -> List[str]:
    """
    List emergency red flags, in evidence order.

    Args:
        evidence: Full evidence list of the session

    Returns:
        Red flag descriptions naming the suspected emergency
    """
    red_flags = []

    for item in evidence:
        if item.name == CHEST_PAIN and item.severity >= 7:
            red_flags.append("Severe chest pain - possible cardiac emergency")

        if item.name == SHORTNESS_OF_BREATH and item.severity >= 8:
            red_flags.append(
                "Severe shortness of breath - possible respiratory emergency"
            )

        if item.name == HEADACHE and item.onset == Onset.SUDDEN and item.severity >= SEVERE:
            red_flags.append("Thunderclap headache - possible subarachnoid hemorrhage")

        if (
            item.name == ABDOMINAL_PAIN
            and item.location
            and symptom_key(item.location) == RIGHT_LOWER_QUADRANT
        ):
            red_flags.append("Right lower quadrant pain - possible appendicitis")

        if item.severity >= SEVERE:
            red_flags.append(f"Severe {item.name} (9-10/10)")

    return red_flags


def detect_critical_findings(evidence: Sequence[Evidence]) -> Tuple[List[str], List[str]]:
    """
    Run both rule tables.

    Returns:
        Tuple of (critical, red_flags)
    """
    return check_critical_symptoms(evidence), check_red_flags(evidence)
