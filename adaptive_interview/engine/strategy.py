"""Next-question strategy selection."""

from typing import Sequence
from adaptive_interview.models.diagnosis import Urgency
from adaptive_interview.models.evidence import Evidence
from adaptive_interview.models.progress import Progress, Strategy
from adaptive_interview.models.question import QuestionPurpose

CLEAR_LEADER_CONFIDENCE = 70
CLEAR_LEADER_GAP = 20
CLOSE_RACE_GAP = 15
RED_FLAG_SEVERITY = 8


def has_red_flag_signals(progress: Progress, evidence: Sequence[Evidence]) -> bool:
    """Any emergency candidate or any evidence at severity 8 or above."""
    return any(c.urgency == Urgency.EMERGENCY for c in progress.candidates) or any(
        item.severity >= RED_FLAG_SEVERITY for item in evidence
    )


def select_strategy(progress: Progress, evidence: Sequence[Evidence] = ()) -> Strategy:
    """
    Pick the questioning strategy for the next turn.

    Rules are evaluated top-down and the first match wins, so a clear leader
    is confirmed even when an emergency candidate is present.

    Args:
        progress: Current progress with candidates sorted by confidence
        evidence: Evidence list of the session

    Returns:
        Strategy for the next question
    """
    top = progress.candidates[0] if progress.candidates else None
    second = progress.candidates[1] if len(progress.candidates) > 1 else None

    if top is None:
        return Strategy.COMPLETENESS

    if top.confidence > CLEAR_LEADER_CONFIDENCE and (
        second is None or top.confidence - second.confidence > CLEAR_LEADER_GAP
    ):
        return Strategy.CONFIRMATION

    if second is not None and top.confidence - second.confidence < CLOSE_RACE_GAP:
        return Strategy.DISCRIMINATIVE

    if has_red_flag_signals(progress, evidence):
        return Strategy.RED_FLAG_CHECK

    return Strategy.COMPLETENESS


def purpose_for_strategy(strategy: Strategy) -> QuestionPurpose:
    """Question purpose implied by the strategy it was asked under."""
    if strategy == Strategy.RED_FLAG_CHECK:
        return QuestionPurpose.RED_FLAG
    return QuestionPurpose(strategy.value)
