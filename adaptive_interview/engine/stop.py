"""Interview stop conditions."""

from adaptive_interview.models.progress import Progress, StopDecision
import logging

logger = logging.getLogger(__name__)

SINGLE_CANDIDATE_CONFIDENCE = 75


def _pct(value: float) -> str:
    return f"{value:g}"


def should_stop(progress: Progress) -> StopDecision:
    """
    Decide whether the interview has gathered enough evidence.

    Checked in order: target confidence, question budget, single
    high-confidence survivor. The reason embeds the triggering numbers.
    """
    if progress.current_confidence >= progress.target_confidence:
        reason = (
            f"Target confidence reached: {_pct(progress.current_confidence)}% "
            f">= {_pct(progress.target_confidence)}%"
        )
        logger.info(f"Stopping questions - {reason}")
        return StopDecision(stop=True, reason=reason)

    if progress.total_questions_asked >= progress.max_questions:
        reason = (
            f"Maximum questions reached: {progress.total_questions_asked} "
            f">= {progress.max_questions}"
        )
        logger.info(f"Stopping questions - {reason}")
        return StopDecision(stop=True, reason=reason)

    if (
        len(progress.candidates) == 1
        and progress.current_confidence >= SINGLE_CANDIDATE_CONFIDENCE
    ):
        reason = (
            f"Single high-confidence diagnosis: {progress.candidates[0].name} "
            f"({_pct(progress.current_confidence)}% confidence)"
        )
        logger.info(f"Stopping questions - {reason}")
        return StopDecision(stop=True, reason=reason)

    return StopDecision(stop=False)
