"""Tests for strategy selection and stop conditions."""

from adaptive_interview.engine.stop import should_stop
from adaptive_interview.engine.strategy import purpose_for_strategy, select_strategy
from adaptive_interview.models.evidence import Evidence
from adaptive_interview.models.progress import Progress, Strategy
from adaptive_interview.models.question import QuestionPurpose


class TestSelectStrategy:
    """Rules are evaluated in order; the first match wins."""

    def test_no_candidates(self):
        assert select_strategy(Progress()) == Strategy.COMPLETENESS

    def test_clear_leader_confirms(self, make_candidate):
        progress = Progress(candidates=[make_candidate("A", 75), make_candidate("B", 50)])
        assert select_strategy(progress) == Strategy.CONFIRMATION

    def test_single_strong_candidate_confirms(self, make_candidate):
        progress = Progress(candidates=[make_candidate("A", 71)])
        assert select_strategy(progress) == Strategy.CONFIRMATION

    def test_close_race_discriminates(self, make_candidate):
        progress = Progress(candidates=[make_candidate("A", 50), make_candidate("B", 40)])
        assert select_strategy(progress) == Strategy.DISCRIMINATIVE

    def test_gap_of_exactly_fifteen_is_not_close(self, make_candidate):
        progress = Progress(candidates=[make_candidate("A", 55), make_candidate("B", 40)])
        assert select_strategy(progress) == Strategy.COMPLETENESS

    def test_emergency_candidate_checks_red_flags(self, make_candidate):
        progress = Progress(
            candidates=[make_candidate("A", 60), make_candidate("B", 30, "emergency")]
        )
        assert select_strategy(progress) == Strategy.RED_FLAG_CHECK

    def test_severe_evidence_checks_red_flags(self, make_candidate):
        progress = Progress(candidates=[make_candidate("A", 60), make_candidate("B", 30)])
        evidence = [Evidence(name="headache", severity=8)]
        assert select_strategy(progress, evidence) == Strategy.RED_FLAG_CHECK

    def test_clear_leader_wins_over_emergency(self, make_candidate):
        progress = Progress(
            candidates=[make_candidate("A", 85, "emergency"), make_candidate("B", 10)]
        )
        assert select_strategy(progress) == Strategy.CONFIRMATION

    def test_leader_at_72_over_50_confirms(self, make_candidate):
        progress = Progress(candidates=[make_candidate("A", 72), make_candidate("B", 50)])
        assert select_strategy(progress) == Strategy.CONFIRMATION

    def test_leader_at_60_over_50_discriminates(self, make_candidate):
        progress = Progress(candidates=[make_candidate("A", 60), make_candidate("B", 50)])
        assert select_strategy(progress) == Strategy.DISCRIMINATIVE

    def test_emergency_leader_with_gap_of_25_confirms(self, make_candidate):
        progress = Progress(
            candidates=[make_candidate("A", 80, "emergency"), make_candidate("B", 55)]
        )
        assert select_strategy(progress) == Strategy.CONFIRMATION

    def test_leader_at_exactly_70_does_not_confirm(self, make_candidate):
        progress = Progress(candidates=[make_candidate("A", 70), make_candidate("B", 40)])
        assert select_strategy(progress) == Strategy.COMPLETENESS

    def test_single_candidate_at_exactly_70_does_not_confirm(self, make_candidate):
        progress = Progress(candidates=[make_candidate("A", 70)])
        assert select_strategy(progress) == Strategy.COMPLETENESS

    def test_purpose_for_strategy(self):
        assert purpose_for_strategy(Strategy.RED_FLAG_CHECK) == QuestionPurpose.RED_FLAG
        assert purpose_for_strategy(Strategy.DISCRIMINATIVE) == QuestionPurpose.DISCRIMINATIVE


class TestShouldStop:
    """Tests for the stop evaluator."""

    def test_target_confidence_reached(self, make_candidate):
        progress = Progress(
            current_confidence=70,
            target_confidence=70,
            candidates=[make_candidate("A", 70), make_candidate("B", 20)],
        )

        decision = should_stop(progress)

        assert decision.stop
        assert decision.reason == "Target confidence reached: 70% >= 70%"

    def test_fractional_confidence_in_reason(self):
        decision = should_stop(Progress(current_confidence=72.5, target_confidence=70))
        assert decision.reason == "Target confidence reached: 72.5% >= 70%"

    def test_question_budget(self):
        decision = should_stop(Progress(total_questions_asked=20, max_questions=20))

        assert decision.stop
        assert decision.reason == "Maximum questions reached: 20 >= 20"

    def test_single_high_confidence_candidate(self, make_candidate):
        progress = Progress(
            current_confidence=75,
            target_confidence=80,
            candidates=[make_candidate("Migraine", 75)],
        )

        decision = should_stop(progress)

        assert decision.stop
        assert decision.reason == "Single high-confidence diagnosis: Migraine (75% confidence)"

    def test_continue(self, make_candidate):
        progress = Progress(
            current_confidence=50,
            total_questions_asked=3,
            candidates=[make_candidate("A", 50), make_candidate("B", 30)],
        )

        decision = should_stop(progress)

        assert not decision.stop
        assert decision.reason is None
