"""Tests for the LangGraph interview turn workflow."""

import pytest

from adaptive_interview.agents.interview_graph import (
    ask_followup,
    retry_turn,
    start_interview,
    submit_answer,
)
from adaptive_interview.engine.session import ORACLE_STOP_REASON, InterviewStateError
from adaptive_interview.models.progress import Strategy
from adaptive_interview.models.question import Question, QuestionType
from adaptive_interview.models.session import EventType, SessionStatus
from adaptive_interview.oracle.base import OracleAuthError, OracleUnavailableError


class TestStartInterview:
    """The first turn asks a question without consulting diagnoses."""

    @pytest.mark.asyncio
    async def test_first_question(self, profile, make_oracle, severity_question):
        oracle = make_oracle(questions=[severity_question])

        session = await start_interview(profile, oracle, language="en")

        assert oracle.methods() == ["question"]
        assert session.status == SessionStatus.COLLECTING
        assert session.current_question.id == 1
        assert session.current_question.type == QuestionType.SCALE
        assert session.progress.strategy == Strategy.COMPLETENESS
        assert session.analysis.missing_information[0] == "Primary symptom details"

    @pytest.mark.asyncio
    async def test_language_is_passed_to_oracle(self, profile, make_oracle):
        oracle = make_oracle()

        await start_interview(profile, oracle, language="zh-TW")

        assert oracle.calls[0]["language"] == "zh-TW"

    @pytest.mark.asyncio
    async def test_zero_target_stops_immediately(self, profile, make_oracle):
        oracle = make_oracle()

        session = await start_interview(profile, oracle, target_confidence=0)

        assert session.status == SessionStatus.STOPPED
        assert session.stop_reason == "Target confidence reached: 0% >= 0%"
        assert oracle.methods() == ["guidance"]


class TestSubmitAnswer:
    """Full turns driven by answers."""

    @pytest.mark.asyncio
    async def test_turn_updates_candidates_and_asks_next(
        self, profile, make_oracle, make_diagnosis, severity_question
    ):
        oracle = make_oracle(
            questions=[severity_question],
            diagnoses=[[make_diagnosis("Migraine", 55), make_diagnosis("Tension headache", 30)]],
        )
        session = await start_interview(profile, oracle)

        session = await submit_answer(session, 7, oracle)

        assert oracle.methods() == ["question", "diagnoses", "question"]
        assert session.status == SessionStatus.COLLECTING
        assert session.progress.total_questions_asked == 1
        assert session.progress.current_confidence == 55
        assert session.current_question.id == 2
        assert session.profile.evidence[0].severity == 7

        context = oracle.calls[-1]["context"]
        assert context["current_confidence"] == 55
        assert context["questions_asked"] == 1

    @pytest.mark.asyncio
    async def test_target_confidence_stops_with_guidance(
        self, profile, make_oracle, make_diagnosis
    ):
        oracle = make_oracle(diagnoses=[[make_diagnosis("Migraine", 80)]])
        session = await start_interview(profile, oracle)

        session = await submit_answer(session, "It throbs on one side", oracle)

        assert session.status == SessionStatus.STOPPED
        assert session.stop_reason == "Target confidence reached: 80% >= 70%"
        assert session.guidance.next_steps == ["Book a GP appointment"]
        assert oracle.methods()[-1] == "guidance"

    @pytest.mark.asyncio
    async def test_question_budget_stops(self, profile, make_oracle, make_diagnosis):
        oracle = make_oracle(diagnoses=[[make_diagnosis("Migraine", 40)]])
        session = await start_interview(profile, oracle, max_questions=1)

        session = await submit_answer(session, "yes", oracle)

        assert session.status == SessionStatus.STOPPED
        assert session.stop_reason == "Maximum questions reached: 1 >= 1"

    @pytest.mark.asyncio
    async def test_oracle_declining_to_ask_stops(self, profile, make_oracle, make_diagnosis):
        oracle = make_oracle(
            questions=[Question(text="Where does it hurt?"), None],
            diagnoses=[[make_diagnosis("Migraine", 50), make_diagnosis("Sinusitis", 45)]],
        )
        session = await start_interview(profile, oracle)

        session = await submit_answer(session, "forehead", oracle)

        assert session.status == SessionStatus.STOPPED
        assert session.stop_reason == ORACLE_STOP_REASON
        assert session.guidance is not None

    @pytest.mark.asyncio
    async def test_answer_after_stop(self, profile, make_oracle):
        oracle = make_oracle()
        session = await start_interview(profile, oracle, target_confidence=0)

        with pytest.raises(InterviewStateError):
            await submit_answer(session, "more", oracle)


class TestOracleFailures:
    """Transient failures degrade the turn; auth failures propagate."""

    @pytest.mark.asyncio
    async def test_diagnosis_failure_degrades_turn(self, profile, make_oracle, make_diagnosis):
        oracle = make_oracle(
            diagnoses=[
                [make_diagnosis("Migraine", 50), make_diagnosis("Sinusitis", 45)],
                OracleUnavailableError("timed out"),
            ]
        )
        session = await start_interview(profile, oracle)
        session = await submit_answer(session, "forehead", oracle)
        assert session.progress.current_confidence == 50

        session = await submit_answer(session, "two days", oracle)

        assert session.progress.current_confidence == 0
        assert session.progress.candidates == []
        assert session.last_error == "Diagnosis request failed: timed out"
        assert EventType.ORACLE_FAILURE in [event.type for event in session.events]
        assert session.status == SessionStatus.COLLECTING
        assert session.current_question is not None

    @pytest.mark.asyncio
    async def test_question_failure_waits_for_retry(self, profile, make_oracle):
        oracle = make_oracle(
            questions=[OracleUnavailableError("no capacity"), Question(text="Where is the pain?")]
        )

        session = await start_interview(profile, oracle)

        assert session.status == SessionStatus.COLLECTING
        assert session.current_question is None
        assert session.last_error == "Question request failed: no capacity"

        session = await retry_turn(session, oracle)

        assert session.current_question.text == "Where is the pain?"
        assert session.current_question.id == 1

    @pytest.mark.asyncio
    async def test_guidance_failure_uses_fallback(self, profile, make_oracle):
        oracle = make_oracle(guidance=OracleUnavailableError("down"))

        session = await start_interview(profile, oracle, target_confidence=0)

        assert session.status == SessionStatus.STOPPED
        assert session.guidance.next_steps
        assert session.last_error == "Guidance request failed: down"

    @pytest.mark.asyncio
    async def test_auth_failure_propagates(self, profile, make_oracle):
        oracle = make_oracle(diagnoses=[OracleAuthError("invalid key")])
        session = await start_interview(profile, oracle)

        with pytest.raises(OracleAuthError):
            await submit_answer(session, "forehead", oracle)


class TestRetryTurn:
    @pytest.mark.asyncio
    async def test_retry_recovers_degraded_turn(self, profile, make_oracle, make_diagnosis):
        oracle = make_oracle(
            diagnoses=[OracleUnavailableError("timed out"), [make_diagnosis("Migraine", 60)]]
        )
        session = await start_interview(profile, oracle)
        session = await submit_answer(session, "forehead", oracle)
        assert session.progress.candidates == []

        session = await retry_turn(session, oracle)

        assert session.progress.current_confidence == 60
        assert session.last_error is None
        # Retrying does not count as a new answer
        assert session.progress.total_questions_asked == 1

    @pytest.mark.asyncio
    async def test_retry_after_stop(self, profile, make_oracle):
        oracle = make_oracle()
        session = await start_interview(profile, oracle, target_confidence=0)

        with pytest.raises(InterviewStateError):
            await retry_turn(session, oracle)


class TestAskFollowup:
    @pytest.mark.asyncio
    async def test_followup_after_stop(self, profile, make_oracle):
        oracle = make_oracle(followup="Migraines often improve with rest.")
        session = await start_interview(profile, oracle, target_confidence=0)

        reply = await ask_followup(
            session,
            "Should I take ibuprofen?",
            oracle,
            [{"role": "user", "content": "hi"}],
        )

        assert reply == "Migraines often improve with rest."
        assert oracle.calls[-1]["chat_history"] == [{"role": "user", "content": "hi"}]

    @pytest.mark.asyncio
    async def test_followup_before_stop(self, profile, make_oracle):
        oracle = make_oracle()
        session = await start_interview(profile, oracle)

        with pytest.raises(InterviewStateError):
            await ask_followup(session, "Is it serious?", oracle)
