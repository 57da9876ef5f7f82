"""Reasoning oracle backed by an OpenAI-compatible chat model via LangChain."""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from adaptive_interview.agents.prompts import (
    DIAGNOSIS_PROMPT,
    FOLLOWUP_PROMPT,
    GUIDANCE_PROMPT,
    NEXT_QUESTION_PROMPT,
    ORACLE_SYSTEM_PROMPT,
    language_name,
)
from adaptive_interview.config.llm_config import (
    get_chat_model,
    get_diagnosis_model,
    get_question_model,
)
from adaptive_interview.models.diagnosis import CandidateDiagnosis, OracleDiagnosis
from adaptive_interview.models.evidence import Profile
from adaptive_interview.models.progress import Strategy
from adaptive_interview.models.question import Question
from adaptive_interview.models.session import AnswerRecord, Guidance
from adaptive_interview.oracle.base import (
    OracleAuthError,
    OracleResponseError,
    ReasoningOracle,
)
from adaptive_interview.oracle.parsing import (
    load_json,
    parse_diagnoses,
    parse_guidance,
    parse_question,
)
from adaptive_interview.utils.llm_helpers import (
    call_with_retry,
    invoke_llm_with_timeout,
)

logger = logging.getLogger(__name__)


def _content(response: Any) -> str:
    content = getattr(response, "content", response)
    return content if isinstance(content, str) else str(content)


def _listing(items: Sequence[str]) -> str:
    return ", ".join(items) if items else "none reported"


def _format_answers(answers: Sequence[AnswerRecord]) -> str:
    if not answers:
        return "None yet"
    return json.dumps(
        [{"question": a.question, "answer": a.answer} for a in answers],
        ensure_ascii=False,
        default=str,
    )


def _format_history(history: Sequence[str]) -> str:
    if not history:
        return "No questions asked yet"
    return "\n".join(f'{i}. "{q}"' for i, q in enumerate(history, start=1))


def _format_candidates(candidates: Sequence[CandidateDiagnosis], limit: int = 3) -> str:
    if not candidates:
        return "None yet"
    return "\n".join(
        f"- {c.name}: {c.confidence:.1f}% ({c.likelihood.value}, urgency {c.urgency.value})"
        for c in candidates[:limit]
    )


def _profile_fields(profile: Profile) -> Dict[str, Any]:
    return {
        "age": profile.age,
        "gender": profile.gender.value,
        "primary_symptom": profile.primary_complaint,
    }


class LLMOracle(ReasoningOracle):
    """
    Oracle implementation that prompts a chat model for JSON.

    Models are created lazily from ``llm_config`` unless given explicitly,
    so the service can start without credentials; the first call then
    fails with ``OracleAuthError``.
    """

    def __init__(
        self,
        diagnosis_llm: Optional[BaseChatModel] = None,
        question_llm: Optional[BaseChatModel] = None,
        chat_llm: Optional[BaseChatModel] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
    ):
        self._diagnosis_llm = diagnosis_llm
        self._question_llm = question_llm
        self._chat_llm = chat_llm
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay

    @staticmethod
    def _build(factory) -> BaseChatModel:
        try:
            return factory()
        except RuntimeError as e:
            raise OracleAuthError(str(e)) from e

    @property
    def diagnosis_llm(self) -> BaseChatModel:
        if self._diagnosis_llm is None:
            self._diagnosis_llm = self._build(get_diagnosis_model)
        return self._diagnosis_llm

    @property
    def question_llm(self) -> BaseChatModel:
        if self._question_llm is None:
            self._question_llm = self._build(get_question_model)
        return self._question_llm

    @property
    def chat_llm(self) -> BaseChatModel:
        if self._chat_llm is None:
            self._chat_llm = self._build(get_chat_model)
        return self._chat_llm

    async def _ask(self, llm_name: str, messages: List[BaseMessage], description: str):
        async def _call():
            llm = getattr(self, llm_name)
            response = await invoke_llm_with_timeout(llm, messages, self.timeout)
            return _content(response)

        return await call_with_retry(
            _call, description, self.max_retries, self.retry_delay
        )

    async def _ask_json(self, llm_name: str, prompt: str, description: str, parse):
        messages = [
            SystemMessage(content=ORACLE_SYSTEM_PROMPT),
            HumanMessage(content=prompt),
        ]

        async def _call():
            llm = getattr(self, llm_name)
            response = await invoke_llm_with_timeout(llm, messages, self.timeout)
            return parse(load_json(_content(response)))

        return await call_with_retry(
            _call, description, self.max_retries, self.retry_delay
        )

    async def generate_diagnoses(
        self,
        profile: Profile,
        answers: Sequence[AnswerRecord],
        language: str,
    ) -> List[OracleDiagnosis]:
        prompt = DIAGNOSIS_PROMPT.format(
            **_profile_fields(profile),
            medications=_listing(profile.medications),
            allergies=_listing(profile.allergies),
            past_medical_history=_listing(profile.past_medical_history),
            family_history=_listing(profile.family_history),
            answers=_format_answers(answers),
            language=language_name(language),
        )
        diagnoses = await self._ask_json(
            "diagnosis_llm", prompt, "Diagnosis request", parse_diagnoses
        )
        logger.info(f"Oracle returned {len(diagnoses)} diagnoses")
        return diagnoses

    async def generate_next_question(
        self,
        profile: Profile,
        history: Sequence[str],
        strategy: Strategy,
        context: Optional[Dict[str, Any]],
        language: str,
    ) -> Optional[Question]:
        context = context or {}
        prompt = NEXT_QUESTION_PROMPT.format(
            **_profile_fields(profile),
            answers=_format_answers(context.get("answers", [])),
            history=_format_history(history),
            current_confidence=f"{context.get('current_confidence', 0):g}",
            target_confidence=f"{context.get('target_confidence', 70):g}",
            questions_asked=context.get("questions_asked", len(history)),
            max_questions=context.get("max_questions", 20),
            strategy=strategy.value,
            missing_information=_listing(context.get("missing_information", [])),
            red_flags=_listing(context.get("red_flags", [])),
            candidates=_format_candidates(context.get("candidates", [])),
            language=language_name(language),
        )
        return await self._ask_json(
            "question_llm",
            prompt,
            "Next question request",
            lambda payload: parse_question(payload, strategy),
        )

    async def generate_guidance(
        self,
        candidates: Sequence[CandidateDiagnosis],
        profile: Profile,
        language: str,
    ) -> Guidance:
        prompt = GUIDANCE_PROMPT.format(
            **_profile_fields(profile),
            candidates=_format_candidates(candidates, limit=len(candidates)),
            language=language_name(language),
        )
        return await self._ask_json(
            "diagnosis_llm", prompt, "Guidance request", parse_guidance
        )

    async def answer_followup(
        self,
        question: str,
        candidates: Sequence[CandidateDiagnosis],
        profile: Profile,
        chat_history: Sequence[Dict[str, str]],
        language: str,
    ) -> str:
        messages: List[BaseMessage] = [SystemMessage(content=ORACLE_SYSTEM_PROMPT)]
        for turn in chat_history:
            if turn.get("role") == "user":
                messages.append(HumanMessage(content=turn.get("content", "")))
            elif turn.get("role") == "assistant":
                messages.append(AIMessage(content=turn.get("content", "")))

        messages.append(
            HumanMessage(
                content=FOLLOWUP_PROMPT.format(
                    **_profile_fields(profile),
                    candidates=_format_candidates(candidates, limit=len(candidates)),
                    question=question,
                    language=language_name(language),
                )
            )
        )

        reply = (await self._ask("chat_llm", messages, "Follow-up request")).strip()
        if not reply:
            raise OracleResponseError("Oracle returned an empty follow-up answer")
        return reply
