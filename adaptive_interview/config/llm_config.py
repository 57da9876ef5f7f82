"""LLM configuration for the reasoning oracle.

All oracle calls go to a single OpenAI-compatible chat endpoint (OpenRouter by
default). Diagnosis and guidance requests run at temperature 0 so rankings are
stable between turns; question generation keeps the configured temperature.
"""

from langchain_openai import ChatOpenAI
from langchain_core.language_models import BaseChatModel
from adaptive_interview.config.settings import settings
from typing import Optional
from pydantic import SecretStr
import logging

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal factory
# ---------------------------------------------------------------------------
def _create_model(temperature: Optional[float] = None) -> BaseChatModel:
    """Instantiate a ChatOpenAI client pointed at the oracle endpoint."""
    if not settings.oracle_api_key:
        raise RuntimeError(
            "Oracle API key is not configured. Set ORACLE_API_KEY in the environment."
        )

    logger.info(f"Creating oracle client: {settings.oracle_model}")
    return ChatOpenAI(
        base_url=settings.oracle_endpoint,
        api_key=SecretStr(settings.oracle_api_key),
        model=settings.oracle_model,
        temperature=(
            settings.model_temperature if temperature is None else temperature
        ),
        max_completion_tokens=settings.model_max_tokens,
        # Retries are owned by call_with_retry so auth failures stop at once.
        max_retries=0,
    )


# ---------------------------------------------------------------------------
# Per-task public accessors
# ---------------------------------------------------------------------------
def get_diagnosis_model() -> BaseChatModel:
    """Differential ranking and guidance: deterministic structured JSON."""
    return _create_model(temperature=0.0)


def get_question_model() -> BaseChatModel:
    """Next-question generation: conversational phrasing."""
    return _create_model()


def get_chat_model() -> BaseChatModel:
    """Follow-up chat after the interview has stopped."""
    return _create_model()
