"""Utility functions for LLM invocations with timeout and retry handling."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional, TypeVar
import openai
from langchain_core.messages import BaseMessage
from langchain_core.language_models.chat_models import BaseChatModel
from adaptive_interview.config.settings import settings
from adaptive_interview.oracle.base import OracleAuthError, OracleUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def invoke_llm_with_timeout(
    llm: BaseChatModel,
    messages: List[BaseMessage],
    timeout: Optional[float] = None,
) -> Any:
    """
    Invoke an LLM with timeout protection.

    Args:
        llm: The language model to invoke
        messages: List of messages to send to the LLM
        timeout: Timeout in seconds (defaults to settings.llm_invoke_timeout)

    Returns:
        LLM response

    Raises:
        asyncio.TimeoutError: If the model does not answer in time
    """
    if timeout is None:
        timeout = settings.llm_invoke_timeout

    logger.info(f"📤 Invoking LLM with timeout: {timeout}s")

    try:
        response = await asyncio.wait_for(llm.ainvoke(messages), timeout=timeout)
        logger.info("✅ LLM responded successfully")
        return response

    except asyncio.TimeoutError:
        logger.error(f"⏱️ LLM invocation timed out after {timeout}s")
        raise


def is_auth_error(error: BaseException) -> bool:
    """True for credential failures, which are never worth retrying."""
    if isinstance(error, (OracleAuthError, openai.AuthenticationError)):
        return True
    return getattr(error, "status_code", None) == 401


async def call_with_retry(
    call: Callable[[], Awaitable[T]],
    description: str,
    max_retries: Optional[int] = None,
    retry_delay: Optional[float] = None,
) -> T:
    """
    Run an oracle call, retrying transient failures with a fixed delay.

    Args:
        call: Zero-argument coroutine factory; invoked once per attempt
        description: What is being requested, used in logs and errors
        max_retries: Total attempts (defaults to settings.oracle_max_retries)
        retry_delay: Seconds between attempts (defaults to settings.oracle_retry_delay)

    Returns:
        Result of the first successful attempt

    Raises:
        OracleAuthError: Immediately on an authentication failure
        OracleUnavailableError: When every attempt failed
    """
    if max_retries is None:
        max_retries = settings.oracle_max_retries
    if retry_delay is None:
        retry_delay = settings.oracle_retry_delay

    last_error: Optional[BaseException] = None

    for attempt in range(1, max_retries + 1):
        try:
            logger.info(f"🔄 {description}: attempt {attempt}/{max_retries}")
            return await call()
        except Exception as e:
            if is_auth_error(e):
                logger.error(f"❌ {description}: authentication failed, not retrying")
                if isinstance(e, OracleAuthError):
                    raise
                raise OracleAuthError(str(e)) from e

            last_error = e
            logger.warning(
                f"❌ {description}: attempt {attempt} failed: {type(e).__name__}: {e}"
            )
            if attempt < max_retries:
                logger.info(f"⏳ Retrying in {retry_delay}s...")
                await asyncio.sleep(retry_delay)

    reason = str(last_error) or type(last_error).__name__
    logger.error(f"🚨 {description} failed after {max_retries} attempts: {reason}")
    raise OracleUnavailableError(f"{description} failed: {reason}") from last_error
