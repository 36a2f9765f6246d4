"""Claude API wrapper with a per-attempt timeout race and retry logic."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import anthropic
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    stop_after_attempt,
    wait_exponential,
)

from ats_resume.errors import GenerationBackendError, GenerationTimeoutError
from ats_resume.models.generation import FinishReason, GenerationResult, Message, Payload

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
VALID_ROLES = ("system", "assistant", "user")

_STOP_REASONS: dict[str, FinishReason] = {
    "end_turn": FinishReason.NORMAL,
    "stop_sequence": FinishReason.NORMAL,
    "max_tokens": FinishReason.LENGTH,
}


def normalize_messages(payload: Payload) -> tuple[str, list[dict[str, str]]]:
    """Turn a prompt or a message list into (system, messages) for the API.

    Unknown roles become ``user``; system segments are lifted into the
    separate ``system`` parameter the Messages API expects.
    """
    if isinstance(payload, str):
        return "", [{"role": "user", "content": payload}]
    if not isinstance(payload, list):
        return "", [{"role": "user", "content": str(payload)}]

    system_parts: list[str] = []
    messages: list[dict[str, str]] = []
    for item in payload:
        if isinstance(item, Message):
            role, content = item.role, item.content
        else:
            role, content = item.get("role"), item.get("content", "")
        if role not in VALID_ROLES:
            role = "user"
        if role == "system":
            system_parts.append(str(content))
        else:
            messages.append({"role": role, "content": str(content)})
    return "\n\n".join(system_parts), messages


def _discard_result(task: asyncio.Task) -> None:
    # Retrieve the outcome of an abandoned call so asyncio doesn't warn about it.
    if not task.cancelled() and task.exception() is not None:
        logger.debug("Abandoned LLM call finished with error: %s", task.exception())


class LLMClient:
    """Async Claude API client with timeout races and sequential retries.

    The backend client is injected; when omitted an ``AsyncAnthropic`` is
    built from ``api_key`` (or the ``ANTHROPIC_API_KEY`` env var).
    """

    def __init__(
        self,
        client: Any | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        wait: Any = None,
    ):
        if client is None:
            # tenacity owns retries; the SDK makes one HTTP call per attempt
            kwargs: dict = {"max_retries": 0}
            if api_key is not None:
                kwargs["api_key"] = api_key
            if timeout is not None:
                kwargs["timeout"] = timeout
            client = anthropic.AsyncAnthropic(**kwargs)
        self.client = client
        self.wait = wait if wait is not None else wait_exponential(min=1, max=10)

    async def _call_with_timeout(self, kwargs: dict, timeout: float) -> Any:
        """Race the API call against a timer.

        A losing call is not cancelled: it keeps running in the background and
        its result is discarded.
        """
        task = asyncio.ensure_future(self.client.messages.create(**kwargs))
        done, _ = await asyncio.wait({task}, timeout=timeout)
        if not done:
            task.add_done_callback(_discard_result)
            raise GenerationTimeoutError(f"LLM request timed out after {timeout}s")
        try:
            return task.result()
        except Exception as exc:
            raise GenerationBackendError(f"LLM request failed: {exc}") from exc

    def _log_retry(self, retries: int):
        def before_sleep(state: RetryCallState) -> None:
            left = retries - state.attempt_number
            logger.warning(
                "LLM attempt %d failed (%s), retrying... (%d attempts left)",
                state.attempt_number,
                state.outcome.exception() if state.outcome else None,
                left,
            )
        return before_sleep

    async def generate(
        self,
        payload: Payload,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 8000,
        retries: int = 2,
        timeout: float = 180.0,
    ) -> GenerationResult:
        """Send a prompt to Claude and return the text with finish reason and usage.

        ``retries`` is the total number of attempts. When they are exhausted
        the last error propagates unchanged. A token-budget cutoff is not an
        error: check ``result.finish_reason``.
        """
        system, messages = normalize_messages(payload)
        kwargs: dict = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": messages,
        }
        if system:
            kwargs["system"] = system

        logger.debug("LLM call: model=%s max_tokens=%d", model, max_tokens)
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(max(1, retries)),
                wait=self.wait,
                before_sleep=self._log_retry(max(1, retries)),
                reraise=True,
            ):
                with attempt:
                    message = await self._call_with_timeout(kwargs, timeout)
        except Exception:
            logger.error("LLM call failed", exc_info=True)
            raise

        text = "".join(
            getattr(block, "text", "") for block in (message.content or [])
        )
        finish_reason = _STOP_REASONS.get(message.stop_reason, FinishReason.OTHER)
        input_tokens = message.usage.input_tokens
        output_tokens = message.usage.output_tokens
        logger.info(
            "LLM response: model=%s finish=%s input=%d output=%d",
            model,
            message.stop_reason,
            input_tokens,
            output_tokens,
        )
        return GenerationResult(
            text=text,
            finish_reason=finish_reason,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            model=model,
        )

