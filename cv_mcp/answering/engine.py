"""Answer engine — live Claude answers or a deterministic fallback."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from anthropic import AsyncAnthropic
from anthropic.types import TextBlock

from cv_mcp.answering.prompts import (
    NO_ANSWER,
    PREVIEW_CHAR_LIMIT,
    PROMPT_CHAR_LIMIT,
    build_fallback_answer,
    build_messages,
    build_system_prompt,
)
from cv_mcp.config import DEFAULT_ANSWER_MAX_TOKENS, DEFAULT_ANSWER_MODEL
from cv_mcp.tools.types import ToolError

if TYPE_CHECKING:
    from cv_mcp.config import Settings

logger = logging.getLogger(__name__)


class InferenceFailure(ToolError):
    """Raised by the live strategy when the model call fails or is unusable.

    Never escapes AnswerEngine.answer(); it is rendered as an answer string.
    """


# ── Strategies ─────────────────────────────────────────────────────────────────


@runtime_checkable
class AnswerStrategy(Protocol):
    """Produces an answer to a question about the given CV text."""

    async def answer(self, question: str, document_text: str) -> str:
        ...


class FallbackAnswerStrategy:
    """Echoes the question and a CV preview. Needs no external account."""

    def __init__(self, preview_char_limit: int = PREVIEW_CHAR_LIMIT) -> None:
        self._preview_char_limit = preview_char_limit

    async def answer(self, question: str, document_text: str) -> str:
        return build_fallback_answer(question, document_text, self._preview_char_limit)


class LiveAnswerStrategy:
    """Asks Claude, restricted to the CV text, in one synchronous request."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_ANSWER_MODEL,
        max_tokens: int = DEFAULT_ANSWER_MAX_TOKENS,
        prompt_char_limit: int = PROMPT_CHAR_LIMIT,
    ) -> None:
        self._client = AsyncAnthropic(api_key=api_key)
        self._model = model
        self._max_tokens = max_tokens
        self._prompt_char_limit = prompt_char_limit

    async def answer(self, question: str, document_text: str) -> str:
        """Return the model's first text block, or NO_ANSWER if it has none.

        Raises:
            InferenceFailure: on any error from the API call or its payload.
        """
        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                system=build_system_prompt(document_text, self._prompt_char_limit),
                messages=build_messages(question),  # type: ignore[arg-type]
            )
            blocks = list(response.content or [])
        except Exception as exc:  # noqa: BLE001
            raise InferenceFailure(str(exc)) from exc

        for block in blocks:
            if isinstance(block, TextBlock) and block.text:
                return block.text
        logger.debug("Model returned no text content (stop_reason=%r)", response.stop_reason)
        return NO_ANSWER


# ── Engine ─────────────────────────────────────────────────────────────────────


class AnswerEngine:
    """Answers CV questions through an injected strategy. Never raises."""

    def __init__(self, strategy: AnswerStrategy) -> None:
        self._strategy = strategy

    @property
    def strategy(self) -> AnswerStrategy:
        return self._strategy

    async def answer(self, question: str, document_text: str) -> str:
        try:
            return await self._strategy.answer(question, document_text)
        except Exception as exc:  # noqa: BLE001
            logger.error("Answer API error: %s", exc)
            return f"API error: {exc}"


def build_answer_engine(settings: Settings) -> AnswerEngine:
    """Pick the strategy once, from whether an inference credential is set."""
    strategy: AnswerStrategy
    if settings.has_inference_credential:
        strategy = LiveAnswerStrategy(
            api_key=settings.anthropic_api_key,
            model=settings.answer_model,
            max_tokens=settings.answer_max_tokens,
            prompt_char_limit=settings.prompt_char_limit,
        )
        logger.info("Answer engine: live (%s)", settings.answer_model)
    else:
        strategy = FallbackAnswerStrategy(settings.preview_char_limit)
        logger.info("Answer engine: fallback (ANTHROPIC_API_KEY not set)")
    return AnswerEngine(strategy)
