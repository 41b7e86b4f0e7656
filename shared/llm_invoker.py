"""Thin async client over litellm chat completions."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import litellm

from shared.logging import get_logger

# Initialize logger
logger = get_logger(__name__)


@dataclass
class LLMResponse:
    """Text of the first completion choice, plus why generation stopped."""

    content: str
    finish_reason: Optional[str] = None

    @property
    def truncated(self) -> bool:
        return self.finish_reason == "length"


class LiteLLMInvoker:
    """
    Async completion client bound to one model and a set of default parameters.
    """

    def __init__(self, model: str, **kwargs: Any):
        """
        Args:
            model: litellm model string (e.g., "gemini/gemini-2.5-flash").
            **kwargs: Default parameters for litellm.acompletion (e.g., temperature,
                max_tokens, response_format).
        """
        self.model = model
        self.default_params = kwargs

    async def ainvoke(self, messages: List[Dict[str, str]]) -> LLMResponse:
        """
        Send ``messages`` to the model.

        Args:
            messages: Chat messages, e.g. [{"role": "user", "content": "..."}].

        Returns:
            The stripped response text. The content is empty when the call
            failed; callers decide whether that is fatal.
        """
        try:
            params = {"model": self.model, "messages": messages, **self.default_params}
            response = await litellm.acompletion(**params)
        except Exception as e:
            logger.error(f"LiteLLM call to model '{self.model}' failed: {e}")
            return LLMResponse(content="")

        usage = getattr(response, "usage", None)
        if usage is not None:
            logger.debug(f"Model '{self.model}' usage: {usage}")

        try:
            choice = response.choices[0]
            content = choice.message.content or ""
            if not isinstance(content, str):
                raise TypeError(f"content is {type(content).__name__}, not str")
        except (AttributeError, IndexError, TypeError) as e:
            logger.error(f"Malformed response from model '{self.model}': {e}")
            return LLMResponse(content="")

        finish_reason = getattr(choice, "finish_reason", None)
        return LLMResponse(
            content=content.strip(),
            finish_reason=finish_reason if isinstance(finish_reason, str) else None,
        )
