"""Text generation through OpenRouter's OpenAI-compatible API.

Each candidate model in a `ModelChain` is tried once, in order. The first
successful completion wins; if none succeeds `GenerationUnavailable` is
raised with what went wrong on each attempt.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

import openai
from openai import OpenAI

from .config import Settings

log = logging.getLogger("clarity.ai")


class MalformedProviderResponse(ValueError):
    """A 2xx reply that does not carry `choices[0].message`."""


class Attempt(NamedTuple):
    model: str
    error: str


class GenerationUnavailable(RuntimeError):
    def __init__(self, attempts: Sequence[Attempt]):
        self.attempts: Tuple[Attempt, ...] = tuple(attempts)
        self.last_error: Optional[str] = self.attempts[-1].error if self.attempts else None
        super().__init__(f"All candidate models failed; last error: {self.last_error or 'no models available'}")


class ModelChain(tuple):
    """Ordered, non-empty candidate model ids, tried front to back."""

    def __new__(cls, models: Iterable[str]) -> "ModelChain":
        cleaned = tuple(m.strip() for m in models if m and m.strip())
        if not cleaned:
            raise ValueError("ModelChain needs at least one model id")
        return super().__new__(cls, cleaned)

    @classmethod
    def of(cls, *models: str) -> "ModelChain":
        return cls(models)

    def __repr__(self) -> str:
        return f"ModelChain({list(self)!r})"


def extract_content(response: Any) -> str:
    choices = getattr(response, "choices", None)
    if not choices:
        raise MalformedProviderResponse("response has no choices")
    message = getattr(choices[0], "message", None)
    if message is None:
        raise MalformedProviderResponse("first choice has no message")
    return getattr(message, "content", None) or ""


def _describe(err: Exception) -> str:
    status = getattr(err, "status_code", None)
    if status is not None:
        return f"HTTP {status}: {err}"
    return f"{type(err).__name__}: {err}"


class GenerationClient:
    def __init__(
        self,
        client: OpenAI,
        models: ModelChain,
        temperature: float = 0.8,
        max_tokens: int = 600,
    ):
        self.client = client
        self.models = models
        self.temperature = temperature
        self.max_tokens = max_tokens

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "GenerationClient":
        if not settings.openrouter_api_key:
            log.warning("OPENROUTER_API_KEY is not set; generation calls will be rejected")
        client = OpenAI(
            api_key=settings.openrouter_api_key,
            base_url=settings.openrouter_base_url,
            timeout=settings.generation_timeout,
            # one call per candidate; the chain is the retry policy
            max_retries=0,
            default_headers={
                "HTTP-Referer": settings.app_url,
                "X-Title": settings.app_title,
            },
        )
        return cls(client, ModelChain(settings.generation_models), **kwargs)

    def complete(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        require_content: bool = False,
    ) -> str:
        """First successful reply along the chain.

        With `require_content`, an empty reply counts as a failed attempt and
        the next model is tried.
        """
        attempts: List[Attempt] = []
        for model in self.models:
            try:
                response = self.client.chat.completions.create(
                    model=model,
                    messages=messages,
                    temperature=self.temperature if temperature is None else temperature,
                    max_tokens=self.max_tokens if max_tokens is None else max_tokens,
                )
                content = extract_content(response)
                if require_content and not content.strip():
                    raise MalformedProviderResponse("empty content")
            except (openai.APIError, MalformedProviderResponse) as e:
                detail = _describe(e)
                log.warning("generation failed model=%s error=%s", model, detail)
                attempts.append(Attempt(model, detail))
                continue

            log.info("generation ok model=%s chars=%d", model, len(content))
            return content

        raise GenerationUnavailable(attempts)

    def generate(self, system_prompt: str, user_prompt: str, **kwargs: Any) -> str:
        return self.complete(
            [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            **kwargs,
        )
