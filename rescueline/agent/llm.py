"""
Answer LLM: OpenAI (primary) or Hugging Face router (when no OpenAI key is set).

Each client makes exactly one request per generate() call and raises
GenerationFailureError when the response is unusable. No retries, no fallback
between providers: the backend is picked once at startup by build_text_model().
"""

import logging
from typing import Protocol

import httpx
from openai import OpenAI

from rescueline.core.config import (
    ANSWER_MAX_TOKENS,
    HF_API_KEY,
    HF_CHAT_URL,
    HF_LLM_MODEL,
    LLM_API_TIMEOUT,
    OPENAI_API_KEY,
    OPENAI_LLM_MODEL,
)
from rescueline.core.errors import GenerationFailureError

logger = logging.getLogger(__name__)


class TextModel(Protocol):
    name: str

    def generate(self, prompt: str) -> str: ...


class OpenAIChatModel:
    """OpenAI chat completions with a fixed model. The SDK client is safe to share across threads."""

    def __init__(
        self,
        api_key: str = OPENAI_API_KEY,
        model: str = OPENAI_LLM_MODEL,
        max_tokens: int = ANSWER_MAX_TOKENS,
        timeout: float = LLM_API_TIMEOUT,
        client: OpenAI | None = None,
    ) -> None:
        self.name = f"openai:{model}"
        self.model = model
        self.max_tokens = max_tokens
        self._client = client or OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def generate(self, prompt: str) -> str:
        logger.info("[llm:openai] IN  model=%s prompt_len=%d", self.model, len(prompt))
        response = self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=self.max_tokens,
        )
        msg = response.choices[0].message if response.choices else None
        out = (getattr(msg, "content", None) or "").strip()
        if not out:
            raise GenerationFailureError("OpenAI returned no answer text")
        logger.info("[llm:openai] OUT response_len=%d", len(out))
        return out


class HFRouterChatModel:
    """Hugging Face router chat completions over httpx."""

    def __init__(
        self,
        api_key: str = HF_API_KEY,
        model: str = HF_LLM_MODEL,
        url: str = HF_CHAT_URL,
        max_tokens: int = ANSWER_MAX_TOKENS,
        timeout: float = LLM_API_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.name = f"hf:{model}"
        self.api_key = api_key
        self.model = model
        self.url = url
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._transport = transport

    def generate(self, prompt: str) -> str:
        logger.info("[llm:hf] IN  model=%s prompt_len=%d", self.model, len(prompt))
        if not self.api_key:
            raise GenerationFailureError("HF_API_KEY is not set")
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.max_tokens,
        }
        with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
            response = client.post(self.url, json=payload, headers=headers)
        if response.status_code != 200:
            raise GenerationFailureError(f"HF LLM error {response.status_code}: {response.text[:200]}")
        try:
            data = response.json()
        except ValueError as e:
            raise GenerationFailureError("HF LLM returned invalid JSON") from e
        choices = data.get("choices") if isinstance(data, dict) else None
        if not choices or not isinstance(choices[0], dict):
            raise GenerationFailureError("HF LLM response has no choices")
        msg = choices[0].get("message") or {}
        out = (msg.get("content") or "").strip()
        if not out:
            raise GenerationFailureError("HF LLM returned no answer text")
        logger.info("[llm:hf] OUT response_len=%d", len(out))
        return out


def build_text_model() -> TextModel:
    """Pick the answer backend from config: OpenAI when OPENAI_API_KEY is set, else Hugging Face."""
    if OPENAI_API_KEY:
        model: TextModel = OpenAIChatModel()
    else:
        if not HF_API_KEY:
            logger.warning("[llm] neither OPENAI_API_KEY nor HF_API_KEY is set; every answer will be the fallback")
        model = HFRouterChatModel()
    logger.info("[llm] answer backend=%s", model.name)
    return model
