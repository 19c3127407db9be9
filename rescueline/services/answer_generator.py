"""
Answer generation: one model call per prompt, with a fixed spoken-safe fallback.

Callers are live voice/chat sessions during an emergency, so no model failure
may escape this boundary.
"""

import logging
from dataclasses import dataclass

from rescueline.agent.llm import TextModel

logger = logging.getLogger(__name__)

FALLBACK_ANSWER = (
    "I encountered an issue trying to retrieve that information. "
    "Please rely on official local announcements for now and stay safe."
)


@dataclass(frozen=True)
class AnswerResult:
    answer_text: str
    is_fallback: bool


class AnswerGenerator:
    def __init__(self, model: TextModel) -> None:
        self.model = model

    def generate_answer(self, prompt_text: str) -> AnswerResult:
        """Call the model once. Any error or empty output yields FALLBACK_ANSWER with is_fallback=True."""
        logger.info("[answer:generate_answer] IN  model=%s prompt_len=%d", getattr(self.model, "name", "?"), len(prompt_text))
        try:
            text = (self.model.generate(prompt_text) or "").strip()
        except Exception:
            logger.exception("[answer:generate_answer] model call failed; returning fallback")
            return AnswerResult(answer_text=FALLBACK_ANSWER, is_fallback=True)
        if not text:
            logger.warning("[answer:generate_answer] model returned empty text; returning fallback")
            return AnswerResult(answer_text=FALLBACK_ANSWER, is_fallback=True)
        logger.info("[answer:generate_answer] OUT answer_len=%d", len(text))
        return AnswerResult(answer_text=text, is_fallback=False)
