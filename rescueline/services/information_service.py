"""
Information pipeline: context assembly -> prompt -> answer model.

Stateless per call: every question re-fetches context and makes one model call.
Store and model are injected at startup so tests can swap in fakes.
"""

import logging

from rescueline.agent.llm import TextModel
from rescueline.core.config import CONTEXT_DOC_LIMIT
from rescueline.core.document_store import DocumentStore
from rescueline.services.answer_generator import FALLBACK_ANSWER, AnswerGenerator, AnswerResult
from rescueline.services.context_assembler import NO_CONTEXT_SENTINEL, ContextAssembler
from rescueline.services.prompt_composer import compose_prompt

logger = logging.getLogger(__name__)


class InformationPipeline:
    def __init__(
        self,
        document_store: DocumentStore,
        text_model: TextModel,
        context_limit: int = CONTEXT_DOC_LIMIT,
    ) -> None:
        self.assembler = ContextAssembler(document_store, limit=context_limit)
        self.generator = AnswerGenerator(text_model)

    def answer(self, user_question: str) -> AnswerResult:
        logger.info("[information:answer] IN  question=%r", user_question)
        context = self.assembler.assemble_context(user_question)
        prompt = compose_prompt(context, user_question)
        result = self.generator.generate_answer(prompt)
        if context == NO_CONTEXT_SENTINEL:
            # retrieval failed; the answer came from general guidance only
            result = AnswerResult(answer_text=result.answer_text, is_fallback=True)
        logger.info("[information:answer] OUT is_fallback=%s answer_len=%d", result.is_fallback, len(result.answer_text))
        return result

    def answer_query(self, user_question: str) -> str:
        """Answer text for the caller. Never raises; always non-empty."""
        try:
            return self.answer(user_question).answer_text
        except Exception:
            logger.exception("[information:answer_query] pipeline failed; returning fallback")
            return FALLBACK_ANSWER
