"""
Context assembly: turn stored documents into the "known facts" block of the prompt.

There is no relevance ranking. The assembler takes whatever the store returns,
capped at a fixed number of documents so prompts stay within model input limits.
"""

import logging

from rescueline.core.config import CONTEXT_DOC_LIMIT
from rescueline.core.document_store import DocumentStore, StoredDocument

logger = logging.getLogger(__name__)

CONTEXT_HEADER = "Use the following information to answer the user's question:\n\n"
NO_CONTEXT_SENTINEL = "No specific context documents are available right now."


def format_context(documents: list[StoredDocument]) -> str:
    """Header, then one "--- Document i ---" section per document (i is the 1-based position)."""
    parts = [CONTEXT_HEADER]
    for i, doc in enumerate(documents, start=1):
        parts.append(f"--- Document {i} ---\n{doc.content}\n\n")
    return "".join(parts)


class ContextAssembler:
    def __init__(self, store: DocumentStore, limit: int = CONTEXT_DOC_LIMIT) -> None:
        self.store = store
        self.limit = limit

    def assemble_context(self, query_hint: str) -> str:
        """
        Build the context block for a question.

        query_hint is not used for selection yet; documents come back in store order.
        On any store failure, returns NO_CONTEXT_SENTINEL so the caller can still
        get an answer from general guidance.
        """
        logger.info("[context:assemble_context] IN  query_hint=%r limit=%d", query_hint, self.limit)
        try:
            documents = self.store.fetch_documents(self.limit)[: self.limit]
        except Exception:
            logger.exception("[context:assemble_context] document fetch failed; using sentinel context")
            return NO_CONTEXT_SENTINEL
        context = format_context(documents)
        logger.info("[context:assemble_context] OUT documents=%d context_len=%d", len(documents), len(context))
        return context
