"""
Document ingestion: decode an upload to text and persist it as answer context.

Responsibility: Validate size, extract text (txt, pdf, xlsx), clean it, and
insert into the document store. Called by the API layer; no HTTP or FastAPI here.
"""

import logging
import re
import time
from pathlib import Path

from rescueline.core.config import MAX_UPLOAD_BYTES
from rescueline.core.document_store import DocumentStore, NewDocument, StoredDocument
from rescueline.core.errors import InvalidDocumentError
from rescueline.ingest.loader import bytes_to_text
from rescueline.services.text_processing import clean_text

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


def _sanitize_filename(filename: str) -> str:
    """Sanitize filename to prevent path traversal (../). Returns safe basename."""
    if not filename or not filename.strip():
        return "unnamed"
    base = Path(filename).name
    safe = base.replace("..", "").replace("/", "").replace("\\", "")
    safe = re.sub(r"[^\w.\-]", "_", safe)
    return safe.strip() or "unnamed"


def ingest_document(
    store: DocumentStore,
    filename: str,
    mime_type: str,
    raw: bytes,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> StoredDocument:
    """
    Extract text from an uploaded file and store it.

    Raises:
        InvalidDocumentError: upload larger than max_bytes (413), or no text could be extracted (400).
        StoreUnavailableError: the document store could not be written.
    """
    logger.info("[ingestion:ingest_document] IN  filename=%r mime=%s bytes=%d", filename, mime_type, len(raw))
    if len(raw) > max_bytes:
        raise InvalidDocumentError(f"File exceeds the {max_bytes // (1024 * 1024)} MB upload limit.", status_code=413)
    try:
        text = bytes_to_text(raw, filename, mime_type)
    except Exception as e:
        logger.warning("[ingestion:ingest_document] text extraction failed for %r: %s", filename, e)
        raise InvalidDocumentError("Could not extract text content or file is empty.") from e
    content = clean_text(text)
    if not content:
        raise InvalidDocumentError("Could not extract text content or file is empty.")

    original_name = Path(filename).name if filename else "unnamed"
    stored = store.insert(
        NewDocument(
            filename=f"{int(time.time() * 1000)}-{_sanitize_filename(filename)}",
            original_name=original_name,
            mime_type=mime_type or DEFAULT_MIME_TYPE,
            content=content,
        )
    )
    logger.info("[ingestion:ingest_document] OUT id=%s content_len=%d", stored.id, len(content))
    return stored
