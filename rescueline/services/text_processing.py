"""
Text processing for uploaded reference documents.

Documents are stored whole (no chunking), so cleaning is all that happens here.
"""

import re
import unicodedata

_WHITESPACE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Replace every whitespace run with a single space and trim."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def clean_text(text: str) -> str:
    """
    Normalize extracted document text before storage.

    NFKC folds compatibility characters (fullwidth forms, ligatures) so the
    model sees plain text; zero-width and NUL characters from PDF extraction
    are dropped; whitespace is collapsed to single spaces.
    """
    if not text or not text.strip():
        return ""
    text = unicodedata.normalize("NFKC", text)
    text = text.replace("\u200b", "").replace("\x00", " ").replace("\x7f", " ")
    return collapse_whitespace(text)
