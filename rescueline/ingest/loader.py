# Document loader: single place for "uploaded bytes -> text".
# Supports plain text (.txt, .md, .csv, or any text/* type), .pdf and .xlsx.

import io
from pathlib import Path

from rescueline.core.config import ALLOWED_EXTENSIONS

SUPPORTED_EXTENSIONS = ALLOWED_EXTENSIONS

PDF_MIME = "application/pdf"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def bytes_to_text(raw: bytes, filename: str, mime_type: str = "") -> str:
    """
    Convert raw upload bytes to text by extension, falling back to the MIME type.
    Unknown types are decoded as UTF-8 with replacement characters.
    """
    ext = Path(filename).suffix.lower() if filename else ""
    mime = (mime_type or "").split(";")[0].strip().lower()
    if ext == ".pdf" or mime == PDF_MIME:
        return _read_pdf(raw)
    if ext == ".xlsx" or mime == XLSX_MIME:
        return _read_excel(raw)
    return raw.decode("utf-8", errors="replace")


def _read_pdf(raw: bytes) -> str:
    """Text of every page that has any; scanned (image-only) pages are skipped."""
    from pypdf import PdfReader
    pages = [(page.extract_text() or "").strip() for page in PdfReader(io.BytesIO(raw)).pages]
    return "\n\n".join(text for text in pages if text)


def _read_excel(raw: bytes) -> str:
    """One "Sheet <name>:" block per non-empty sheet; rows become "cell; cell" lines, blank cells dropped."""
    import pandas as pd
    workbook = pd.read_excel(io.BytesIO(raw), sheet_name=None, header=None, dtype=str)
    blocks = []
    for name, frame in workbook.items():
        lines = []
        for row in frame.fillna("").itertuples(index=False):
            cells = [str(cell).strip() for cell in row if str(cell).strip()]
            if cells:
                lines.append("; ".join(cells))
        if lines:
            blocks.append(f"Sheet {name}:\n" + "\n".join(lines))
    return "\n\n".join(blocks)
