"""Schemas for the document upload and listing endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UploadResponse(BaseModel):
    """Response after a document has been decoded and stored."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [{"message": "Document uploaded and processed successfully.", "docId": 3}]
        },
    )

    message: str
    doc_id: int = Field(..., alias="docId")


class DocumentSummary(BaseModel):
    """Document metadata for the dashboard list (content omitted)."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    original_name: str = Field(..., alias="originalName")
    mime_type: str = Field(..., alias="mimeType")
    uploaded_at: datetime = Field(..., alias="uploadedAt")
