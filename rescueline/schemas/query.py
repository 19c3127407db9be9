"""Schemas for the information (question answering) endpoint."""

from pydantic import BaseModel, Field


class QueryData(BaseModel):
    """Nested payload some voice-agent tool calls send instead of a top-level query."""

    query: str | None = None


class InformationRequest(BaseModel):
    """Request body for POST /api/information. Accepts {"query": ...} or {"data": {"query": ...}}."""

    query: str | None = Field(None, description="Caller question.")
    data: QueryData | None = Field(None, description="Alternate nested form: data.query.")

    def resolved_query(self) -> str | None:
        """
        A non-empty top-level query wins outright, even if it is only whitespace
        (which then resolves to None). An absent or empty one falls back to data.query.
        """
        if self.query:
            return self.query.strip() or None
        nested = (self.data.query if self.data else None) or ""
        return nested.strip() or None


class InformationResponse(BaseModel):
    """Response for POST /api/information."""

    answer: str = Field(..., description="Answer text to speak back to the caller.")

    model_config = {
        "json_schema_extra": {
            "examples": [{"answer": "Boil tap water for at least one minute before drinking."}]
        }
    }
