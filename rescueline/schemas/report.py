"""Schemas for caller report intake and the dashboard report list."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from rescueline.core.report_store import Report


class ReportRequest(BaseModel):
    """Body the voice agent posts to /api/report. Call SID and caller number arrive as headers."""

    location: str = Field(..., min_length=1)
    people_count: int = Field(..., ge=0)
    need_description: str = Field(..., min_length=1)
    is_urgent: bool | None = Field(None, description="True when the call was an immediate medical emergency.")


class ReportResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    report_id: int = Field(..., alias="reportId")


class ReportOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    call_sid: str = Field(..., alias="callSid")
    caller_number: str | None = Field(None, alias="callerNumber")
    location: str
    people_count: int = Field(..., alias="peopleCount")
    need_description: str = Field(..., alias="needDescription")
    status: str
    is_urgent_medical: bool = Field(..., alias="isUrgentMedical")
    timestamp: datetime

    @classmethod
    def from_report(cls, report: Report) -> "ReportOut":
        return cls(
            id=report.id,
            call_sid=report.call_sid,
            caller_number=report.caller_number,
            location=report.location,
            people_count=report.people_count,
            need_description=report.need_description,
            status=report.status,
            is_urgent_medical=report.is_urgent_medical,
            timestamp=report.timestamp,
        )
