"""
Service container: stores and pipeline built once at startup and hung on app.state.
"""

from dataclasses import dataclass

from fastapi import Request

from rescueline.core.document_store import DocumentStore
from rescueline.core.report_store import ReportStore
from rescueline.services.information_service import InformationPipeline


@dataclass
class Services:
    document_store: DocumentStore
    report_store: ReportStore
    pipeline: InformationPipeline


def get_services(request: Request) -> Services:
    return request.app.state.services
