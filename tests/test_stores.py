"""
Tests for the SQLite and in-memory document/report stores (tmp_path databases).
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest

from rescueline.core.document_store import InMemoryDocumentStore, NewDocument, SqliteDocumentStore
from rescueline.core.errors import StoreUnavailableError
from rescueline.core.report_store import InMemoryReportStore, ReportUpdate, SqliteReportStore


def _doc(name: str, content: str = "text", at: datetime | None = None) -> NewDocument:
    kwargs = {"uploaded_at": at} if at else {}
    return NewDocument(filename=f"1-{name}", original_name=name, mime_type="text/plain", content=content, **kwargs)


@pytest.fixture(params=["sqlite", "memory"])
def document_store(request, tmp_path):
    if request.param == "sqlite":
        return SqliteDocumentStore(tmp_path / "db" / "test.db")
    return InMemoryDocumentStore()


@pytest.fixture(params=["sqlite", "memory"])
def report_store(request, tmp_path):
    if request.param == "sqlite":
        return SqliteReportStore(tmp_path / "test.db")
    return InMemoryReportStore()


class TestDocumentStore:
    def test_empty_store_returns_empty(self, document_store) -> None:
        assert document_store.fetch_documents(5) == []
        assert document_store.list_documents() == []

    def test_insert_assigns_id_and_keeps_fields(self, document_store) -> None:
        stored = document_store.insert(_doc("a.txt", "Shelter at the gym."))
        assert stored.id >= 1
        assert stored.original_name == "a.txt"
        assert stored.content == "Shelter at the gym."
        assert document_store.fetch_documents(1) == [stored]

    def test_fetch_is_capped_and_in_insertion_order(self, document_store) -> None:
        for i in range(8):
            document_store.insert(_doc(f"{i}.txt", f"doc {i}"))
        docs = document_store.fetch_documents(5)
        assert [d.content for d in docs] == [f"doc {i}" for i in range(5)]

    def test_non_positive_limit(self, document_store) -> None:
        document_store.insert(_doc("a.txt"))
        assert document_store.fetch_documents(0) == []

    def test_list_newest_first(self, document_store) -> None:
        base = datetime(2024, 5, 1, tzinfo=timezone.utc)
        document_store.insert(_doc("old.txt", at=base))
        document_store.insert(_doc("new.txt", at=base + timedelta(hours=1)))
        assert [d.original_name for d in document_store.list_documents()] == ["new.txt", "old.txt"]

    @pytest.mark.parametrize("content", ["", "   \n"])
    def test_rejects_empty_content(self, document_store, content: str) -> None:
        with pytest.raises(ValueError):
            document_store.insert(_doc("a.txt", content))

    def test_clear(self, document_store) -> None:
        document_store.insert(_doc("a.txt"))
        document_store.clear()
        assert document_store.fetch_documents(5) == []


def test_sqlite_unreachable_raises_store_unavailable(tmp_path) -> None:
    # A directory where the DB file should be cannot be opened as a database
    bad = tmp_path / "not_a_file.db"
    bad.mkdir()
    store = SqliteDocumentStore(bad)
    with pytest.raises(StoreUnavailableError):
        store.fetch_documents(5)


class TestReportStore:
    def test_create_then_update_same_call(self, report_store) -> None:
        first, created = report_store.upsert(
            ReportUpdate(call_sid="CA1", location="Main St", people_count=3, need_description="water",
                         caller_number="+15550001", is_urgent=True)
        )
        assert created
        assert first.status == "Received"
        assert first.is_urgent_medical

        second, created = report_store.upsert(
            ReportUpdate(call_sid="CA1", location="Main St 12", people_count=4, need_description="water and food")
        )
        assert not created
        assert second.id == first.id
        assert second.location == "Main St 12"
        assert second.people_count == 4
        assert second.caller_number == "+15550001"
        assert second.is_urgent_medical
        assert second.timestamp >= first.timestamp
        assert len(report_store.list_reports()) == 1

    def test_urgent_defaults_false(self, report_store) -> None:
        report, _ = report_store.upsert(
            ReportUpdate(call_sid="CA2", location="Hill Rd", people_count=1, need_description="insulin")
        )
        assert report.is_urgent_medical is False
        assert report.caller_number is None

    def test_list_newest_first(self, report_store) -> None:
        report_store.upsert(ReportUpdate(call_sid="A", location="x", people_count=1, need_description="n"))
        report_store.upsert(ReportUpdate(call_sid="B", location="y", people_count=1, need_description="n"))
        assert [r.call_sid for r in report_store.list_reports()] == ["B", "A"]

    def test_concurrent_upserts_of_one_call_create_once(self, report_store) -> None:
        workers = 8
        barrier = threading.Barrier(workers)

        def deliver(i: int):
            barrier.wait()
            return report_store.upsert(
                ReportUpdate(call_sid="CA9", location=f"Dock {i}", people_count=i, need_description="boat")
            )

        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(deliver, range(workers)))

        assert sum(created for _, created in results) == 1
        assert len({report.id for report, _ in results}) == 1
        assert len(report_store.list_reports()) == 1
