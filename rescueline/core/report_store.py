"""
Report store for caller emergency reports, keyed by call SID.

Intake is an idempotent upsert: a repeated call SID updates the existing report
instead of creating a second one.
"""

import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from rescueline.core.config import DB_PATH, DB_TIMEOUT
from rescueline.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

_TABLE = "reports"
DEFAULT_STATUS = "Received"


@dataclass(frozen=True)
class ReportUpdate:
    """Fields supplied by one intake call."""

    call_sid: str
    location: str
    people_count: int
    need_description: str
    caller_number: str | None = None
    is_urgent: bool | None = None


@dataclass(frozen=True)
class Report:
    id: int
    call_sid: str
    caller_number: str | None
    location: str
    people_count: int
    need_description: str
    status: str
    is_urgent_medical: bool
    timestamp: datetime


class ReportStore(Protocol):
    def upsert(self, update: ReportUpdate) -> tuple[Report, bool]: ...

    def list_reports(self) -> list[Report]: ...


def _merge(existing: Report, update: ReportUpdate, now: datetime) -> Report:
    """Apply an intake update to an existing report. Missing caller info keeps the old value."""
    return replace(
        existing,
        location=update.location,
        people_count=update.people_count,
        need_description=update.need_description,
        caller_number=update.caller_number or existing.caller_number,
        is_urgent_medical=bool(update.is_urgent or existing.is_urgent_medical),
        timestamp=now,
    )


class SqliteReportStore:
    def __init__(self, db_path: str | Path = DB_PATH, timeout: float = DB_TIMEOUT) -> None:
        self.db_path = Path(db_path)
        self.timeout = timeout

    @contextmanager
    def _connect(self, immediate: bool = False) -> Iterator[sqlite3.Connection]:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path), timeout=self.timeout)
        except (OSError, sqlite3.Error) as e:
            raise StoreUnavailableError(f"Report store unreachable: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_TABLE} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    call_sid TEXT NOT NULL UNIQUE,
                    caller_number TEXT,
                    location TEXT NOT NULL,
                    people_count INTEGER NOT NULL,
                    need_description TEXT NOT NULL,
                    status TEXT NOT NULL,
                    is_urgent_medical INTEGER NOT NULL,
                    timestamp TEXT NOT NULL
                )
                """
            )
            if immediate:
                # take the write lock before reading so concurrent upserts of one call SID serialize
                conn.execute("BEGIN IMMEDIATE")
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            raise StoreUnavailableError(f"Report store query failed: {e}") from e
        finally:
            conn.close()

    @staticmethod
    def _from_row(row: sqlite3.Row) -> Report:
        return Report(
            id=row["id"],
            call_sid=row["call_sid"],
            caller_number=row["caller_number"],
            location=row["location"],
            people_count=row["people_count"],
            need_description=row["need_description"],
            status=row["status"],
            is_urgent_medical=bool(row["is_urgent_medical"]),
            timestamp=datetime.fromisoformat(row["timestamp"]),
        )

    def upsert(self, update: ReportUpdate) -> tuple[Report, bool]:
        """Insert or update by call SID. Returns (report, created)."""
        now = datetime.now(timezone.utc)
        with self._connect(immediate=True) as conn:
            row = conn.execute(f"SELECT * FROM {_TABLE} WHERE call_sid = ?", (update.call_sid,)).fetchone()
            if row is not None:
                report = _merge(self._from_row(row), update, now)
                conn.execute(
                    f"UPDATE {_TABLE} SET caller_number = ?, location = ?, people_count = ?, "
                    "need_description = ?, is_urgent_medical = ?, timestamp = ? WHERE id = ?",
                    (
                        report.caller_number,
                        report.location,
                        report.people_count,
                        report.need_description,
                        int(report.is_urgent_medical),
                        now.isoformat(),
                        report.id,
                    ),
                )
                logger.info("[report_store:upsert] updated call_sid=%s id=%s", update.call_sid, report.id)
                return report, False
            cur = conn.execute(
                f"INSERT INTO {_TABLE} (call_sid, caller_number, location, people_count, need_description, "
                "status, is_urgent_medical, timestamp) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    update.call_sid,
                    update.caller_number,
                    update.location,
                    update.people_count,
                    update.need_description,
                    DEFAULT_STATUS,
                    int(bool(update.is_urgent)),
                    now.isoformat(),
                ),
            )
            report = Report(
                id=cur.lastrowid,
                call_sid=update.call_sid,
                caller_number=update.caller_number,
                location=update.location,
                people_count=update.people_count,
                need_description=update.need_description,
                status=DEFAULT_STATUS,
                is_urgent_medical=bool(update.is_urgent),
                timestamp=now,
            )
        logger.info("[report_store:upsert] created call_sid=%s id=%s", update.call_sid, report.id)
        return report, True

    def list_reports(self) -> list[Report]:
        """All reports, newest first."""
        with self._connect() as conn:
            rows = conn.execute(f"SELECT * FROM {_TABLE} ORDER BY timestamp DESC, id DESC").fetchall()
        return [self._from_row(r) for r in rows]


class InMemoryReportStore:
    def __init__(self) -> None:
        self._reports: dict[str, Report] = {}
        self._lock = threading.Lock()

    def upsert(self, update: ReportUpdate) -> tuple[Report, bool]:
        now = datetime.now(timezone.utc)
        with self._lock:
            existing = self._reports.get(update.call_sid)
            if existing is not None:
                report = _merge(existing, update, now)
                self._reports[update.call_sid] = report
                return report, False
            report = Report(
                id=len(self._reports) + 1,
                call_sid=update.call_sid,
                caller_number=update.caller_number,
                location=update.location,
                people_count=update.people_count,
                need_description=update.need_description,
                status=DEFAULT_STATUS,
                is_urgent_medical=bool(update.is_urgent),
                timestamp=now,
            )
            self._reports[update.call_sid] = report
            return report, True

    def list_reports(self) -> list[Report]:
        with self._lock:
            reports = list(self._reports.values())
        return sorted(reports, key=lambda r: (r.timestamp, r.id), reverse=True)
