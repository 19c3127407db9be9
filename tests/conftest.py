"""Shared fakes for pipeline and API tests."""

from datetime import datetime, timezone

import pytest

from rescueline.core.document_store import InMemoryDocumentStore, StoredDocument
from rescueline.core.errors import GenerationFailureError, StoreUnavailableError


def make_doc(i: int, content: str | None = None) -> StoredDocument:
    return StoredDocument(
        id=i,
        filename=f"{i}-doc.txt",
        original_name=f"doc{i}.txt",
        mime_type="text/plain",
        content=content if content is not None else f"Content of document {i}.",
        uploaded_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


class FakeModel:
    """Records prompts; returns a canned answer or raises."""

    name = "fake:model"

    def __init__(self, answer: str = "Boil water for one minute.", error: Exception | None = None) -> None:
        self.answer = answer
        self.error = error
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.answer


class ListStore:
    """Returns a fixed list regardless of limit, like a store that ignores the cap."""

    def __init__(self, docs: list[StoredDocument]) -> None:
        self.docs = docs
        self.limits: list[int] = []

    def fetch_documents(self, limit: int) -> list[StoredDocument]:
        self.limits.append(limit)
        return list(self.docs)

    def list_documents(self) -> list[StoredDocument]:
        return list(self.docs)

    def insert(self, document):
        raise NotImplementedError


class DownStore:
    """Store whose every call fails like a lost connection."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or StoreUnavailableError("connection refused")

    def fetch_documents(self, limit: int):
        raise self.error

    def list_documents(self):
        raise self.error

    def insert(self, document):
        raise self.error

    def upsert(self, update):
        raise self.error

    def list_reports(self):
        raise self.error


@pytest.fixture
def fake_model() -> FakeModel:
    return FakeModel()


@pytest.fixture
def failing_model() -> FakeModel:
    return FakeModel(error=GenerationFailureError("timeout"))


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()
