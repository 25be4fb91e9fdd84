"""Shared pytest fixtures for reviewbuilder tests."""

from __future__ import annotations

import asyncio
import copy
import json
from pathlib import Path
from typing import Callable

import pytest

from reviewbuilder.adapter.storage import ReadError, SourceReader

SAMPLE_PRODUCTS = [
    {"id": 1, "name": "Widget"},
    {"id": 2, "name": "Gadget", "price": 24.5},
]

SAMPLE_USERS = [
    {"id": 10, "name": "Ann"},
    {"id": 11, "name": "Bo"},
]

SAMPLE_REVIEWS = [
    {"productId": 1, "userId": 10, "rating": 5, "text": "Great"},
    {"productId": 2, "userId": 11, "rating": 3, "text": "Fine", "verified": True},
    {"productId": 1, "userId": 11, "rating": 4, "text": "Good value"},
]


class InMemoryReader(SourceReader):
    """Reader over in-memory documents with simulated read failures."""

    def __init__(self, documents: dict[str, str], failing: set[str] | None = None):
        self.documents = documents
        self.failing = failing or set()
        self.calls: list[str] = []

    def read(self, name: str) -> str:
        self.calls.append(name)
        if name in self.failing:
            raise ReadError(name, "simulated failure")
        return self.documents[name]


class HangingReader(SourceReader):
    """Async reader whose reads never finish unless they fail.

    Records which reads were cancelled.
    """

    def __init__(self, failing: str | None = None):
        self.failing = failing
        self.cancelled: list[str] = []

    def read(self, name: str) -> str:
        raise AssertionError("HangingReader is async only")

    async def read_async(self, name: str) -> str:
        if name == self.failing:
            await asyncio.sleep(0)
            raise ReadError(name, "simulated failure")
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.cancelled.append(name)
            raise
        return ""


class BarrierReader(SourceReader):
    """Async reader whose reads only finish once all three have started."""

    def __init__(self, documents: dict[str, str]):
        self.documents = documents
        self.started: list[str] = []
        self._all_started: asyncio.Event | None = None

    def read(self, name: str) -> str:
        return self.documents[name]

    async def read_async(self, name: str) -> str:
        if self._all_started is None:
            self._all_started = asyncio.Event()
        self.started.append(name)
        if len(self.started) == 3:
            self._all_started.set()
        await asyncio.wait_for(self._all_started.wait(), timeout=1.0)
        return self.documents[name]


@pytest.fixture
def sample_records() -> dict[str, list[dict]]:
    """Sample source records keyed by source name (fresh copies per test)."""
    return {
        "products": copy.deepcopy(SAMPLE_PRODUCTS),
        "reviews": copy.deepcopy(SAMPLE_REVIEWS),
        "users": copy.deepcopy(SAMPLE_USERS),
    }


@pytest.fixture
def documents(sample_records: dict[str, list[dict]]) -> dict[str, str]:
    """Serialized sample sources."""
    return {name: json.dumps(records) for name, records in sample_records.items()}


@pytest.fixture
def data_dir(tmp_path: Path, documents: dict[str, str]) -> Path:
    """Data directory holding products.json, reviews.json and users.json."""
    directory = tmp_path / "data"
    directory.mkdir()
    for name, text in documents.items():
        (directory / f"{name}.json").write_text(text, encoding="utf-8")
    return directory


@pytest.fixture
def memory_reader() -> Callable[..., InMemoryReader]:
    """Factory for in-memory readers: memory_reader(documents, failing=None)."""
    return InMemoryReader


@pytest.fixture
def hanging_reader() -> Callable[..., HangingReader]:
    """Factory for never-finishing async readers: hanging_reader(failing=None)."""
    return HangingReader


@pytest.fixture
def barrier_reader() -> Callable[..., BarrierReader]:
    """Factory for readers that finish only once all reads started."""
    return BarrierReader
