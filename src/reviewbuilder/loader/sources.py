"""Source loading: read + parse for the three named datasets.

Provides:
- load_source / load_source_async: one source, read then parse
- load_sources_sequential: all three, one after another, blocking
- load_sources: all three with overlapped reads, first error wins
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, TypeVar

from pydantic import BaseModel

from reviewbuilder.adapter.serializer import parse_collection
from reviewbuilder.adapter.storage import SOURCE_NAMES, SourceReader
from reviewbuilder.models.types import Product, Review, User

logger = logging.getLogger(__name__)

T = TypeVar("T")

SOURCE_MODELS: dict[str, type[BaseModel]] = {
    "products": Product,
    "reviews": Review,
    "users": User,
}

Collections = tuple[list[Product], list[Review], list[User]]


def parse_source(name: str, raw: str) -> list[Any]:
    """Parse raw text of a named source into its model collection."""
    return parse_collection(raw, SOURCE_MODELS[name], name)


def load_source(reader: SourceReader, name: str) -> list[Any]:
    """Read and parse one source (blocking)."""
    return parse_source(name, reader.read(name))


async def load_source_async(reader: SourceReader, name: str) -> list[Any]:
    """Read and parse one source; suspends only while reading."""
    raw = await reader.read_async(name)
    return parse_source(name, raw)


def load_sources_sequential(reader: SourceReader) -> Collections:
    """Load products, reviews and users one after another.

    Raises:
        ReadError: If a source cannot be read.
        ParseError: If a source is not valid structured data.
    """
    products, reviews, users = (load_source(reader, name) for name in SOURCE_NAMES)
    return products, reviews, users


async def gather_first_error(*aws: Awaitable[T]) -> list[T]:
    """Run awaitables concurrently and return their results in order.

    Unlike asyncio.gather, the first failure cancels everything still
    pending before it is re-raised, so no work outlives the call. When
    several awaitables have already failed, the one passed first wins.

    Raises:
        Exception: The first failure, unchanged.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]

    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        for task in tasks:
            task.cancel()
        raise

    failed = [t for t in tasks if t in done and not t.cancelled() and t.exception() is not None]
    if not failed:
        return [t.result() for t in tasks]

    for task in pending:
        task.cancel()
    if pending:
        await asyncio.wait(pending)
        # Mark late failures as retrieved; only the first one is reported
        for task in pending:
            if not task.cancelled():
                task.exception()

    raise failed[0].exception()


async def load_sources(reader: SourceReader) -> Collections:
    """Load products, reviews and users with overlapped reads.

    All three reads are started before any is awaited. The first read or
    parse failure aborts the rest and is raised unchanged.

    Args:
        reader: Storage reader for the three sources.

    Returns:
        Tuple of (products, reviews, users).

    Raises:
        ReadError: If a source cannot be read.
        ParseError: If a source is not valid structured data.
    """
    logger.debug(f"Loading sources concurrently: {', '.join(SOURCE_NAMES)}")
    products, reviews, users = await gather_first_error(
        *(load_source_async(reader, name) for name in SOURCE_NAMES)
    )
    return products, reviews, users
