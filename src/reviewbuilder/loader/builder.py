"""ReviewBuilder: the products/reviews/users join in four I/O styles.

Every entry point loads the three sources fresh and hands them to the
same pure aggregation, so all four return identical results:

- build_reviews_sync: sequential blocking reads
- build_reviews_callbacks: sequential reads chained through callbacks
- build_reviews_deferred: overlapped reads, result delivered on a Future
- build_reviews_async: overlapped reads, awaited directly

Errors are never handled here. The first ReadError or ParseError reaches
the caller unchanged.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Callable

from reviewbuilder.adapter.storage import FileSourceReader, SourceReader
from reviewbuilder.aggregation.join import aggregate
from reviewbuilder.loader.sources import (
    Collections,
    load_sources,
    load_sources_sequential,
    parse_source,
)
from reviewbuilder.models.types import AggregatedResult, UnresolvedReview

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes"}


class JoinError(Exception):
    """Raised in strict mode when reviews reference missing products or users."""

    def __init__(self, unresolved: tuple[UnresolvedReview, ...]):
        indices = ", ".join(str(u.index) for u in unresolved)
        super().__init__(f"{len(unresolved)} review(s) with unresolved references at: {indices}")
        self.unresolved = unresolved


def strict_join_from_env() -> bool:
    """Strict join mode from REVIEWBUILDER_STRICT_JOIN."""
    return os.environ.get("REVIEWBUILDER_STRICT_JOIN", "").strip().lower() in _TRUTHY


class ReviewBuilder:
    """Builds the joined review result from three sources.

    By default, reviews with dangling product/user references are excluded
    from the result and listed under `unresolved`. In strict mode they
    raise JoinError instead.
    """

    def __init__(self, reader: SourceReader | None = None, *, strict: bool | None = None):
        """Initialize builder.

        Args:
            reader: Source reader. Defaults to a FileSourceReader over
                REVIEWBUILDER_DATA_DIR.
            strict: Raise JoinError on unresolved references. Defaults to
                REVIEWBUILDER_STRICT_JOIN.
        """
        self.reader = reader if reader is not None else FileSourceReader()
        self.strict = strict if strict is not None else strict_join_from_env()

    def _produce_result(self, collections: Collections) -> AggregatedResult:
        result = aggregate(*collections)

        if result.unresolved:
            logger.warning(
                f"{len(result.unresolved)} review(s) not joined, indices: "
                f"{[u.index for u in result.unresolved]}"
            )
            if self.strict:
                raise JoinError(result.unresolved)

        return result

    def build_reviews_sync(self) -> AggregatedResult:
        """Build the result with sequential blocking reads.

        Raises:
            ReadError: If a source cannot be read.
            ParseError: If a source is not valid structured data.
            JoinError: In strict mode, on unresolved references.
        """
        logger.debug("Building reviews (sync)")
        return self._produce_result(load_sources_sequential(self.reader))

    def build_reviews_callbacks(self, callback: Callable[[AggregatedResult], None]) -> None:
        """Build the result with nested read callbacks.

        Each read starts only after the previous one has completed. The
        callback receives the result; any failure raises out of this call
        and the callback is never invoked.
        """
        logger.debug("Building reviews (callbacks)")

        def on_products(raw_products: str) -> None:
            def on_reviews(raw_reviews: str) -> None:
                def on_users(raw_users: str) -> None:
                    collections = (
                        parse_source("products", raw_products),
                        parse_source("reviews", raw_reviews),
                        parse_source("users", raw_users),
                    )
                    callback(self._produce_result(collections))

                self.reader.read_with_callback("users", on_users)

            self.reader.read_with_callback("reviews", on_reviews)

        self.reader.read_with_callback("products", on_products)

    def build_reviews_deferred(self) -> asyncio.Future[AggregatedResult]:
        """Build the result on a Future chained onto the concurrent loader.

        Must be called with a running event loop. The returned future fails
        with the first load error; cancelling it cancels the load.
        """
        logger.debug("Building reviews (deferred)")
        loop = asyncio.get_running_loop()
        result: asyncio.Future[AggregatedResult] = loop.create_future()
        loading = loop.create_task(load_sources(self.reader))

        def on_loaded(task: asyncio.Task[Collections]) -> None:
            if result.done():
                # Result already settled by the caller; still consume the load error
                if not task.cancelled():
                    task.exception()
                return
            if task.cancelled():
                result.cancel()
                return
            error = task.exception()
            if error is not None:
                result.set_exception(error)
                return
            try:
                result.set_result(self._produce_result(task.result()))
            except Exception as e:
                result.set_exception(e)

        def on_result_done(future: asyncio.Future[AggregatedResult]) -> None:
            if future.cancelled():
                loading.cancel()

        loading.add_done_callback(on_loaded)
        result.add_done_callback(on_result_done)
        return result

    async def build_reviews_async(self) -> AggregatedResult:
        """Build the result with overlapped reads.

        Raises:
            ReadError: If a source cannot be read.
            ParseError: If a source is not valid structured data.
            JoinError: In strict mode, on unresolved references.
        """
        logger.debug("Building reviews (async)")
        collections = await load_sources(self.reader)
        return self._produce_result(collections)
