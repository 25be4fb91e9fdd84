"""reviewbuilder: join products, reviews and users from JSON sources.

Structure:
- models/       - pydantic records and the join result
- adapter/      - storage reader and JSON serializer (IO boundary)
- aggregation/  - pure join logic
- loader/       - source loading and the ReviewBuilder entry points
"""

from reviewbuilder.adapter.serializer import ParseError
from reviewbuilder.adapter.storage import FileSourceReader, ReadError, SourceReader
from reviewbuilder.aggregation.join import aggregate
from reviewbuilder.loader.builder import JoinError, ReviewBuilder
from reviewbuilder.loader.sources import load_sources
from reviewbuilder.models.types import (
    AggregatedResult,
    EnrichedReview,
    Product,
    Review,
    UnresolvedReview,
    User,
)

__all__ = [
    # Entry points
    "ReviewBuilder",
    "aggregate",
    "load_sources",
    # IO
    "FileSourceReader",
    "SourceReader",
    # Errors
    "JoinError",
    "ParseError",
    "ReadError",
    # Models
    "AggregatedResult",
    "EnrichedReview",
    "Product",
    "Review",
    "UnresolvedReview",
    "User",
]
