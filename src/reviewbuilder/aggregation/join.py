"""Three-way join of products, reviews and users.

Pure domain logic: no IO, no logging, no exceptions.
"""

from __future__ import annotations

from typing import Sequence, TypeVar

from reviewbuilder.models.types import (
    AggregatedResult,
    EnrichedReview,
    Identifier,
    MissingSide,
    Product,
    Review,
    UnresolvedReview,
    User,
)

RecordT = TypeVar("RecordT", Product, User)


def _index_by_id(records: Sequence[RecordT]) -> dict[Identifier, RecordT]:
    """Map id -> record. On duplicate ids the first record wins."""
    index: dict[Identifier, RecordT] = {}
    for record in records:
        index.setdefault(record.id, record)
    return index


def aggregate(
    products: Sequence[Product],
    reviews: Sequence[Review],
    users: Sequence[User],
) -> AggregatedResult:
    """Join each review with its product and user.

    One row per review, in review input order. A review whose product or
    user does not resolve is left out of `reviews` and listed in
    `unresolved` instead, naming the missing side(s).

    Args:
        products: Product collection.
        reviews: Review collection.
        users: User collection.

    Returns:
        AggregatedResult with enriched and unresolved reviews.
    """
    products_by_id = _index_by_id(products)
    users_by_id = _index_by_id(users)

    enriched: list[EnrichedReview] = []
    unresolved: list[UnresolvedReview] = []

    for index, review in enumerate(reviews):
        product = products_by_id.get(review.product_id)
        user = users_by_id.get(review.user_id)

        if product is None or user is None:
            missing: list[MissingSide] = []
            if product is None:
                missing.append("product")
            if user is None:
                missing.append("user")
            unresolved.append(
                UnresolvedReview(
                    index=index,
                    product_id=review.product_id,
                    user_id=review.user_id,
                    missing=tuple(missing),
                )
            )
            continue

        # Source review fields (including opaque extras) plus the joined records
        data = review.model_dump(by_alias=True)
        data["product"] = product
        data["user"] = user
        enriched.append(EnrichedReview.model_validate(data))

    return AggregatedResult(reviews=tuple(enriched), unresolved=tuple(unresolved))
