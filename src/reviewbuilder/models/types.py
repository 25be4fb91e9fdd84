"""Pydantic models for reviewbuilder.

Input records declare only the identifiers the join is keyed on. Every
other attribute (a product name, a review's rating or text) is kept as an
opaque extra (extra="allow") and passes through the join unvalidated.
Identifiers are validated strictly so they are never coerced.
All models are frozen: loaded collections and join results are read-only.
"""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr

# JSON scalar ids only: no bools, nulls or containers
Identifier = Union[StrictInt, StrictFloat, StrictStr]
MissingSide = Literal["product", "user"]


class Product(BaseModel):
    """Catalog entry, keyed by id."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: Identifier


class User(BaseModel):
    """Reviewing user, keyed by id."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: Identifier


class Review(BaseModel):
    """Review referencing one product and one user.

    Content such as rating and text is opaque and kept as-is.
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    product_id: Identifier = Field(alias="productId")
    user_id: Identifier = Field(alias="userId")


class EnrichedReview(Review):
    """Review joined with its product and user."""

    product: Product
    user: User


class UnresolvedReview(BaseModel):
    """Review left out of the join because a reference did not resolve."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    index: int  # position in the review input
    product_id: Identifier = Field(alias="productId")
    user_id: Identifier = Field(alias="userId")
    missing: tuple[MissingSide, ...]


class AggregatedResult(BaseModel):
    """Join output.

    Both collections follow review input order.
    """

    model_config = ConfigDict(frozen=True)

    reviews: tuple[EnrichedReview, ...] = ()
    unresolved: tuple[UnresolvedReview, ...] = ()
