from __future__ import annotations

from typing import Annotated, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

ListingCategory = Literal[
    "amazing_views",
    "chefs_kitchens",
    "beachfront",
    "mansions",
    "tiny_homes",
    "treehouses",
    "countryside",
    "trending",
]

LISTING_CATEGORIES: tuple[str, ...] = get_args(ListingCategory)

ImageUrl = Annotated[str, StringConstraints(pattern=r"^https?://.+")]


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# ── Listing record ───────────────────────────────────────────────────────


class Coordinates(_CamelModel):
    # Bounding box of India
    lat: float = Field(..., gt=6, lt=37)
    lng: float = Field(..., gt=68, lt=97)


class Host(_CamelModel):
    name: str
    avatar: str
    rating: float = Field(..., ge=0.0, le=5.0)


class Listing(_CamelModel):
    id: str = Field(..., min_length=1)
    title: str
    location: str
    description: str
    category: ListingCategory
    price: float = Field(..., gt=0)
    rating: float = Field(..., ge=0.0, le=5.0)
    coordinates: Coordinates
    images: list[ImageUrl] = Field(..., min_length=1)
    amenities: list[str] = Field(..., min_length=1)
    host: Host
    distance: float
    available_dates: str


# ── Query input ──────────────────────────────────────────────────────────


class QueryParams(_CamelModel):
    """Raw, unvalidated query-string values.

    Everything stays a string here; the engine decides what parses.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    search: str | None = None
    category: str | None = None
    location: str | None = None
    min_price: str | None = None
    max_price: str | None = None
    min_rating: str | None = None
    page: str | None = None
    limit: str | None = None


# ── Query output ─────────────────────────────────────────────────────────


class PaginationInfo(_CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool


class FilterEcho(_CamelModel):
    category: str | None = None
    location: str | None = None
    min_price: str | None = None
    max_price: str | None = None
    min_rating: str | None = None
    search: str | None = None


class QueryResult(_CamelModel):
    data: list[Listing]
    pagination: PaginationInfo
    filters: FilterEcho


# ── Response envelopes ───────────────────────────────────────────────────


class ListingsPageResponse(QueryResult):
    success: bool = True


class SearchResponse(_CamelModel):
    success: bool = True
    data: list[Listing]
    query: str
    count: int


class CategoryListingsResponse(_CamelModel):
    success: bool = True
    data: list[Listing]
    category: str
    count: int


class LocationListingsResponse(_CamelModel):
    success: bool = True
    data: list[Listing]
    location: str
    count: int


class ListingResponse(_CamelModel):
    success: bool = True
    data: Listing


class CategoriesResponse(_CamelModel):
    success: bool = True
    data: list[str]


class ErrorResponse(_CamelModel):
    success: bool = False
    message: str
    error: str | None = None


class HealthResponse(_CamelModel):
    status: str
    timestamp: str
    uptime: float
