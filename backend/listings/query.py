"""
Filter chain and pagination over a listing collection.

Responsibilities:
- Narrow a collection with the optional filter chain
  (search -> category -> location -> price range -> minimum rating).
- Paginate the filtered set and compute its metadata.
- Echo back the filter values that were actually applied.
- Serve the keyword-only search, category, location and id lookups.
"""
from __future__ import annotations

import math
from typing import Sequence

import numpy as np
import pandas as pd

from .data_store import SEARCH_FIELDS, ListingCollection
from .errors import MissingQueryError, NotFoundError
from .models import FilterEcho, Listing, PaginationInfo, QueryParams, QueryResult

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _present(raw: str | None) -> str | None:
    """Treat empty strings as absent."""
    return raw if raw else None


def _parse_number(raw: str | None) -> float | None:
    """Parse a numeric filter value; anything unparseable counts as absent."""
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _parse_positive_int(raw: str | None, default: int) -> int:
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _all_rows(frame: pd.DataFrame) -> pd.Series:
    return pd.Series(True, index=frame.index)


def _search_mask(frame: pd.DataFrame, term: str) -> pd.Series:
    term_lower = term.lower()
    mask = pd.Series(False, index=frame.index)
    for field in SEARCH_FIELDS:
        mask = mask | frame[f"{field}_lower"].str.contains(term_lower, regex=False, na=False)
    return mask


def _location_mask(frame: pd.DataFrame, location: str) -> pd.Series:
    return frame["location_lower"].str.contains(location.lower(), regex=False, na=False)


def _select(collection: ListingCollection, mask: pd.Series) -> list[Listing]:
    positions = np.flatnonzero(mask.to_numpy(dtype=bool))
    return [collection.listings[i] for i in positions]


def paginate(
    items: Sequence[Listing],
    page: int,
    limit: int,
) -> tuple[list[Listing], PaginationInfo]:
    """Slice ``items`` to one page and describe where that page sits."""
    total = len(items)
    start = (page - 1) * limit
    end = start + limit
    info = PaginationInfo(
        current_page=page,
        total_pages=math.ceil(total / limit),
        total_items=total,
        items_per_page=limit,
        has_next_page=end < total,
        has_prev_page=page > 1,
    )
    return list(items[start:end]), info


def query_listings(collection: ListingCollection, params: QueryParams) -> QueryResult:
    frame = collection.frame

    search = _present(params.search)
    category = _present(params.category)
    location = _present(params.location)
    min_price = _parse_number(params.min_price)
    max_price = _parse_number(params.max_price)
    min_rating = _parse_number(params.min_rating)

    # --- Filter chain ---
    mask = _all_rows(frame)

    if search:
        mask = mask & _search_mask(frame, search)

    if category:
        mask = mask & (frame["category"] == category)

    if location:
        mask = mask & _location_mask(frame, location)

    if min_price is not None:
        mask = mask & (frame["price"] >= min_price)

    if max_price is not None:
        mask = mask & (frame["price"] <= max_price)

    if min_rating is not None:
        mask = mask & (frame["rating"] >= min_rating)

    matches = _select(collection, mask)

    # --- Pagination ---
    page = _parse_positive_int(params.page, DEFAULT_PAGE)
    limit = _parse_positive_int(params.limit, DEFAULT_LIMIT)
    data, pagination = paginate(matches, page, limit)

    filters = FilterEcho(
        category=category,
        location=location,
        min_price=params.min_price if min_price is not None else None,
        max_price=params.max_price if max_price is not None else None,
        min_rating=params.min_rating if min_rating is not None else None,
        search=search,
    )
    return QueryResult(data=data, pagination=pagination, filters=filters)


def search_only(collection: ListingCollection, term: str | None) -> list[Listing]:
    """Keyword search over title, location, description and category."""
    if not term:
        raise MissingQueryError()
    return _select(collection, _search_mask(collection.frame, term))


def listings_by_category(collection: ListingCollection, category: str) -> list[Listing]:
    frame = collection.frame
    return _select(collection, frame["category"] == category)


def listings_by_location(collection: ListingCollection, location: str) -> list[Listing]:
    return _select(collection, _location_mask(collection.frame, location))


def listing_by_id(collection: ListingCollection, listing_id: str) -> Listing:
    matches = _select(collection, collection.frame["id"] == listing_id)
    if not matches:
        raise NotFoundError(listing_id)
    return matches[0]


def distinct_categories(collection: ListingCollection) -> list[str]:
    """Categories present in the data, each once, in first-seen order."""
    return collection.frame["category"].unique().tolist()
