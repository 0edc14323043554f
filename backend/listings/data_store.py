from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import pandas as pd
from pydantic import TypeAdapter

from .config import DEFAULT_SERVICE_CONFIG, ServiceConfig
from .errors import LoadError
from .models import Listing

logger = logging.getLogger(__name__)

# Free-text columns the search predicate looks at, lowercased once at load time
SEARCH_FIELDS = ("title", "location", "description", "category")

_listings_adapter = TypeAdapter(list[Listing])


@dataclass(frozen=True, eq=False)
class ListingCollection:
    """An immutable snapshot of the listings.

    ``frame`` holds the filterable columns; row ``i`` describes ``listings[i]``.
    """

    listings: tuple[Listing, ...]
    frame: pd.DataFrame

    def __len__(self) -> int:
        return len(self.listings)


_snapshot: ListingCollection | None = None
_snapshot_lock = threading.Lock()


def build_collection(listings: Iterable[Listing]) -> ListingCollection:
    records = tuple(listings)
    columns = {
        "id": pd.Series([r.id for r in records], dtype="object"),
        "category": pd.Series([r.category for r in records], dtype="object"),
        "price": pd.Series([r.price for r in records], dtype="float64"),
        "rating": pd.Series([r.rating for r in records], dtype="float64"),
    }
    for field in SEARCH_FIELDS:
        columns[f"{field}_lower"] = pd.Series(
            [getattr(r, field).lower() for r in records], dtype="object"
        )
    return ListingCollection(listings=records, frame=pd.DataFrame(columns))


def _read_listings(path: Path) -> list[Listing]:
    """Read and validate every record in ``path``; all or nothing."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        listings = _listings_adapter.validate_python(raw["properties"])
    except (OSError, ValueError, KeyError, TypeError) as exc:
        raise LoadError(f"Could not load listings from {path}") from exc

    seen: set[str] = set()
    for listing in listings:
        if listing.id in seen:
            raise LoadError(f"Duplicate listing id {listing.id!r} in {path}")
        seen.add(listing.id)
    return listings


def load_listings(path: Path | None = None) -> ListingCollection:
    """Load the listing source, falling back to an empty collection on failure."""
    path = path or DEFAULT_SERVICE_CONFIG.data_path
    try:
        listings = _read_listings(path)
    except LoadError:
        logger.warning("Listing source unavailable, serving an empty collection", exc_info=True)
        listings = []
    return build_collection(listings)


def get_listing_collection(config: ServiceConfig = DEFAULT_SERVICE_CONFIG) -> ListingCollection:
    """Return the collection to query.

    Reloads the source on every call unless ``reload_per_request`` is off, in
    which case the first load is published once and reused read-only.
    """
    global _snapshot
    if config.reload_per_request:
        return load_listings(config.data_path)
    if _snapshot is None:
        with _snapshot_lock:
            if _snapshot is None:
                _snapshot = load_listings(config.data_path)
    return _snapshot


def clear_listing_cache() -> None:
    global _snapshot
    with _snapshot_lock:
        _snapshot = None
