from __future__ import annotations

from typing import Any

import pytest

from backend.listings.models import Listing


def listing_payload(listing_id: str = "1", **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": listing_id,
        "title": f"Listing {listing_id}",
        "location": "Indiranagar, Bangalore",
        "description": "Bright apartment close to the metro.",
        "category": "amazing_views",
        "price": 2500,
        "rating": 4.5,
        "coordinates": {"lat": 12.97, "lng": 77.64},
        "images": ["https://images.example.com/1.jpg"],
        "amenities": ["Wifi"],
        "host": {"name": "Priya", "avatar": "https://images.example.com/host.jpg", "rating": 4.8},
        "distance": 3.2,
        "availableDates": "Nov 3 - 8",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_listing():
    def _make(listing_id: str = "1", **overrides: Any) -> Listing:
        return Listing.model_validate(listing_payload(listing_id, **overrides))

    return _make


@pytest.fixture
def make_payload():
    return listing_payload
