from __future__ import annotations

import logging
import time
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .listings.config import DEFAULT_SERVICE_CONFIG, configure_logging
from .listings.data_store import ListingCollection, get_listing_collection
from .listings.errors import MissingQueryError, NotFoundError
from .listings.models import (
    CategoriesResponse,
    CategoryListingsResponse,
    ErrorResponse,
    HealthResponse,
    ListingResponse,
    ListingsPageResponse,
    LocationListingsResponse,
    QueryParams,
    SearchResponse,
)
from .listings.query import (
    distinct_categories,
    listing_by_id,
    listings_by_category,
    listings_by_location,
    query_listings,
    search_only,
)

SERVICE_CONFIG = DEFAULT_SERVICE_CONFIG

configure_logging(SERVICE_CONFIG.log_level)
logger = logging.getLogger(__name__)

_STARTED_AT = time.monotonic()

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
}

app = FastAPI(title="Property Listings API", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(SERVICE_CONFIG.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def access_log(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = round((time.perf_counter() - start) * 1000, 1)
    logger.info(
        "%s %s -> %d (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in _SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


def listing_collection() -> ListingCollection:
    return get_listing_collection(SERVICE_CONFIG)


def _error(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    body = ErrorResponse(message=message, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


# ── Error mapping ────────────────────────────────────────────────────────


@app.exception_handler(MissingQueryError)
def missing_query_handler(request: Request, exc: MissingQueryError) -> JSONResponse:
    return _error(400, exc.message)


@app.exception_handler(NotFoundError)
def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error(404, "Property not found")


@app.exception_handler(StarletteHTTPException)
def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return _error(404, "Route not found")
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    detail = str(exc) if SERVICE_CONFIG.is_development else "Internal server error"
    return _error(500, "Something went wrong!", detail)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/")
def root() -> dict:
    return {
        "message": "Property Listings API",
        "version": app.version,
        "endpoints": {
            "properties": "/api/properties",
            "propertyById": "/api/properties/:id",
            "search": "/api/properties/search?q=search_term",
            "byCategory": "/api/properties/category/:category",
            "byLocation": "/api/properties/location/:location",
            "categories": "/api/categories",
            "health": "/api/health",
        },
    }


@app.get("/api/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime=round(time.monotonic() - _STARTED_AT, 3),
    )


# ── Listing endpoints ────────────────────────────────────────────────────
# Constant path segments are registered before the catch-all id route.


@app.get("/api/properties", response_model=ListingsPageResponse)
def list_properties(
    search: str | None = Query(None),
    category: str | None = Query(None),
    location: str | None = Query(None),
    min_price: str | None = Query(None, alias="minPrice"),
    max_price: str | None = Query(None, alias="maxPrice"),
    min_rating: str | None = Query(None, alias="minRating"),
    page: str | None = Query(None),
    limit: str | None = Query(None),
    collection: ListingCollection = Depends(listing_collection),
) -> ListingsPageResponse:
    params = QueryParams(
        search=search,
        category=category,
        location=location,
        min_price=min_price,
        max_price=max_price,
        min_rating=min_rating,
        page=page,
        limit=limit,
    )
    result = query_listings(collection, params)
    return ListingsPageResponse(
        data=result.data,
        pagination=result.pagination,
        filters=result.filters,
    )


@app.get("/api/properties/search", response_model=SearchResponse)
def search_properties(
    q: str | None = Query(None),
    collection: ListingCollection = Depends(listing_collection),
) -> SearchResponse:
    matches = search_only(collection, q)
    return SearchResponse(data=matches, query=q, count=len(matches))


@app.get("/api/properties/category/{category}", response_model=CategoryListingsResponse)
def properties_by_category(
    category: str,
    collection: ListingCollection = Depends(listing_collection),
) -> CategoryListingsResponse:
    matches = listings_by_category(collection, category)
    return CategoryListingsResponse(data=matches, category=category, count=len(matches))


@app.get("/api/properties/location/{location}", response_model=LocationListingsResponse)
def properties_by_location(
    location: str,
    collection: ListingCollection = Depends(listing_collection),
) -> LocationListingsResponse:
    matches = listings_by_location(collection, location)
    return LocationListingsResponse(data=matches, location=location, count=len(matches))


@app.get("/api/properties/{listing_id}", response_model=ListingResponse)
def property_by_id(
    listing_id: str,
    collection: ListingCollection = Depends(listing_collection),
) -> ListingResponse:
    return ListingResponse(data=listing_by_id(collection, listing_id))


@app.get("/api/categories", response_model=CategoriesResponse)
def categories(
    collection: ListingCollection = Depends(listing_collection),
) -> CategoriesResponse:
    return CategoriesResponse(data=distinct_categories(collection))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.app:app", host=SERVICE_CONFIG.host, port=SERVICE_CONFIG.port)
