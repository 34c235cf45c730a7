"""Pydantic v2 contracts for strict API input validation."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StrictSchema(BaseModel):
    """Base strict schema: forbids unknown fields and strips strings."""

    model_config = ConfigDict(extra='forbid', str_strip_whitespace=True)


class SearchQuerySchema(StrictSchema):
    """Contract for ``GET /api/restaurants/search`` query parameters.

    Coordinates are only required to be floats; range is not checked.
    """

    latitude: float = Field(allow_inf_nan=False)
    longitude: float = Field(allow_inf_nan=False)


class RestaurantFilterSchema(StrictSchema):
    """Contract for ``GET /api/restaurants`` filters and pagination."""

    city: str = ''
    state: str = ''
    name: str = ''
    min_rating: float | None = Field(default=None, ge=0, le=5)
    max_rating: float | None = Field(default=None, ge=0, le=5)
    page: int | None = Field(default=None, ge=1)
    per_page: int | None = Field(default=None, ge=1)


class AddressFilterSchema(StrictSchema):
    """Contract for ``GET /api/addresses`` filters.

    Bounding-box filtering applies only when all four bounds are given.
    """

    city: str = ''
    state: str = ''
    country: str = ''
    postal_code: str = ''
    street: str = ''
    min_lat: float | None = None
    max_lat: float | None = None
    min_lon: float | None = None
    max_lon: float | None = None

    def has_bounds(self) -> bool:
        return None not in (self.min_lat, self.max_lat, self.min_lon, self.max_lon)
