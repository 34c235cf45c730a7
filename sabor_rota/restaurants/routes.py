"""Маршруты для поиска ресторанов.

Весь алгоритм вынесен в :mod:`sabor_rota.services.restaurants_service`.
Здесь остаётся только HTTP-обёртка, разбор параметров запроса и
перевод ошибок сервиса в JSON-ответы.
"""

from __future__ import annotations

import logging

from flask import jsonify

from . import bp
from ..helpers import paginate, validate_args
from ..schemas import RestaurantFilterSchema, SearchQuerySchema
from ..services.geocode_service import GeocodingError
from ..services.places_service import PlacesError
from ..services.restaurants_service import (
    AddressNotFoundError,
    filter_restaurants,
    search_restaurants,
)

logger = logging.getLogger(__name__)


@bp.errorhandler(AddressNotFoundError)
def _address_not_found(err):
    return jsonify(error='address_not_found', message=str(err)), 404


@bp.errorhandler(GeocodingError)
@bp.errorhandler(PlacesError)
def _upstream_error(err):
    logger.error('Upstream Google API failure: %s', err)
    return jsonify(error='upstream_error', message=str(err)), 502


@bp.get('/restaurants/search')
def api_search_restaurants():
    """Найти рестораны рядом с точкой ``latitude``/``longitude``."""
    params, error = validate_args(SearchQuerySchema)
    if error is not None:
        return error

    restaurants = search_restaurants(params.latitude, params.longitude)
    return jsonify([r.to_dict() for r in restaurants])


@bp.get('/restaurants')
def api_list_restaurants():
    """Вернуть сохранённые рестораны с фильтрами и (опционально) пагинацией."""
    params, error = validate_args(RestaurantFilterSchema)
    if error is not None:
        return error

    query = filter_restaurants(
        city=params.city,
        state=params.state,
        name=params.name,
        min_rating=params.min_rating,
        max_rating=params.max_rating,
    )
    return paginate(query, params.page, params.per_page)
