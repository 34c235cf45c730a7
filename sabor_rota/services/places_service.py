"""Поиск ресторанов рядом с точкой через Google Places (nearby search)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from flask import current_app

from .geocode_service import format_location, get_json

logger = logging.getLogger(__name__)


class PlacesError(RuntimeError):
    """Ошибка обращения к Places API или разбора его ответа."""


@dataclass(frozen=True)
class PlaceCandidate:
    """Сырой кандидат из ответа Places: имя, рейтинг и координаты."""

    name: str
    rating: float
    latitude: float
    longitude: float


def _parse_candidate(item: Dict[str, Any]) -> PlaceCandidate:
    location = (item.get('geometry') or {}).get('location') or {}
    return PlaceCandidate(
        name=item.get('name') or '',
        rating=float(item.get('rating') or 0.0),
        latitude=float(location['lat']),
        longitude=float(location['lng']),
    )


def search_nearby(latitude: float, longitude: float) -> List[PlaceCandidate]:
    """Вернуть рестораны в радиусе ``PLACES_RADIUS_M`` от точки.

    Пустой ответ (``ZERO_RESULTS``) — это пустой список, а не ошибка.
    Сетевые ошибки и ошибки разбора бросают :class:`PlacesError`.
    """
    cfg = current_app.config
    api_key = cfg.get('GOOGLE_API_KEY')
    if not api_key:
        raise PlacesError('Google API key is not configured')

    params = {
        'location': format_location(latitude, longitude),
        'radius': cfg.get('PLACES_RADIUS_M', 1000),
        'type': cfg.get('PLACES_TYPE', 'restaurant'),
        'key': api_key,
    }
    logger.info('Initiating restaurant search for location: latitude=%s, longitude=%s', latitude, longitude)

    try:
        data = get_json(cfg['PLACES_URL'], params, PlacesError, 'Places API')
        results = data.get('results') or []
        if not isinstance(results, list):
            raise PlacesError('Places API returned malformed results')
    except PlacesError as exc:
        logger.error(
            'Error occurred while fetching restaurants for location: latitude=%s, longitude=%s: %s',
            latitude, longitude, exc,
        )
        raise

    candidates: List[PlaceCandidate] = []
    for item in results:
        try:
            candidates.append(_parse_candidate(item))
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            # Битый элемент пропускаем, остальные кандидаты обрабатываются
            name = item.get('name') if isinstance(item, dict) else None
            logger.warning('Skipping malformed place entry name=%r: %s', name, exc)

    if not candidates:
        logger.warning('No restaurants found near latitude=%s, longitude=%s', latitude, longitude)
    else:
        logger.debug('Places API returned %d candidates', len(candidates))
    return candidates
