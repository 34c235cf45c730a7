"""Сервисный слой для обратного геокодирования.

Содержит функцию :func:`reverse_geocode`, которая обращается к
Google Geocoding API и превращает координаты в структурированный
адрес (:class:`~sabor_rota.models.Address`, ещё не сохранённый в БД).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from flask import current_app

from ..models import Address

logger = logging.getLogger(__name__)

# Тип компонента адреса Google → поле модели Address
COMPONENT_FIELDS: Dict[str, str] = {
    'route': 'street',
    'sublocality': 'neighborhood',
    'administrative_area_level_2': 'city',
    'administrative_area_level_1': 'state',
    'postal_code': 'postal_code',
    'country': 'country',
}

# Статусы Google, при которых ответ считается корректным
OK_STATUSES = {'OK', 'ZERO_RESULTS'}


class GeocodingError(RuntimeError):
    """Ошибка обращения к сервису геокодирования или разбора его ответа."""


def _fixed(value: float) -> str:
    # Google не принимает экспоненциальную запись (1e-05)
    text = f"{float(value):.7f}".rstrip('0').rstrip('.')
    return '0' if text in ('', '-0') else text


def format_location(latitude: float, longitude: float) -> str:
    """Координаты в формате Google: ``"lat,lon"`` с фиксированной точкой."""
    return f"{_fixed(latitude)},{_fixed(longitude)}"


def get_json(url: str, params: Dict[str, Any], error_cls: type, what: str) -> Dict[str, Any]:
    """Выполнить GET к Google API и вернуть тело ответа как dict.

    Любая сетевая ошибка, не-2xx ответ, невалидный JSON или статус
    Google вне ``OK``/``ZERO_RESULTS`` превращаются в ``error_cls``.
    Ключ API в лог не попадает.
    """
    timeout = current_app.config.get('HTTP_TIMEOUT_SEC', 10)
    logger.debug('Request %s: %s params=%s', what, url, {k: v for k, v in params.items() if k != 'key'})
    try:
        r = requests.get(url, params=params, timeout=timeout)
    except requests.RequestException as exc:
        raise error_cls(f'{what} request failed: {exc}') from exc

    if not r.ok:
        raise error_cls(f'{what} returned HTTP {r.status_code}')

    try:
        data = r.json()
    except ValueError as exc:
        raise error_cls(f'{what} returned invalid JSON') from exc

    if not isinstance(data, dict):
        raise error_cls(f'{what} returned unexpected payload')

    status = data.get('status') or 'OK'
    if status not in OK_STATUSES:
        message = data.get('error_message') or status
        raise error_cls(f'{what} error: {message}')
    return data


def parse_address_components(result: Dict[str, Any], latitude: float, longitude: float) -> Address:
    """Собрать Address из одного элемента ``results`` ответа Google.

    Для каждого компонента перебираются все его типы; совпавший тип
    заполняет соответствующее поле значением ``long_name``. Если тип
    встречается несколько раз, побеждает последний компонент.
    """
    fields = {name: '' for name in COMPONENT_FIELDS.values()}
    components = result.get('address_components')
    if not isinstance(components, list):
        raise GeocodingError('address_components missing in geocoding result')

    for component in components:
        for component_type in component.get('types') or []:
            field = COMPONENT_FIELDS.get(component_type)
            if field:
                fields[field] = component.get('long_name') or ''

    return Address(latitude=latitude, longitude=longitude, **fields)


def reverse_geocode(latitude: float, longitude: float) -> Optional[Address]:
    """Получить адрес по координатам.

    Возвращает несохранённый Address или None, если Google не нашёл
    ни одного результата. При любой ошибке транспорта или разбора
    бросает :class:`GeocodingError`.
    """
    api_key = current_app.config.get('GOOGLE_API_KEY')
    if not api_key:
        logger.error('Google API key is not configured; cannot geocode lat=%s, lon=%s', latitude, longitude)
        raise GeocodingError('Google API key is not configured')

    logger.info('Fetching address for coordinates: lat=%s, lon=%s', latitude, longitude)
    params = {'latlng': format_location(latitude, longitude), 'key': api_key}

    try:
        data = get_json(current_app.config['GEOCODING_URL'], params, GeocodingError, 'Geocoding API')
        results = data.get('results') or []
        if not isinstance(results, list):
            raise GeocodingError('Geocoding API returned malformed results')
        if not results:
            logger.warning('No address found for the given coordinates: lat=%s, lon=%s', latitude, longitude)
            return None
        address = parse_address_components(results[0], latitude, longitude)
    except GeocodingError as exc:
        logger.error('Error while fetching address for lat=%s, lon=%s: %s', latitude, longitude, exc)
        raise
    except (AttributeError, TypeError) as exc:
        logger.error('Malformed geocoding response for lat=%s, lon=%s: %s', latitude, longitude, exc)
        raise GeocodingError('Malformed geocoding response') from exc

    logger.info('Address successfully retrieved: %r', address)
    return address
