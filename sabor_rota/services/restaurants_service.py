"""Сервисный слой для ресторанов и поиска ресторанов рядом с точкой.

Главная функция — :func:`search_restaurants`: геокодирует точку
запроса, сохраняет адрес и запись о запросе, запрашивает Places и
для каждого найденного заведения находит или создаёт адрес и
ресторан. Ошибка по одному кандидату не прерывает весь поиск.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import Address, Restaurant, UserQuery
from .addresses_service import get_or_create_address
from .geocode_service import reverse_geocode
from .places_service import PlaceCandidate, search_nearby

logger = logging.getLogger(__name__)


class AddressNotFoundError(LookupError):
    """Точку запроса не удалось превратить в адрес."""


def find_restaurant(name: str, address: Address) -> Optional[Restaurant]:
    """Найти ресторан по имени и полному адресу (улица, город, штат, индекс)."""
    return (
        Restaurant.query
        .join(Address, Restaurant.address_id == Address.id)
        .filter(
            Restaurant.name == name,
            Address.street == (address.street or ''),
            Address.city == (address.city or ''),
            Address.state == (address.state or ''),
            Address.postal_code == (address.postal_code or ''),
        )
        .order_by(Restaurant.id)
        .first()
    )


def get_or_create_restaurant(name: str, rating: float, address: Address) -> Restaurant:
    """Вернуть уже сохранённый ресторан или создать новый.

    Существующая запись возвращается как есть, рейтинг не обновляется.
    """
    existing = find_restaurant(name, address)
    if existing is not None:
        logger.info('Restaurant already exists: name=%s, address=%r', name, address)
        return existing

    restaurant = Restaurant(name=name, rating=rating, address=address)
    db.session.add(restaurant)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        existing = find_restaurant(name, address)
        if existing is None:
            raise
        logger.info('Restaurant %r was inserted concurrently, reusing it', existing)
        return existing

    logger.info('Successfully saved new restaurant: %r', restaurant)
    return restaurant


def record_user_query(address: Address) -> UserQuery:
    """Сохранить запись о пользовательском запросе."""
    user_query = UserQuery(address=address)
    db.session.add(user_query)
    db.session.commit()
    return user_query


def filter_restaurants(
    city: str = "",
    state: str = "",
    name: str = "",
    min_rating: Optional[float] = None,
    max_rating: Optional[float] = None,
):
    """Построить запрос по сохранённым ресторанам с учётом фильтров.

    Возвращает SQLAlchemy-запрос, чтобы вызывающий код мог применить
    пагинацию.
    """
    query = Restaurant.query.join(Address, Restaurant.address_id == Address.id)
    name = (name or '').strip()
    if city:
        query = query.filter(Address.city == city)
    if state:
        query = query.filter(Address.state == state)
    if name:
        query = query.filter(Restaurant.name.ilike(f'%{name}%'))
    if min_rating is not None:
        query = query.filter(Restaurant.rating >= min_rating)
    if max_rating is not None:
        query = query.filter(Restaurant.rating <= max_rating)
    return query.order_by(Restaurant.rating.desc(), Restaurant.id)


def _process_candidate(candidate: PlaceCandidate) -> Optional[Restaurant]:
    address = reverse_geocode(candidate.latitude, candidate.longitude)
    if address is None:
        logger.warning('No address found for restaurant: name=%s', candidate.name)
        return None
    address = get_or_create_address(address)
    return get_or_create_restaurant(candidate.name, candidate.rating, address)


def search_restaurants(latitude: float, longitude: float) -> List[Restaurant]:
    """Найти рестораны рядом с точкой и сохранить их в БД.

    Если саму точку запроса геокодировать не удалось, бросает
    :class:`AddressNotFoundError` и в Places не обращается. Ошибки
    транспорта Google (GeocodingError / PlacesError) пробрасываются.
    Кандидат, для которого не нашёлся адрес или случилась иная
    ошибка, пропускается с записью в лог.
    """
    query_address = reverse_geocode(latitude, longitude)
    if query_address is None:
        logger.error('No address found for the provided coordinates: latitude=%s, longitude=%s', latitude, longitude)
        raise AddressNotFoundError('Address not found for the provided coordinates.')

    query_address = get_or_create_address(query_address)
    record_user_query(query_address)

    candidates = search_nearby(latitude, longitude)

    restaurants: List[Restaurant] = []
    for candidate in candidates:
        try:
            restaurant = _process_candidate(candidate)
        except Exception:
            db.session.rollback()
            logger.exception(
                'Error occurred while processing restaurant name=%s (lat=%s, lon=%s). Skipping this entry.',
                candidate.name, candidate.latitude, candidate.longitude,
            )
            continue
        if restaurant is not None:
            restaurants.append(restaurant)

    logger.info(
        'Restaurant search for latitude=%s, longitude=%s returned %d of %d candidates',
        latitude, longitude, len(restaurants), len(candidates),
    )
    return restaurants
