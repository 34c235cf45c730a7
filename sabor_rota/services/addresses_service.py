"""Сервисный слой для работы с адресами.

Поиск по естественному ключу, «найти или создать» и выборки по
городу/штату/стране и по географическому прямоугольнику вынесены в
отдельные функции. Это позволяет повторно использовать их в
оркестраторе поиска и упрощает написание тестов.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import Address

logger = logging.getLogger(__name__)


def find_address(street: str, city: str, postal_code: str) -> Optional[Address]:
    """Найти адрес по естественному ключу (street, city, postal_code)."""
    return Address.query.filter_by(
        street=street or '',
        city=city or '',
        postal_code=postal_code or '',
    ).first()


def get_or_create_address(candidate: Address) -> Address:
    """Вернуть сохранённый адрес с тем же естественным ключом или сохранить ``candidate``.

    Если между поиском и вставкой такой же адрес успел сохранить
    параллельный запрос, уникальный индекс отклонит вставку — тогда
    откатываемся и возвращаем уже существующую запись.
    """
    street, city, postal_code = candidate.natural_key()
    existing = find_address(street, city, postal_code)
    if existing is not None:
        logger.debug('Reusing address %r', existing)
        return existing

    db.session.add(candidate)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        existing = find_address(street, city, postal_code)
        if existing is None:
            raise
        logger.info('Address %r was inserted concurrently, reusing it', existing)
        return existing

    logger.info('Saved new address %r', candidate)
    return candidate


def _apply_filters(query, city="", state="", country="", postal_code="", street=""):
    if city:
        query = query.filter(Address.city == city)
    if state:
        query = query.filter(Address.state == state)
    if country:
        query = query.filter(Address.country == country)
    if postal_code:
        query = query.filter(Address.postal_code == postal_code)
    street = (street or '').strip()
    if street:
        query = query.filter(Address.street.ilike(f'%{street}%'))
    return query


def filter_addresses(
    city: str = "",
    state: str = "",
    country: str = "",
    postal_code: str = "",
    street: str = "",
) -> List[Address]:
    """Вернуть адреса с учётом фильтров (пустой фильтр не применяется).

    ``street`` ищется по подстроке без учёта регистра.
    """
    query = _apply_filters(Address.query, city, state, country, postal_code, street)
    return query.order_by(Address.id).all()


def addresses_in_bounds(
    min_lat: float,
    max_lat: float,
    min_lon: float,
    max_lon: float,
    city: str = "",
    state: str = "",
    country: str = "",
    postal_code: str = "",
    street: str = "",
) -> List[Address]:
    """Адреса, чьи координаты попадают в прямоугольник (границы включительно).

    Остальные фильтры работают так же, как в :func:`filter_addresses`,
    и применяются в том же SQL-запросе.
    """
    query = (
        Address.query
        .filter(Address.latitude.between(min_lat, max_lat))
        .filter(Address.longitude.between(min_lon, max_lon))
    )
    query = _apply_filters(query, city, state, country, postal_code, street)
    return query.order_by(Address.id).all()
