"""
Модели базы данных для приложения.

Три таблицы: адреса (результат обратного геокодирования),
рестораны (результат поиска Google Places) и журнал
пользовательских запросов. Естественные ключи адресов и ресторанов
дополнительно закреплены уникальными ограничениями, чтобы
параллельные одинаковые запросы не плодили дубликаты.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from .extensions import db


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Address(db.Model):
    """Почтовый адрес точки: улица, район, город, штат, индекс, страна
    и координаты, по которым он был получен.

    Естественный ключ — (street, city, postal_code). Пустые компоненты
    хранятся как пустая строка, а не NULL, иначе уникальный индекс
    не сработает для адресов без индекса или улицы.
    """

    __tablename__ = 'addresses'
    __table_args__ = (
        db.UniqueConstraint('street', 'city', 'postal_code', name='uq_addresses_natural_key'),
        db.Index('ix_addresses_city_state', 'city', 'state'),
        db.Index('ix_addresses_lat_lon', 'latitude', 'longitude'),
    )

    id: int = db.Column(db.Integer, primary_key=True)
    street: str = db.Column(db.String(255), nullable=False, default='')
    neighborhood: str = db.Column(db.String(255), nullable=False, default='')
    city: str = db.Column(db.String(255), nullable=False, default='')
    state: str = db.Column(db.String(255), nullable=False, default='')
    postal_code: str = db.Column(db.String(32), nullable=False, default='')
    country: str = db.Column(db.String(128), nullable=False, default='')
    latitude: float = db.Column(db.Float, nullable=True)
    longitude: float = db.Column(db.Float, nullable=True)
    created_at = db.Column(db.DateTime, default=_utcnow)

    def natural_key(self) -> tuple:
        return (self.street or '', self.city or '', self.postal_code or '')

    def to_dict(self) -> Dict[str, Any]:
        """Преобразовать запись в словарь для JSON‑выдачи."""
        return {
            'id': self.id,
            'street': self.street,
            'neighborhood': self.neighborhood,
            'city': self.city,
            'state': self.state,
            'postal_code': self.postal_code,
            'country': self.country,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return (
            f"<Address id={self.id} street={self.street!r} city={self.city!r} "
            f"postal_code={self.postal_code!r}>"
        )


class Restaurant(db.Model):
    """Ресторан, найденный через Google Places.

    Каждый ресторан ссылается ровно на один адрес. Повторный поиск
    находит уже сохранённую запись по имени и полному адресу.
    """

    __tablename__ = 'restaurants'
    __table_args__ = (
        db.UniqueConstraint('name', 'address_id', name='uq_restaurants_name_address'),
        db.Index('ix_restaurants_rating', 'rating'),
    )

    id: int = db.Column(db.Integer, primary_key=True)
    name: str = db.Column(db.String(255), nullable=False, default='')
    rating: float = db.Column(db.Float, nullable=False, default=0.0)
    address_id: int = db.Column(db.Integer, db.ForeignKey('addresses.id'), nullable=False, index=True)
    address = db.relationship('Address', lazy='joined')
    created_at = db.Column(db.DateTime, default=_utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'rating': self.rating,
            'address': self.address.to_dict() if self.address else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<Restaurant id={self.id} name={self.name!r} rating={self.rating}>"


class UserQuery(db.Model):
    """Запись о поисковом запросе пользователя.

    Создаётся один раз на каждый успешно геокодированный запрос и
    больше не изменяется.
    """

    __tablename__ = 'user_queries'

    id: int = db.Column(db.Integer, primary_key=True)
    address_id: int = db.Column(db.Integer, db.ForeignKey('addresses.id'), nullable=False, index=True)
    address = db.relationship('Address', lazy='selectin')
    created_at = db.Column(db.DateTime, default=_utcnow, index=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'address_id': self.address_id,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
