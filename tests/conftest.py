import pytest

from sabor_rota import create_app
from sabor_rota.config import TestingConfig
from sabor_rota.extensions import db


GEOCODE_URL_MARK = "geocode"
PLACES_URL_MARK = "nearbysearch"


@pytest.fixture()
def app(tmp_path):
    # Изолируем БД в tmp: конфиг читает env при импорте, поэтому
    # подменяем URI через подкласс, а не через переменную окружения.
    db_path = tmp_path / "test.db"

    class _Config(TestingConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{db_path}"

    a = create_app(_Config)
    yield a

    with a.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def db_session(app):
    with app.app_context():
        yield db.session
        db.session.rollback()


class DummyResponse:
    def __init__(self, payload, ok=True, status_code=200):
        self.ok = ok
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


def geocode_payload(street="", neighborhood="", city="", state="", postal_code="", country=""):
    """Ответ Google Geocoding с одним результатом."""
    components = []
    for value, types in (
        (street, ["route"]),
        (neighborhood, ["sublocality", "sublocality_level_1", "political"]),
        (city, ["administrative_area_level_2", "political"]),
        (state, ["administrative_area_level_1", "political"]),
        (postal_code, ["postal_code"]),
        (country, ["country", "political"]),
    ):
        if value:
            components.append({"long_name": value, "short_name": value[:2], "types": types})
    return {"status": "OK", "results": [{"address_components": components}]}


def place(name, lat, lng, rating=4.5):
    item = {"name": name, "geometry": {"location": {"lat": lat, "lng": lng}}}
    if rating is not None:
        item["rating"] = rating
    return item


ZERO_RESULTS = {"status": "ZERO_RESULTS", "results": []}


class FakeGoogle:
    """Подмена requests.get для геокодера и Places.

    ``addresses`` — словарь "lat,lon" → payload геокодера (или исключение),
    ``places`` — payload Places (или исключение). Все вызовы пишутся в
    ``calls`` в порядке поступления.
    """

    def __init__(self, addresses=None, places=None):
        self.addresses = dict(addresses or {})
        self.places = places if places is not None else ZERO_RESULTS
        self.calls = []

    def __call__(self, url, params=None, timeout=None, **kwargs):
        params = params or {}
        if GEOCODE_URL_MARK in url:
            self.calls.append(("geocode", params.get("latlng")))
            payload = self.addresses.get(params.get("latlng"), ZERO_RESULTS)
        elif PLACES_URL_MARK in url:
            self.calls.append(("places", params.get("location")))
            payload = self.places
        else:  # pragma: no cover - защита от неожиданных вызовов
            raise AssertionError(f"unexpected url {url}")
        if isinstance(payload, BaseException):
            raise payload
        if isinstance(payload, DummyResponse):
            return payload
        return DummyResponse(payload)

    def count(self, kind):
        return sum(1 for k, _ in self.calls if k == kind)


@pytest.fixture()
def fake_google(monkeypatch):
    fake = FakeGoogle()
    monkeypatch.setattr("sabor_rota.services.geocode_service.requests.get", fake)
    return fake
