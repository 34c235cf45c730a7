from sabor_rota.extensions import db
from sabor_rota.models import Address
from sabor_rota.services import addresses_service
from sabor_rota.services.addresses_service import (
    addresses_in_bounds,
    filter_addresses,
    find_address,
    get_or_create_address,
)


def _addr(**kw):
    base = dict(street='Main St', neighborhood='', city='Springfield', state='IL',
                postal_code='62701', country='United States', latitude=39.8, longitude=-89.6)
    base.update(kw)
    return Address(**base)


def test_get_or_create_address_inserts_then_reuses(db_session):
    first = get_or_create_address(_addr())
    assert first.id is not None

    # тот же естественный ключ, другие координаты и район
    second = get_or_create_address(_addr(neighborhood='Downtown', latitude=39.81, longitude=-89.61))

    assert second.id == first.id
    assert Address.query.count() == 1


def test_get_or_create_address_distinguishes_postal_code(db_session):
    a = get_or_create_address(_addr())
    b = get_or_create_address(_addr(postal_code='62702'))
    assert a.id != b.id
    assert Address.query.count() == 2


def test_find_address_by_natural_key(db_session):
    saved = get_or_create_address(_addr())
    assert find_address('Main St', 'Springfield', '62701').id == saved.id
    assert find_address('Main St', 'Springfield', '00000') is None


def test_get_or_create_address_recovers_from_concurrent_insert(db_session, monkeypatch):
    # Имитируем гонку: первая проверка «не видит» строку, которую уже
    # вставил параллельный запрос, и вставка падает на уникальном индексе.
    other = _addr()
    db.session.add(other)
    db.session.commit()

    real_find = addresses_service.find_address
    calls = {'n': 0}

    def racy_find(street, city, postal_code):
        calls['n'] += 1
        if calls['n'] == 1:
            return None
        return real_find(street, city, postal_code)

    monkeypatch.setattr(addresses_service, 'find_address', racy_find)

    result = get_or_create_address(_addr(latitude=0.0, longitude=0.0))

    assert result.id == other.id
    assert Address.query.count() == 1


def test_filter_addresses_and_bounds(db_session):
    db.session.add_all([
        _addr(street='A', city='Recife', state='Pernambuco', country='Brazil', postal_code='1',
              latitude=-8.05, longitude=-34.9),
        _addr(street='B', city='Olinda', state='Pernambuco', country='Brazil', postal_code='2',
              latitude=-8.01, longitude=-34.85),
        _addr(street='C', city='Lisboa', state='Lisboa', country='Portugal', postal_code='3',
              latitude=38.72, longitude=-9.14),
    ])
    db.session.commit()

    assert {a.street for a in filter_addresses(state='Pernambuco')} == {'A', 'B'}
    assert [a.street for a in filter_addresses(country='Portugal')] == ['C']
    assert len(filter_addresses()) == 3

    inside = addresses_in_bounds(-8.1, -8.0, -35.0, -34.8)
    assert {a.street for a in inside} == {'A', 'B'}


def test_bounds_combined_with_filters(db_session):
    db.session.add_all([
        _addr(street='Rua da Aurora', city='Recife', state='Pernambuco', postal_code='1',
              latitude=-8.05, longitude=-34.9),
        _addr(street='Rua do Amparo', city='Olinda', state='Pernambuco', postal_code='2',
              latitude=-8.01, longitude=-34.85),
        # тот же город, но за пределами прямоугольника
        _addr(street='Rua Nova', city='Recife', state='Pernambuco', postal_code='3',
              latitude=-9.5, longitude=-35.7),
    ])
    db.session.commit()

    inside = addresses_in_bounds(-8.1, -8.0, -35.0, -34.8, city='Recife')
    assert [a.street for a in inside] == ['Rua da Aurora']

    assert addresses_in_bounds(-8.1, -8.0, -35.0, -34.8, postal_code='3') == []
    assert [a.street for a in addresses_in_bounds(-8.1, -8.0, -35.0, -34.8, street='amparo')] == ['Rua do Amparo']


def test_filter_addresses_by_street_substring(db_session):
    db.session.add_all([
        _addr(street='Rua da Aurora', city='Recife', postal_code='1'),
        _addr(street='Avenida Boa Viagem', city='Recife', postal_code='2'),
        _addr(street='Rua da Aurora', city='Olinda', postal_code='3'),
    ])
    db.session.commit()

    assert {a.city for a in filter_addresses(street='aurora')} == {'Recife', 'Olinda'}
    assert [a.postal_code for a in filter_addresses(street='Aurora', city='Olinda')] == ['3']
    assert filter_addresses(street='Conde da Boa Vista') == []
