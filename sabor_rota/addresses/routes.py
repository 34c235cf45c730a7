"""Маршруты для просмотра адресов."""

from __future__ import annotations

from flask import jsonify

from . import bp
from ..helpers import validate_args
from ..schemas import AddressFilterSchema
from ..services.addresses_service import addresses_in_bounds, filter_addresses


@bp.get('/addresses')
def api_list_addresses():
    """Вернуть адреса по городу/штату/стране/индексу/улице или по прямоугольнику.

    Если заданы все четыре границы (min_lat, max_lat, min_lon, max_lon),
    остальные фильтры применяются к адресам внутри прямоугольника.
    """
    params, error = validate_args(AddressFilterSchema)
    if error is not None:
        return error

    filters = dict(
        city=params.city,
        state=params.state,
        country=params.country,
        postal_code=params.postal_code,
        street=params.street,
    )
    if params.has_bounds():
        items = addresses_in_bounds(params.min_lat, params.max_lat, params.min_lon, params.max_lon, **filters)
    else:
        items = filter_addresses(**filters)
    return jsonify([a.to_dict() for a in items])
