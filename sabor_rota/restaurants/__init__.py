"""
Пакет для поиска ресторанов.

Blueprint restaurants содержит эндпоинт поиска ресторанов рядом с
точкой и список уже сохранённых ресторанов. Вся логика вынесена в
:mod:`sabor_rota.services.restaurants_service`.
"""

from flask import Blueprint

bp = Blueprint('restaurants', __name__)

from . import routes  # noqa: F401
