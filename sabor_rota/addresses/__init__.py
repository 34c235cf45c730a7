"""
Пакет для просмотра сохранённых адресов.

Адреса появляются в БД только как побочный результат поиска
ресторанов, поэтому здесь есть лишь выборка с фильтрами.
"""

from flask import Blueprint

bp = Blueprint('addresses', __name__)

from . import routes  # noqa: F401
