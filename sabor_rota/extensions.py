"""
Инициализация расширений Flask.

В этом модуле размещаются объекты, которые будут использованы
приложением: сейчас это только SQLAlchemy. Отделение расширений в
отдельный файл помогает избежать циклических импортов и
облегчает тестирование.
"""

from __future__ import annotations

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

# Инициализируем объект SQLAlchemy без привязки к конкретному приложению.
# Приложение привязывается в create_app() (см. sabor_rota/__init__.py).
db = SQLAlchemy()


def init_extensions(app: Flask) -> None:
    """Init all Flask extensions in one place."""
    db.init_app(app)
