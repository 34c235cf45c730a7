"""
Модуль конфигурации приложения.

Здесь определяются классы конфигурации Flask с различными
параметрами для разработки, тестов и продакшена. Все секреты
(ключ Google API, строка подключения к БД) читаются из
переменных окружения, в коде хранятся только значения по умолчанию.
"""

import os
import secrets
import warnings


def _safe_secret_key() -> str:
    """Получить SECRET_KEY из env или сгенерировать случайный.

    В продакшене ВСЕГДА задавайте SECRET_KEY через переменную окружения.
    """
    key = os.environ.get("SECRET_KEY", "").strip()
    if not key:
        key = secrets.token_hex(32)
        if os.environ.get("FLASK_ENV") != "development":
            warnings.warn(
                "SECRET_KEY не задан! Используется случайный ключ. "
                "Установите SECRET_KEY в переменных окружения для production.",
                RuntimeWarning,
                stacklevel=2,
            )
    return key


class Config:
    """Базовый класс конфигурации."""

    # Каталог, в котором размещается проект
    BASE_DIR = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    # Основная база данных: адреса, рестораны и журнал запросов.
    # По умолчанию SQLite-файл app.db в корне проекта; в проде —
    # PostgreSQL (см. deploy/compose.yaml).
    SQLALCHEMY_DATABASE_URI = (
        os.environ.get("DATABASE_URI")
        or os.environ.get("DATABASE_URL")
        or f"sqlite:///{os.path.join(BASE_DIR, 'app.db')}"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = _safe_secret_key()

    # --- Google Maps Platform ---
    # Фолбэк: если GOOGLE_MAPS_API_KEY не задан, используем API_KEY
    GOOGLE_API_KEY = (
        os.environ.get("GOOGLE_MAPS_API_KEY", "").strip()
        or os.environ.get("API_KEY", "").strip()
    )
    GEOCODING_URL = os.environ.get(
        "GEOCODING_URL", "https://maps.googleapis.com/maps/api/geocode/json"
    ).strip()
    PLACES_URL = os.environ.get(
        "PLACES_URL", "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
    ).strip()
    # Радиус поиска ресторанов вокруг точки запроса, метры
    PLACES_RADIUS_M = int(os.environ.get("PLACES_RADIUS_M", 1000))
    PLACES_TYPE = (os.environ.get("PLACES_TYPE", "restaurant") or "restaurant").strip()
    # Таймаут одного исходящего HTTP-запроса, секунды
    HTTP_TIMEOUT_SEC = float(os.environ.get("HTTP_TIMEOUT_SEC", 10))

    # Настройки логирования. Можно переопределить через переменные окружения
    # LOG_LEVEL и LOG_FILE. По умолчанию уровень INFO и вывод только в консоль.
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE = os.environ.get("LOG_FILE")  # если не задан, лог пишется только в stdout

    # Постраничная выдача списка ресторанов
    RESTAURANTS_MAX_PER_PAGE = int(os.environ.get("RESTAURANTS_MAX_PER_PAGE", 500))


class DevelopmentConfig(Config):
    """Настройки для режима разработки."""

    DEBUG = True
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class TestingConfig(Config):
    """Настройки для тестов."""

    TESTING = True
    DEBUG = True
    # Тесты никогда не ходят в настоящий Google API
    GOOGLE_API_KEY = "test-key"


class ProductionConfig(Config):
    """Настройки для режима продакшена."""

    DEBUG = False
