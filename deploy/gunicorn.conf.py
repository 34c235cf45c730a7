"""Конфигурация gunicorn для Sabor Rota.

Запуск:
    gunicorn -c deploy/gunicorn.conf.py wsgi:app
"""

import multiprocessing
import os

bind = os.environ.get("GUNICORN_BIND", "0.0.0.0:8080")

# Запрос к /api/restaurants/search делает 2+N последовательных вызовов
# Google API, воркеры большую часть времени ждут сети.
workers = int(os.environ.get("GUNICORN_WORKERS", multiprocessing.cpu_count() * 2 + 1))
worker_class = "gthread"
threads = int(os.environ.get("GUNICORN_THREADS", 4))

# N геокодирований по HTTP_TIMEOUT_SEC каждое должны уложиться в таймаут воркера
timeout = int(os.environ.get("GUNICORN_TIMEOUT", 120))

# Логи gunicorn — в stdout/stderr (подходит для docker/journalctl)
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("GUNICORN_LOGLEVEL", "info")
