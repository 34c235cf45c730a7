import logging
import os

from sabor_rota import create_app
from sabor_rota.config import TestingConfig
from sabor_rota.extensions import db


def _file_handlers(path):
    return [
        h for h in logging.getLogger().handlers
        if isinstance(h, logging.FileHandler) and h.baseFilename == str(path)
    ]


def test_relative_log_file_handler_added_once(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    class _Config(TestingConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'factory.db'}"
        LOG_FILE = "sabor_rota.log"

    apps = [create_app(_Config), create_app(_Config)]
    handlers = _file_handlers(os.path.abspath("sabor_rota.log"))
    try:
        assert len(handlers) == 1
    finally:
        root = logging.getLogger()
        for h in handlers:
            root.removeHandler(h)
            h.close()
        for a in apps:
            with a.app_context():
                db.session.remove()
                db.engine.dispose()
