import logging

from fastapi.testclient import TestClient

from backend.core.logging_config import configure_logging
from backend.main import app

client = TestClient(app)


def test_healthz() -> None:
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_configure_logging_sets_backend_level() -> None:
    backend_logger = logging.getLogger("backend")
    previous = backend_logger.level
    try:
        configure_logging("warning")
        assert backend_logger.level == logging.WARNING
    finally:
        backend_logger.setLevel(previous)
