import asyncio
import os
import sys

import pytest

# Ensure project root is on sys.path so 'song_library_api' and the
# top-level scripts import correctly
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from song_library_api.app.core.config import settings


@pytest.fixture(autouse=True)
def _isolate_db(monkeypatch, tmp_path):
    """Point every test at its own sqlite file with seeding disabled."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "songs.sqlite"))
    monkeypatch.setattr(settings, "seed_database", False)
    yield


@pytest.fixture
def db():
    from song_library_api.app.core.db import init_db

    init_db()
    yield


@pytest.fixture
def run():
    """Drive a service coroutine to completion."""
    return asyncio.run


@pytest.fixture
def app():
    from song_library_api.app.main import create_app

    return create_app()


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def song_payload():
    return {
        "title": "Me Myself and I",
        "artist": "De La Soul",
        "releaseDate": "1989-03-14",
    }
