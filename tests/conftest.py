"""Shared test fixtures for lively-langs."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import inspect

from lively_langs.database import sqlite_url
from lively_langs.languages.schemas import LanguageCreate
from lively_langs.main import create_app
from lively_langs.store import Store
from lively_langs.words.schemas import WordCreate


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "lively-langs-test.db"


@pytest.fixture
async def store(db_path):
    """A store on a fresh SQLite file."""
    store = Store(sqlite_url(db_path))
    await store.init()
    yield store
    await store.close()


@pytest.fixture
async def spanish(store):
    """Store with the language 'spanish' (aliases es, esp) created."""
    return await store.create_language(LanguageCreate(name="spanish", aliases=["es", "esp"]))


@pytest.fixture
async def gato(store, spanish):
    """The word 'gato' in spanish."""
    return await store.create_word(
        "spanish", WordCreate(word="gato", definition="cat", aliases=["michi", "gata"])
    )


@pytest.fixture
def table_names(store):
    """Async callable returning the tables currently in the database."""
    async def _table_names():
        async with store.engine.connect() as conn:
            return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    return _table_names


@pytest.fixture
def app(db_path):
    return create_app(sqlite_url(db_path))


@pytest.fixture
def client(app):
    """HTTP client; entering it runs the app lifespan (creates tables)."""
    with TestClient(app) as client:
        yield client
