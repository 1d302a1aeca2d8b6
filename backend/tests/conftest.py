"""
Noteful Backend — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets a fresh in-memory SQLite database (aiosqlite +
       StaticPool), so store and endpoint tests run without PostgreSQL.

Fixture Hierarchy (all function-scoped):
    database ─┬─ folder_store / note_store
              ├─ seeded_folders ── seeded_notes
              └─ app: create_app(settings, database) ── test_client (HTTPX AsyncClient)

Seed data:
    Folders: 1 Important, 2 Super, 3 Spangley
    Notes:   1 Dogs (f1), 2 Cats (f2), 3 Pigs (f3), 4 Birds (f1)
"""

import os

# Override settings for testing BEFORE any noteful imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from noteful.config import Settings
from noteful.database import Database
from noteful.services.folder_store import FolderStore
from noteful.services.note_store import NoteStore

TEST_DATABASE_URL = "sqlite+aiosqlite://"

FOLDER_NAMES = ["Important", "Super", "Spangley"]

NOTE_DATA = [
    {"name": "Dogs", "content": "Corporis accusamus placeat quas non voluptas.", "folder_id": 1},
    {"name": "Cats", "content": "Eos laudantium quia ab blanditiis temporibus.", "folder_id": 2},
    {"name": "Pigs", "content": "Occaecati dignissimos quam qui facere deserunt.", "folder_id": 3},
    {"name": "Birds", "content": "Eum culpa odit. Veniam porro molestiae dolores.", "folder_id": 1},
]


@pytest.fixture
def malicious_note():
    """
    Returns (payload, expected) for a note carrying script markup.

    `expected` is what the API must echo back: the script tag escaped, the
    img event handler dropped, harmless formatting kept.
    """
    payload = {
        "name": 'Naughty naughty very naughty <script>alert("xss");</script>',
        "content": (
            'Bad image <img src="https://url.to.file.which/does-not.exist" '
            'onerror="alert(document.cookie);">. But not <strong>all</strong> bad.'
        ),
        "folderId": 1,
    }
    expected = {
        "name": 'Naughty naughty very naughty &lt;script&gt;alert("xss");&lt;/script&gt;',
        "content": (
            'Bad image <img src="https://url.to.file.which/does-not.exist">. '
            'But not <strong>all</strong> bad.'
        ),
    }
    return payload, expected


@pytest_asyncio.fixture
async def database():
    """
    Provides a fresh in-memory database with all tables created.

    Disposed after the test, which discards the data.
    """
    db = Database(TEST_DATABASE_URL)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def folder_store(database):
    return FolderStore(database)


@pytest.fixture
def note_store(database):
    return NoteStore(database)


@pytest_asyncio.fixture
async def seeded_folders(folder_store):
    """Inserts the three seed folders; returns them in id order."""
    return [await folder_store.create(name) for name in FOLDER_NAMES]


@pytest_asyncio.fixture
async def seeded_notes(seeded_folders, note_store):
    """Inserts the four seed notes; returns them in id order."""
    return [await note_store.create(**data) for data in NOTE_DATA]


@pytest.fixture
def app(database):
    """The application wired to the test database."""
    from noteful.main import create_app

    return create_app(Settings(database_url=TEST_DATABASE_URL), database)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    How: ASGITransport routes requests straight into the app; the app is
    built with the test database so both share the same tables.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
