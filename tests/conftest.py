"""Shared fixtures for resourcekit tests."""

from __future__ import annotations

import pytest
from pydantic import Field

from resourcekit.adapters.memory import InMemoryDataSource
from resourcekit.domain import Entity, Timestamp, Timezone
from resourcekit.events import EventManager
from resourcekit.resource import Resource


# Sample entity (name avoids pytest collecting it as a test class)
class Article(Entity):
    """Blog entry used throughout the tests."""

    title: str = Field(..., min_length=1)
    body: str = ""
    author: str = ""
    is_draft: bool = False
    created: Timestamp = 0
    timezone: Timezone = "UTC"
    tags: list[str] = []


@pytest.fixture
def article_cls() -> type[Article]:
    return Article


@pytest.fixture
def articles() -> list[dict]:
    return [
        {
            "id": "some-slug",
            "title": "Some Slug",
            "body": "Some Slug.",
            "author": "matthew",
            "is_draft": False,
            "tags": ["foo", "bar"],
        },
        {
            "id": "some-other-slug",
            "title": "Some Other Slug",
            "body": "Some other slug.",
            "author": "matthew",
            "is_draft": True,
            "tags": ["foo"],
        },
        {
            "id": "some-final-slug",
            "title": "Some Final Slug",
            "body": "Some final slug.",
            "author": "matthew",
            "is_draft": False,
            "tags": ["bar"],
        },
    ]


@pytest.fixture
def data_source() -> InMemoryDataSource:
    return InMemoryDataSource()


@pytest.fixture
def events() -> EventManager:
    return EventManager()


@pytest.fixture
def resource(data_source, events) -> Resource[Article]:
    return Resource(data_source, Article, events=events)


@pytest.fixture
def mongo_connection():
    """Connection manager over an in-process mongomock client."""
    mongomock = pytest.importorskip("mongomock")

    from resourcekit.adapters.mongo import MongoConnectionManager

    connection = MongoConnectionManager.from_client(
        mongomock.MongoClient(), database="test_db"
    )
    yield connection
    connection.close()
