"""Pytest configuration and fixtures."""

import pytest

from bookindex.backends import MemoryBackend
from bookindex.config import Settings
from bookindex.models import Entry, RawRecord


@pytest.fixture
def settings():
    """Default settings, independent of the environment."""
    return Settings(_env_file=None)


@pytest.fixture
def memory_backend():
    """Fresh recording backend."""
    return MemoryBackend()


@pytest.fixture
def giac_entry():
    """Single well-formed entry."""
    return Entry(
        topic="GIAC",
        description="Global Information Assurance Certification",
        page="5",
        book="1",
    )


@pytest.fixture
def mixed_records():
    """Letter and non-letter topics in input order."""
    return [
        RawRecord(topic=topic, description=f"About {topic}", page=str(i + 1), book="1")
        for i, topic in enumerate(["Apple", "Banana", "1x", "2y", "Cherry"])
    ]


@pytest.fixture
def csv_file(tmp_path):
    """Write a small index CSV with a header row."""
    path = tmp_path / "index.csv"
    path.write_text(
        "Topic,Description,Page,Book\n"
        "Cherry,Red fruit,12,2\n"
        "apple,\"Fruit, green or red\",3,1\n"
        "  Banana,Yellow fruit,7,1\n"
        "\n"
        "42,The answer,99,3\n",
        encoding="utf-8",
    )
    return path
