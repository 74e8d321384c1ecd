"""
Pytest configuration and fixtures for article insights tests.
"""

import json
import os
from pathlib import Path

import pytest
from hypothesis import settings, Verbosity

from article_insights.data.models import Article

# Configure Hypothesis for faster test runs
settings.register_profile("fast", max_examples=25, deadline=None, verbosity=Verbosity.quiet)
settings.register_profile("thorough", max_examples=200, deadline=None, verbosity=Verbosity.normal)

settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "fast"))


def build_article(uuid, title=None, **fields):
    """Build an article with sensible defaults for every field not given."""
    defaults = {
        "author": "Author",
        "language": "english",
        "published": "2024-01-01T00:00:00",
        "categories": (),
        "text": None,
        "url": f"https://news.example/{uuid}",
    }
    defaults.update(fields)
    if defaults["categories"] is not None:
        defaults["categories"] = tuple(defaults["categories"])
    return Article(uuid=uuid, title=title if title is not None else f"Title {uuid}", **defaults)


@pytest.fixture
def make_article():
    """Factory building Article records."""
    return build_article


@pytest.fixture
def write_article_file(tmp_path):
    """Write a list of article dicts (or Articles) as one JSON article file."""
    def _write(name, records):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = [r.to_dict() if isinstance(r, Article) else r for r in records]
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def write_counted_file(tmp_path):
    """Write a count-then-lines file (roster or word list)."""
    def _write(name, entries):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join([str(len(entries))] + list(entries)) + "\n", encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def sample_dataset(tmp_path, write_article_file, write_counted_file):
    """
    A small on-disk dataset with article and auxiliary rosters.

    Layout: data/articles.txt lists two article files under data/articles/,
    data/inputs.txt lists the language, category and stop-word files.
    """
    data_dir = Path("data")
    first = [
        {"uuid": "a1", "title": "Storm hits coast", "author": "Alice", "language": "english",
         "published": "2024-03-01T10:00:00", "categories": ["Weather", "World News", "Weather"],
         "text": "The storm hits the coast. Storm warnings issued.", "url": "https://news.example/a1"},
        {"uuid": "b1", "title": "Markets rally", "author": "Bob", "language": "english",
         "published": "2024-03-02T09:00:00", "categories": ["Business, Finance"],
         "text": "Markets rally as the storm passes", "url": "https://news.example/b1"},
        {"uuid": "dup", "title": "Repeated story", "author": "Carol", "language": "french",
         "published": "2024-03-03T08:00:00", "categories": ["World News"],
         "text": None, "url": "https://news.example/dup-1"},
    ]
    second = [
        {"uuid": "c1", "title": "Tempete sur la cote", "author": "Carol", "language": "french",
         "published": "2024-03-02T09:00:00", "categories": ["Weather"],
         "text": "La tempete frappe", "url": "https://news.example/c1"},
        {"uuid": "dup", "title": "Another repeated story", "author": "Dave", "language": "english",
         "published": "2024-03-04T08:00:00", "categories": ["World News"],
         "text": "ignored because duplicated", "url": "https://news.example/dup-2"},
        {"uuid": "d1", "title": "Markets rally", "author": "Erin", "language": "english",
         "published": "2024-03-05T08:00:00", "categories": [],
         "text": "title clash makes this a duplicate", "url": "https://news.example/d1"},
        {"uuid": "e1", "title": "Quiet day", "author": "Alice", "language": "english",
         "published": "2024-02-01T08:00:00", "categories": None,
         "url": "https://news.example/e1"},
    ]
    write_article_file(str(data_dir / "articles" / "part1.json"), first)
    write_article_file(str(data_dir / "articles" / "part2.json"), second)
    articles_roster = write_counted_file(
        str(data_dir / "articles.txt"), ["articles/part1.json", "articles/part2.json"]
    )

    write_counted_file(str(data_dir / "aux" / "languages.txt"), ["english", "french", "german"])
    write_counted_file(str(data_dir / "aux" / "categories.txt"), ["Weather", "World News", "Business, Finance"])
    write_counted_file(str(data_dir / "aux" / "linking_words.txt"), ["The", "as", "la"])
    inputs_roster = write_counted_file(
        str(data_dir / "inputs.txt"),
        ["aux/languages.txt", "aux/categories.txt", "aux/linking_words.txt"]
    )

    return {
        "articles_roster": articles_roster,
        "inputs_roster": inputs_roster,
        "output_dir": tmp_path / "out",
    }


def pytest_configure(config):
    """Configure pytest with custom settings."""
    import logging
    logging.getLogger("article_insights").setLevel(logging.WARNING)
    logging.getLogger("hypothesis").setLevel(logging.WARNING)


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers."""
    for item in items:
        # Mark property-based tests
        if "properties" in item.fspath.basename or any(
            marker.name == "given" for marker in item.iter_markers()
        ):
            item.add_marker(pytest.mark.property)

        if "integration" in item.fspath.basename:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
