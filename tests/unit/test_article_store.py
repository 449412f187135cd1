"""Unit tests for article history stores."""
import json

import pytest

from article_digest.models import ArticleResult
from article_digest.storage import InMemoryArticleStore, LocalJsonArticleStore


def article(n: int, summary: str = "") -> ArticleResult:
    return ArticleResult(
        url=f"https://example.com/{n}",
        title=f"Article {n}",
        summary=summary or f"Summary number {n}",
    )


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryArticleStore(limit=3)
    return LocalJsonArticleStore(tmp_path / "data" / "history.json", limit=3)


def test_add_keeps_newest_first(store):
    store.add(article(1))
    store.add(article(2))
    assert [a.url for a in store.list()] == ["https://example.com/2", "https://example.com/1"]


def test_add_replaces_same_url(store):
    store.add(article(1, "old"))
    store.add(article(2))
    store.add(article(1, "new"))

    urls = [a.url for a in store.list()]
    assert urls == ["https://example.com/1", "https://example.com/2"]
    assert store.get("https://example.com/1").summary == "new"


def test_add_caps_history(store):
    for n in range(5):
        store.add(article(n))
    assert len(store) == 3
    assert [a.url for a in store.list()][-1] == "https://example.com/2"


def test_remove(store):
    store.add(article(1))
    assert store.remove("https://example.com/1") is True
    assert store.remove("https://example.com/1") is False
    assert store.list() == []


def test_search_matches_url_or_summary_case_insensitively(store):
    store.add(article(1, "Climate policy shifts"))
    store.add(article(2, "Sports roundup"))

    assert [a.url for a in store.search("CLIMATE")] == ["https://example.com/1"]
    assert [a.url for a in store.search("example.com/2")] == ["https://example.com/2"]
    assert len(store.search("")) == 2
    assert store.search("missing") == []


def test_get_unknown_url(store):
    assert store.get("https://example.com/none") is None


def test_invalid_limit():
    with pytest.raises(ValueError):
        InMemoryArticleStore(limit=0)


class TestLocalJsonArticleStore:
    def test_persists_between_instances(self, tmp_path):
        path = tmp_path / "history.json"
        LocalJsonArticleStore(path).add(article(1))

        reloaded = LocalJsonArticleStore(path)
        assert reloaded.get("https://example.com/1").title == "Article 1"
        assert json.loads(path.read_text(encoding="utf-8"))[0]["url"] == "https://example.com/1"

    def test_missing_file_is_empty(self, tmp_path):
        assert LocalJsonArticleStore(tmp_path / "nope.json").list() == []

    def test_corrupt_file_is_treated_as_empty(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text("{not json", encoding="utf-8")
        assert LocalJsonArticleStore(path).list() == []

    def test_malformed_entries_are_skipped(self, tmp_path):
        path = tmp_path / "history.json"
        good = article(1).model_dump()
        path.write_text(json.dumps([{"url": "ftp://bad"}, good]), encoding="utf-8")

        assert [a.url for a in LocalJsonArticleStore(path).list()] == ["https://example.com/1"]

    def test_no_temp_files_left_behind(self, tmp_path):
        store = LocalJsonArticleStore(tmp_path / "history.json")
        store.add(article(1))
        store.add(article(2))
        assert [p.name for p in tmp_path.iterdir()] == ["history.json"]
