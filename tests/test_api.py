"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from conftest import MemoryState
from kosha.main import create_app


@pytest.fixture
def client(store):
    return TestClient(create_app(store=store))


class TestSearchRoute:
    """Tests for /api/search."""

    def test_iast_search(self, client):
        response = client.get("/api/search", params={"q": "dharma"})
        assert response.status_code == 200
        data = response.json()
        assert data["terms"] == ["dharma", "धर्म"]
        assert data["count"] == 3
        assert data["total"] == 3
        assert data["truncated"] is False
        assert [r["dict_code"] for r in data["results"]] == ["ap90", "mw", "pw"]
        assert "content" not in data["results"][0]

    def test_devanagari_search(self, client):
        data = client.get("/api/search", params={"q": "योग"}).json()
        assert [r["word"] for r in data["results"]] == ["yoga"]

    def test_mode_and_dictionary_filter(self, client):
        data = client.get(
            "/api/search", params={"q": "dharm", "mode": "prefix", "dict": ["mw"]}
        ).json()
        assert data["mode"] == "prefix"
        assert {r["word"] for r in data["results"]} == {"dharma", "dharmakāya"}

    def test_limit_truncates(self, client):
        data = client.get(
            "/api/search", params={"q": "a", "mode": "fuzzy", "limit": 2}
        ).json()
        assert data["count"] == 2
        assert data["total"] > 2
        assert data["truncated"] is True

    def test_reverse(self, client):
        data = client.get("/api/search", params={"q": "weapon", "mode": "reverse"}).json()
        assert [r["word"] for r in data["results"]] == ["arma"]

    def test_empty_query(self, client):
        assert client.get("/api/search", params={"q": "  "}).status_code == 400

    def test_invalid_mode(self, client):
        response = client.get("/api/search", params={"q": "dharma", "mode": "regex"})
        assert response.status_code == 400

    def test_invalid_limit(self, client):
        response = client.get("/api/search", params={"q": "dharma", "limit": 0})
        assert response.status_code == 422

    def test_configured_default_limit(self, store, monkeypatch):
        monkeypatch.setenv("KOSHA_SEARCH_LIMIT", "1")
        client = TestClient(create_app(store=store))
        data = client.get("/api/search", params={"q": "dharma"}).json()
        assert data["count"] == 1
        assert data["total"] == 3
        assert data["truncated"] is True

        data = client.get("/api/search", params={"q": "dharma", "limit": 5}).json()
        assert data["count"] == 3

    def test_dictionaries_in_results(self, client):
        data = client.get("/api/search", params={"q": "dharma"}).json()
        assert data["dictionaries"] == ["ap90", "mw", "pw"]
        data = client.get("/api/search", params={"q": "xyz"}).json()
        assert data["dictionaries"] == []


class TestArticleRoutes:
    """Tests for /api/articles."""

    def article_id(self, client, word):
        return client.get("/api/search", params={"q": word}).json()["results"][0]["article_id"]

    def test_get_article(self, client):
        article_id = self.article_id(client, "karma")
        data = client.get(f"/api/articles/{article_id}").json()
        assert data["word"] == "karma"
        assert data["dict_code"] == "mw"
        assert data["content"] == "karma n. act, action, work, deed"
        assert data["starred"] is False

    def test_highlights(self, client):
        article_id = self.article_id(client, "yoga")
        data = client.get(f"/api/articles/{article_id}", params={"q": "yoga"}).json()
        assert data["highlights"][0] == [0, 4]

    def test_missing_article(self, client):
        assert client.get("/api/articles/99999").status_code == 404

    def test_contents(self, client):
        results = client.get("/api/search", params={"q": "dharma"}).json()["results"]
        ids = [r["article_id"] for r in results]
        data = client.get("/api/articles/contents", params={"ids": ids + [99999]}).json()
        assert data["count"] == 3
        assert set(data["contents"]) == {str(i) for i in ids}


class TestStarRoute:
    """Tests for starring articles."""

    def article_id(self, client, word):
        return client.get("/api/search", params={"q": word}).json()["results"][0][
            "article_id"
        ]

    def test_toggle(self, store):
        state = MemoryState()
        client = TestClient(create_app(store=store, state=state))
        article_id = self.article_id(client, "yoga")

        response = client.post(f"/api/articles/{article_id}/star")
        assert response.status_code == 200
        assert response.json() == {"article_id": article_id, "starred": True}
        assert state.starred == {article_id: ("yoga", "mw")}
        assert client.get(f"/api/articles/{article_id}").json()["starred"] is True

        response = client.post(f"/api/articles/{article_id}/star")
        assert response.json()["starred"] is False
        assert state.starred == {}
        assert client.get(f"/api/articles/{article_id}").json()["starred"] is False

    def test_lookup_is_recorded(self, store):
        state = MemoryState()
        client = TestClient(create_app(store=store, state=state))
        client.get("/api/search", params={"q": "karma"})
        assert state.queries == ["karma"]

    def test_without_state(self, client):
        article_id = self.article_id(client, "yoga")
        assert client.post(f"/api/articles/{article_id}/star").status_code == 503

    def test_missing_article(self, store):
        client = TestClient(create_app(store=store, state=MemoryState()))
        assert client.post("/api/articles/99999/star").status_code == 404


class TestOtherRoutes:
    def test_dictionaries(self, client):
        data = client.get("/api/dictionaries").json()
        assert data["count"] == 3
        assert data["dictionaries"][0]["code"] == "ap90"

    def test_transliterate_to_devanagari(self, client):
        data = client.get("/api/transliterate", params={"text": "kṛṣṇa"}).json()
        assert data["result"] == "कृष्ण"

    def test_transliterate_to_iast(self, client):
        data = client.get(
            "/api/transliterate", params={"text": "संस्कृत", "direction": "iast"}
        ).json()
        assert data["result"] == "saṃskṛta"

    def test_transliterate_errors(self, client):
        assert client.get("/api/transliterate", params={"text": " "}).status_code == 400
        response = client.get(
            "/api/transliterate", params={"text": "yoga", "direction": "slp"}
        )
        assert response.status_code == 400

    def test_health(self, client):
        assert client.get("/api/health/").json() == {"status": "healthy"}
        data = client.get("/api/health/index").json()
        assert data["status"] == "healthy"
        assert data["index"]["content"]["word_count"] == 7

    def test_ready(self, client):
        assert client.get("/ready").json() == {"ready": True}

    def test_not_ready_before_rebuild(self, bulk_store):
        client = TestClient(create_app(store=bulk_store))
        assert client.get("/ready").json() == {"ready": False}
        assert client.get("/api/health/index").json()["status"] == "unhealthy"

    def test_root(self, client):
        assert client.get("/").status_code == 200
