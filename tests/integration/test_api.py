"""Integration tests for the API endpoints."""

import json

import pytest
from fastapi.testclient import TestClient
from fuzzy_trie_index.config import Settings
from fuzzy_trie_index.core.service import IndexService
from fuzzy_trie_index.main import create_app


class TestAPI:
    """Integration tests for API endpoints."""

    @pytest.fixture
    def service(self):
        """Create a service preloaded with sample words."""
        service = IndexService()
        service.insert_many(["cat", "cats", "car", "dog"])
        return service

    @pytest.fixture
    def client(self, service):
        """Create a test client around the sample service."""
        settings = Settings(default_max_distance=1, max_batch_size=5)
        with TestClient(create_app(settings=settings, service=service)) as client:
            yield client

    def test_root_endpoint(self, client):
        """Test the root endpoint."""
        response = client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert data["name"] == "Fuzzy Trie Index"
        assert data["status"] == "running"

    def test_api_info_endpoint(self, client):
        """Test the API info endpoint."""
        response = client.get("/api")
        assert response.status_code == 200

        data = response.json()
        assert "endpoints" in data
        assert data["defaults"]["max_distance"] == 1

    def test_search_exact(self, client):
        """Distance zero returns just the word itself."""
        response = client.get("/api/v1/search/cat?max_distance=0")
        assert response.status_code == 200
        assert response.json() == [{"token": "cat", "distance": 0}]

    def test_search_fuzzy(self, client):
        """Distance one returns the one-edit neighbours."""
        response = client.get("/api/v1/search/cat?max_distance=1")
        assert response.status_code == 200

        data = response.json()
        assert {"token": "cat", "distance": 0} in data
        assert {"token": "cats", "distance": 1} in data
        assert {"token": "car", "distance": 1} in data
        assert all(item["token"] != "dog" for item in data)
        assert all(set(item) == {"token", "distance"} for item in data)

    def test_search_default_distance(self, client):
        """The configured default budget applies when none is given."""
        response = client.get("/api/v1/search/cag")
        assert response.status_code == 200
        assert {item["token"] for item in response.json()} == {"cat", "car"}

    def test_search_no_match(self, client):
        """No matches yields an empty array."""
        response = client.get("/api/v1/search/elephant?max_distance=1")
        assert response.status_code == 200
        assert response.json() == []

    def test_search_negative_distance(self, client):
        """Negative budgets are rejected by validation."""
        response = client.get("/api/v1/search/cat?max_distance=-1")
        assert response.status_code == 422

    def test_search_word_too_long(self, client):
        """Overlong words are rejected."""
        response = client.get("/api/v1/search/" + "a" * 101)
        assert response.status_code == 400

    def test_search_with_body(self, client):
        """Structured search returns metadata and can sort results."""
        response = client.post(
            "/api/v1/search",
            json={"word": "cat", "max_distance": 1, "sort": True}
        )
        assert response.status_code == 200

        data = response.json()
        assert data["query"] == "cat"
        assert data["max_distance"] == 1
        assert data["total_results"] == 3
        assert [r["token"] for r in data["results"]] == ["cat", "car", "cats"]

    def test_search_with_body_empty_word(self, client):
        """An empty word yields no results."""
        response = client.post("/api/v1/search", json={"word": "", "max_distance": 3})
        assert response.status_code == 200
        assert response.json()["results"] == []

    def test_match_endpoint(self, client):
        """Token matching returns the exact hit or fuzzy neighbours."""
        response = client.get("/api/v1/match/cat?tolerance=2")
        assert response.json() == [{"token": "cat", "distance": 0}]

        response = client.get("/api/v1/match/cag")
        assert response.json() == []

    def test_insert_word(self, client):
        """An inserted word becomes searchable."""
        response = client.post("/api/v1/words", json={"word": "bird"})
        assert response.status_code == 200
        assert response.json()["applied"] is True

        response = client.get("/api/v1/search/bird?max_distance=0")
        assert response.json() == [{"token": "bird", "distance": 0}]

    def test_insert_empty_word(self, client, service):
        """Inserting an empty word is accepted but ignored."""
        response = client.post("/api/v1/words", json={"word": ""})
        assert response.status_code == 200
        assert response.json()["applied"] is False
        assert service.get_stats()["index_stats"]["word_count"] == 4

    def test_insert_batch(self, client):
        """Bulk insertion reports how many words were added."""
        response = client.post("/api/v1/words/batch", json={"words": ["emu", "", "elk"]})
        assert response.status_code == 200
        assert response.json()["count"] == 2

        response = client.get("/api/v1/words/elk")
        assert response.json()["exists"] is True

    def test_insert_batch_too_large(self, client):
        """Batches above the configured size are rejected."""
        response = client.post(
            "/api/v1/words/batch",
            json={"words": [f"w{i}" for i in range(6)]}
        )
        assert response.status_code == 400

    def test_lookup_word(self, client):
        """Exact lookups distinguish words from prefixes."""
        assert client.get("/api/v1/words/cat").json()["exists"] is True
        assert client.get("/api/v1/words/ca").json()["exists"] is False

    def test_delete_word(self, client):
        """A deleted word is no longer found."""
        response = client.delete("/api/v1/words/dog")
        assert response.status_code == 200

        response = client.get("/api/v1/search/dog?max_distance=0")
        assert response.json() == []

    def test_delete_missing_word(self, client):
        """Deleting an absent word succeeds without changing anything."""
        before = client.get("/api/v1/search/cat?max_distance=1").json()

        response = client.delete("/api/v1/words/zebra")
        assert response.status_code == 200

        assert client.get("/api/v1/search/cat?max_distance=1").json() == before

    def test_reset(self, client):
        """Reset empties the index."""
        response = client.post("/api/v1/index/reset")
        assert response.status_code == 200

        response = client.get("/api/v1/search/cat?max_distance=2")
        assert response.json() == []

    def test_health_check(self, client):
        """Test health check endpoint."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"]["index_service"] == "healthy"

    def test_health_check_leaves_search_counters(self, client, service):
        """Health checks are not counted as searches."""
        client.get("/api/v1/health")
        client.get("/api/v1/health/ready")

        stats = service.get_stats()
        assert stats["total_searches"] == 0
        assert stats["total_execution_time"] == 0.0

    def test_readiness_and_liveness(self, client):
        """Test readiness and liveness probes."""
        ready = client.get("/api/v1/health/ready")
        assert ready.status_code == 200
        assert ready.json()["index_stats"]["word_count"] == 4

        live = client.get("/api/v1/health/live")
        assert live.status_code == 200
        assert live.json()["status"] == "alive"

    def test_status(self, client):
        """Test detailed status endpoint."""
        response = client.get("/api/v1/status")
        assert response.status_code == 200

        data = response.json()
        assert data["configuration"]["default_max_distance"] == 1
        assert data["statistics"]["index_stats"]["word_count"] == 4

    def test_metrics(self, client):
        """Test metrics endpoint."""
        client.get("/api/v1/search/cat?max_distance=1")

        response = client.get("/api/v1/metrics")
        assert response.status_code == 200

        data = response.json()
        assert data["total_searches"] >= 1
        assert data["word_count"] == 4
        assert data["node_count"] == 8
        assert data["memory_usage_mb"] > 0


class TestWordLengthLimit:
    """The configured word length limit applies to every word endpoint."""

    @pytest.fixture
    def service(self):
        service = IndexService()
        service.insert("cat")
        return service

    @pytest.fixture
    def client(self, service):
        settings = Settings(max_word_length=5)
        with TestClient(create_app(settings=settings, service=service)) as client:
            yield client

    def test_insert_rejects_long_word(self, client, service):
        response = client.post("/api/v1/words", json={"word": "toolong"})
        assert response.status_code == 400
        assert "Maximum length is 5" in response.json()["detail"]
        assert service.contains("toolong") is False

    def test_batch_rejects_long_word(self, client, service):
        response = client.post("/api/v1/words/batch", json={"words": ["ok", "toolong"]})
        assert response.status_code == 400
        assert service.contains("ok") is False

    def test_search_rejects_long_word(self, client):
        assert client.get("/api/v1/search/toolong").status_code == 400
        assert client.post("/api/v1/search", json={"word": "toolong"}).status_code == 400

    def test_lookup_delete_and_match_reject_long_word(self, client):
        assert client.get("/api/v1/words/toolong").status_code == 400
        assert client.delete("/api/v1/words/toolong").status_code == 400
        assert client.get("/api/v1/match/toolong").status_code == 400

    def test_word_at_limit_is_accepted(self, client):
        assert client.post("/api/v1/words", json={"word": "abcde"}).status_code == 200
        assert client.get("/api/v1/words/abcde").json()["exists"] is True

    def test_raised_limit_accepts_longer_words(self):
        """Models carry no length cap of their own."""
        word = "w" * 150
        settings = Settings(max_word_length=200)
        with TestClient(create_app(settings=settings)) as client:
            assert client.post("/api/v1/words", json={"word": word}).status_code == 200
            response = client.post("/api/v1/search", json={"word": word, "max_distance": 0})
            assert response.status_code == 200
            assert response.json()["total_results"] == 1


class TestSeedWords:
    """Startup loading of seed words."""

    def test_seed_words_loaded(self, tmp_path):
        """Words from the seed file are indexed at startup."""
        seed_file = tmp_path / "words.json"
        seed_file.write_text(json.dumps(["alpha", "beta"]), encoding="utf-8")

        settings = Settings(seed_words_file=str(seed_file))
        with TestClient(create_app(settings=settings)) as client:
            response = client.get("/api/v1/search/alpha?max_distance=0")
            assert response.json() == [{"token": "alpha", "distance": 0}]

    def test_missing_seed_file(self, tmp_path):
        """A missing seed file leaves the index empty."""
        settings = Settings(seed_words_file=str(tmp_path / "missing.json"))
        with TestClient(create_app(settings=settings)) as client:
            response = client.get("/api/v1/health/ready")
            assert response.json()["index_stats"]["word_count"] == 0

    def test_separate_apps_do_not_share_state(self):
        """Each application owns its own index."""
        first = create_app(settings=Settings())
        second = create_app(settings=Settings())

        with TestClient(first) as a, TestClient(second) as b:
            a.post("/api/v1/words", json={"word": "only"})
            assert a.get("/api/v1/words/only").json()["exists"] is True
            assert b.get("/api/v1/words/only").json()["exists"] is False
