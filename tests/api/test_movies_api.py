"""
API tests for movie endpoints.

Each test gets its own app instance backed by an in-memory database.
"""

import uuid

import pytest
from fastapi.testclient import TestClient

from catalog.api.main import create_app


@pytest.fixture
def client():
    with TestClient(create_app("sqlite+aiosqlite:///:memory:")) as test_client:
        yield test_client


def create_movie(client, title="The Matrix", year=1999, genres=("Action", "Sci-Fi")):
    r = client.post(
        "/api/movies",
        json={"title": title, "year_of_release": year, "genres": list(genres)},
    )
    assert r.status_code == 201, r.text
    return r.json()


class TestMovieEndpoints:
    """Tests for /api/movies."""

    def test_create_movie(self, client):
        """POST /api/movies returns 201 with the stored movie and a Location header."""
        r = client.post(
            "/api/movies",
            json={"title": "The Matrix", "year_of_release": 1999, "genres": ["Sci-Fi", "Action"]},
        )
        assert r.status_code == 201
        data = r.json()
        assert data["slug"] == "the-matrix-1999"
        assert data["genres"] == ["Action", "Sci-Fi"]
        assert r.headers["location"] == f"/api/movies/{data['id']}"

    def test_create_invalid_movie_returns_all_errors(self, client):
        r = client.post(
            "/api/movies",
            json={"title": "", "year_of_release": 1999, "genres": []},
        )
        assert r.status_code == 400
        fields = {e["field"] for e in r.json()["errors"]}
        assert fields == {"title", "genres"}

    def test_create_duplicate_returns_409(self, client):
        create_movie(client)
        r = client.post(
            "/api/movies",
            json={"title": "The Matrix", "year_of_release": 1999, "genres": ["Action"]},
        )
        assert r.status_code == 409

    def test_get_by_id_and_slug(self, client):
        movie = create_movie(client)

        by_id = client.get(f"/api/movies/{movie['id']}")
        by_slug = client.get("/api/movies/the-matrix-1999")

        assert by_id.status_code == 200
        assert by_slug.status_code == 200
        assert by_id.json() == by_slug.json()

    def test_get_missing_returns_404(self, client):
        assert client.get(f"/api/movies/{uuid.uuid4()}").status_code == 404
        assert client.get("/api/movies/nothing-here-2000").status_code == 404

    def test_list_movies_paged_with_total(self, client):
        for title in ["Delta", "Bravo", "Alpha", "Charlie"]:
            create_movie(client, title=title, year=2000)

        r = client.get("/api/movies", params={"sort_by": "-title", "page": 1, "page_size": 3})

        assert r.status_code == 200
        data = r.json()
        assert [m["title"] for m in data["items"]] == ["Delta", "Charlie", "Bravo"]
        assert data["total"] == 4
        assert data["page"] == 1
        assert data["page_size"] == 3

    def test_list_movies_title_filter(self, client):
        for title in ["The Matrix", "Another Thing", "Inception"]:
            create_movie(client, title=title)

        r = client.get("/api/movies", params={"title": "THE", "sort_by": "title"})

        data = r.json()
        assert [m["title"] for m in data["items"]] == ["Another Thing", "The Matrix"]
        assert data["total"] == 2

    def test_list_movies_rejects_unknown_sort_field(self, client):
        r = client.get("/api/movies", params={"sort_by": "slug", "page_size": 100})

        assert r.status_code == 400
        fields = {e["field"] for e in r.json()["errors"]}
        assert fields == {"sort_field", "page_size"}

    def test_list_movies_rejects_page_past_max_offset(self, client):
        r = client.get("/api/movies", params={"page": 2**62})

        assert r.status_code == 400
        assert [e["field"] for e in r.json()["errors"]] == ["page"]

    def test_update_movie(self, client):
        movie = create_movie(client, genres=("Action", "Drama"))

        r = client.put(
            f"/api/movies/{movie['id']}",
            json={"title": "The Matrix", "year_of_release": 1999, "genres": ["Action"]},
        )

        assert r.status_code == 200
        assert r.json()["genres"] == ["Action"]
        assert client.get(f"/api/movies/{movie['id']}").json()["genres"] == ["Action"]

    def test_update_missing_returns_404(self, client):
        r = client.put(
            f"/api/movies/{uuid.uuid4()}",
            json={"title": "Ghost", "year_of_release": 1990, "genres": ["Drama"]},
        )
        assert r.status_code == 404

    def test_delete_movie(self, client):
        movie = create_movie(client)

        assert client.delete(f"/api/movies/{movie['id']}").status_code == 200
        assert client.get(f"/api/movies/{movie['id']}").status_code == 404
        assert client.delete(f"/api/movies/{movie['id']}").status_code == 404

    def test_health(self, client):
        r = client.get("/api/health")
        assert r.status_code == 200
        assert r.json()["status"] == "healthy"
