"""
API tests for rating endpoints.
"""

import uuid

import pytest
from fastapi.testclient import TestClient

from catalog.api.main import create_app


@pytest.fixture
def client():
    with TestClient(create_app("sqlite+aiosqlite:///:memory:")) as test_client:
        yield test_client


@pytest.fixture
def movie(client):
    r = client.post(
        "/api/movies",
        json={"title": "Heat", "year_of_release": 1995, "genres": ["Crime"]},
    )
    assert r.status_code == 201
    return r.json()


@pytest.fixture
def user_headers():
    return {"X-User-Id": str(uuid.uuid4())}


class TestRatingEndpoints:
    def test_rate_and_read_back(self, client, movie, user_headers):
        url = f"/api/movies/{movie['id']}/ratings"
        assert client.put(url, json={"rating": 3}, headers=user_headers).status_code == 200
        assert client.put(url, json={"rating": 5}, headers=user_headers).status_code == 200

        mine = client.get(f"/api/movies/{movie['id']}", headers=user_headers).json()
        anonymous = client.get(f"/api/movies/{movie['id']}").json()

        assert mine["rating"] == 5.0
        assert mine["user_rating"] == 5
        assert anonymous["user_rating"] is None

    def test_rating_out_of_range(self, client, movie, user_headers):
        r = client.put(
            f"/api/movies/{movie['id']}/ratings", json={"rating": 6}, headers=user_headers
        )
        assert r.status_code == 400
        assert r.json()["errors"][0]["field"] == "rating"

    def test_rating_missing_movie(self, client, user_headers):
        r = client.put(f"/api/movies/{uuid.uuid4()}/ratings", json={"rating": 4}, headers=user_headers)
        assert r.status_code == 404

    def test_rating_requires_user(self, client, movie):
        r = client.put(f"/api/movies/{movie['id']}/ratings", json={"rating": 4})
        assert r.status_code == 401

    def test_malformed_user_id(self, client, movie):
        r = client.get(f"/api/movies/{movie['id']}", headers={"X-User-Id": "not-a-uuid"})
        assert r.status_code == 400
        assert r.json()["detail"] == "X-User-Id must be a UUID"

    def test_my_ratings_and_delete(self, client, movie, user_headers):
        client.put(f"/api/movies/{movie['id']}/ratings", json={"rating": 4}, headers=user_headers)

        r = client.get("/api/ratings/me", headers=user_headers)
        assert r.status_code == 200
        assert r.json()["items"] == [{"movie_id": movie["id"], "slug": "heat-1995", "rating": 4}]

        url = f"/api/movies/{movie['id']}/ratings"
        assert client.delete(url, headers=user_headers).status_code == 200
        assert client.delete(url, headers=user_headers).status_code == 404
        assert client.get("/api/ratings/me", headers=user_headers).json()["items"] == []
