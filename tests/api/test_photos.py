"""Tests for photo endpoints."""


class TestListPhotos:
    """Test GET /api/photos."""

    def test_empty_library(self, api_client):
        data = api_client.get("/api/photos").json()

        assert data == {"photos": [], "total": 0, "page": 1, "limit": 50}

    def test_lists_scanned_photos_newest_first(self, scanned_client):
        data = scanned_client.get("/api/photos").json()

        assert data["total"] == 3
        assert [p["file_path"] for p in data["photos"]] == ["trips/alps.webp", "cat.PNG", "beach.jpg"]
        first = data["photos"][0]
        assert first["url"] == "/photos/trips/alps.webp"
        assert first["tags"] == []
        assert first["albums"] == []
        assert first["mime_type"] == "image/webp"

    def test_sort_by_name_ascending(self, scanned_client):
        data = scanned_client.get("/api/photos", params={"sort": "name", "order": "asc"}).json()

        assert [p["file_name"] for p in data["photos"]] == ["alps.webp", "beach.jpg", "cat.PNG"]

    def test_filter_by_tag(self, scanned_client):
        scanned_client.post("/api/photos/2/tags", json={"tags": ["Pets"]})

        data = scanned_client.get("/api/photos", params={"tag": "PETS"}).json()

        assert [p["id"] for p in data["photos"]] == [2]
        assert data["photos"][0]["tags"] == ["Pets"]

    def test_filter_by_album_and_search(self, scanned_client):
        album = scanned_client.post("/api/albums", json={"name": "Best"}).json()
        scanned_client.post(f"/api/albums/{album['id']}/photos", json={"photo_ids": [1, 3]})
        scanned_client.patch("/api/photos/1", json={"title": "Sunny beach"})

        data = scanned_client.get(
            "/api/photos", params={"album_id": album["id"], "search": "SUNNY"}
        ).json()

        assert [p["id"] for p in data["photos"]] == [1]
        assert data["photos"][0]["albums"] == [{"id": album["id"], "name": "Best"}]

    def test_pagination_not_capped(self, scanned_client):
        data = scanned_client.get("/api/photos", params={"limit": 500, "page": 1}).json()

        assert data["limit"] == 500
        assert len(data["photos"]) == 3


class TestPhotoDetail:
    """Test GET/PATCH /api/photos/{id}."""

    def test_get_photo(self, scanned_client):
        response = scanned_client.get("/api/photos/1")

        assert response.status_code == 200
        assert response.json()["file_name"] == "beach.jpg"

    def test_get_unknown_photo(self, scanned_client):
        response = scanned_client.get("/api/photos/99")

        assert response.status_code == 404
        assert response.json() == {"error": "Photo not found"}

    def test_partial_update(self, scanned_client):
        scanned_client.patch("/api/photos/1", json={"title": "Beach", "description": "Waves"})

        response = scanned_client.patch("/api/photos/1", json={"rating": 5, "date_taken": "2023-07-01"})

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Beach"
        assert data["description"] == "Waves"
        assert data["rating"] == 5
        assert data["date_taken"] == "2023-07-01"
        assert data["updated_at"] > data["created_at"]

    def test_null_clears_field(self, scanned_client):
        scanned_client.patch("/api/photos/1", json={"description": "Temp", "rating": 3})

        data = scanned_client.patch("/api/photos/1", json={"description": None, "rating": None}).json()

        assert data["description"] is None
        assert data["rating"] is None

    def test_invalid_rating(self, scanned_client):
        for rating in (0, 6, 4.5):
            response = scanned_client.patch("/api/photos/1", json={"rating": rating})

            assert response.status_code == 400
            assert "between 1 and 5" in response.json()["error"]

        assert scanned_client.get("/api/photos/1").json()["rating"] is None

    def test_update_unknown_photo(self, scanned_client):
        response = scanned_client.patch("/api/photos/99", json={"title": "x"})

        assert response.status_code == 404


class TestPhotoTags:
    """Test photo tag association routes."""

    def test_add_tags_reuses_rows(self, scanned_client):
        scanned_client.post("/api/photos/1/tags", json={"tags": ["Sunset"]})

        response = scanned_client.post("/api/photos/2/tags", json={"tags": ["sunset", "SUNSET"]})

        assert response.status_code == 200
        assert response.json()["tags"] == ["Sunset"]

    def test_add_tags_not_array(self, scanned_client):
        response = scanned_client.post("/api/photos/1/tags", json={"tags": "sunset"})

        assert response.status_code == 400
        assert response.json()["error"] == "tags must be an array"

    def test_add_tags_without_body(self, scanned_client):
        response = scanned_client.post("/api/photos/1/tags")

        assert response.status_code == 400
        assert response.json() == {"error": "tags must be an array"}

    def test_add_tags_unknown_photo(self, scanned_client):
        response = scanned_client.post("/api/photos/99/tags", json={"tags": ["x"]})

        assert response.status_code == 404

    def test_remove_tag(self, scanned_client):
        scanned_client.post("/api/photos/1/tags", json={"tags": ["Sea", "Sand"]})

        response = scanned_client.delete("/api/photos/1/tags/sea")

        assert response.status_code == 204
        assert scanned_client.get("/api/photos/1").json()["tags"] == ["Sand"]

    def test_remove_unknown_tag_is_noop(self, scanned_client):
        response = scanned_client.delete("/api/photos/1/tags/never")

        assert response.status_code == 204

    def test_remove_tag_unknown_photo(self, scanned_client):
        response = scanned_client.delete("/api/photos/99/tags/x")

        assert response.status_code == 404
