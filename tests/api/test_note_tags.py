"""Tests for the note tag sub-routes."""

import pytest


@pytest.fixture
def note(api_client):
    return api_client.post("/api/notes", json={"content": "Tag me", "tags": ["keep"]}).json()


class TestAddNoteTags:
    """Test POST /api/notes/{id}/tags."""

    def test_add_tags(self, api_client, note):
        response = api_client.post(f"/api/notes/{note['id']}/tags", json={"tags": ["Idea", "urgent"]})

        assert response.status_code == 200
        data = response.json()
        assert data["tags"] == ["keep", "idea", "urgent"]
        assert data["updatedAt"] > note["updatedAt"]

    def test_existing_tag_is_noop(self, api_client, note):
        response = api_client.post(f"/api/notes/{note['id']}/tags", json={"tags": ["keep", "KEEP"]})

        assert response.status_code == 200
        assert response.json() == note

    def test_whitespace_tag_is_noop(self, api_client, note):
        response = api_client.post(f"/api/notes/{note['id']}/tags", json={"tags": ["   "]})

        assert response.status_code == 200
        assert response.json()["tags"] == ["keep"]

    def test_limit_exceeded(self, api_client):
        tags = [f"tag{i}" for i in range(10)]
        full = api_client.post("/api/notes", json={"content": "Full", "tags": tags}).json()

        response = api_client.post(f"/api/notes/{full['id']}/tags", json={"tags": ["overflow"]})

        assert response.status_code == 400
        assert response.json()["error"].startswith("Tag limit exceeded")

    def test_tag_over_32_characters(self, api_client, note):
        response = api_client.post(f"/api/notes/{note['id']}/tags", json={"tags": ["a" * 33]})

        assert response.status_code == 400
        assert "exceeds 32 characters" in response.json()["error"]

    def test_tags_not_an_array(self, api_client, note):
        response = api_client.post(f"/api/notes/{note['id']}/tags", json={"tags": "invalid"})

        assert response.status_code == 400
        assert response.json()["error"] == "tags must be an array"

    def test_tags_missing(self, api_client, note):
        response = api_client.post(f"/api/notes/{note['id']}/tags", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "tags must be an array"

    def test_request_without_body(self, api_client, note):
        response = api_client.post(f"/api/notes/{note['id']}/tags")

        assert response.status_code == 400
        assert response.json() == {"error": "tags must be an array"}

    def test_unknown_note(self, api_client):
        response = api_client.post("/api/notes/n_zzzzzz/tags", json={"tags": ["x"]})

        assert response.status_code == 404


class TestRemoveNoteTag:
    """Test DELETE /api/notes/{id}/tags/{tag}."""

    def test_remove_tag(self, api_client, app):
        created = api_client.post(
            "/api/notes", json={"content": "Remove tag", "tags": ["keep", "remove"]}
        ).json()

        response = api_client.delete(f"/api/notes/{created['id']}/tags/remove")

        assert response.status_code == 200
        assert response.json()["tags"] == ["keep"]
        assert "remove" not in app.state.notes.tag_index

    def test_remove_is_case_insensitive(self, api_client, note):
        response = api_client.delete(f"/api/notes/{note['id']}/tags/KEEP")

        assert response.status_code == 200
        assert response.json()["tags"] == []

    def test_url_encoded_tag(self, api_client):
        created = api_client.post("/api/notes", json={"content": "Encoded", "tags": ["c++", "a/b"]}).json()

        plus = api_client.delete(f"/api/notes/{created['id']}/tags/c%2B%2B")
        slash = api_client.delete(f"/api/notes/{created['id']}/tags/a%2Fb")

        assert plus.status_code == 200
        assert slash.status_code == 200
        assert slash.json()["tags"] == []

    def test_tag_not_on_note(self, api_client, note):
        response = api_client.delete(f"/api/notes/{note['id']}/tags/nope")

        assert response.status_code == 404
        assert response.json()["error"] == "Tag not found on this note"

    def test_unknown_note(self, api_client):
        response = api_client.delete("/api/notes/n_notreal/tags/sometag")

        assert response.status_code == 404
        assert response.json()["error"] == "Note not found"

    def test_add_then_remove_round_trip(self, api_client, note):
        api_client.post(f"/api/notes/{note['id']}/tags", json={"tags": ["temp"]})

        response = api_client.delete(f"/api/notes/{note['id']}/tags/temp")

        assert response.json()["tags"] == note["tags"]
