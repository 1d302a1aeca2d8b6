"""
Noteful Backend — Notes Endpoint Tests
=======================================

What:  HTTP-level tests for /notes through the full app (middleware,
       exception handlers, routers, stores, SQLite).
"""

from datetime import datetime, timezone

import pytest


def as_json(notes):
    return [
        {"id": n.id, "name": n.name, "content": n.content, "folderId": n.folder_id}
        for n in notes
    ]


def parse_modified(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def strip_modified(notes):
    return [{k: v for k, v in note.items() if k != "modified"} for note in notes]


class TestListNotes:

    @pytest.mark.asyncio
    async def test_empty_list(self, test_client):
        response = await test_client.get("/notes")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_all_notes_in_id_order(self, test_client, seeded_notes):
        response = await test_client.get("/notes")
        assert response.status_code == 200
        body = response.json()
        assert strip_modified(body) == as_json(seeded_notes)
        assert all("modified" in note for note in body)

    @pytest.mark.asyncio
    async def test_xss_content_neutralized(
        self, test_client, seeded_folders, note_store, malicious_note
    ):
        payload, expected = malicious_note
        await note_store.create(
            name=payload["name"], content=payload["content"], folder_id=payload["folderId"]
        )

        response = await test_client.get("/notes")
        assert response.status_code == 200
        note = response.json()[0]
        assert note["name"] == expected["name"]
        assert "onerror" not in note["content"]
        assert "<strong>all</strong> bad." in note["content"]


class TestGetNote:

    @pytest.mark.asyncio
    async def test_missing_note_404(self, test_client):
        response = await test_client.get("/notes/123456")
        assert response.status_code == 404
        assert response.json() == {"error": {"message": "Note doesn't exist"}}

    @pytest.mark.asyncio
    async def test_returns_note(self, test_client, seeded_notes):
        response = await test_client.get("/notes/2")
        assert response.status_code == 200
        body = response.json()
        assert {k: body[k] for k in ("id", "name", "content", "folderId")} == {
            "id": 2,
            "name": "Cats",
            "content": "Eos laudantium quia ab blanditiis temporibus.",
            "folderId": 2,
        }

    @pytest.mark.asyncio
    async def test_non_integer_id_400(self, test_client):
        response = await test_client.get("/notes/not-a-number")
        assert response.status_code == 400
        assert response.json() == {"error": {"message": "Invalid path parameter 'note_id'"}}


OUT_OF_RANGE_ID = "99999999999999999999999"


class TestOutOfRangeIds:
    """Ids no integer column can hold are reported as missing, not as a crash."""

    @pytest.mark.asyncio
    async def test_get(self, test_client):
        response = await test_client.get(f"/notes/{OUT_OF_RANGE_ID}")
        assert response.status_code == 404
        assert response.json() == {"error": {"message": "Note doesn't exist"}}

    @pytest.mark.asyncio
    async def test_patch(self, test_client):
        response = await test_client.patch(f"/notes/{OUT_OF_RANGE_ID}", json={"name": "x"})
        assert response.status_code == 404
        assert response.json() == {"error": {"message": "Note doesn't exist"}}

    @pytest.mark.asyncio
    async def test_delete(self, test_client):
        response = await test_client.delete(f"/notes/{OUT_OF_RANGE_ID}")
        assert response.status_code == 404
        assert response.json() == {"error": {"message": "Note doesn't exist"}}


class TestCreateNote:

    @pytest.mark.asyncio
    async def test_creates_note(self, test_client, seeded_folders):
        new_note = {"name": "Test new note", "content": "Test new note content...", "folderId": 2}

        response = await test_client.post("/notes", json=new_note)

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == new_note["name"]
        assert body["content"] == new_note["content"]
        assert body["folderId"] == 2
        assert "id" in body
        assert response.headers["location"] == f"/notes/{body['id']}"

        modified = parse_modified(body["modified"])
        assert modified.date() == datetime.now(timezone.utc).date()

        fetched = await test_client.get(f"/notes/{body['id']}")
        assert fetched.status_code == 200
        assert fetched.json() == body

    @pytest.mark.asyncio
    async def test_numeric_string_folder_id_accepted(self, test_client, seeded_folders):
        response = await test_client.post(
            "/notes", json={"name": "n", "content": "c", "folderId": "3"}
        )
        assert response.status_code == 201
        assert response.json()["folderId"] == 3

    @pytest.mark.parametrize("field", ["name", "content", "folderId"])
    @pytest.mark.asyncio
    async def test_missing_field_400(self, test_client, seeded_folders, field):
        new_note = {"name": "Test new name", "content": "Test new content...", "folderId": 1}
        del new_note[field]

        response = await test_client.post("/notes", json=new_note)

        assert response.status_code == 400
        assert response.json() == {"error": {"message": f"Missing '{field}' in request body"}}
        assert (await test_client.get("/notes")).json() == []

    @pytest.mark.asyncio
    async def test_unknown_folder_404(self, test_client, seeded_folders):
        response = await test_client.post(
            "/notes", json={"name": "n", "content": "c", "folderId": 999}
        )
        assert response.status_code == 404
        assert response.json() == {"error": {"message": "Folder doesn't exist"}}

    @pytest.mark.asyncio
    async def test_wrong_types_400(self, test_client, seeded_folders):
        response = await test_client.post(
            "/notes", json={"name": ["n"], "content": "c", "folderId": 1}
        )
        assert response.status_code == 400
        assert response.json() == {"error": {"message": "'name' must be a string"}}

        response = await test_client.post(
            "/notes", json={"name": "n", "content": "c", "folderId": "abc"}
        )
        assert response.status_code == 400
        assert response.json() == {"error": {"message": "'folderId' must be an integer"}}

    @pytest.mark.asyncio
    async def test_malformed_json_400(self, test_client):
        response = await test_client.post(
            "/notes",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": {"message": "Request body must be a JSON object"}}

    @pytest.mark.asyncio
    async def test_ampersands_returned_verbatim(self, test_client, seeded_folders):
        new_note = {"name": "Tom & Jerry", "content": "Q&A: salt & pepper", "folderId": 1}

        response = await test_client.post("/notes", json=new_note)

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Tom & Jerry"
        assert body["content"] == "Q&A: salt & pepper"
        assert (await test_client.get(f"/notes/{body['id']}")).json()["name"] == "Tom & Jerry"

    @pytest.mark.asyncio
    async def test_long_name_accepted(self, test_client, seeded_folders):
        name = "n" * 1000
        response = await test_client.post(
            "/notes", json={"name": name, "content": "c", "folderId": 1}
        )
        assert response.status_code == 201
        assert response.json()["name"] == name

    @pytest.mark.parametrize("folder_id", [10**30, "99999999999999999999", 2**31, 0, -1])
    @pytest.mark.asyncio
    async def test_out_of_range_folder_404(self, test_client, seeded_folders, folder_id):
        response = await test_client.post(
            "/notes", json={"name": "n", "content": "c", "folderId": folder_id}
        )
        assert response.status_code == 404
        assert response.json() == {"error": {"message": "Folder doesn't exist"}}

    @pytest.mark.parametrize("folder_id", ["²", "--1"])
    @pytest.mark.asyncio
    async def test_non_ascii_or_malformed_folder_id_400(
        self, test_client, seeded_folders, folder_id
    ):
        response = await test_client.post(
            "/notes", json={"name": "n", "content": "c", "folderId": folder_id}
        )
        assert response.status_code == 400
        assert response.json() == {"error": {"message": "'folderId' must be an integer"}}

    @pytest.mark.asyncio
    async def test_xss_content_neutralized(self, test_client, seeded_folders, malicious_note):
        payload, expected = malicious_note

        response = await test_client.post("/notes", json=payload)

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == expected["name"]
        assert "<script>" not in body["name"]
        assert "onerror" not in body["content"]
        assert body["content"].startswith("Bad image <img")


class TestUpdateNote:

    @pytest.mark.asyncio
    async def test_missing_note_404(self, test_client):
        response = await test_client.patch("/notes/123456", json={"name": "x"})
        assert response.status_code == 404
        assert response.json() == {"error": {"message": "Note doesn't exist"}}

    @pytest.mark.asyncio
    async def test_updates_note(self, test_client, seeded_notes):
        update = {"name": "updated note title", "content": "updated note content"}

        response = await test_client.patch("/notes/2", json=update)

        assert response.status_code == 204
        assert response.content == b""
        body = (await test_client.get("/notes/2")).json()
        assert body["name"] == update["name"]
        assert body["content"] == update["content"]
        assert body["folderId"] == 2

    @pytest.mark.asyncio
    async def test_no_updatable_fields_400(self, test_client, seeded_notes):
        response = await test_client.patch("/notes/2", json={"irrelevantField": "foo"})
        assert response.status_code == 400
        assert response.json() == {
            "error": {"message": "Request body must contain a 'name' and a 'content'"}
        }

    @pytest.mark.asyncio
    async def test_subset_update_restamps_modified(self, test_client, seeded_notes):
        before = (await test_client.get("/notes/2")).json()

        response = await test_client.patch(
            "/notes/2",
            json={"name": "updated note name", "fieldToIgnore": "should not be in GET response"},
        )

        assert response.status_code == 204
        after = (await test_client.get("/notes/2")).json()
        assert after["name"] == "updated note name"
        assert after["content"] == before["content"]
        assert after["folderId"] == before["folderId"]
        assert "fieldToIgnore" not in after
        assert parse_modified(after["modified"]) >= parse_modified(before["modified"])


class TestDeleteNote:

    @pytest.mark.asyncio
    async def test_missing_note_404(self, test_client):
        response = await test_client.delete("/notes/123456")
        assert response.status_code == 404
        assert response.json() == {"error": {"message": "Note doesn't exist"}}

    @pytest.mark.asyncio
    async def test_removes_only_target(self, test_client, seeded_notes):
        response = await test_client.delete("/notes/2")
        assert response.status_code == 204

        remaining = (await test_client.get("/notes")).json()
        expected = [n for n in as_json(seeded_notes) if n["id"] != 2]
        assert strip_modified(remaining) == expected

        assert (await test_client.get("/notes/2")).status_code == 404
