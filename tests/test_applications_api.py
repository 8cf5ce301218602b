"""
Tests for the application CRUD endpoints.
"""
import json
import pytest
from unittest.mock import patch
from sqlalchemy.exc import OperationalError

from apptracker.repositories.application_repository import ApplicationRepository


VALID_PAYLOAD = {
    "title": "Frontend role",
    "description": "Applied through the careers page",
    "status": "pending",
}


async def _create(client, **overrides):
    response = await client.post("/applications", json={**VALID_PAYLOAD, **overrides})
    assert response.status_code == 201
    return response.json()


# ============================================
# List
# ============================================

class TestListApplications:

    @pytest.mark.asyncio
    async def test_empty_list(self, client):
        response = await client.get("/applications")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_created_record_appears_verbatim(self, client):
        """Create then list: the record is returned unchanged"""
        created = await _create(client)

        response = await client.get("/applications")

        assert response.status_code == 200
        assert created in response.json()

    @pytest.mark.asyncio
    async def test_persistence_failure_returns_500(self, client):
        with patch.object(
            ApplicationRepository,
            "list_all",
            side_effect=OperationalError("SELECT", {}, Exception("db down")),
        ):
            response = await client.get("/applications")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


# ============================================
# Create
# ============================================

class TestCreateApplication:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_value", ["pending", "approved", "rejected"])
    async def test_valid_payload_returns_201(self, client, status_value):
        response = await client.post(
            "/applications", json={**VALID_PAYLOAD, "status": status_value}
        )

        assert response.status_code == 201
        data = response.json()
        assert isinstance(data["id"], int)
        assert data["title"] == VALID_PAYLOAD["title"]
        assert data["description"] == VALID_PAYLOAD["description"]
        assert data["status"] == status_value

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, client):
        first = await _create(client)
        second = await _create(client)

        assert first["id"] != second["id"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_value", ["open", "PENDING", "", None, 1])
    async def test_invalid_status_returns_400(self, client, status_value):
        response = await client.post(
            "/applications", json={**VALID_PAYLOAD, "status": status_value}
        )

        assert response.status_code == 400
        errors = response.json()["errors"]
        assert [error["field"] for error in errors] == ["status"]
        assert errors[0]["message"] == "Status must be 'pending', 'approved', or 'rejected'"

    @pytest.mark.asyncio
    async def test_empty_body_reports_every_field(self, client):
        response = await client.post("/applications", json={})

        assert response.status_code == 400
        messages = {error["field"]: error["message"] for error in response.json()["errors"]}
        assert messages == {
            "title": "Title is required",
            "description": "Description is required",
            "status": "Status must be 'pending', 'approved', or 'rejected'",
        }

    @pytest.mark.asyncio
    async def test_rejected_payload_is_not_stored(self, client):
        await client.post("/applications", json={**VALID_PAYLOAD, "title": ""})

        response = await client.get("/applications")
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_malformed_json_returns_400(self, client):
        response = await client.post(
            "/applications",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "body"

    @pytest.mark.asyncio
    async def test_json_array_body_returns_400(self, client):
        response = await client.post("/applications", json=[VALID_PAYLOAD])

        assert response.status_code == 400
        assert response.json()["errors"][0]["message"] == "Request body must be a JSON object"

    @pytest.mark.asyncio
    async def test_non_json_content_type_returns_400(self, client):
        response = await client.post(
            "/applications",
            content=json.dumps(VALID_PAYLOAD),
            headers={"Content-Type": "text/plain"},
        )

        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "body", "message": "Request body must be a JSON object", "location": "body"}
        ]
        assert (await client.get("/applications")).json() == []

    @pytest.mark.asyncio
    async def test_persistence_failure_returns_500(self, client):
        with patch.object(
            ApplicationRepository,
            "create",
            side_effect=OperationalError("INSERT", {}, Exception("db down")),
        ):
            response = await client.post("/applications", json=VALID_PAYLOAD)

        assert response.status_code == 500
        assert response.json() == {"error": "Could not create application"}

    @pytest.mark.asyncio
    async def test_unknown_fields_are_ignored(self, client):
        response = await client.post("/applications", json={**VALID_PAYLOAD, "id": 999})

        assert response.status_code == 201
        assert response.json()["id"] != 999


# ============================================
# Update
# ============================================

class TestUpdateApplication:

    @pytest.mark.asyncio
    async def test_partial_update_changes_only_supplied_fields(self, client):
        created = await _create(client)

        response = await client.put(
            f"/applications/{created['id']}", json={"status": "approved"}
        )

        assert response.status_code == 200
        assert response.json() == {**created, "status": "approved"}

    @pytest.mark.asyncio
    async def test_full_update(self, client):
        created = await _create(client)
        changes = {"title": "Backend role", "description": "Referral", "status": "rejected"}

        response = await client.put(f"/applications/{created['id']}", json=changes)

        assert response.status_code == 200
        assert response.json() == {"id": created["id"], **changes}

    @pytest.mark.asyncio
    async def test_empty_body_returns_record_unchanged(self, client):
        created = await _create(client)

        response = await client.put(f"/applications/{created['id']}", json={})

        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_update_is_persisted(self, client):
        created = await _create(client)
        await client.put(f"/applications/{created['id']}", json={"title": "Renamed"})

        listing = (await client.get("/applications")).json()

        assert listing == [{**created, "title": "Renamed"}]

    @pytest.mark.asyncio
    async def test_non_integer_id_returns_400(self, client):
        response = await client.put("/applications/abc", json={"status": "approved"})

        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "id", "message": "ID must be an integer", "location": "path"}
        ]

    @pytest.mark.asyncio
    async def test_invalid_fields_return_400(self, client):
        created = await _create(client)

        response = await client.put(
            f"/applications/{created['id']}",
            json={"title": "", "description": "", "status": "done"},
        )

        assert response.status_code == 400
        messages = [error["message"] for error in response.json()["errors"]]
        assert messages == ["Title cannot be empty", "Description cannot be empty", "Invalid status"]

    @pytest.mark.asyncio
    async def test_null_field_is_rejected(self, client):
        created = await _create(client)

        response = await client.put(f"/applications/{created['id']}", json={"title": None})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "title"

    @pytest.mark.asyncio
    async def test_unknown_id_returns_404(self, client):
        response = await client.put("/applications/12345", json={"status": "approved"})

        assert response.status_code == 404
        assert response.json() == {"error": "Application not found"}

    @pytest.mark.asyncio
    async def test_persistence_failure_returns_500(self, client):
        created = await _create(client)

        with patch.object(
            ApplicationRepository,
            "update",
            side_effect=OperationalError("UPDATE", {}, Exception("db down")),
        ):
            response = await client.put(
                f"/applications/{created['id']}", json={"status": "approved"}
            )

        assert response.status_code == 500
        assert response.json() == {"error": "Could not update application"}


# ============================================
# Delete
# ============================================

class TestDeleteApplication:

    @pytest.mark.asyncio
    async def test_delete_removes_record(self, client):
        created = await _create(client)

        response = await client.delete(f"/applications/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Deleted successfully"}
        assert (await client.get("/applications")).json() == []

    @pytest.mark.asyncio
    async def test_second_delete_returns_404(self, client):
        """Deleting the same ID twice is consistently reported as not found"""
        created = await _create(client)

        first = await client.delete(f"/applications/{created['id']}")
        second = await client.delete(f"/applications/{created['id']}")

        assert first.status_code == 200
        assert second.status_code == 404
        assert second.json() == {"error": "Application not found"}

    @pytest.mark.asyncio
    async def test_non_integer_id_returns_400(self, client):
        response = await client.delete("/applications/1.5")

        assert response.status_code == 400
        assert response.json()["errors"][0]["message"] == "ID must be an integer"

    @pytest.mark.asyncio
    async def test_delete_leaves_other_records(self, client):
        keep = await _create(client, title="Keep")
        drop = await _create(client, title="Drop")

        await client.delete(f"/applications/{drop['id']}")

        assert (await client.get("/applications")).json() == [keep]

    @pytest.mark.asyncio
    async def test_persistence_failure_returns_500(self, client):
        created = await _create(client)

        with patch.object(
            ApplicationRepository,
            "delete",
            side_effect=OperationalError("DELETE", {}, Exception("db down")),
        ):
            response = await client.delete(f"/applications/{created['id']}")

        assert response.status_code == 500
        assert response.json() == {"error": "Could not delete application"}
        assert (await client.get("/applications")).json() == [created]
