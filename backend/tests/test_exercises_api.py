"""
Exercise API Backend: HTTP Endpoint Tests
==========================================

What:  The /exercises contract end to end through FastAPI: status codes,
       `{"Error": ...}` bodies, `_id` serialization, request-id header.
How:   httpx AsyncClient over ASGITransport; the Record Store is the
       in-memory fake (see conftest.app) unless a test swaps it.
"""

import uuid

import pytest

from exercise_api.config import settings
from exercise_api.routes.exercises import get_exercise_store

INVALID = {"Error": "Invalid request"}
NOT_FOUND = {"Error": "Not found"}
FAILED = {"Error": "Request failed"}


@pytest.fixture
def use_failing_store(app, failing_store):
    app.dependency_overrides[get_exercise_store] = lambda: failing_store
    return failing_store


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_returns_201_with_id(self, test_client, valid_payload):
        response = await test_client.post("/exercises", json=valid_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["_id"]
        assert {k: body[k] for k in valid_payload} == valid_payload

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "override",
        [
            {"reps": 0},
            {"unit": "stones"},
            {"name": ""},
            {"weight": -1},
            {"weight": "heavy"},
            {"date": "1-01-01"},
            {"date": "ab-01-01"},
            {"date": None},
        ],
    )
    async def test_invalid_fields_return_400(self, test_client, fake_store, valid_payload, override):
        response = await test_client.post("/exercises", json={**valid_payload, **override})

        assert response.status_code == 400
        assert response.json() == INVALID
        assert fake_store.records == {}

    @pytest.mark.asyncio
    async def test_oversized_integer_string_returns_400(self, test_client, fake_store, valid_payload):
        response = await test_client.post("/exercises", json={**valid_payload, "reps": "9" * 5000})

        assert response.status_code == 400
        assert response.json() == INVALID
        assert fake_store.records == {}

    @pytest.mark.asyncio
    async def test_numeric_name_returns_400(self, test_client, valid_payload):
        response = await test_client.post("/exercises", json={**valid_payload, "name": 5})
        assert response.status_code == 400
        assert response.json() == INVALID

    @pytest.mark.asyncio
    async def test_missing_date_returns_400(self, test_client, valid_payload):
        del valid_payload["date"]
        response = await test_client.post("/exercises", json=valid_payload)
        assert response.status_code == 400
        assert response.json() == INVALID

    @pytest.mark.asyncio
    async def test_reps_zero_is_400_regardless_of_other_fields(self, test_client):
        response = await test_client.post(
            "/exercises",
            json={"name": "", "reps": 0, "weight": 0, "unit": "stones", "date": "bad"},
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_malformed_json_returns_400(self, test_client):
        response = await test_client.post(
            "/exercises",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == INVALID

    @pytest.mark.asyncio
    async def test_empty_body_returns_400(self, test_client):
        response = await test_client.post("/exercises")
        assert response.status_code == 400
        assert response.json() == INVALID

    @pytest.mark.asyncio
    async def test_store_failure_returns_400(self, test_client, use_failing_store, valid_payload):
        response = await test_client.post("/exercises", json=valid_payload)

        assert response.status_code == 400
        assert response.json() == INVALID
        assert "connection reset" not in response.text


class TestReadOne:

    @pytest.mark.asyncio
    async def test_round_trip(self, test_client, valid_payload):
        created = (await test_client.post("/exercises", json=valid_payload)).json()

        response = await test_client.get(f"/exercises/{created['_id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["_id"] == created["_id"]
        assert {k: body[k] for k in valid_payload} == valid_payload

    @pytest.mark.asyncio
    async def test_unknown_id_returns_404(self, test_client):
        response = await test_client.get(f"/exercises/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json() == NOT_FOUND

    @pytest.mark.asyncio
    async def test_malformed_id_returns_400(self, test_client):
        response = await test_client.get("/exercises/12345")
        assert response.status_code == 400
        assert response.json() == FAILED


class TestList:

    @pytest.mark.asyncio
    async def test_empty_list(self, test_client):
        response = await test_client.get("/exercises")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_lists_created_records(self, test_client, valid_payload):
        await test_client.post("/exercises", json=valid_payload)
        await test_client.post("/exercises", json={**valid_payload, "name": "Deadlift"})

        response = await test_client.get("/exercises")

        assert response.status_code == 200
        assert sorted(item["name"] for item in response.json()) == ["Deadlift", "Squat"]

    @pytest.mark.asyncio
    async def test_year_parameter_is_ignored(self, test_client, valid_payload):
        await test_client.post("/exercises", json=valid_payload)
        await test_client.post("/exercises", json={**valid_payload, "date": "01-01-19"})

        response = await test_client.get("/exercises", params={"year": "24"})
        assert len(response.json()) == 2

    @pytest.mark.asyncio
    async def test_store_failure_returns_200_error_body(self, test_client, use_failing_store):
        response = await test_client.get("/exercises")
        assert response.status_code == 200
        assert response.json() == FAILED

    @pytest.mark.asyncio
    async def test_store_failure_returns_500_when_legacy_off(
        self, test_client, use_failing_store, monkeypatch
    ):
        monkeypatch.setattr(settings, "legacy_error_status", False)
        response = await test_client.get("/exercises")
        assert response.status_code == 500
        assert response.json() == FAILED


class TestReplace:

    @pytest.mark.asyncio
    async def test_replace_echoes_payload(self, test_client, valid_payload):
        created = (await test_client.post("/exercises", json=valid_payload)).json()
        update = {"name": "Squat", "reps": "12", "weight": 60, "unit": "kgs", "date": "06-28-24"}

        response = await test_client.put(f"/exercises/{created['_id']}", json=update)

        assert response.status_code == 200
        assert response.json() == {"_id": created["_id"], **update}

        stored = (await test_client.get(f"/exercises/{created['_id']}")).json()
        assert stored["reps"] == 12
        assert stored["unit"] == "kgs"

    @pytest.mark.asyncio
    async def test_replace_unknown_id_returns_404(self, test_client, valid_payload):
        response = await test_client.put(f"/exercises/{uuid.uuid4()}", json=valid_payload)
        assert response.status_code == 404
        assert response.json() == NOT_FOUND

    @pytest.mark.asyncio
    async def test_replace_without_date_returns_400(self, test_client, valid_payload):
        del valid_payload["date"]
        response = await test_client.put(f"/exercises/{uuid.uuid4()}", json=valid_payload)
        assert response.status_code == 400
        assert response.json() == INVALID

    @pytest.mark.asyncio
    async def test_replace_bad_date_returns_400(self, test_client, valid_payload):
        response = await test_client.put(
            f"/exercises/{uuid.uuid4()}", json={**valid_payload, "date": "6-1-24"}
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_replace_oversized_weight_returns_400(self, test_client, valid_payload):
        created = (await test_client.post("/exercises", json=valid_payload)).json()

        response = await test_client.put(
            f"/exercises/{created['_id']}", json={**valid_payload, "weight": "1" * 5000}
        )

        assert response.status_code == 400
        assert response.json() == INVALID

    @pytest.mark.asyncio
    async def test_replace_malformed_id_returns_400(self, test_client, valid_payload):
        response = await test_client.put("/exercises/abc", json=valid_payload)
        assert response.status_code == 400
        assert response.json() == INVALID


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_twice(self, test_client, valid_payload):
        created = (await test_client.post("/exercises", json=valid_payload)).json()

        first = await test_client.delete(f"/exercises/{created['_id']}")
        second = await test_client.delete(f"/exercises/{created['_id']}")

        assert first.status_code == 204
        assert first.content == b""
        assert second.status_code == 404
        assert second.json() == NOT_FOUND

    @pytest.mark.asyncio
    async def test_delete_unknown_id_returns_404(self, test_client):
        response = await test_client.delete(f"/exercises/{uuid.uuid4()}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_store_failure_returns_200_error_body(self, test_client, use_failing_store):
        response = await test_client.delete(f"/exercises/{uuid.uuid4()}")
        assert response.status_code == 200
        assert response.json() == FAILED

    @pytest.mark.asyncio
    async def test_store_failure_returns_500_when_legacy_off(
        self, test_client, use_failing_store, monkeypatch
    ):
        monkeypatch.setattr(settings, "legacy_error_status", False)
        response = await test_client.delete(f"/exercises/{uuid.uuid4()}")
        assert response.status_code == 500
        assert response.json() == FAILED


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/exercises")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_id_is_echoed(self, test_client):
        response = await test_client.get(
            f"/exercises/{uuid.uuid4()}", headers={"X-Request-ID": "trace-42"}
        )
        assert response.status_code == 404
        assert response.headers["X-Request-ID"] == "trace-42"
