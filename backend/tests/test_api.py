"""
Nice List Backend — API Endpoint Tests
========================================

What:  End-to-end HTTP tests through the FastAPI app with an in-memory database.

What we test:
    ✅ camelCase request/response bodies
    ✅ 201 + {"id"} on create, {"ok": true} on mutations
    ✅ 404 for unknown people on GET only
    ✅ 400 envelope for bad or out-of-range ids, missing/empty fields, wrong types, severity range
    ✅ null reason on create stored as empty
    ✅ 409 for infractions/appeals against missing records
    ✅ cascade delete visible through the API
    ✅ request ID echoed in headers and error bodies
"""

import pytest


async def _create_person(client, **body):
    body.setdefault("name", "Candy Cane")
    response = await client.post("/api/people", json=body)
    assert response.status_code == 201
    return response.json()["id"]


async def _create_infraction(client, person_id, **body):
    body.setdefault("description", "Stole cookies from the cookie jar")
    response = await client.post(f"/api/people/{person_id}/infractions", json=body)
    assert response.status_code == 201
    return response.json()["id"]


class TestPeopleEndpoints:

    @pytest.mark.asyncio
    async def test_create_and_get_person(self, test_client):
        person_id = await _create_person(test_client, reason="Helped an old lady cross the street")

        response = await test_client.get(f"/api/people/{person_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == person_id
        assert data["name"] == "Candy Cane"
        assert data["isNice"] is True
        assert data["reason"] == "Helped an old lady cross the street"
        assert "checkedAt" in data

    @pytest.mark.asyncio
    async def test_create_person_trims_name(self, test_client):
        person_id = await _create_person(test_client, name="  Buddy  ", isNice=False)

        data = (await test_client.get(f"/api/people/{person_id}")).json()

        assert data["name"] == "Buddy"
        assert data["isNice"] is False

    @pytest.mark.asyncio
    async def test_create_person_requires_name(self, test_client):
        response = await test_client.post("/api/people", json={"name": "   "})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["field"] == "name"

    @pytest.mark.asyncio
    async def test_create_person_without_body(self, test_client):
        response = await test_client.post("/api/people")

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_get_unknown_person(self, test_client):
        response = await test_client.get("/api/people/9999")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_get_person_invalid_id(self, test_client):
        response = await test_client.get("/api/people/abc")

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_create_person_null_reason(self, test_client):
        person_id = await _create_person(test_client, reason=None)

        data = (await test_client.get(f"/api/people/{person_id}")).json()

        assert data["reason"] == ""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, body",
        [("get", None), ("patch", {"isNice": True}), ("delete", None)],
    )
    async def test_person_id_out_of_range(self, test_client, method, body):
        kwargs = {"json": body} if body is not None else {}

        response = await test_client.request(method.upper(), f"/api/people/{2**70}", **kwargs)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_judge_person(self, test_client):
        person_id = await _create_person(test_client)

        response = await test_client.patch(
            f"/api/people/{person_id}",
            json={"isNice": False, "reason": "stole candy"},
        )
        data = (await test_client.get(f"/api/people/{person_id}")).json()

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert data["isNice"] is False
        assert data["reason"] == "stole candy"

    @pytest.mark.asyncio
    async def test_judge_requires_boolean(self, test_client):
        person_id = await _create_person(test_client)

        response = await test_client.patch(f"/api/people/{person_id}", json={"isNice": "no"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_judge_unknown_person_still_ok(self, test_client):
        response = await test_client.patch("/api/people/9999", json={"isNice": True})

        assert response.status_code == 200
        assert response.json() == {"ok": True}

    @pytest.mark.asyncio
    async def test_list_people_most_recent_first(self, test_client):
        first = await _create_person(test_client, name="Dasher")
        second = await _create_person(test_client, name="Dancer")
        await test_client.patch(f"/api/people/{first}", json={"isNice": True})

        response = await test_client.get("/api/people")

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [first, second]

    @pytest.mark.asyncio
    async def test_delete_person_cascades(self, test_client):
        person_id = await _create_person(test_client)
        infraction_id = await _create_infraction(test_client, person_id)
        await test_client.post(
            "/api/appeals",
            json={"personId": person_id, "infractionId": infraction_id, "appealText": "Not me"},
        )

        response = await test_client.delete(f"/api/people/{person_id}")

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert (await test_client.get(f"/api/people/{person_id}")).status_code == 404
        assert (await test_client.get(f"/api/people/{person_id}/infractions")).json() == []
        assert (await test_client.get("/api/appeals/pending")).json() == []

    @pytest.mark.asyncio
    async def test_delete_unknown_person_still_ok(self, test_client):
        response = await test_client.delete("/api/people/9999")

        assert response.status_code == 200
        assert response.json() == {"ok": True}


class TestInfractionEndpoints:

    @pytest.mark.asyncio
    async def test_record_and_list(self, test_client):
        person_id = await _create_person(test_client)
        first = await _create_infraction(test_client, person_id)
        second = await _create_infraction(test_client, person_id, description="Hid the presents", severity=4)

        response = await test_client.get(f"/api/people/{person_id}/infractions")

        assert response.status_code == 200
        data = response.json()
        assert [i["id"] for i in data] == [second, first]
        assert data[0]["personId"] == person_id
        assert data[0]["severity"] == 4
        assert data[1]["severity"] == 1
        assert "occurredAt" in data[0]

    @pytest.mark.asyncio
    async def test_record_for_unknown_person(self, test_client):
        response = await test_client.post(
            "/api/people/9999/infractions",
            json={"description": "Haunted the workshop"},
        )

        assert response.status_code == 409
        assert response.json()["error"] == "referential_integrity_error"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("severity", [0, 6])
    async def test_severity_out_of_range(self, test_client, severity):
        person_id = await _create_person(test_client)

        response = await test_client.post(
            f"/api/people/{person_id}/infractions",
            json={"description": "Too naughty", "severity": severity},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_person_id_out_of_range(self, test_client):
        listed = await test_client.get(f"/api/people/{2**70}/infractions")
        recorded = await test_client.post(
            f"/api/people/{2**70}/infractions",
            json={"description": "Too big to exist"},
        )

        assert listed.status_code == 400
        assert recorded.status_code == 400

    @pytest.mark.asyncio
    async def test_description_required(self, test_client):
        person_id = await _create_person(test_client)

        response = await test_client.post(f"/api/people/{person_id}/infractions", json={})

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "description"


class TestAppealEndpoints:

    @pytest.mark.asyncio
    async def test_appeal_workflow(self, test_client):
        person_id = await _create_person(test_client)
        infraction_id = await _create_infraction(test_client, person_id)

        created = await test_client.post(
            "/api/appeals",
            json={
                "personId": person_id,
                "infractionId": infraction_id,
                "appealText": "I swear I was just borrowing the cookies!",
            },
        )
        assert created.status_code == 201
        appeal_id = created.json()["id"]

        pending = (await test_client.get("/api/appeals/pending")).json()
        assert [a["id"] for a in pending] == [appeal_id]
        assert pending[0]["status"] == 0
        assert pending[0]["infractionId"] == infraction_id

        reviewed = await test_client.patch(
            f"/api/appeals/{appeal_id}/review", json={"approved": True}
        )
        assert reviewed.status_code == 200
        assert reviewed.json() == {"ok": True}
        assert (await test_client.get("/api/appeals/pending")).json() == []

    @pytest.mark.asyncio
    async def test_appeal_missing_fields(self, test_client):
        response = await test_client.post("/api/appeals", json={"personId": 1})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_appeal_against_missing_infraction(self, test_client):
        person_id = await _create_person(test_client)

        response = await test_client.post(
            "/api/appeals",
            json={"personId": person_id, "infractionId": 9999, "appealText": "Phantom"},
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["personId", "infractionId"])
    async def test_appeal_id_out_of_range(self, test_client, field):
        body = {"personId": 1, "infractionId": 1, "appealText": "Not me"}
        body[field] = 2**70

        response = await test_client.post("/api/appeals", json=body)

        assert response.status_code == 400
        assert response.json()["details"]["field"] == field

    @pytest.mark.asyncio
    async def test_review_id_out_of_range(self, test_client):
        response = await test_client.patch(f"/api/appeals/{2**70}/review", json={"approved": True})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_review_requires_approved(self, test_client):
        response = await test_client.patch("/api/appeals/1/review", json={})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_review_unknown_appeal_still_ok(self, test_client):
        response = await test_client.patch("/api/appeals/9999/review", json={"approved": False})

        assert response.status_code == 200
        assert response.json() == {"ok": True}


class TestPlumbing:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/api/people/9999", headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"
        assert response.json()["request_id"] == "abc12345"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/api/people")

        assert len(response.headers["X-Request-ID"]) == 8
