"""
GeoJournal Backend — HTTP Route Tests
=======================================

What:  End-to-end tests through the FastAPI app: routing, validation,
       status codes, camelCase JSON and the error body.
How:   `test_client` (conftest) drives the ASGI app over httpx with a real
       SQLite database and the FakeGeocoder.
"""

import uuid

import pytest

SIGNUP = {
    "firstName": "Ana",
    "lastName": "Cruz",
    "mobileNumber": "09171234567",
    "email": "ana@example.com",
    "password": "secret123",
}


async def signup(client, **overrides):
    response = await client.post("/api/users/signup", json={**SIGNUP, **overrides})
    assert response.status_code == 201, response.text
    return response.json()["user"]


async def create_entry(client, author, location="Manila, Philippines", headline="Sunset by the bay"):
    response = await client.post(
        "/api/journal",
        json={
            "headline": headline,
            "journalText": "Watched the sun go down over Manila Bay.",
            "locationName": location,
            "author": author,
        },
    )
    return response


class TestUserRoutes:

    @pytest.mark.asyncio
    async def test_signup_then_login(self, test_client):
        user = await signup(test_client)

        assert user["firstName"] == "Ana"
        assert user["mobileNumber"] == "09171234567"
        assert "password" not in user
        assert "passwordHash" not in user

        response = await test_client.post(
            "/api/users/login",
            json={"email": "ana@example.com", "password": "secret123"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body == {"message": "Logged in!", "userId": user["id"], "email": "ana@example.com"}

    @pytest.mark.asyncio
    async def test_duplicate_signup_is_422_conflict(self, test_client):
        await signup(test_client)

        response = await test_client.post("/api/users/signup", json=SIGNUP)

        assert response.status_code == 422
        assert response.json()["error"] == "conflict"
        assert response.json()["message"] == "User exists already, please login instead."

        users = (await test_client.get("/api/users")).json()["users"]
        assert len(users) == 1

    @pytest.mark.asyncio
    async def test_invalid_signup_is_422_before_store(self, test_client):
        response = await test_client.post(
            "/api/users/signup",
            json={**SIGNUP, "email": "not-an-email", "password": "abc"},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "unprocessable_input"
        assert body["message"] == "Invalid inputs passed, please check your data."
        assert "body.email" in body["details"]["fields"]
        # Submitted values are never echoed back
        assert "abc" not in response.text

        assert (await test_client.get("/api/users")).json() == {"users": []}

    @pytest.mark.asyncio
    async def test_bad_login_is_401_with_one_message(self, test_client):
        await signup(test_client)

        wrong_password = await test_client.post(
            "/api/users/login", json={"email": "ana@example.com", "password": "nope-nope"}
        )
        unknown_email = await test_client.post(
            "/api/users/login", json={"email": "ghost@example.com", "password": "secret123"}
        )

        assert wrong_password.status_code == 401
        assert unknown_email.status_code == 401
        assert wrong_password.json()["message"] == unknown_email.json()["message"]
        assert wrong_password.json()["error"] == "invalid_credentials"

    @pytest.mark.asyncio
    async def test_list_users(self, test_client):
        await signup(test_client)
        await signup(test_client, firstName="Ben", email="ben@example.com")

        response = await test_client.get("/api/users")

        assert response.status_code == 200
        assert [u["firstName"] for u in response.json()["users"]] == ["Ana", "Ben"]


class TestEntryRoutes:

    @pytest.mark.asyncio
    async def test_create_and_get(self, test_client):
        user = await signup(test_client)

        response = await create_entry(test_client, user["id"])

        assert response.status_code == 201
        entry = response.json()["entry"]
        assert entry["coordinates"] == {"latitude": 14.5995, "longitude": 120.9842}
        assert entry["locationName"] == "Manila, Philippines"
        assert entry["author"] == user["id"]
        assert entry["photo"].startswith("http")

        fetched = await test_client.get(f"/api/journal/{entry['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["entry"]["headline"] == "Sunset by the bay"
        assert fetched.json()["entry"]["createdAt"] == entry["createdAt"]

    @pytest.mark.asyncio
    async def test_unknown_location_is_422_and_stores_nothing(self, test_client):
        author = str(uuid.uuid4())

        response = await create_entry(test_client, author, location="Atlantis")

        assert response.status_code == 422
        assert response.json()["error"] == "geocode_failure"
        assert response.json()["message"] == "Could not find location for the specified address."

        listing = await test_client.get(f"/api/journal/user/{author}")
        assert listing.json() == {"entries": []}

    @pytest.mark.asyncio
    async def test_short_headline_is_422_without_geocoding(self, test_client, geocoder):
        response = await create_entry(test_client, str(uuid.uuid4()), headline="Hi")

        assert response.status_code == 422
        assert response.json()["error"] == "unprocessable_input"
        assert geocoder.calls == []

    @pytest.mark.asyncio
    async def test_list_by_user(self, test_client):
        ana = str(uuid.uuid4())
        ben = str(uuid.uuid4())
        first = (await create_entry(test_client, ana)).json()["entry"]
        await create_entry(test_client, ben, location="Baguio")
        second = (await create_entry(test_client, ana, location="Baguio")).json()["entry"]

        response = await test_client.get(f"/api/journal/user/{ana}")

        assert response.status_code == 200
        assert [e["id"] for e in response.json()["entries"]] == [first["id"], second["id"]]

    @pytest.mark.asyncio
    async def test_list_with_uppercase_user_id_matches(self, test_client):
        author = str(uuid.uuid4())
        await create_entry(test_client, author.upper())

        response = await test_client.get(f"/api/journal/user/{author}")

        assert len(response.json()["entries"]) == 1

    @pytest.mark.asyncio
    async def test_update_changes_text_only(self, test_client):
        created = (await create_entry(test_client, str(uuid.uuid4()))).json()["entry"]

        response = await test_client.patch(
            f"/api/journal/{created['id']}",
            json={"headline": "Sunrise instead", "journalText": "Woke up early."},
        )

        assert response.status_code == 200
        updated = response.json()["entry"]
        assert updated["headline"] == "Sunrise instead"
        assert updated["journalText"] == "Woke up early."
        assert updated["coordinates"] == created["coordinates"]
        assert updated["locationName"] == created["locationName"]

    @pytest.mark.asyncio
    async def test_delete_then_get_is_404(self, test_client):
        created = (await create_entry(test_client, str(uuid.uuid4()))).json()["entry"]

        response = await test_client.delete(f"/api/journal/{created['id']}")
        assert response.status_code == 200
        assert response.json() == {"message": "Deleted entry."}

        missing = await test_client.get(f"/api/journal/{created['id']}")
        assert missing.status_code == 404
        assert missing.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_unknown_ids_are_404(self, test_client):
        entry_id = uuid.uuid4()

        assert (await test_client.get(f"/api/journal/{entry_id}")).status_code == 404
        assert (await test_client.delete(f"/api/journal/{entry_id}")).status_code == 404
        patched = await test_client.patch(
            f"/api/journal/{entry_id}",
            json={"headline": "Nothing here", "journalText": "..."},
        )
        assert patched.status_code == 404

    @pytest.mark.asyncio
    async def test_malformed_id_is_422(self, test_client):
        response = await test_client.get("/api/journal/not-a-uuid")

        assert response.status_code == 422
        assert response.json()["error"] == "unprocessable_input"

    @pytest.mark.asyncio
    async def test_delete_malformed_id_is_422(self, test_client):
        response = await test_client.delete("/api/journal/not-a-uuid")

        assert response.status_code == 422
        assert response.json()["error"] == "unprocessable_input"


class TestPlumbing:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["geocoder"] == "configured"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/health")

        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_request_id_echoed_in_errors(self, test_client):
        response = await test_client.get(
            f"/api/journal/{uuid.uuid4()}", headers={"X-Request-ID": "abc12345"}
        )

        assert response.headers["X-Request-ID"] == "abc12345"
        assert response.json()["request_id"] == "abc12345"
