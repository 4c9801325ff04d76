"""Integration tests for Profile API."""

import pytest
from httpx import AsyncClient

PROFILE = {"status": "Developer", "skills": "a, b,c"}


async def _upsert(client: AsyncClient, headers: dict[str, str], **fields: str) -> dict:
    response = await client.post("/api/profile", json={**PROFILE, **fields}, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


class TestProfileAPI:
    """Integration tests for profile CRUD."""

    @pytest.mark.asyncio
    async def test_me_without_profile(self, client: AsyncClient, alice_headers: dict[str, str]):
        response = await client.get("/api/profile/me", headers=alice_headers)

        assert response.status_code == 400
        assert response.json()["msg"] == "There is no profile for this user"

    @pytest.mark.asyncio
    async def test_create_profile(self, client: AsyncClient, alice_headers: dict[str, str]):
        data = await _upsert(client, alice_headers, twitter="https://twitter.com/alice")

        assert data["skills"] == ["a", "b", "c"]
        assert data["social"] == {"twitter": "https://twitter.com/alice"}
        assert data["user"]["name"] == "Alice"
        assert data["user"]["avatar"].startswith("https://www.gravatar.com/avatar/")

    @pytest.mark.asyncio
    async def test_upsert_twice_keeps_one_profile(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        first = await _upsert(client, alice_headers, company="Acme")
        second = await _upsert(client, alice_headers, company="Globex")

        assert second["id"] == first["id"]
        assert second["company"] == "Globex"

        profiles = await client.get("/api/profile")
        assert len(profiles.json()) == 1

    @pytest.mark.asyncio
    async def test_requires_status_and_skills(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        response = await client.post(
            "/api/profile", json={"status": "", "skills": ""}, headers=alice_headers
        )

        assert response.status_code == 400
        assert [e["msg"] for e in response.json()["errors"]] == [
            "Status is required",
            "Skills is required",
        ]

    @pytest.mark.asyncio
    async def test_public_lookup_by_user(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        await _upsert(client, alice_headers)
        me = (await client.get("/api/auth", headers=alice_headers)).json()

        found = await client.get(f"/api/profile/user/{me['id']}")
        malformed = await client.get("/api/profile/user/123")

        assert found.status_code == 200
        assert found.json()["user"]["id"] == me["id"]
        assert malformed.status_code == 400
        assert malformed.json()["msg"] == "There is no profile for this user"

    @pytest.mark.asyncio
    async def test_experience_and_education(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        await _upsert(client, alice_headers)

        added = await client.put(
            "/api/profile/experience",
            json={"title": "Engineer", "company": "Acme", "from_date": "2020-01-01"},
            headers=alice_headers,
        )
        assert added.status_code == 200
        experience_id = added.json()["experience"][0]["id"]

        removed = await client.delete(
            f"/api/profile/experience/{experience_id}", headers=alice_headers
        )
        assert removed.json()["experience"] == []

        again = await client.delete(
            f"/api/profile/experience/{experience_id}", headers=alice_headers
        )
        assert again.status_code == 404

        education = await client.put(
            "/api/profile/education",
            json={
                "school": "MIT",
                "degree": "BSc",
                "field_of_study": "CS",
                "from_date": "2014-09-01",
                "current": True,
            },
            headers=alice_headers,
        )
        assert education.status_code == 200
        assert education.json()["education"][0]["current"] is True

    @pytest.mark.asyncio
    async def test_experience_requires_fields(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        await _upsert(client, alice_headers)

        response = await client.put(
            "/api/profile/experience",
            json={"title": "", "company": "Acme", "from_date": "2020-01-01"},
            headers=alice_headers,
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["msg"] == "Title is required"

    @pytest.mark.asyncio
    async def test_delete_account(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        bob_headers: dict[str, str],
    ):
        await _upsert(client, alice_headers)
        await client.post("/api/posts", json={"text": "bye"}, headers=alice_headers)
        bob_post = (
            await client.post("/api/posts", json={"text": "hello"}, headers=bob_headers)
        ).json()
        await client.post(
            f"/api/posts/comment/{bob_post['id']}", json={"text": "hi"}, headers=alice_headers
        )

        response = await client.delete("/api/profile", headers=alice_headers)
        assert response.status_code == 200
        assert response.json() == {"msg": "User deleted"}

        assert (await client.get("/api/profile")).json() == []
        feed = (await client.get("/api/posts", headers=bob_headers)).json()
        assert [p["text"] for p in feed] == ["hello"]
        assert feed[0]["comments"][0]["text"] == "hi"

        login = await client.post(
            "/api/auth", json={"email": "alice@example.com", "password": "secret123"}
        )
        assert login.status_code == 400


class TestProfileValidation:
    @pytest.mark.asyncio
    async def test_upsert_with_empty_body(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        response = await client.post("/api/profile", json={}, headers=alice_headers)

        assert response.status_code == 400
        assert [e["msg"] for e in response.json()["errors"]] == [
            "Status is required",
            "Skills is required",
        ]

    @pytest.mark.asyncio
    async def test_skills_with_only_separators(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        response = await client.post(
            "/api/profile", json={"status": "Dev", "skills": " , ,"}, headers=alice_headers
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "skills"
        assert response.json()["errors"][0]["msg"] == "Skills is required"

    @pytest.mark.asyncio
    async def test_experience_with_empty_body(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        await _upsert(client, alice_headers)

        response = await client.put("/api/profile/experience", json={}, headers=alice_headers)

        assert response.status_code == 400
        assert [e["msg"] for e in response.json()["errors"]] == [
            "Title is required",
            "Company is required",
            "From date is required",
        ]

    @pytest.mark.asyncio
    async def test_education_with_empty_body(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        await _upsert(client, alice_headers)

        response = await client.put("/api/profile/education", json={}, headers=alice_headers)

        assert response.status_code == 400
        assert [e["msg"] for e in response.json()["errors"]] == [
            "School is required",
            "Degree is required",
            "Field of study is required",
            "From date is required",
        ]


class TestDeletedAccountToken:
    @pytest.mark.asyncio
    async def test_upsert_after_account_deleted(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        await _upsert(client, alice_headers)
        deleted = await client.delete("/api/profile", headers=alice_headers)
        assert deleted.status_code == 200

        response = await client.post(
            "/api/profile", json={"status": "Dev", "skills": "a"}, headers=alice_headers
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "USER_NOT_FOUND"
        assert (await client.get("/api/profile")).json() == []
