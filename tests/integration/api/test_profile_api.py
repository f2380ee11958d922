"""Integration tests for Profile API."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

PROFILE = {"status": "Developer", "skills": "html,css"}

EXPERIENCE = {
    "title": "Developer",
    "company": "Acme",
    "location": "Remote",
    "from": "2019-01-01T00:00:00",
    "current": True,
}

EDUCATION = {
    "school": "MIT",
    "degree": "BSc",
    "fieldofstudy": "Computer Science",
    "from": "2014-09-01T00:00:00",
    "to": "2018-06-01T00:00:00",
}


async def _create_profile(client: AsyncClient, headers: dict[str, str], **fields) -> dict:
    response = await client.post("/api/profile", headers=headers, json={**PROFILE, **fields})
    assert response.status_code == 200, response.text
    return response.json()


class TestProfileUpsert:
    """POST /api/profile and GET /api/profile/me"""

    @pytest.mark.asyncio
    async def test_create_then_read_own_profile(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        await _create_profile(client, alice_headers)

        response = await client.get("/api/profile/me", headers=alice_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "Developer"
        assert data["skills"] == ["html", "css"]
        assert data["user"]["name"] == "Alice"
        assert data["user"]["avatar"].startswith("https://www.gravatar.com/avatar/")
        assert data["experience"] == []
        assert data["education"] == []

    @pytest.mark.asyncio
    async def test_skills_are_trimmed(self, client: AsyncClient, alice_headers: dict[str, str]):
        data = await _create_profile(client, alice_headers, skills="a, b ,c")

        assert data["skills"] == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_update_leaves_omitted_fields_unchanged(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        await _create_profile(
            client,
            alice_headers,
            company="Acme",
            bio="Hello",
            youtube="https://youtube.com/alice",
        )

        data = await _create_profile(
            client,
            alice_headers,
            status="Lead Developer",
            skills="go",
            twitter="https://twitter.com/alice",
        )

        assert data["status"] == "Lead Developer"
        assert data["skills"] == ["go"]
        assert data["company"] == "Acme"
        assert data["bio"] == "Hello"
        assert data["social"] == {
            "youtube": "https://youtube.com/alice",
            "twitter": "https://twitter.com/alice",
        }

    @pytest.mark.asyncio
    async def test_upsert_keeps_one_profile_per_user(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        first = await _create_profile(client, alice_headers)
        second = await _create_profile(client, alice_headers, status="Changed")

        listing = await client.get("/api/profile")

        assert first["id"] == second["id"]
        assert len(listing.json()) == 1

    @pytest.mark.asyncio
    async def test_status_and_skills_required(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        response = await client.post("/api/profile", headers=alice_headers, json={})

        assert response.status_code == 400
        assert [e["msg"] for e in response.json()["errors"]] == [
            "Status is required",
            "Skills is required",
        ]

    @pytest.mark.asyncio
    async def test_me_without_profile(self, client: AsyncClient, alice_headers: dict[str, str]):
        response = await client.get("/api/profile/me", headers=alice_headers)

        assert response.status_code == 400
        assert response.json()["msg"] == "There is no profile for this user"


class TestPublicProfiles:
    """GET /api/profile and GET /api/profile/user/{user_id}"""

    @pytest.mark.asyncio
    async def test_list_is_public(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        bob_headers: dict[str, str],
    ):
        await _create_profile(client, alice_headers)
        await _create_profile(client, bob_headers, status="Designer")

        response = await client.get("/api/profile")

        assert response.status_code == 200
        assert [p["user"]["name"] for p in response.json()] == ["Alice", "Bob"]

    @pytest.mark.asyncio
    async def test_get_by_user_id(self, client: AsyncClient, alice_headers: dict[str, str]):
        created = await _create_profile(client, alice_headers)
        user_id = created["user"]["id"]

        response = await client.get(f"/api/profile/user/{user_id}")

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("user_id", ["not-an-id", str(uuid4())])
    async def test_unknown_or_malformed_user_id(self, client: AsyncClient, user_id: str):
        response = await client.get(f"/api/profile/user/{user_id}")

        assert response.status_code == 400
        assert response.json()["msg"] == "Profile not found"


class TestExperienceAndEducation:
    @pytest.mark.asyncio
    async def test_entries_are_newest_first(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        await _create_profile(client, alice_headers)
        await client.put(
            "/api/profile/experience",
            headers=alice_headers,
            json={**EXPERIENCE, "title": "Junior"},
        )

        response = await client.put(
            "/api/profile/experience",
            headers=alice_headers,
            json={**EXPERIENCE, "title": "Senior"},
        )

        assert response.status_code == 200
        experience = response.json()["experience"]
        assert [e["title"] for e in experience] == ["Senior", "Junior"]
        assert experience[0]["from"].startswith("2019-01-01")
        assert experience[0]["current"] is True

    @pytest.mark.asyncio
    async def test_experience_validation(self, client: AsyncClient, alice_headers: dict[str, str]):
        await _create_profile(client, alice_headers)

        response = await client.put("/api/profile/experience", headers=alice_headers, json={})

        assert response.status_code == 400
        assert [e["msg"] for e in response.json()["errors"]] == [
            "Title is required",
            "Company is required",
            "From date is required",
        ]

    @pytest.mark.asyncio
    async def test_experience_requires_profile(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        response = await client.put(
            "/api/profile/experience", headers=alice_headers, json=EXPERIENCE
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "NO_PROFILE"

    @pytest.mark.asyncio
    async def test_remove_experience_by_id(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        await _create_profile(client, alice_headers)
        added = await client.put(
            "/api/profile/experience", headers=alice_headers, json=EXPERIENCE
        )
        exp_id = added.json()["experience"][0]["id"]

        response = await client.delete(
            f"/api/profile/experience/{exp_id}", headers=alice_headers
        )

        assert response.status_code == 200
        assert response.json()["experience"] == []

    @pytest.mark.asyncio
    async def test_remove_unknown_experience_is_a_no_op(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        await _create_profile(client, alice_headers)
        await client.put("/api/profile/experience", headers=alice_headers, json=EXPERIENCE)

        response = await client.delete(
            f"/api/profile/experience/{uuid4()}", headers=alice_headers
        )

        assert response.status_code == 200
        assert len(response.json()["experience"]) == 1

    @pytest.mark.asyncio
    async def test_add_and_remove_education(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        await _create_profile(client, alice_headers)
        await client.put(
            "/api/profile/education",
            headers=alice_headers,
            json={**EDUCATION, "school": "High School"},
        )
        added = await client.put("/api/profile/education", headers=alice_headers, json=EDUCATION)
        education = added.json()["education"]
        assert [e["school"] for e in education] == ["MIT", "High School"]
        assert education[0]["to"].startswith("2018-06-01")

        response = await client.delete(
            f"/api/profile/education/{education[0]['id']}", headers=alice_headers
        )

        assert [e["school"] for e in response.json()["education"]] == ["High School"]

    @pytest.mark.asyncio
    async def test_education_validation(self, client: AsyncClient, alice_headers: dict[str, str]):
        response = await client.put(
            "/api/profile/education",
            headers=alice_headers,
            json={"school": "MIT"},
        )

        assert response.status_code == 400
        assert [e["param"] for e in response.json()["errors"]] == [
            "degree",
            "fieldofstudy",
            "from",
        ]

    @pytest.mark.asyncio
    async def test_education_validation_messages(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ):
        response = await client.put("/api/profile/education", headers=alice_headers, json={})

        assert response.status_code == 400
        assert [e["msg"] for e in response.json()["errors"]] == [
            "School is required",
            "Degree is required",
            "Field of study is required",
            "From date is required",
        ]


class TestDeleteAccount:
    """DELETE /api/profile"""

    @pytest.mark.asyncio
    async def test_removes_profile_user_and_posts(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        bob_headers: dict[str, str],
    ):
        await _create_profile(client, alice_headers)
        await client.post("/api/posts", headers=alice_headers, json={"text": "bye"})
        await client.post("/api/posts", headers=bob_headers, json={"text": "stays"})

        response = await client.delete("/api/profile", headers=alice_headers)

        assert response.status_code == 200
        assert response.json() == {"msg": "User deleted"}
        assert (await client.get("/api/profile")).json() == []
        posts = (await client.get("/api/posts", headers=bob_headers)).json()
        assert [p["text"] for p in posts] == ["stays"]

        me = await client.get("/api/auth", headers=alice_headers)
        assert me.status_code == 404
        login = await client.post(
            "/api/auth",
            json={"email": "alice@example.com", "password": "secret1"},
        )
        assert login.status_code == 400

    @pytest.mark.asyncio
    async def test_works_without_profile(self, client: AsyncClient, alice_headers: dict[str, str]):
        response = await client.delete("/api/profile", headers=alice_headers)

        assert response.status_code == 200


class TestGithubRepos:
    """GET /api/profile/github/{username}"""

    @pytest.mark.asyncio
    async def test_passes_repos_through(self, client: AsyncClient):
        response = await client.get("/api/profile/github/octocat")

        assert response.status_code == 200
        assert [r["name"] for r in response.json()] == ["hello-world", "spoon-knife"]

    @pytest.mark.asyncio
    async def test_unknown_github_user(self, client: AsyncClient):
        response = await client.get("/api/profile/github/nobody-here")

        assert response.status_code == 404
        assert response.json()["msg"] == "No Github profile found"
