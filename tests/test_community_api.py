"""Tests for comments, ratings, community suggestions, and questions."""

import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from discovery.models import Comment, Question

SUGGESTION = {
    "submitter_name": "Asha Rao",
    "submitter_email": "asha@example.com",
    "place_name": "Hidden Filter Coffee Stall",
    "suggested_latitude": 12.978,
    "suggested_longitude": 77.641,
    "category": "cafe",
    "personal_notes": "Best filter coffee on 12th Main, opens at 6am.",
}


class TestComments:
    """Tests for /api/comments."""

    async def test_create_sanitises_and_defaults_author(self, client: AsyncClient, make_place):
        place = await make_place()
        response = await client.post(
            "/api/comments",
            json={
                "entity_type": "place",
                "entity_id": str(place.id),
                "content": "Great cakes! <script>alert('x')</script>",
            },
        )
        assert response.status_code == 201
        body = response.json()
        assert body["content"] == "Great cakes!"
        assert body["author_name"] == "Anonymous"

    async def test_content_is_truncated(self, client: AsyncClient, make_place):
        place = await make_place()
        response = await client.post(
            "/api/comments",
            json={"entity_type": "place", "entity_id": str(place.id), "content": "y" * 1500},
        )
        assert len(response.json()["content"]) == 1000

    async def test_very_long_content_is_truncated_not_rejected(self, client: AsyncClient, make_place):
        place = await make_place()
        response = await client.post(
            "/api/comments",
            json={"entity_type": "place", "entity_id": str(place.id), "content": "x" * 10_001},
        )
        assert response.status_code == 201
        assert response.json()["content"] == "x" * 1000

    async def test_script_only_content_is_rejected(self, client: AsyncClient, make_place):
        place = await make_place()
        response = await client.post(
            "/api/comments",
            json={
                "entity_type": "place",
                "entity_id": str(place.id),
                "content": "<script>steal()</script>",
            },
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Comment content is required"}

    async def test_unknown_entity(self, client: AsyncClient):
        response = await client.post(
            "/api/comments",
            json={"entity_type": "journey", "entity_id": str(uuid.uuid4()), "content": "hi"},
        )
        assert response.status_code == 404
        assert response.json() == {"error": "Journey not found"}

    async def test_unknown_entity_type_is_a_validation_error(self, client: AsyncClient):
        response = await client.post(
            "/api/comments",
            json={"entity_type": "restaurant", "entity_id": str(uuid.uuid4()), "content": "hi"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid input data"

    async def test_replies_are_nested_one_level(self, client: AsyncClient, make_place):
        place = await make_place()
        target = {"entity_type": "place", "entity_id": str(place.id)}

        parent = (await client.post("/api/comments", json={**target, "content": "Parent"})).json()
        reply = await client.post(
            "/api/comments", json={**target, "content": "Reply", "parent_id": parent["id"]}
        )
        assert reply.status_code == 201

        nested = await client.post(
            "/api/comments",
            json={**target, "content": "Too deep", "parent_id": reply.json()["id"]},
        )
        assert nested.status_code == 400

        listing = (await client.get("/api/comments", params=target)).json()
        assert listing["total"] == 2
        [top] = listing["comments"]
        assert top["content"] == "Parent"
        assert [r["content"] for r in top["replies"]] == ["Reply"]

    async def test_reply_must_target_same_entity(self, client: AsyncClient, make_place):
        first = await make_place(name="Salt")
        second = await make_place(name="Muro")
        parent = (
            await client.post(
                "/api/comments",
                json={"entity_type": "place", "entity_id": str(first.id), "content": "Hi"},
            )
        ).json()
        response = await client.post(
            "/api/comments",
            json={
                "entity_type": "place",
                "entity_id": str(second.id),
                "content": "Wrong thread",
                "parent_id": parent["id"],
            },
        )
        assert response.status_code == 404

    async def test_comment_rate_limit(self, client: AsyncClient, make_place):
        place = await make_place()
        body = {"entity_type": "place", "entity_id": str(place.id), "content": "again"}
        for _ in range(11):
            assert (await client.post("/api/comments", json=body)).status_code == 201

        response = await client.post("/api/comments", json=body)
        assert response.status_code == 429
        assert response.json() == {"error": "Too many comments. Please wait before posting again."}

    async def test_like_toggles(self, client: AsyncClient, make_place, db_session):
        place = await make_place()
        comment = (
            await client.post(
                "/api/comments",
                json={"entity_type": "place", "entity_id": str(place.id), "content": "Like me"},
            )
        ).json()

        liked = await client.post(f"/api/comments/{comment['id']}/like")
        assert liked.json() == {"liked": True, "likes": 1}

        listing = await client.get(
            "/api/comments", params={"entity_type": "place", "entity_id": str(place.id)}
        )
        assert listing.json()["comments"][0]["user_has_liked"] is True

        unliked = await client.post(f"/api/comments/{comment['id']}/like")
        assert unliked.json() == {"liked": False, "likes": 0}

        stored = (await db_session.execute(select(Comment))).scalar_one()
        assert stored.likes == 0


class TestRatings:
    """Tests for /api/ratings."""

    async def test_upsert_per_ip(self, client: AsyncClient, make_place):
        place = await make_place()
        target = {"entity_type": "place", "entity_id": str(place.id)}

        first = await client.post("/api/ratings", json={**target, "rating": 4.0})
        assert first.status_code == 200
        assert first.json()["total"] == 1

        second = await client.post("/api/ratings", json={**target, "rating": 2.5})
        body = second.json()
        assert body["total"] == 1
        assert body["average"] == 2.5
        assert body["user_rating"] == 2.5

    async def test_summary_distribution(self, client: AsyncClient, make_place):
        place = await make_place()
        target = {"entity_type": "place", "entity_id": str(place.id)}
        for ip, rating in [("10.0.0.1", 5.0), ("10.0.0.2", 4.4), ("10.0.0.3", 4.5)]:
            await client.post(
                "/api/ratings", json={**target, "rating": rating}, headers={"X-Forwarded-For": ip}
            )

        summary = (await client.get("/api/ratings", params=target)).json()
        assert summary["total"] == 3
        assert summary["average"] == pytest.approx(4.63, abs=0.01)
        assert summary["distribution"] == {"1": 0, "2": 0, "3": 0, "4": 1, "5": 2}
        assert summary["user_rating"] is None

    async def test_empty_summary(self, client: AsyncClient, make_place):
        place = await make_place()
        summary = (
            await client.get("/api/ratings", params={"entity_type": "place", "entity_id": str(place.id)})
        ).json()
        assert summary["average"] is None
        assert summary["total"] == 0

    @pytest.mark.parametrize("rating", [0.5, 5.5, 3.25])
    async def test_invalid_rating(self, client: AsyncClient, make_place, rating):
        place = await make_place()
        response = await client.post(
            "/api/ratings",
            json={"entity_type": "place", "entity_id": str(place.id), "rating": rating},
        )
        assert response.status_code == 400

    async def test_rating_missing_entity(self, client: AsyncClient):
        response = await client.post(
            "/api/ratings",
            json={"entity_type": "place", "entity_id": str(uuid.uuid4()), "rating": 4.0},
        )
        assert response.status_code == 404
        assert response.json() == {"error": "Place not found"}


class TestCommunitySuggestions:
    """Tests for /api/community-suggestions."""

    async def test_fourth_suggestion_in_a_day_is_rejected(self, client: AsyncClient):
        for i in range(3):
            response = await client.post(
                "/api/community-suggestions", json={**SUGGESTION, "place_name": f"Spot {i}"}
            )
            assert response.status_code == 200
            assert response.json()["success"] is True

        response = await client.post("/api/community-suggestions", json=SUGGESTION)
        assert response.status_code == 429
        assert response.json() == {"error": "Rate limit exceeded. Maximum 3 suggestions per day."}

    async def test_limit_is_keyed_by_email_case_insensitively(self, client: AsyncClient):
        for email in ("asha@example.com", "ASHA@example.com", "Asha@Example.com"):
            await client.post("/api/community-suggestions", json={**SUGGESTION, "submitter_email": email})

        blocked = await client.post(
            "/api/community-suggestions", json={**SUGGESTION, "submitter_email": "asha@EXAMPLE.com"}
        )
        assert blocked.status_code == 429

        other = await client.post(
            "/api/community-suggestions", json={**SUGGESTION, "submitter_email": "ravi@example.com"}
        )
        assert other.status_code == 200

    async def test_outside_neighbourhood_is_invalid(self, client: AsyncClient):
        response = await client.post(
            "/api/community-suggestions", json={**SUGGESTION, "suggested_latitude": 12.90}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid input data"

    async def test_list_newest_first_with_status(self, client: AsyncClient):
        for name in ("First spot", "Second spot"):
            await client.post(
                "/api/community-suggestions",
                json={**SUGGESTION, "place_name": name, "submitter_email": f"{name[0]}@example.com"},
            )

        listing = (await client.get("/api/community-suggestions")).json()
        assert listing["total"] == 2
        assert [s["place_name"] for s in listing["suggestions"]] == ["Second spot", "First spot"]

        approved = (await client.get("/api/community-suggestions", params={"status": "approved"})).json()
        assert approved["total"] == 0

    async def test_vote_once_per_fingerprint(self, client: AsyncClient):
        created = (await client.post("/api/community-suggestions", json=SUGGESTION)).json()
        suggestion_id = created["suggestion"]["id"]
        headers = {"User-Agent": "browser-a"}

        first = await client.post(f"/api/community-suggestions/{suggestion_id}/vote", headers=headers)
        assert first.json() == {"success": True, "votes": 1}

        again = await client.post(f"/api/community-suggestions/{suggestion_id}/vote", headers=headers)
        assert again.status_code == 409
        assert again.json() == {"error": "Already voted for this suggestion"}

        other_browser = await client.post(
            f"/api/community-suggestions/{suggestion_id}/vote", headers={"User-Agent": "browser-b"}
        )
        assert other_browser.json()["votes"] == 2

    async def test_vote_unknown_suggestion(self, client: AsyncClient):
        response = await client.post(f"/api/community-suggestions/{uuid.uuid4()}/vote")
        assert response.status_code == 404


class TestQuestions:
    """Tests for POST /api/suggestions."""

    QUESTION = {
        "question": "Where can I find late-night dosa near 100 Feet Road?",
        "name": "Ravi",
        "email": "ravi@example.com",
    }

    async def test_stored(self, client: AsyncClient, db_session):
        response = await client.post("/api/suggestions", json=self.QUESTION)
        assert response.status_code == 200
        assert response.json()["success"] is True

        stored = (await db_session.execute(select(Question))).scalar_one()
        assert stored.contact_email == "ravi@example.com"
        assert stored.status == "new"

    async def test_sixth_question_in_an_hour_is_rejected(self, client: AsyncClient):
        for _ in range(5):
            assert (await client.post("/api/suggestions", json=self.QUESTION)).status_code == 200

        response = await client.post("/api/suggestions", json=self.QUESTION)
        assert response.status_code == 429
        assert response.json() == {"error": "Too many submissions. Please try again later."}

    async def test_short_question_is_invalid(self, client: AsyncClient):
        response = await client.post("/api/suggestions", json={**self.QUESTION, "question": "Why?"})
        assert response.status_code == 400
