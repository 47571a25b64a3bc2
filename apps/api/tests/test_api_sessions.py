"""Tests for practice session routes."""

from fastapi.testclient import TestClient

from lingocards_core.store import InMemoryCardStore


def _create(client: TestClient, **payload: object) -> dict:
    body = {"source_language": "en", "target_language": "de", **payload}
    r = client.post("/api/v1/sessions", json=body)
    assert r.status_code == 201, r.text
    return r.json()


class TestSessionRoutes:
    """Tests for /sessions."""

    def test_create(self, client: TestClient) -> None:
        session = _create(client, max_cards=2)

        assert len(session["card_ids"]) == 2
        assert len(set(session["card_ids"])) == 2
        assert session["current_card_index"] == 0
        assert session["is_complete"] is False

    def test_create_with_tags(self, client: TestClient) -> None:
        session = _create(client, tags=["farewell"])
        assert session["card_ids"] == ["en-goodbye"]

    def test_no_matching_cards(self, client: TestClient) -> None:
        r = client.post(
            "/api/v1/sessions",
            json={"source_language": "en", "target_language": "de", "tags": ["x"]},
        )
        assert r.status_code == 404
        assert r.json()["context"]["tags"] == ["x"]

    def test_same_languages(self, client: TestClient) -> None:
        r = client.post(
            "/api/v1/sessions",
            json={"source_language": "en", "target_language": "en"},
        )
        assert r.status_code == 422

    def test_sample_cards(self, client: TestClient) -> None:
        session = _create(client, use_sample_cards=True, max_cards=3)
        assert session["card_ids"] == ["sample-01", "sample-02", "sample-03"]

        current = client.get(f"/api/v1/sessions/{session['id']}/current").json()
        assert current["card"]["content"] == "Hello"

    def test_unknown_session(self, client: TestClient) -> None:
        assert client.get("/api/v1/sessions/nope").status_code == 404
        assert client.get("/api/v1/sessions/nope/current").status_code == 404
        r = client.post("/api/v1/sessions/nope/answer", json={"answer": "x"})
        assert r.status_code == 404

    def test_practice_flow(self, client: TestClient, card_store: InMemoryCardStore) -> None:
        session = _create(client, tags=["common"])
        session_id = session["id"]

        for position in (1, 2):
            current = client.get(f"/api/v1/sessions/{session_id}/current").json()
            assert current["is_complete"] is False
            assert current["session_progress"] == {"current": position, "total": 2}

            card = card_store.get_flashcard(current["card"]["id"])
            assert card is not None
            r = client.post(
                f"/api/v1/sessions/{session_id}/answer",
                json={"answer": card.user_translation},
            )
            assert r.status_code == 200
            result = r.json()
            assert result["evaluation"]["correct"] is True
            assert result["evaluation"]["score"] == 1.0
            assert result["is_complete"] is (position == 2)

            advance = client.post(f"/api/v1/sessions/{session_id}/advance").json()
            assert advance["is_complete"] is (position == 2)

        assert advance["stats"]["total"] == 2
        assert advance["stats"]["accuracy"] == 100.0

        current = client.get(f"/api/v1/sessions/{session_id}/current").json()
        assert current == {
            "session_id": session_id,
            "is_complete": True,
            "session_progress": None,
            "card": None,
        }

        r = client.post(f"/api/v1/sessions/{session_id}/answer", json={"answer": "x"})
        assert r.status_code == 409

        stats = client.get(f"/api/v1/sessions/{session_id}/stats").json()
        assert stats["session_id"] == session_id
        assert stats["correct"] == 2
        assert stats["is_complete"] is True

        completed = client.get(
            "/api/v1/sessions", params={"completed_only": "true"}
        ).json()
        assert [s["id"] for s in completed["sessions"]] == [session_id]

    def test_blank_answer_rejected(self, client: TestClient) -> None:
        session_id = _create(client, max_cards=2)["id"]

        for answer in ("", "   "):
            r = client.post(
                f"/api/v1/sessions/{session_id}/answer", json={"answer": answer}
            )
            assert r.status_code == 422

        session = client.get(f"/api/v1/sessions/{session_id}").json()
        assert session["current_card_index"] == 0
        assert session["responses"] == []

    def test_deleted_card_is_skipped(self, client: TestClient) -> None:
        session = _create(client, tags=["common"])
        first, second = session["card_ids"]
        client.delete(f"/api/v1/cards/{first}")

        current = client.get(f"/api/v1/sessions/{session['id']}/current").json()
        assert current["card"]["id"] == second

        stats = client.get(f"/api/v1/sessions/{session['id']}/stats").json()
        assert stats["skipped"] == 1
        assert stats["total"] == 1
