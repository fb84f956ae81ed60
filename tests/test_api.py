"""
API Tests

HTTP-level tests for the transcript and correction routers against
in-memory SQLite.
"""

import pytest


async def create_transcript(client, headers, raw_text, **extra):
    response = await client.post(
        "/transcripts", json={"raw_text": raw_text, **extra}, headers=headers
    )
    assert response.status_code == 201
    return response.json()


async def edit_transcript(client, headers, transcript_id, final_text):
    response = await client.put(
        f"/transcripts/{transcript_id}", json={"final_text": final_text}, headers=headers
    )
    assert response.status_code == 200
    return response.json()


class TestAuth:
    
    @pytest.mark.asyncio
    async def test_root_is_public(self, client):
        response = await client.get("/")
        assert response.status_code == 200
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/transcripts", "/corrections", "/corrections/stats"])
    async def test_missing_token_rejected(self, client, path):
        response = await client.get(path)
        assert response.status_code == 401
        assert response.json()["error"] == "AuthenticationError"
    
    @pytest.mark.asyncio
    async def test_garbage_token_rejected(self, client):
        response = await client.get(
            "/transcripts", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.status_code == 401


class TestTranscriptEndpoints:
    
    @pytest.mark.asyncio
    async def test_create_and_get(self, client, auth_headers):
        created = await create_transcript(
            client, auth_headers, "hello world", title="Greeting", duration_seconds=1.5
        )
        
        assert created["raw_text"] == "hello world"
        assert created["personalized_text"] == "hello world"
        assert created["final_text"] is None
        assert created["display_text"] == "hello world"
        assert created["user_id"] == "user-1"
        
        response = await client.get(f"/transcripts/{created['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["title"] == "Greeting"
    
    @pytest.mark.asyncio
    async def test_list(self, client, auth_headers, other_auth_headers):
        await create_transcript(client, auth_headers, "one")
        await create_transcript(client, auth_headers, "two")
        await create_transcript(client, other_auth_headers, "someone else")
        
        response = await client.get("/transcripts", headers=auth_headers)
        
        assert response.status_code == 200
        assert sorted(t["raw_text"] for t in response.json()) == ["one", "two"]
    
    @pytest.mark.asyncio
    async def test_other_users_transcript_is_not_found(self, client, auth_headers, other_auth_headers):
        created = await create_transcript(client, auth_headers, "private")
        
        response = await client.get(f"/transcripts/{created['id']}", headers=other_auth_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "TranscriptNotFoundError"
        
        response = await client.put(
            f"/transcripts/{created['id']}",
            json={"final_text": "hijacked"},
            headers=other_auth_headers,
        )
        assert response.status_code == 404
    
    @pytest.mark.asyncio
    async def test_edit_returns_learning_summary(self, client, auth_headers):
        created = await create_transcript(client, auth_headers, "meet me at the pub")
        
        edited = await edit_transcript(client, auth_headers, created["id"], "meet me at the office")
        
        assert edited["final_text"] == "meet me at the office"
        assert edited["raw_text"] == "meet me at the pub"
        assert edited["display_text"] == "meet me at the office"
        assert edited["learning"] == {
            "corrections_emitted": 1,
            "corrections_stored": 1,
            "failures": 0,
        }
    
    @pytest.mark.asyncio
    async def test_delete(self, client, auth_headers):
        created = await create_transcript(client, auth_headers, "temporary")
        
        response = await client.delete(f"/transcripts/{created['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["success"] is True
        
        response = await client.get(f"/transcripts/{created['id']}", headers=auth_headers)
        assert response.status_code == 404


class TestLearningLoop:
    
    @pytest.mark.asyncio
    async def test_repeated_edits_personalize_new_transcripts(self, client, auth_headers):
        for raw in ("meet me at the pub", "lunch at the pub"):
            created = await create_transcript(client, auth_headers, raw)
            await edit_transcript(
                client, auth_headers, created["id"], raw.replace("pub", "office")
            )
        
        fresh = await create_transcript(client, auth_headers, "see you at the pub")
        
        assert fresh["raw_text"] == "see you at the pub"
        assert fresh["personalized_text"] == "see you at the office"
    
    @pytest.mark.asyncio
    async def test_learning_does_not_leak_between_users(self, client, auth_headers, other_auth_headers):
        for _ in range(2):
            created = await create_transcript(client, auth_headers, "at the pub")
            await edit_transcript(client, auth_headers, created["id"], "at the office")
        
        fresh = await create_transcript(client, other_auth_headers, "at the pub")
        assert fresh["personalized_text"] == "at the pub"


class TestCorrectionEndpoints:
    
    async def learn(self, client, headers, raw, edited, times=2):
        for _ in range(times):
            created = await create_transcript(client, headers, raw)
            await edit_transcript(client, headers, created["id"], edited)
    
    @pytest.mark.asyncio
    async def test_list_corrections(self, client, auth_headers):
        await self.learn(client, auth_headers, "the pub", "the office", times=2)
        await self.learn(client, auth_headers, "a jason file", "a JSON file", times=1)
        
        response = await client.get("/corrections", headers=auth_headers)
        
        assert response.status_code == 200
        body = response.json()
        assert [(c["original_token"], c["corrected_token"], c["count"]) for c in body] == [
            ("pub", "office", 2),
            ("jason", "JSON", 1),
        ]
        
        response = await client.get("/corrections?min_count=2", headers=auth_headers)
        assert [c["original_token"] for c in response.json()] == ["pub"]
    
    @pytest.mark.asyncio
    async def test_disable_and_enable(self, client, auth_headers):
        await self.learn(client, auth_headers, "the pub", "the office")
        correction = (await client.get("/corrections", headers=auth_headers)).json()[0]
        
        response = await client.post(
            f"/corrections/{correction['id']}/disable", headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["disabled"] is True
        assert response.json()["count"] == 2
        
        response = await client.post(
            "/corrections/personalize", json={"text": "the pub"}, headers=auth_headers
        )
        assert response.json()["personalized"] == "the pub"
        
        response = await client.post(
            f"/corrections/{correction['id']}/enable", headers=auth_headers
        )
        assert response.json()["disabled"] is False
        
        response = await client.post(
            "/corrections/personalize", json={"text": "the pub"}, headers=auth_headers
        )
        assert response.json()["personalized"] == "the office"
    
    @pytest.mark.asyncio
    async def test_disable_other_users_correction(self, client, auth_headers, other_auth_headers):
        await self.learn(client, auth_headers, "the pub", "the office", times=1)
        correction = (await client.get("/corrections", headers=auth_headers)).json()[0]
        
        response = await client.post(
            f"/corrections/{correction['id']}/disable", headers=other_auth_headers
        )
        assert response.status_code == 404
        assert response.json()["error"] == "CorrectionNotFoundError"
    
    @pytest.mark.asyncio
    async def test_personalize(self, client, auth_headers):
        await self.learn(client, auth_headers, "the pub", "the office", times=1)
        
        response = await client.post(
            "/corrections/personalize", json={"text": "the pub"}, headers=auth_headers
        )
        assert response.json() == {
            "original": "the pub",
            "personalized": "the pub",
            "corrections_applied": 0,
            "degraded": False,
        }
        
        response = await client.post(
            "/corrections/personalize",
            json={"text": "the pub", "min_count": 1},
            headers=auth_headers,
        )
        assert response.json()["personalized"] == "the office"
        assert response.json()["corrections_applied"] == 1
    
    @pytest.mark.asyncio
    async def test_stats(self, client, auth_headers):
        await self.learn(client, auth_headers, "the pub", "the office", times=2)
        await self.learn(client, auth_headers, "a jason file", "a JSON file", times=1)
        
        response = await client.get("/corrections/stats", headers=auth_headers)
        
        assert response.status_code == 200
        stats = response.json()
        assert stats["total_corrections"] == 2
        assert stats["total_observations"] == 3
        assert stats["eligible_corrections"] == 1
        assert stats["disabled_corrections"] == 0
        assert stats["min_count"] == 2
        assert stats["most_common"][0] == {
            "original_token": "pub",
            "corrected_token": "office",
            "count": 2,
        }
