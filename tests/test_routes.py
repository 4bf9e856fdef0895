"""
SocialAPI Backend: HTTP Endpoint Tests
======================================

What:  Status codes, JSON shapes and error envelopes for the public routes.
How:   HTTPX AsyncClient against the ASGI app with the database dependency
       replaced by the mock from conftest.py.
"""

import pytest
from unittest.mock import MagicMock
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError


class TestUserRoutes:

    @pytest.mark.asyncio
    async def test_create_user(self, test_client, mock_db):
        new_id = ObjectId()
        mock_db.users.insert_one.return_value = MagicMock(inserted_id=new_id)

        response = await test_client.post(
            "/api/users", json={"username": "lernantino", "email": "lernantino@example.com"}
        )

        assert response.status_code == 201
        assert response.json() == {
            "_id": str(new_id),
            "username": "lernantino",
            "email": "lernantino@example.com",
            "thoughts": [],
            "friends": [],
            "friendCount": 0,
        }

    @pytest.mark.asyncio
    async def test_create_duplicate_username(self, test_client, mock_db):
        mock_db.users.insert_one.side_effect = DuplicateKeyError(
            "E11000", 11000, {"keyValue": {"username": "lernantino"}}
        )

        response = await test_client.post(
            "/api/users", json={"username": "lernantino", "email": "other@example.com"}
        )

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "conflict"
        assert body["details"] == {"field": "username"}

    @pytest.mark.asyncio
    async def test_create_with_bad_email_is_400(self, test_client, mock_db):
        response = await test_client.post(
            "/api/users", json={"username": "lernantino", "email": "not-an-email"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        mock_db.users.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_users(self, test_client, mock_db, user_doc):
        mock_db.users.find.return_value.to_list.return_value = [user_doc]

        response = await test_client.get("/api/users")

        assert response.status_code == 200
        assert [u["username"] for u in response.json()] == ["lernantino"]

    @pytest.mark.asyncio
    async def test_get_user_not_found(self, test_client, mock_db):
        mock_db.users.find_one.return_value = None

        response = await test_client.get(f"/api/users/{ObjectId()}")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_malformed_user_id_is_400(self, test_client):
        response = await test_client.get("/api/users/12345")

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "userId"

    @pytest.mark.asyncio
    async def test_empty_update_is_400(self, test_client):
        response = await test_client.put(f"/api/users/{ObjectId()}", json={})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_user(self, test_client, mock_db, user_doc):
        mock_db.users.find_one_and_delete.return_value = user_doc
        mock_db.thoughts.delete_many.return_value = MagicMock(deleted_count=2)

        response = await test_client.delete(f"/api/users/{user_doc['_id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["cleanupComplete"] is True
        assert body["deletedThoughtCount"] == 2

    @pytest.mark.asyncio
    async def test_add_friend(self, test_client, mock_db, user_doc, friend_doc):
        mock_db.users.find_one.return_value = {"_id": friend_doc["_id"]}
        mock_db.users.find_one_and_update.return_value = {
            **user_doc, "friends": [friend_doc["_id"]]
        }

        response = await test_client.post(
            f"/api/users/{user_doc['_id']}/friends/{friend_doc['_id']}"
        )

        assert response.status_code == 200
        assert response.json()["friendCount"] == 1

    @pytest.mark.asyncio
    async def test_remove_friend_unknown_user(self, test_client, mock_db):
        mock_db.users.find_one_and_update.return_value = None

        response = await test_client.delete(f"/api/users/{ObjectId()}/friends/{ObjectId()}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_database_outage_is_generic_500(self, test_client, mock_db):
        mock_db.users.find.return_value.to_list.side_effect = ServerSelectionTimeoutError(
            "localhost:27017: connection refused"
        )

        response = await test_client.get("/api/users")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "27017" not in body["message"]


class TestThoughtRoutes:

    @pytest.mark.asyncio
    async def test_create_unlinked_thought_has_warning(self, test_client, mock_db):
        mock_db.thoughts.insert_one.return_value = MagicMock(inserted_id=ObjectId())
        mock_db.users.find_one_and_update.return_value = None

        response = await test_client.post(
            "/api/thoughts",
            json={"thoughtText": "hello", "username": "ghost", "userId": str(ObjectId())},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["thoughtText"] == "hello"
        assert body["reactionCount"] == 0
        assert "warning" in body

    @pytest.mark.asyncio
    async def test_create_thought_too_long(self, test_client):
        response = await test_client.post(
            "/api/thoughts",
            json={"thoughtText": "x" * 281, "username": "u", "userId": str(ObjectId())},
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_get_thought(self, test_client, mock_db, thought_doc):
        mock_db.thoughts.find_one.return_value = thought_doc

        response = await test_client.get(f"/api/thoughts/{thought_doc['_id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["createdAt"] == "3:07pm on 5 Jan 2024"
        assert body["reactionCount"] == 1

    @pytest.mark.asyncio
    async def test_update_missing_thought(self, test_client, mock_db):
        mock_db.thoughts.find_one_and_update.return_value = None

        response = await test_client.put(
            f"/api/thoughts/{ObjectId()}", json={"thoughtText": "edited"}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_thought(self, test_client, mock_db, thought_doc):
        mock_db.thoughts.find_one_and_delete.return_value = thought_doc
        mock_db.users.update_many.return_value = MagicMock(modified_count=1)

        response = await test_client.delete(f"/api/thoughts/{thought_doc['_id']}")

        assert response.status_code == 200
        assert response.json()["cleanupComplete"] is True

    @pytest.mark.asyncio
    async def test_add_reaction(self, test_client, mock_db, thought_doc):
        mock_db.thoughts.find_one.return_value = {"_id": thought_doc["_id"]}
        mock_db.users.find_one.return_value = {"_id": ObjectId()}
        mock_db.thoughts.find_one_and_update.return_value = thought_doc

        response = await test_client.post(
            f"/api/thoughts/{thought_doc['_id']}/reactions",
            json={"reactionBody": "Agreed!", "username": "amiko"},
        )

        assert response.status_code == 201
        assert response.json()["reactionCount"] == 1

    @pytest.mark.asyncio
    async def test_remove_reaction_malformed_id(self, test_client, thought_doc):
        response = await test_client.delete(
            f"/api/thoughts/{thought_doc['_id']}/reactions/nope"
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "reactionId"


class TestHealthAndMiddleware:

    @pytest.mark.asyncio
    async def test_health_ok(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_health_database_down(self, test_client, mock_db):
        mock_db.command.side_effect = ServerSelectionTimeoutError("down")

        response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/health", headers={"X-Request-ID": "abc12345"})
        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_request_id_in_error_body(self, test_client):
        response = await test_client.get("/api/users/bad", headers={"X-Request-ID": "feedbeef"})
        assert response.json()["request_id"] == "feedbeef"
