"""
HTTP boundary of the friends API
"""
from datetime import timedelta
from unittest.mock import patch

from social.api.auth.utils import create_access_token
from social.api.friends.exceptions import StoreUnavailable
from social.api.friends.models import Relationship
from social.api.notifications.models import Notification

ACTION_URL = "/api/v1/friends/action"


def act(client, headers, target, action):
    return client.post(ACTION_URL, json={"target_user_id": target.id, "action": action}, headers=headers)


class TestAuthentication:

    def test_missing_header(self, client, bob):
        response = client.post(ACTION_URL, json={"target_user_id": bob.id, "action": "request"})
        assert response.status_code == 401
        assert response.json() == {"error": "Missing Authorization header"}

    def test_invalid_token(self, client, bob):
        response = client.post(
            ACTION_URL,
            json={"target_user_id": bob.id, "action": "request"},
            headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid user token"}

    def test_expired_token(self, client, alice, bob):
        token = create_access_token({"sub": alice.id}, expires_delta=timedelta(minutes=-5))
        response = act(client, {"Authorization": f"Bearer {token}"}, bob, "request")
        assert response.status_code == 401

    def test_unknown_user(self, client, bob):
        token = create_access_token({"sub": "ghost"})
        response = act(client, {"Authorization": f"Bearer {token}"}, bob, "request")
        assert response.status_code == 401

    def test_inactive_user(self, client, make_profile, auth_headers, bob):
        inactive = make_profile("mallory", is_active=False)
        response = act(client, auth_headers(inactive), bob, "request")
        assert response.status_code == 401


class TestValidation:

    def test_self_target(self, client, auth_headers, alice):
        response = act(client, auth_headers(alice), alice, "request")
        assert response.status_code == 400
        assert response.json() == {"error": "Cannot friend yourself"}

    def test_unknown_action(self, client, auth_headers, alice, bob):
        response = act(client, auth_headers(alice), bob, "follow")
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request parameters"}

    def test_missing_target(self, client, auth_headers, alice):
        response = client.post(ACTION_URL, json={"action": "request"}, headers=auth_headers(alice))
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request parameters"}

    def test_empty_target(self, client, auth_headers, alice):
        response = client.post(
            ACTION_URL, json={"target_user_id": "", "action": "request"}, headers=auth_headers(alice)
        )
        assert response.status_code == 400

    def test_unknown_target(self, client, auth_headers, alice):
        response = client.post(
            ACTION_URL, json={"target_user_id": "nobody", "action": "request"}, headers=auth_headers(alice)
        )
        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}


class TestActions:

    def test_request_accept_scenario(self, client, db, auth_headers, fetch_profile, alice, bob):
        response = act(client, auth_headers(alice), bob, "request")
        assert response.status_code == 200
        assert response.json() == {"success": True}

        response = act(client, auth_headers(bob), alice, "accept")
        assert response.status_code == 200

        assert fetch_profile(alice.id).friends_count == 1
        assert fetch_profile(bob.id).friends_count == 1
        types = sorted((n.user_id, n.type) for n in db.query(Notification).all())
        assert types == sorted([(bob.id, "friend_request"), (alice.id, "friend_accepted")])

        response = act(client, auth_headers(alice), bob, "request")
        assert response.status_code == 409
        assert response.json() == {"error": "Already friends"}
        assert db.query(Relationship).count() == 1
        assert fetch_profile(alice.id).friends_count == 1

    def test_domain_failures(self, client, auth_headers, alice, bob):
        assert act(client, auth_headers(alice), bob, "accept").json() == {"error": "No pending request to accept"}
        assert act(client, auth_headers(alice), bob, "reject").json() == {"error": "No relationship to reject"}

        act(client, auth_headers(alice), bob, "request")
        response = act(client, auth_headers(alice), bob, "accept")
        assert response.status_code == 409
        assert response.json() == {"error": "You cannot accept your own request"}
        assert act(client, auth_headers(bob), alice, "request").json() == {"error": "Request already pending"}

    def test_block(self, client, auth_headers, alice, bob):
        act(client, auth_headers(alice), bob, "request")
        assert act(client, auth_headers(bob), alice, "block").status_code == 200
        assert act(client, auth_headers(bob), alice, "block").status_code == 200

        response = act(client, auth_headers(alice), bob, "request")
        assert response.status_code == 409
        assert response.json() == {"error": "Cannot request friendship"}

    def test_store_unavailable(self, client, auth_headers, alice, bob):
        with patch("social.api.friends.store.RelationshipStore.find_pair", side_effect=StoreUnavailable()):
            response = act(client, auth_headers(alice), bob, "request")
        assert response.status_code == 503
        assert response.json() == {"error": "Relationship store unavailable"}

    def test_side_effect_failure_does_not_fail_request(self, client, db, auth_headers, alice, bob):
        with patch(
            "social.api.friends.store.RelationshipStore.insert_notification",
            side_effect=RuntimeError("notifications table is gone")
        ):
            response = act(client, auth_headers(alice), bob, "request")
        assert response.status_code == 200
        assert db.query(Relationship).count() == 1
        assert db.query(Notification).count() == 0


class TestReads:

    def test_status(self, client, auth_headers, alice, bob):
        url = f"/api/v1/friends/status/{bob.id}"
        assert client.get(url, headers=auth_headers(alice)).json() == {"status": None, "is_initiator": False}

        act(client, auth_headers(alice), bob, "request")
        assert client.get(url, headers=auth_headers(alice)).json() == {"status": "pending", "is_initiator": True}

        response = client.get(f"/api/v1/friends/status/{alice.id}", headers=auth_headers(bob))
        assert response.json() == {"status": "pending", "is_initiator": False}

    def test_lists(self, client, auth_headers, alice, bob):
        act(client, auth_headers(alice), bob, "request")

        response = client.get("/api/v1/friends/", params={"status": "pending"}, headers=auth_headers(bob))
        assert response.status_code == 200
        items = response.json()
        assert len(items) == 1
        assert items[0]["profile"]["id"] == alice.id
        assert items[0]["status"] == "pending"

        act(client, auth_headers(bob), alice, "accept")
        friends = client.get("/api/v1/friends/", headers=auth_headers(alice)).json()
        assert [item["profile"]["username"] for item in friends] == ["bob"]

    def test_list_unknown_status(self, client, auth_headers, alice):
        response = client.get("/api/v1/friends/", params={"status": "rejected"}, headers=auth_headers(alice))
        assert response.status_code == 400


class TestCors:

    def test_preflight(self, client):
        response = client.options(
            ACTION_URL,
            headers={
                "Origin": "https://app.example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "authorization, content-type",
            }
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "authorization" in response.headers["access-control-allow-headers"].lower()

    def test_real_responses_carry_headers(self, client, auth_headers, alice, bob):
        headers = {**auth_headers(alice), "Origin": "https://app.example.com"}
        success = act(client, headers, bob, "request")
        failure = act(client, headers, bob, "request")
        assert success.headers["access-control-allow-origin"] == "*"
        assert failure.headers["access-control-allow-origin"] == "*"

    def test_options_without_origin(self, client):
        response = client.options(ACTION_URL)
        assert response.status_code == 200
        assert response.content == b""


class TestRoutingErrors:

    def test_wrong_method(self, client):
        response = client.get(ACTION_URL)
        assert response.status_code == 405
        assert response.json() == {"error": "Method Not Allowed"}

    def test_unknown_path(self, client):
        response = client.get("/api/v1/friends/unknown/path")
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
