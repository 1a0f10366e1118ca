"""End-to-end tests for the time ledger API."""

from uuid import uuid4

import pytest
from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient

from yard.adapter.notification import MockNotificationClient
from yard.config import AuthSettings
from yard.domain.value import NotificationKind
from yard.interface.api.app import create_app
from yard.util.clock import FixedClock
from yard.util.jwt import create_token
from tests.di import build_test_container


@pytest.fixture
def container():
    """Test container shared by the app and the test body."""
    return build_test_container(None, FastapiProvider())


@pytest.fixture
def client(container):
    """Create test client with test container."""
    with TestClient(create_app(container)) as test_client:
        yield test_client


def resolve(client, container, dependency):
    return client.portal.call(container.get, dependency)


def sign_up(client, container, email: str, full_name: str) -> dict[str, str]:
    """Stage, confirm and return auth headers for a new member."""
    client.post("/profiles/pending", json={"email": email, "full_name": full_name})
    settings = resolve(client, container, AuthSettings)
    token = create_token(str(uuid4()), email, settings)
    headers = {"Authorization": f"Bearer {token}"}
    response = client.post("/profiles/confirm", headers=headers)
    assert response.status_code == 200
    return headers


class TestDirectFlow:
    """Carol and Dave are both members."""

    def test_log_confirm_and_balance(self, client, container):
        # Arrange
        carol = sign_up(client, container, "carol@example.com", "Carol")
        dave = sign_up(client, container, "dave@example.com", "Dave")
        notifications = resolve(client, container, MockNotificationClient)

        # Act
        logged = client.post(
            "/transactions",
            headers=carol,
            json={"mode": "helped", "contact": "dave@example.com", "hours": "2", "description": "Tutoring"},
        )
        tx_id = logged.json()["result"]["transaction_id"]
        own_confirm = client.post(f"/transactions/{tx_id}/confirm", headers=carol)
        confirmed = client.post(f"/transactions/{tx_id}/confirm", headers=dave)
        again = client.post(f"/transactions/{tx_id}/confirm", headers=dave)

        # Assert
        assert logged.status_code == 201
        assert logged.json()["result"]["kind"] == "direct"
        assert logged.json()["notification_sent"] is True
        assert notifications.sent[0].kind == NotificationKind.TIME_LOGGED

        assert own_confirm.status_code == 403
        assert own_confirm.json()["error"] == "forbidden"
        assert confirmed.status_code == 200
        assert confirmed.json()["status"] == "confirmed"
        assert again.status_code == 409

        assert client.get("/profiles/me/balance", headers=carol).json()["balance"] == 2.0
        assert client.get("/profiles/me/balance", headers=dave).json()["balance"] == -2.0

        feed = client.get("/feed").json()["items"]
        assert len(feed) == 1
        assert feed[0]["giver"]["name"] == "Carol"
        assert feed[0]["receivers"][0]["name"] == "Dave"

    def test_dispute_requires_reason(self, client, container):
        # Arrange
        carol = sign_up(client, container, "carol@example.com", "Carol")
        dave = sign_up(client, container, "dave@example.com", "Dave")
        logged = client.post(
            "/transactions",
            headers=carol,
            json={"mode": "wasHelped", "contact": "dave@example.com", "hours": "1"},
        )
        tx_id = logged.json()["result"]["transaction_id"]

        # Act
        blank = client.post(f"/transactions/{tx_id}/dispute", headers=dave, json={"reason": " "})
        disputed = client.post(
            f"/transactions/{tx_id}/dispute", headers=dave, json={"reason": "Did not happen"}
        )

        # Assert
        assert blank.status_code == 422
        assert blank.json()["error"] == "validation_error"
        assert disputed.status_code == 200
        assert disputed.json()["dispute_reason"] == "Did not happen"
        assert client.get("/transactions/pending", headers=carol).json()["transactions"] == []

    def test_nudge_is_throttled(self, client, container):
        # Arrange
        carol = sign_up(client, container, "carol@example.com", "Carol")
        sign_up(client, container, "dave@example.com", "Dave")
        clock = resolve(client, container, FixedClock)
        logged = client.post(
            "/transactions",
            headers=carol,
            json={"mode": "helped", "contact": "dave@example.com", "hours": "1"},
        )
        tx_id = logged.json()["result"]["transaction_id"]

        # Act
        first = client.post(f"/transactions/{tx_id}/nudge", headers=carol)
        clock.advance(minutes=59)
        throttled = client.post(f"/transactions/{tx_id}/nudge", headers=carol)
        clock.advance(minutes=2)
        second = client.post(f"/transactions/{tx_id}/nudge", headers=carol)

        # Assert
        assert first.status_code == 200
        assert throttled.status_code == 429
        assert "Retry-After" in throttled.headers
        assert second.status_code == 200
        assert second.json()["nudge_count"] == 2


class TestInvitedFlow:
    """Alice logs time with Bob before Bob has an account."""

    def test_invite_accept_and_confirm(self, client, container):
        # Arrange
        alice = sign_up(client, container, "alice@example.com", "Alice")
        notifications = resolve(client, container, MockNotificationClient)

        # Act
        logged = client.post(
            "/transactions",
            headers=alice,
            json={"mode": "helped", "contact": "bob@example.com", "name": "Bob", "hours": "2"},
        )
        token = logged.json()["result"]["invitation_token"]
        landing = client.get(f"/invitations/{token}")
        bob = sign_up(client, container, "bob@example.com", "Bob")
        accepted = client.post(f"/invitations/{token}/accept", headers=bob)
        repeat = client.post(f"/invitations/{token}/accept", headers=bob)
        pending = client.get("/transactions/pending", headers=bob).json()["transactions"]
        confirmed = client.post(
            f"/transactions/{pending[0]['transaction_id']}/confirm", headers=bob
        )

        # Assert
        assert logged.status_code == 201
        assert logged.json()["result"]["kind"] == "invited"
        assert logged.json()["result"]["invite_url"].endswith(f"/invite/{token}")
        assert notifications.sent[0].kind == NotificationKind.INVITATION

        assert landing.status_code == 200
        assert landing.json()["inviter_name"] == "Alice"
        assert landing.json()["time_log"]["hours"] == 2.0

        assert accepted.status_code == 200
        assert accepted.json()["transaction_created"] is True
        assert repeat.json()["already_accepted"] is True
        assert len(pending) == 1
        assert pending[0]["can_confirm"] is True
        assert confirmed.status_code == 200
        assert client.get("/profiles/me/balance", headers=alice).json()["balance"] == 2.0

    def test_expired_invitation(self, client, container):
        # Arrange
        alice = sign_up(client, container, "alice@example.com", "Alice")
        clock = resolve(client, container, FixedClock)
        logged = client.post(
            "/transactions",
            headers=alice,
            json={"mode": "helped", "contact": "bob@example.com", "hours": "2"},
        )
        token = logged.json()["result"]["invitation_token"]
        clock.advance(days=8)

        # Act
        response = client.get(f"/invitations/{token}")

        # Assert
        assert response.status_code == 410
        assert response.json()["error"] == "expired"

    def test_unknown_invitation(self, client):
        response = client.get(f"/invitations/{'0' * 64}")
        assert response.status_code == 404


class TestAuthentication:
    """Session handling at the edge."""

    def test_missing_token(self, client):
        response = client.get("/profiles/me")
        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"

    def test_invalid_token(self, client):
        response = client.get("/profiles/me", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
