from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from contactbook.main import create_application
from contactbook.modules.user_management.infrastructure.database.user_repository_impl import (
    UserRepositoryImpl,
)
from contactbook.shared.core.exceptions import ExternalServiceError
from contactbook.shared.core.security import TokenType
from contactbook.shared.infrastructure.external_apis.email_client import EmailClient

from tests.helpers import PASSWORD, auth_header, build_settings, login, signup

EMAIL = "ann@mailbox.com"


def error_body(response):
    body = response.json()
    assert set(body) == {"message", "code"}
    return body


class TestSignup:
    def test_signup_creates_unverified_user_and_sends_link(self, client, mailbox):
        response = signup(client, EMAIL)

        assert response.status_code == 201
        user = response.json()["user"]
        assert user["email"] == EMAIL
        assert user["subscription"] == "starter"
        assert user["avatarUrl"].startswith("https://www.gravatar.com/avatar/")
        assert "password" not in response.text
        assert "token" not in response.text

        assert len(mailbox.messages) == 1
        message = mailbox.messages[0]
        assert message.to == EMAIL
        assert message.subject == "Verify your email"
        assert "/api/users/verify/" in message.text

    def test_signup_with_requested_subscription(self, client):
        response = signup(client, EMAIL, subscription="pro")
        assert response.status_code == 201
        assert response.json()["user"]["subscription"] == "pro"

    def test_duplicate_email_is_a_conflict(self, client):
        signup(client, EMAIL)
        response = signup(client, EMAIL)

        assert response.status_code == 409
        assert error_body(response) == {"message": "Email in use", "code": "CONFLICT"}

    def test_conflict_wins_over_invalid_body(self, client):
        signup(client, EMAIL)
        response = client.post("/api/users/signup", json={"email": EMAIL, "subscription": "gold"})
        assert response.status_code == 409

    @pytest.mark.parametrize(
        "payload, message",
        [
            ({"email": EMAIL}, '"password" is required'),
            ({"password": PASSWORD}, '"email" is required'),
            ({"email": EMAIL, "password": ""}, None),
            ({"email": "ann@mailbox.org", "password": PASSWORD}, None),
            ({"email": "not-an-email", "password": PASSWORD}, None),
            ({"email": EMAIL, "password": PASSWORD, "subscription": "gold"}, None),
        ],
    )
    def test_invalid_bodies_are_rejected(self, client, mailbox, payload, message):
        response = client.post("/api/users/signup", json=payload)

        assert response.status_code == 400
        body = error_body(response)
        assert body["code"] == "VALIDATION"
        if message:
            assert body["message"] == message
        assert mailbox.messages == []

    def test_empty_body_is_rejected(self, client):
        response = client.post("/api/users/signup")
        assert response.status_code == 400
        assert error_body(response)["code"] == "VALIDATION"

    def test_failed_email_delivery_is_reported(self, tmp_path):
        class FailingEmailClient(EmailClient):
            async def send(self, message):
                raise ExternalServiceError("Email delivery failed", service_name="test")

        app = create_application(build_settings(tmp_path))
        app.state.email_client = FailingEmailClient()
        with TestClient(app) as client:
            response = signup(client, EMAIL)

        assert response.status_code == 500
        assert error_body(response)["code"] == "UPSTREAM_FAILURE"


class TestVerification:
    def test_verification_is_one_shot(self, client, mailbox):
        signup(client, EMAIL)
        token = mailbox.last_token_for(EMAIL)

        first = client.get(f"/api/users/verify/{token}")
        assert first.status_code == 200
        assert first.json() == {"message": "Verification successful"}

        second = client.get(f"/api/users/verify/{token}")
        assert second.status_code == 404
        assert error_body(second) == {
            "message": "User not found or already verified",
            "code": "NOT_FOUND",
        }

    def test_unknown_token(self, client):
        response = client.get("/api/users/verify/not-a-real-token")
        assert response.status_code == 404

    def test_resend_requires_email(self, client):
        response = client.post("/api/users/verify-resend", json={})
        assert response.status_code == 400
        assert error_body(response)["message"] == "missing required field email"

    def test_resend_for_unknown_user(self, client):
        response = client.post("/api/users/verify-resend", json={"email": EMAIL})
        assert response.status_code == 404
        assert error_body(response)["message"] == "User not found"

    def test_resend_rotates_token(self, client, mailbox):
        signup(client, EMAIL)
        old_token = mailbox.last_token_for(EMAIL)

        response = client.post("/api/users/verify-resend", json={"email": EMAIL})
        assert response.status_code == 200
        assert response.json() == {"message": "Verification email sent"}

        new_token = mailbox.last_token_for(EMAIL)
        assert new_token != old_token
        assert len(mailbox.messages) == 2
        assert client.get(f"/api/users/verify/{old_token}").status_code == 404
        assert client.get(f"/api/users/verify/{new_token}").status_code == 200

    def test_resend_after_verification(self, client, register):
        register(EMAIL)
        response = client.post("/api/users/verify-resend", json={"email": EMAIL})

        assert response.status_code == 400
        assert error_body(response)["message"] == "Verification has already been passed"


class TestLogin:
    def test_login_returns_token_and_user(self, client, register):
        register(EMAIL)
        response = client.post("/api/users/login", json={"email": EMAIL, "password": PASSWORD})

        assert response.status_code == 200
        body = response.json()
        assert body["token"]
        assert body["user"] == {"email": EMAIL, "subscription": "starter"}

    def test_unknown_email(self, client):
        response = client.post("/api/users/login", json={"email": EMAIL, "password": PASSWORD})
        assert response.status_code == 401
        assert error_body(response) == {
            "message": "User with this email doesn't exist",
            "code": "UNAUTHORIZED",
        }

    def test_wrong_password(self, client, register):
        register(EMAIL)
        response = client.post("/api/users/login", json={"email": EMAIL, "password": "nope"})
        assert response.status_code == 401
        assert error_body(response)["message"] == "Incorrect password"

    def test_login_is_not_gated_on_verification(self, client):
        signup(client, EMAIL)
        assert login(client, EMAIL)

    def test_invalid_body(self, client):
        response = client.post("/api/users/login", json={"email": EMAIL})
        assert response.status_code == 400


class TestSession:
    def test_current_user(self, client, register):
        token = register(EMAIL)
        response = client.get("/api/users/current", headers=auth_header(token))

        assert response.status_code == 200
        body = response.json()
        assert body["email"] == EMAIL
        assert body["subscription"] == "starter"
        assert "avatarUrl" in body

    @pytest.mark.parametrize(
        "headers",
        [
            {},
            {"Authorization": "Bearer"},
            {"Authorization": "Bearer garbage"},
            {"Authorization": "Basic dXNlcjpwdw=="},
        ],
    )
    def test_rejects_missing_or_invalid_token(self, client, headers):
        response = client.get("/api/users/current", headers=headers)
        assert response.status_code == 401
        assert error_body(response) == {"message": "Not authorized", "code": "UNAUTHORIZED"}

    def test_logout_revokes_token(self, client, register):
        token = register(EMAIL)

        response = client.get("/api/users/logout", headers=auth_header(token))
        assert response.status_code == 204
        assert response.content == b""

        assert client.get("/api/users/current", headers=auth_header(token)).status_code == 401
        assert client.get("/api/users/logout", headers=auth_header(token)).status_code == 401

    def test_new_login_replaces_previous_session(self, client, register):
        first = register(EMAIL)
        second = login(client, EMAIL)

        assert client.get("/api/users/current", headers=auth_header(first)).status_code == 401
        assert client.get("/api/users/current", headers=auth_header(second)).status_code == 200

    def test_expired_session_token_is_rejected(self, client, app, register):
        register(EMAIL)

        async def store_expired_session() -> str:
            async with app.state.session_manager.get_session() as session:
                repository = UserRepositoryImpl(session)
                user = await repository.get_by_email(EMAIL)
                token = app.state.security.create_token(
                    user.user_id, TokenType.SESSION, expires_delta=timedelta(seconds=-5)
                )
                user.start_session(token)
                await repository.update(user)
                return token

        expired = client.portal.call(store_expired_session)
        response = client.get("/api/users/current", headers=auth_header(expired))

        assert response.status_code == 401
        assert error_body(response) == {"message": "Not authorized", "code": "UNAUTHORIZED"}

    def test_token_for_deleted_user_is_rejected(self, client, app):
        token = app.state.security.create_token("no-such-user", TokenType.SESSION)
        response = client.get("/api/users/current", headers=auth_header(token))
        assert response.status_code == 401


class TestSubscription:
    def test_change_subscription(self, client, register):
        token = register(EMAIL)
        response = client.patch("/api/users", json={"subscription": "business"}, headers=auth_header(token))

        assert response.status_code == 200
        assert response.json() == {"email": EMAIL, "subscription": "business"}
        current = client.get("/api/users/current", headers=auth_header(token)).json()
        assert current["subscription"] == "business"

    @pytest.mark.parametrize("payload", [{}, {"subscription": "gold"}, {"subscription": None}])
    def test_invalid_subscription(self, client, register, payload):
        token = register(EMAIL)
        response = client.patch("/api/users", json=payload, headers=auth_header(token))

        assert response.status_code == 400
        assert error_body(response)["message"] == "Invalid subscription type"

    def test_requires_token(self, client):
        response = client.patch("/api/users", json={"subscription": "pro"})
        assert response.status_code == 401

    def test_signature_only_check_accepts_logged_out_token(self, client, register):
        token = register(EMAIL)
        client.get("/api/users/logout", headers=auth_header(token))

        response = client.patch("/api/users", json={"subscription": "pro"}, headers=auth_header(token))
        assert response.status_code == 200


class TestRateLimiting:
    def test_auth_endpoints_are_rate_limited(self, tmp_path):
        settings = build_settings(tmp_path, RATE_LIMIT_ENABLED=True, AUTH_RATE_LIMIT="2/minute")
        with TestClient(create_application(settings)) as client:
            statuses = [client.post("/api/users/login", json={}).status_code for _ in range(3)]
            limited = client.post("/api/users/login", json={})

        assert statuses == [400, 400, 429]
        assert limited.status_code == 429
        assert limited.json()["code"] == "RATE_LIMITED"

    def test_limits_belong_to_each_application(self, tmp_path):
        for name in ("strict", "relaxed"):
            (tmp_path / name).mkdir()
        strict = create_application(
            build_settings(tmp_path / "strict", RATE_LIMIT_ENABLED=True, AUTH_RATE_LIMIT="1/minute")
        )
        relaxed = create_application(build_settings(tmp_path / "relaxed"))

        with TestClient(strict) as strict_client, TestClient(relaxed) as relaxed_client:
            strict_statuses = [strict_client.post("/api/users/login", json={}).status_code for _ in range(2)]
            relaxed_statuses = [relaxed_client.post("/api/users/login", json={}).status_code for _ in range(3)]

        assert strict_statuses == [400, 429]
        assert relaxed_statuses == [400, 400, 400]

    def test_signup_and_login_have_separate_budgets(self, tmp_path):
        settings = build_settings(tmp_path, RATE_LIMIT_ENABLED=True, AUTH_RATE_LIMIT="1/minute")
        with TestClient(create_application(settings)) as client:
            assert client.post("/api/users/login", json={}).status_code == 400
            assert client.post("/api/users/signup", json={}).status_code == 400
            assert client.post("/api/users/login", json={}).status_code == 429
