from datetime import timedelta

import pytest

from contactbook.shared.core.security import PasswordHasher, SecurityManager, TokenType

from tests.helpers import build_settings


@pytest.fixture
def security(tmp_path):
    return SecurityManager(build_settings(tmp_path))


class TestPasswordHasher:
    def test_hash_and_verify(self):
        hasher = PasswordHasher(rounds=4)
        hashed = hasher.hash("correct horse")

        assert hashed != "correct horse"
        assert hasher.verify("correct horse", hashed)
        assert not hasher.verify("wrong horse", hashed)

    def test_same_password_gets_different_salts(self):
        hasher = PasswordHasher(rounds=4)
        assert hasher.hash("pw") != hasher.hash("pw")

    @pytest.mark.parametrize("stored", [None, "", "not-a-bcrypt-hash"])
    def test_missing_or_malformed_hash_fails_closed(self, stored):
        assert PasswordHasher(rounds=4).verify("pw", stored) is False


class TestTokens:
    def test_session_token_carries_user_id(self, security):
        token = security.create_token("user-1", TokenType.SESSION)
        claims = security.decode_token(token, TokenType.SESSION)

        assert claims["id"] == "user-1"
        assert "exp" in claims
        assert "jti" in claims

    @pytest.mark.parametrize(
        "token_type, hours",
        [(TokenType.SESSION, 12), (TokenType.VERIFICATION, 24)],
    )
    def test_token_lifetimes(self, security, token_type, hours):
        claims = security.decode_token(security.create_token("user-1", token_type), token_type)
        assert claims["exp"] - claims["iat"] == hours * 3600

    def test_tokens_for_same_user_are_distinct(self, security):
        first = security.create_token("user-1", TokenType.SESSION)
        second = security.create_token("user-1", TokenType.SESSION)
        assert first != second

    def test_expired_token_is_rejected(self, security):
        token = security.create_token("user-1", TokenType.SESSION, expires_delta=timedelta(seconds=-5))
        assert security.decode_token(token, TokenType.SESSION) is None

    def test_token_classes_do_not_cross(self, security):
        session = security.create_token("user-1", TokenType.SESSION)
        verification = security.create_token("user-1", TokenType.VERIFICATION)

        assert security.decode_token(session, TokenType.VERIFICATION) is None
        assert security.decode_token(verification, TokenType.SESSION) is None

    @pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c"])
    def test_malformed_tokens_are_rejected(self, security, token):
        assert security.decode_token(token, TokenType.SESSION) is None

    def test_tampered_token_is_rejected(self, security):
        token = security.create_token("user-1", TokenType.SESSION)
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[:-2] + ("AA" if signature[-2:] != "AA" else "BB")])
        assert security.decode_token(tampered, TokenType.SESSION) is None
