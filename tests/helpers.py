"""Helpers shared by the test modules."""

import io
from typing import List

from fastapi.testclient import TestClient
from PIL import Image

from contactbook.shared.config.settings import Settings
from contactbook.shared.infrastructure.external_apis.email_client import EmailClient, EmailMessage

PASSWORD = "s3cret-pass"


class RecordingEmailClient(EmailClient):
    """Keeps outgoing messages in memory instead of sending them."""

    def __init__(self):
        self.messages: List[EmailMessage] = []

    async def send(self, message: EmailMessage) -> None:
        self.messages.append(message)

    def last_token_for(self, email: str) -> str:
        message = [m for m in self.messages if m.to == email][-1]
        return message.text.rsplit("/verify/", 1)[1].strip()


def build_settings(tmp_path, **overrides) -> Settings:
    values = dict(
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
        LOG_FORMAT="text",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'contactbook.db'}",
        AUTH_SECRET="test-auth-secret",
        VERIFICATION_SECRET="test-verification-secret",
        BCRYPT_ROUNDS=4,
        EMAIL_BACKEND="console",
        TMP_DIR=str(tmp_path / "tmp"),
        AVATARS_DIR=str(tmp_path / "public" / "avatars"),
        RATE_LIMIT_ENABLED=False,
    )
    values.update(overrides)
    return Settings(**values)


def signup(client: TestClient, email: str, password: str = PASSWORD, **extra):
    return client.post("/api/users/signup", json={"email": email, "password": password, **extra})


def login(client: TestClient, email: str, password: str = PASSWORD) -> str:
    response = client.post("/api/users/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def image_bytes(image_format: str = "PNG", size=(640, 480), color=(200, 40, 40)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=image_format)
    return buffer.getvalue()
