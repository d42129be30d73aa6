"""Shared fixtures: an application wired to a throwaway SQLite database and directories."""

import pytest
from fastapi.testclient import TestClient

from contactbook.main import create_application
from contactbook.shared.config.settings import Settings

from tests.helpers import PASSWORD, RecordingEmailClient, build_settings, login, signup


@pytest.fixture
def settings(tmp_path) -> Settings:
    return build_settings(tmp_path)


@pytest.fixture
def mailbox() -> RecordingEmailClient:
    return RecordingEmailClient()


@pytest.fixture
def app(settings, mailbox):
    application = create_application(settings)
    application.state.email_client = mailbox
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client, mailbox):
    """Sign up, verify and log in a user; returns the session token."""

    def _register(email: str = "ann@mailbox.com", password: str = PASSWORD) -> str:
        response = signup(client, email, password)
        assert response.status_code == 201, response.text
        token = mailbox.last_token_for(email)
        assert client.get(f"/api/users/verify/{token}").status_code == 200
        return login(client, email, password)

    return _register
