import pytest

from contactbook.modules.contacts.domain.models.contact import Contact
from contactbook.modules.user_management.domain.models.user import SubscriptionTier, User


def make_user(**kwargs) -> User:
    return User(email="ann@mailbox.com", password_hash="hash", **kwargs)


class TestUserSession:
    def test_new_user_has_no_session(self):
        user = make_user()
        assert not user.has_active_session()
        assert not user.has_active_session("any")

    def test_only_latest_token_is_live(self):
        user = make_user()
        user.start_session("first")
        user.start_session("second")

        assert user.has_active_session()
        assert user.has_active_session("second")
        assert not user.has_active_session("first")

    def test_end_session(self):
        user = make_user()
        user.start_session("token")
        user.end_session()
        assert not user.has_active_session("token")


class TestUserVerification:
    def test_mark_verified_consumes_token(self):
        user = make_user(verification_token="pending")
        user.mark_verified()

        assert user.verified
        assert user.verification_token is None

    def test_rotate_after_verification_is_refused(self):
        user = make_user(verified=True)
        with pytest.raises(ValueError):
            user.rotate_verification_token("new")


class TestUserChanges:
    def test_loaded_user_has_no_changes(self):
        assert make_user(session_token="token").pending_changes() == {}

    def test_only_touched_fields_are_pending(self):
        user = make_user(session_token="token")
        user.change_avatar("/avatars/x.png")

        changes = user.pending_changes()
        assert set(changes) == {"avatar_url", "updated_at"}
        assert changes["avatar_url"] == "/avatars/x.png"

    def test_verification_changes_both_fields(self):
        user = make_user(verification_token="pending")
        user.mark_verified()
        assert set(user.pending_changes()) == {"verified", "verification_token", "updated_at"}

    def test_clear_changes(self):
        user = make_user()
        user.end_session()
        user.clear_changes()
        assert user.pending_changes() == {}


def test_public_dict_hides_secrets():
    user = make_user(subscription=SubscriptionTier.PRO, avatar_url="/avatars/x.png")
    user.start_session("token")

    assert user.to_public_dict() == {
        "email": "ann@mailbox.com",
        "subscription": "pro",
        "avatarUrl": "/avatars/x.png",
    }


class TestContact:
    def test_apply_changes(self):
        contact = Contact(owner_id="owner", name="Bob")
        contact.apply_changes({"name": "Robert", "phone": "555-0100"})

        assert contact.name == "Robert"
        assert contact.phone == "555-0100"

    def test_owner_cannot_be_changed(self):
        contact = Contact(owner_id="owner", name="Bob")
        with pytest.raises(ValueError):
            contact.apply_changes({"owner_id": "someone-else"})
        assert contact.owner_id == "owner"

    def test_set_favorite(self):
        contact = Contact(owner_id="owner", name="Bob")
        contact.set_favorite(True)
        assert contact.favorite
