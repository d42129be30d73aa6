import pytest

from tests.helpers import auth_header

CONTACTS_URL = "/api/contacts"


@pytest.fixture
def owner(register):
    return auth_header(register("ann@mailbox.com"))


@pytest.fixture
def stranger(register):
    return auth_header(register("bob@mailbox.com"))


def create(client, headers, **fields):
    payload = {"name": "Carol", "email": "carol@mailbox.com", "phone": "555-0100", **fields}
    response = client.post(CONTACTS_URL, json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateAndRead:
    def test_create_contact(self, client, owner):
        contact = create(client, owner, favorite=True)

        assert contact["id"]
        assert contact["name"] == "Carol"
        assert contact["email"] == "carol@mailbox.com"
        assert contact["phone"] == "555-0100"
        assert contact["favorite"] is True
        assert contact["owner"]

    def test_owner_in_body_is_ignored(self, client, owner, stranger):
        created = create(client, owner, owner="someone-else")
        listed = client.get(CONTACTS_URL, headers=owner).json()
        assert [c["id"] for c in listed] == [created["id"]]
        assert client.get(CONTACTS_URL, headers=stranger).json() == []

    def test_name_is_required(self, client, owner):
        response = client.post(CONTACTS_URL, json={"email": "x@mailbox.com"}, headers=owner)
        assert response.status_code == 400
        assert response.json() == {"message": '"name" is required', "code": "VALIDATION"}

    def test_get_contact(self, client, owner):
        created = create(client, owner)
        response = client.get(f"{CONTACTS_URL}/{created['id']}", headers=owner)

        assert response.status_code == 200
        assert response.json() == created

    def test_missing_contact(self, client, owner):
        response = client.get(f"{CONTACTS_URL}/does-not-exist", headers=owner)
        assert response.status_code == 404
        assert response.json() == {"message": "Not found", "code": "NOT_FOUND"}

    def test_requires_authentication(self, client):
        assert client.get(CONTACTS_URL).status_code == 401
        assert client.post(CONTACTS_URL, json={"name": "Carol"}).status_code == 401


class TestListing:
    def test_pagination(self, client, owner):
        created = {create(client, owner, name=f"Contact {i}")["id"] for i in range(5)}

        first = client.get(CONTACTS_URL, params={"page": 1, "limit": 2}, headers=owner).json()
        second = client.get(CONTACTS_URL, params={"page": 2, "limit": 2}, headers=owner).json()
        third = client.get(CONTACTS_URL, params={"page": 3, "limit": 2}, headers=owner).json()
        beyond = client.get(CONTACTS_URL, params={"page": 4, "limit": 2}, headers=owner).json()

        assert [len(first), len(second), len(third), len(beyond)] == [2, 2, 1, 0]
        seen = [c["id"] for c in first + second + third]
        assert len(seen) == len(set(seen))
        assert set(seen) == created

    def test_favorite_filter(self, client, owner):
        starred = create(client, owner, name="Starred", favorite=True)
        create(client, owner, name="Plain")

        favorites = client.get(CONTACTS_URL, params={"favorite": "true"}, headers=owner).json()
        others = client.get(CONTACTS_URL, params={"favorite": "false"}, headers=owner).json()

        assert [c["id"] for c in favorites] == [starred["id"]]
        assert [c["name"] for c in others] == ["Plain"]

    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 101}, {"page": "x"}])
    def test_invalid_query(self, client, owner, params):
        response = client.get(CONTACTS_URL, params=params, headers=owner)
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION"


class TestUpdate:
    def test_partial_update(self, client, owner):
        created = create(client, owner)
        response = client.put(
            f"{CONTACTS_URL}/{created['id']}", json={"phone": "555-0199"}, headers=owner
        )

        assert response.status_code == 200
        body = response.json()
        assert body["phone"] == "555-0199"
        assert body["name"] == created["name"]
        assert body["email"] == created["email"]

    def test_avatar_url_can_be_set_and_changed(self, client, owner):
        created = create(client, owner, avatarUrl="https://img.mailbox.com/carol.png")
        assert created["avatarUrl"] == "https://img.mailbox.com/carol.png"

        response = client.put(
            f"{CONTACTS_URL}/{created['id']}",
            json={"avatarUrl": "https://img.mailbox.com/carol-2.png"},
            headers=owner,
        )

        assert response.status_code == 200
        assert response.json()["avatarUrl"] == "https://img.mailbox.com/carol-2.png"
        assert response.json()["phone"] == created["phone"]

    def test_empty_update_is_rejected(self, client, owner):
        created = create(client, owner)
        response = client.put(f"{CONTACTS_URL}/{created['id']}", json={}, headers=owner)

        assert response.status_code == 400
        assert response.json() == {"message": "missing fields", "code": "VALIDATION"}

    def test_null_name_is_rejected(self, client, owner):
        created = create(client, owner)
        response = client.put(f"{CONTACTS_URL}/{created['id']}", json={"name": None}, headers=owner)
        assert response.status_code == 400

    def test_update_missing_contact(self, client, owner):
        response = client.put(f"{CONTACTS_URL}/nope", json={"name": "X"}, headers=owner)
        assert response.status_code == 404

    def test_favorite_toggle(self, client, owner):
        created = create(client, owner)
        url = f"{CONTACTS_URL}/{created['id']}/favorite"

        response = client.patch(url, json={"favorite": True}, headers=owner)
        assert response.status_code == 200
        assert response.json()["favorite"] is True

        response = client.patch(url, json={"favorite": False}, headers=owner)
        assert response.json()["favorite"] is False

    @pytest.mark.parametrize("payload", [{}, {"favorite": None}, {"favorite": "maybe"}])
    def test_favorite_requires_boolean(self, client, owner, payload):
        created = create(client, owner)
        response = client.patch(f"{CONTACTS_URL}/{created['id']}/favorite", json=payload, headers=owner)

        assert response.status_code == 400
        assert response.json() == {"message": "missing field favorite", "code": "VALIDATION"}


class TestDelete:
    def test_delete_contact(self, client, owner):
        created = create(client, owner)

        response = client.delete(f"{CONTACTS_URL}/{created['id']}", headers=owner)
        assert response.status_code == 200
        assert response.json() == {"message": "contact deleted"}

        assert client.get(f"{CONTACTS_URL}/{created['id']}", headers=owner).status_code == 404
        assert client.delete(f"{CONTACTS_URL}/{created['id']}", headers=owner).status_code == 404


class TestOwnership:
    def test_foreign_contact_looks_missing(self, client, owner, stranger):
        created = create(client, owner)
        url = f"{CONTACTS_URL}/{created['id']}"

        assert client.get(url, headers=stranger).status_code == 404
        assert client.put(url, json={"name": "Mallory"}, headers=stranger).status_code == 404
        assert client.patch(f"{url}/favorite", json={"favorite": True}, headers=stranger).status_code == 404
        assert client.delete(url, headers=stranger).status_code == 404

        unchanged = client.get(url, headers=owner).json()
        assert unchanged == created
