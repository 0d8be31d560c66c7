import pytest

from tunimind import config
from tunimind.auth import hash_password, verify_password
from tunimind.exceptions import AccountExistsError, AccountNotFoundError, NotAuthenticatedError
from tunimind.services.auth_service import AuthService


@pytest.fixture
def auth(storage):
    return AuthService(storage)


def test_hash_password():
    hashed = hash_password("secret")
    assert hashed != "secret"
    assert verify_password("secret", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("secret", "not-a-hash")


def test_ensure_registry_seeds_demo_account_once(auth, storage):
    auth.ensure_registry()
    auth.ensure_registry()

    users = auth.registered_users()
    assert len(users) == 1
    assert users[0]["email"] == config.SPECIAL_USER_EMAIL
    assert users[0]["user_metadata"]["specialAccess"] is True
    assert "password" not in users[0]
    assert storage.get_json(f"profile_{config.SPECIAL_USER_ID}")["bio"] == config.SPECIAL_USER_BIO


def test_demo_sign_in_grants_special_access(auth, storage):
    assert auth.sign_in(config.SPECIAL_USER_EMAIL, config.SPECIAL_USER_PASSWORD) is True

    assert storage.get_item("userId") == config.SPECIAL_USER_ID
    assert storage.get_item("specialAccess") == "true"
    session = auth.current_session()
    assert session["special_access"] is True
    assert "password_hash" not in session["user"]


def test_sign_up_starts_session(auth, storage):
    result = auth.sign_up("student@example.tn", "pw123", name="Amira")

    user = result["user"]
    assert user["id"].startswith("user_")
    assert "password_hash" not in user
    assert result["profile"]["name"] == "Amira"
    assert storage.get_item("userId") == user["id"]
    assert storage.get_item("specialAccess") == "false"

    stored = auth.find_user_by_email("student@example.tn")
    assert stored["password_hash"] != "pw123"


def test_sign_up_rejects_existing_email(auth):
    auth.sign_up("student@example.tn", "pw123")
    with pytest.raises(AccountExistsError):
        auth.sign_up("student@example.tn", "other")
    with pytest.raises(AccountExistsError):
        auth.sign_up(config.SPECIAL_USER_EMAIL, "other")


def test_sign_in_with_bad_credentials(auth, storage):
    auth.sign_up("student@example.tn", "pw123")
    auth.logout()

    assert auth.sign_in("student@example.tn", "nope") is False
    assert auth.sign_in("nobody@example.tn", "pw123") is False
    assert storage.get_item("specialAccess") == "false"
    assert storage.get_item("userId") is None


def test_sign_in_restores_stored_profile(auth):
    auth.sign_up("student@example.tn", "pw123", name="Amira")
    auth.update_profile({"bio": "Engineering student"})
    auth.logout()

    assert auth.sign_in("student@example.tn", "pw123")
    assert auth.current_session()["profile"]["bio"] == "Engineering student"


def test_logout_clears_session_keys(auth, storage):
    auth.sign_up("student@example.tn", "pw123")
    auth.logout()

    for key in ("user", "profile", "userId", "specialAccess"):
        assert storage.get_item(key) is None
    assert auth.current_session() is None
    # the registry survives
    assert auth.find_user_by_email("student@example.tn")


def test_reset_password(auth):
    auth.ensure_registry()
    auth.reset_password(config.SPECIAL_USER_EMAIL)
    with pytest.raises(AccountNotFoundError):
        auth.reset_password("nobody@example.tn")


def test_update_profile(auth, storage):
    with pytest.raises(NotAuthenticatedError):
        auth.update_profile({"name": "X"})

    user = auth.sign_up("student@example.tn", "pw123", name="Amira")["user"]
    profile = auth.update_profile({"name": "Amira B.", "bio": "Hi", "email": "ignored@example.tn"})

    assert profile["name"] == "Amira B."
    assert profile["email"] == "student@example.tn"
    assert storage.get_json("user")["user_metadata"]["name"] == "Amira B."
    assert storage.get_json(f"profile_{user['id']}")["bio"] == "Hi"
