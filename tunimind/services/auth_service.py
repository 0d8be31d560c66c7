"""
auth_service.py — Local account registry
A development stand-in for real authentication: registered users live in
the namespace's "registeredUsers" list and the session is simply the
"user"/"userId"/"specialAccess" keys. Passwords are kept as bcrypt hashes.
There are no tokens and no session expiry.
"""

import logging
import time
from datetime import datetime, timezone

from tunimind import config
from tunimind.auth import hash_password, verify_password
from tunimind.exceptions import AccountExistsError, AccountNotFoundError, NotAuthenticatedError
from tunimind.storage import (
    LocalStorage,
    REGISTERED_USERS_KEY,
    USER_KEY,
    USER_ID_KEY,
    PROFILE_KEY,
    SPECIAL_ACCESS_KEY,
    profile_key,
)

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "bio", "profile_image_url")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _public_user(user: dict) -> dict:
    return {k: v for k, v in user.items() if k not in ("password", "password_hash")}


def _new_profile(user: dict, bio: str | None = None, image: str | None = None) -> dict:
    now = _now_iso()
    return {
        "id": user["id"],
        "email": user["email"],
        "name": (user.get("user_metadata") or {}).get("name"),
        "bio": bio,
        "profile_image_url": image,
        "created_at": now,
        "updated_at": now,
    }


class AuthService:
    def __init__(self, storage: LocalStorage):
        self.storage = storage

    # ── Registry ──────────────────────────────────────────────────
    def registered_users(self) -> list[dict]:
        try:
            users = self.storage.get_json(REGISTERED_USERS_KEY, [])
            return users if isinstance(users, list) else []
        except Exception as e:
            logger.error(f"Error getting registered users: {e}")
            return []

    def find_user_by_email(self, email: str) -> dict | None:
        for user in self.registered_users():
            if isinstance(user, dict) and user.get("email") == email:
                return user
        return None

    def _register(self, user: dict) -> None:
        users = self.registered_users()
        users.append(user)
        self.storage.set_json(REGISTERED_USERS_KEY, users)

    def ensure_registry(self) -> None:
        """Seed the demo account and its profile if this namespace has not seen it yet."""
        if self.find_user_by_email(config.SPECIAL_USER_EMAIL):
            return
        special = {
            "id": config.SPECIAL_USER_ID,
            "email": config.SPECIAL_USER_EMAIL,
            "password_hash": hash_password(config.SPECIAL_USER_PASSWORD),
            "user_metadata": {"name": config.SPECIAL_USER_NAME, "specialAccess": True},
        }
        self._register(special)
        if self.storage.get_item(profile_key(special["id"])) is None:
            profile = _new_profile(special, bio=config.SPECIAL_USER_BIO, image=config.SPECIAL_USER_IMAGE)
            self.storage.set_json(profile_key(special["id"]), profile)
        logger.info("Seeded demo account in namespace %s", self.storage.namespace)

    # ── Session ───────────────────────────────────────────────────
    def _start_session(self, user: dict, profile: dict, special: bool) -> None:
        self.storage.set_json(USER_KEY, _public_user(user))
        self.storage.set_item(USER_ID_KEY, user["id"])
        self.storage.set_item(SPECIAL_ACCESS_KEY, "true" if special else "false")
        self.storage.set_json(PROFILE_KEY, profile)

    def _stored_profile(self, user: dict, special: bool) -> dict:
        try:
            profile = self.storage.get_json(profile_key(user["id"]))
        except ValueError:
            profile = None
        if isinstance(profile, dict):
            return profile
        if special:
            profile = _new_profile(user, bio=config.SPECIAL_USER_BIO, image=config.SPECIAL_USER_IMAGE)
        else:
            profile = _new_profile(user)
        self.storage.set_json(profile_key(user["id"]), profile)
        return profile

    def sign_up(self, email: str, password: str, name: str | None = None,
                profile_image: str | None = None) -> dict:
        self.ensure_registry()
        if self.find_user_by_email(email):
            raise AccountExistsError("An account with this email already exists. Please log in instead.")

        user = {
            "id": f"user_{int(time.time() * 1000)}",
            "email": email,
            "password_hash": hash_password(password),
            "user_metadata": {"name": name},
        }
        self._register(user)

        profile = _new_profile(user, image=profile_image)
        self.storage.set_json(profile_key(user["id"]), profile)
        self._start_session(user, profile, special=False)

        logger.info(f"Registered {user['id']}")
        return {"user": _public_user(user), "profile": profile}

    def sign_in(self, email: str, password: str) -> bool:
        self.ensure_registry()
        user = self.find_user_by_email(email)
        special = bool(user and (user.get("user_metadata") or {}).get("specialAccess"))
        if not special:
            self.storage.set_item(SPECIAL_ACCESS_KEY, "false")

        if not user or not verify_password(password, user.get("password_hash", "")):
            logger.warning("Failed sign-in attempt")
            return False

        self._start_session(user, self._stored_profile(user, special), special)
        return True

    def logout(self) -> None:
        for key in (USER_KEY, PROFILE_KEY, USER_ID_KEY, SPECIAL_ACCESS_KEY):
            self.storage.remove_item(key)

    def reset_password(self, email: str) -> None:
        """Acknowledges a reset request; no mail is sent."""
        if not self.find_user_by_email(email):
            raise AccountNotFoundError("No account exists with this email address.")

    def current_session(self) -> dict | None:
        """Signed-in user and profile, creating a default profile when it went missing."""
        try:
            user = self.storage.get_json(USER_KEY)
        except ValueError as e:
            logger.error(f"Error parsing stored user: {e}")
            return None
        if not isinstance(user, dict):
            return None

        try:
            profile = self.storage.get_json(PROFILE_KEY)
        except ValueError:
            profile = None
        if not isinstance(profile, dict):
            profile = _new_profile(user)
            self.storage.set_json(PROFILE_KEY, profile)

        return {
            "user": user,
            "profile": profile,
            "special_access": self.storage.get_item(SPECIAL_ACCESS_KEY) == "true",
        }

    def update_profile(self, changes: dict) -> dict:
        """Apply the supplied name/bio/profile_image_url fields to the signed-in user."""
        session = self.current_session()
        if not session:
            raise NotAuthenticatedError("No user logged in")

        user, profile = session["user"], session["profile"]
        changes = {k: v for k, v in changes.items() if k in PROFILE_FIELDS}

        if "name" in changes:
            user["user_metadata"] = {**(user.get("user_metadata") or {}), "name": changes["name"]}
        profile = {**profile, **changes, "updated_at": _now_iso()}

        self.storage.set_json(USER_KEY, user)
        self.storage.set_json(PROFILE_KEY, profile)
        self.storage.set_json(profile_key(user["id"]), profile)
        return profile
