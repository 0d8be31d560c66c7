import logging

import bcrypt

from tunimind.storage import LocalStorage, USER_ID_KEY, SPECIAL_ACCESS_KEY

logger = logging.getLogger(__name__)

ANONYMOUS_USER_ID = "anonymous"


def hash_password(password: str) -> str:
    """Hash a plain-text password using bcrypt."""
    # Ensure it doesn't exceed 72 bytes to prevent bcrypt ValueError
    pw_bytes = password.encode('utf-8')[:72]
    hashed = bcrypt.hashpw(pw_bytes, bcrypt.gensalt())
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain-text password against a bcrypt hash."""
    try:
        pw_bytes = plain_password.encode('utf-8')[:72]
        hash_bytes = hashed_password.encode('utf-8')
        return bcrypt.checkpw(pw_bytes, hash_bytes)
    except Exception as e:
        logger.error(f"Bcrypt verification error: {e}")
        return False


def current_user_id(storage: LocalStorage) -> str:
    """The namespace's signed-in user, or "anonymous"."""
    return storage.get_item(USER_ID_KEY) or ANONYMOUS_USER_ID


def has_special_access(storage: LocalStorage) -> bool:
    return storage.get_item(SPECIAL_ACCESS_KEY) == "true"
