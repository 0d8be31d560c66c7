"""
storage.py — Browser-style local storage for the backend.
Every client gets a namespace of string keys holding text values; the
services above it keep their JSON collections under fixed keys
("moods", "emotions", "preferences", ...). Writes are last-write-wins.
"""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from fastapi import Header
from sqlalchemy.orm import sessionmaker

from tunimind import config
from tunimind.models.storage_item import StorageItem

logger = logging.getLogger(__name__)

# Keys of the implicit schema
MOODS_KEY = "moods"
EMOTIONS_KEY = "emotions"
PREFERENCES_KEY = "preferences"
USER_KEY = "user"
PROFILE_KEY = "profile"
USER_ID_KEY = "userId"
SPECIAL_ACCESS_KEY = "specialAccess"
REGISTERED_USERS_KEY = "registeredUsers"
CHAT_MESSAGES_KEY = "chatMessages"
EMOTION_HISTORY_KEY = "emotionHistory"
LAST_EMOTION_KEY = "tunimind-last-emotion"


def profile_key(user_id: str) -> str:
    return f"profile_{user_id}"


class LocalStorage(ABC):
    """Abstract key/value text store scoped to one namespace."""

    def __init__(self, namespace: str):
        self.namespace = namespace

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove_item(self, key: str) -> None:
        ...

    @abstractmethod
    def keys(self) -> list[str]:
        ...

    def clear(self):
        for key in self.keys():
            self.remove_item(key)

    # ------------------------------------------------------------------
    def get_json(self, key: str, default=None):
        """Parse the value under `key`; `default` when the key is missing.

        Malformed JSON raises ValueError, callers decide how to degrade.
        """
        raw = self.get_item(key)
        if raw is None:
            return default
        return json.loads(raw)

    def set_json(self, key: str, value) -> None:
        self.set_item(key, json.dumps(value, ensure_ascii=False))


class SqlStorage(LocalStorage):
    """Namespace stored as rows of the storage_items table."""

    def __init__(self, session_factory: sessionmaker, namespace: str):
        super().__init__(namespace)
        self._session_factory = session_factory

    def get_item(self, key: str) -> str | None:
        with self._session_factory() as db:
            row = db.query(StorageItem).filter_by(namespace=self.namespace, key=key).first()
            return row.value if row else None

    def set_item(self, key: str, value: str) -> None:
        with self._session_factory() as db:
            try:
                row = db.query(StorageItem).filter_by(namespace=self.namespace, key=key).first()
                if not row:
                    row = StorageItem(namespace=self.namespace, key=key)
                row.value = value
                row.updated_at = datetime.now(timezone.utc)
                db.add(row)
                db.commit()
            except Exception:
                db.rollback()
                raise

    def remove_item(self, key: str) -> None:
        with self._session_factory() as db:
            try:
                db.query(StorageItem).filter_by(namespace=self.namespace, key=key).delete()
                db.commit()
            except Exception:
                db.rollback()
                raise

    def keys(self) -> list[str]:
        with self._session_factory() as db:
            rows = db.query(StorageItem.key).filter_by(namespace=self.namespace).order_by(StorageItem.id).all()
            return [r[0] for r in rows]


class SupabaseStorage(LocalStorage):
    """Namespace stored in the same table, reached through PostgREST."""

    def __init__(self, namespace: str, table: str | None = None):
        super().__init__(namespace)
        self.table = table or config.SUPABASE_STORAGE_TABLE

    def get_item(self, key: str) -> str | None:
        from tunimind.supabase_rest import sb_select
        rows = sb_select(self.table, filters={"namespace": self.namespace, "key": key}, columns="value")
        return rows[0]["value"] if rows else None

    def set_item(self, key: str, value: str) -> None:
        from tunimind.supabase_rest import sb_upsert
        sb_upsert(self.table, {
            "namespace": self.namespace,
            "key": key,
            "value": value,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }, on_conflict="namespace,key")

    def remove_item(self, key: str) -> None:
        from tunimind.supabase_rest import sb_delete
        sb_delete(self.table, {"namespace": self.namespace, "key": key})

    def keys(self) -> list[str]:
        from tunimind.supabase_rest import sb_select
        rows = sb_select(self.table, filters={"namespace": self.namespace}, columns="key")
        return [r["key"] for r in rows]


def open_storage(namespace: str) -> LocalStorage:
    """Build the configured backend for `namespace`."""
    if config.STORAGE_BACKEND == "supabase":
        return SupabaseStorage(namespace)
    from tunimind.database import SessionLocal
    return SqlStorage(SessionLocal, namespace)


def get_storage(x_client_id: str | None = Header(default=None)) -> LocalStorage:
    """FastAPI dependency — the caller's namespace, picked by the X-Client-Id header."""
    namespace = (x_client_id or "").strip() or config.DEFAULT_CLIENT_ID
    return open_storage(namespace)
