"""
data_service.py — Mood & emotion record store
Reads and writes the per-namespace JSON collections ("moods", "emotions",
"preferences"), scoping every query to the signed-in user. The demo
account additionally sees generated sample records.

Reads are best-effort: unreadable storage is logged and treated as "no
data". Writes propagate their errors.
"""

import logging
import random
import uuid
from datetime import datetime, timezone

from pydantic import ValidationError

from tunimind.auth import current_user_id, has_special_access
from tunimind.exceptions import DataFormatError, MoodNotFoundError
from tunimind.services.sample_data import (
    generate_sample_mood_data,
    generate_sample_emotion_data,
    generate_mood_data,
    utc_today,
)
from tunimind.schemas.emotion_schemas import EmotionImport
from tunimind.schemas.mood_schemas import MoodImport
from tunimind.storage import LocalStorage, MOODS_KEY, EMOTIONS_KEY, PREFERENCES_KEY

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return f"local-{uuid.uuid4().hex[:16]}"


def _newest_first(records: list[dict], field: str = "date") -> list[dict]:
    # sorted() is stable, so records earlier in the list win ties
    return sorted(records, key=lambda r: str(r.get(field) or ""), reverse=True)


def _unique_by_date(records: list[dict]) -> list[dict]:
    seen = set()
    unique = []
    for record in records:
        if record.get("date") in seen:
            continue
        seen.add(record.get("date"))
        unique.append(record)
    return unique


def _validate_records(records: list, schema, name: str) -> list[dict]:
    """Check every imported record against `schema`; extra fields are kept."""
    validated = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise DataFormatError(f"Invalid data format: {name} must be objects")
        try:
            validated.append(schema.model_validate(record).model_dump())
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"])
            raise DataFormatError(f"Invalid data format: {name}[{index}].{field}: {error['msg']}")
    return validated


class DataService:
    """Record store accessor bound to one storage namespace."""

    def __init__(self, storage: LocalStorage, rng: random.Random | None = None):
        self.storage = storage
        self.rng = rng or random.Random()

    @property
    def user_id(self) -> str:
        return current_user_id(self.storage)

    @property
    def special_access(self) -> bool:
        return has_special_access(self.storage)

    # ------------------------------------------------------------------
    def _load_list(self, key: str) -> list:
        value = self.storage.get_json(key, [])
        if not isinstance(value, list):
            raise ValueError(f"'{key}' does not hold a list")
        return value

    def _load_user_records(self, key: str, user_id: str) -> list[dict]:
        try:
            records = self._load_list(key)
        except ValueError as e:
            logger.error(f"Error parsing {key} data: {e}")
            records = []
        return [r for r in records if isinstance(r, dict) and r.get("user_id") == user_id]

    def _query(self, key: str, limit: int, sample_factory) -> list[dict]:
        user_id = self.user_id
        records = self._load_user_records(key, user_id)
        limit = max(limit, 0)

        if self.special_access:
            sample = sample_factory(user_id, rng=self.rng)
            # Real records come first so they survive the date de-duplication
            combined = _unique_by_date(_newest_first(records + sample))
            return combined[:limit]

        return _newest_first(records)[:limit]

    # ------------------------------------------------------------------
    def get_moods(self, limit: int = 30) -> list[dict]:
        """Current user's moods, newest first."""
        try:
            return self._query(MOODS_KEY, limit, generate_sample_mood_data)
        except Exception as e:
            logger.error(f"Error fetching moods: {e}")
            return []

    def get_emotions(self, limit: int = 30) -> list[dict]:
        """Current user's emotions, newest first."""
        try:
            return self._query(EMOTIONS_KEY, limit, generate_sample_emotion_data)
        except Exception as e:
            logger.error(f"Error fetching emotions: {e}")
            return []

    def get_recent_emotions(self, limit: int = 20) -> list[dict]:
        """Current user's stored emotions by detection time, without sample data."""
        try:
            records = self._load_user_records(EMOTIONS_KEY, self.user_id)
            return _newest_first(records, field="created_at")[:max(limit, 0)]
        except Exception as e:
            logger.error(f"Error fetching emotions: {e}")
            return []

    # ------------------------------------------------------------------
    def save_mood(self, entry: dict) -> dict:
        """Upsert the current user's mood for entry["date"]."""
        try:
            user_id = self.user_id
            moods = self._load_list(MOODS_KEY)
            fields = {k: v for k, v in entry.items() if k not in ("id", "user_id")}
            now = _now_iso()

            for index, mood in enumerate(moods):
                if isinstance(mood, dict) and mood.get("date") == fields.get("date") and mood.get("user_id") == user_id:
                    record = {**mood, **fields, "user_id": user_id, "updated_at": now}
                    moods[index] = record
                    break
            else:
                record = {**fields, "id": _new_id(), "user_id": user_id, "created_at": now}
                moods.append(record)

            self.storage.set_json(MOODS_KEY, moods)
            return record
        except Exception as e:
            logger.error(f"Error saving mood: {e}")
            raise

    def add_mood(self, entry: dict) -> dict:
        """Prepend a mood without the same-day check."""
        moods = self._load_list(MOODS_KEY)
        record = {**entry, "id": _new_id(), "user_id": self.user_id, "created_at": _now_iso()}
        self.storage.set_json(MOODS_KEY, [record, *moods])
        return record

    def update_mood(self, mood_id: str, fields: dict) -> dict:
        user_id = self.user_id
        moods = self._load_list(MOODS_KEY)
        for index, mood in enumerate(moods):
            if isinstance(mood, dict) and mood.get("id") == mood_id and mood.get("user_id") == user_id:
                changes = {k: v for k, v in fields.items() if k not in ("id", "user_id")}
                moods[index] = {**mood, **changes, "updated_at": _now_iso()}
                self.storage.set_json(MOODS_KEY, moods)
                return moods[index]
        raise MoodNotFoundError("Mood not found")

    def delete_mood(self, mood_id: str) -> bool:
        """Remove the current user's mood with this id. Returns whether one was removed."""
        user_id = self.user_id
        moods = self._load_list(MOODS_KEY)
        kept = [m for m in moods if not (isinstance(m, dict) and m.get("id") == mood_id and m.get("user_id") == user_id)]
        self.storage.set_json(MOODS_KEY, kept)
        return len(kept) != len(moods)

    def add_emotion(self, entry: dict) -> dict:
        emotions = self._load_list(EMOTIONS_KEY)
        record = {**entry, "id": _new_id(), "user_id": self.user_id, "created_at": _now_iso()}
        self.storage.set_json(EMOTIONS_KEY, [record, *emotions])
        return record

    def save_emotion(self, data: dict) -> dict:
        """Append a detection result for the current user."""
        emotions = self._load_list(EMOTIONS_KEY)
        record = {
            "id": _new_id(),
            "date": utc_today().isoformat(),
            **data,
            "user_id": self.user_id,
            "created_at": _now_iso(),
        }
        emotions.append(record)
        self.storage.set_json(EMOTIONS_KEY, emotions)
        return record

    @staticmethod
    def upload_emotion_image(timestamp: str, extension: str = "png") -> dict:
        """Placeholder upload: no bytes are kept, only a path and a placeholder URL."""
        file_name = f"emotion-{timestamp}.{extension}"
        return {
            "path": f"emotions/{file_name}",
            "url": f"/placeholder.svg?height=480&width=640&text=Emotion+{timestamp}",
            "name": file_name,
        }

    # ------------------------------------------------------------------
    def _load_preferences(self) -> dict:
        value = self.storage.get_json(PREFERENCES_KEY, {})
        if not isinstance(value, dict):
            raise ValueError("'preferences' does not hold an object")
        return value

    def save_preference(self, key: str, value) -> dict:
        preferences = self._load_preferences()
        preferences.setdefault(self.user_id, {})[key] = value
        self.storage.set_json(PREFERENCES_KEY, preferences)
        return {"key": key, "value": value}

    def get_preference(self, key: str):
        try:
            return self._load_preferences().get(self.user_id, {}).get(key) or None
        except Exception as e:
            logger.error(f"Error fetching preference: {e}")
            return None

    def get_all_preferences(self) -> dict:
        try:
            return self._load_preferences().get(self.user_id, {})
        except Exception as e:
            logger.error(f"Error fetching preferences: {e}")
            return {}

    # ------------------------------------------------------------------
    def setup_storage(self) -> None:
        """Create the empty collections a fresh namespace is missing."""
        if self.storage.get_item(MOODS_KEY) is None:
            self.storage.set_json(MOODS_KEY, [])
        if self.storage.get_item(EMOTIONS_KEY) is None:
            self.storage.set_json(EMOTIONS_KEY, [])
        if self.storage.get_item(PREFERENCES_KEY) is None:
            self.storage.set_json(PREFERENCES_KEY, {})

    def export_data(self) -> dict:
        """Backup document with the current user's moods and emotions."""
        user_id = self.user_id
        moods, emotions = [], []
        try:
            moods = self._load_user_records(MOODS_KEY, user_id)
            emotions = self._load_user_records(EMOTIONS_KEY, user_id)

            if not moods and self.special_access:
                moods = generate_sample_mood_data(user_id, rng=self.rng)
            if not emotions and self.special_access:
                emotions = generate_sample_emotion_data(user_id, rng=self.rng)
        except Exception as e:
            logger.error(f"Error exporting data: {e}")
            moods, emotions = [], []

        return {
            "moods": moods,
            "emotions": emotions,
            "exportDate": _now_iso(),
        }

    def import_data(self, doc) -> bool:
        """Replace the current user's records with the ones in an export document."""
        if not isinstance(doc, dict) or not isinstance(doc.get("moods"), list):
            raise DataFormatError("Invalid data format: moods array is missing")

        moods = _validate_records(doc["moods"], MoodImport, "moods")
        emotions = doc.get("emotions")
        if isinstance(emotions, list):
            emotions = _validate_records(emotions, EmotionImport, "emotions")

        user_id = self.user_id
        others = [m for m in self._load_list(MOODS_KEY) if not (isinstance(m, dict) and m.get("user_id") == user_id)]
        imported = [{**m, "user_id": user_id} for m in moods]
        self.storage.set_json(MOODS_KEY, others + imported)

        if isinstance(emotions, list):
            others = [e for e in self._load_list(EMOTIONS_KEY) if not (isinstance(e, dict) and e.get("user_id") == user_id)]
            imported = [{**e, "user_id": user_id} for e in emotions]
            self.storage.set_json(EMOTIONS_KEY, others + imported)

        logger.info(f"Imported {len(doc['moods'])} moods for {user_id}")
        return True

    def clear_all_data(self) -> bool:
        """Drop the current user's moods and emotions, keeping other users' records."""
        user_id = self.user_id
        for key in (MOODS_KEY, EMOTIONS_KEY):
            kept = [r for r in self._load_list(key) if not (isinstance(r, dict) and r.get("user_id") == user_id)]
            self.storage.set_json(key, kept)
        return True

    def load_sample_data(self) -> dict:
        """Overwrite both collections with generated data for the current user."""
        user_id = self.user_id
        moods = generate_sample_mood_data(user_id, rng=self.rng)
        emotions = generate_sample_emotion_data(user_id, rng=self.rng)
        self.storage.set_json(MOODS_KEY, moods)
        self.storage.set_json(EMOTIONS_KEY, emotions)
        return {"moods": len(moods), "emotions": len(emotions)}

    def reset_with_sample_data(self, days: int = 30) -> list[dict]:
        """Clear the current user's records and log one random mood per day instead."""
        self.clear_all_data()
        user_id = self.user_id
        now = _now_iso()
        moods = [
            {**entry, "id": _new_id(), "user_id": user_id, "created_at": now}
            for entry in generate_mood_data(days, rng=self.rng)
        ]
        self.storage.set_json(MOODS_KEY, self._load_list(MOODS_KEY) + moods)
        return moods
