"""
emotion_service.py — Facial-expression results to mood entries
Maps detector labels onto the mood vocabulary, keeps the recent detection
history of a namespace, and turns a detection into a saved mood.
"""

from datetime import datetime, timezone

from tunimind.services.data_service import DataService
from tunimind.services.sample_data import round_half_up, utc_today
from tunimind.storage import LocalStorage, EMOTION_HISTORY_KEY, LAST_EMOTION_KEY
from tunimind.vocabulary import EMOTIONS, label_for

EMOTION_TO_MOOD = {
    "happy": "happy",
    "sad": "sad",
    "angry": "angry",
    "surprised": "excited",
    "fearful": "anxious",
    "disgusted": "tired",
    "neutral": "neutral",
}

HISTORY_LIMIT = 50
DEFAULT_CONFIDENCE = 0.5


def emotion_to_mood(expression: str, confidence: float | None = None) -> tuple[str, int]:
    """(mood, intensity) for a detected expression; intensity runs 5..10 with confidence."""
    mood = EMOTION_TO_MOOD.get((expression or "").lower(), "neutral")
    if confidence is None:
        confidence = DEFAULT_CONFIDENCE
    confidence = min(1.0, max(0.0, confidence))
    return mood, round_half_up(5 + confidence * 5)


def dominant_expression(scores: dict[str, float]) -> str | None:
    """Highest-scoring label, or None when the detector saw no face."""
    if not scores:
        return None
    best, best_score = "neutral", 0.0
    for expression, score in scores.items():
        if score > best_score:
            best_score = score
            label = expression.lower()
            best = label if label in EMOTIONS else "neutral"
    return best


def confidence_scores(scores: dict[str, float]) -> dict[str, float]:
    """Score for every known emotion; labels the detector did not report get 0."""
    lowered = {k.lower(): v for k, v in (scores or {}).items()}
    return {emotion: float(lowered.get(emotion, 0) or 0) for emotion in EMOTIONS}


class EmotionService:
    def __init__(self, storage: LocalStorage, data_service: DataService | None = None):
        self.storage = storage
        self.data = data_service or DataService(storage)

    def last_emotion(self) -> str | None:
        return self.storage.get_item(LAST_EMOTION_KEY)

    def history(self) -> list[dict]:
        try:
            history = self.storage.get_json(EMOTION_HISTORY_KEY, [])
            return history if isinstance(history, list) else []
        except ValueError:
            return []

    def record_detection(self, emotion: str, confidences: dict[str, float]) -> dict:
        """Remember a detection as the latest emotion and at the top of the history."""
        entry = {"emotion": emotion, "timestamp": datetime.now(timezone.utc).isoformat()}
        self.storage.set_item(LAST_EMOTION_KEY, emotion)
        self.storage.set_json(EMOTION_HISTORY_KEY, [entry, *self.history()][:HISTORY_LIMIT])
        return {"emotion": emotion, "confidences": confidences, "timestamp": entry["timestamp"]}

    def save_mood_from_emotion(self, emotion: str, confidences: dict[str, float] | None = None) -> dict:
        tag = (emotion or "").lower()
        lowered = {k.lower(): v for k, v in (confidences or {}).items()}
        mood, intensity = emotion_to_mood(tag, lowered.get(tag))
        return self.data.save_mood({
            "date": utc_today().isoformat(),
            "mood": mood,
            "intensity": intensity,
            "note": f"Automatically detected from facial expression ({label_for(tag)})",
            "activities": [],
        })
