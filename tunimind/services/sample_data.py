"""
sample_data.py — Placeholder records for the demo account
Procedurally generated mood and emotion entries used for the sample-data
overlay, the exported demo data, and the "load sample data" action.
"""

import math
import random
from datetime import date, datetime, timedelta, timezone

from tunimind.vocabulary import MOODS, EMOTIONS, ACTIVITY_OPTIONS

SAMPLE_NOTES = {
    "happy": [
        "Had a great day today!",
        "Everything went well.",
        "Feeling optimistic about the future.",
        "Accomplished a lot today.",
        "Enjoyed spending time with friends.",
    ],
    "sad": [
        "Feeling down today.",
        "Things didn't go as planned.",
        "Missing someone special.",
        "Struggling with my studies.",
        "Just a low energy day.",
    ],
    "angry": [
        "Frustrated with my project.",
        "Had an argument with a friend.",
        "Traffic was terrible today.",
        "Someone was rude to me.",
        "Things keep going wrong.",
    ],
    "anxious": [
        "Worried about upcoming exams.",
        "Feeling overwhelmed with work.",
        "Anxious about my presentation tomorrow.",
        "Too many deadlines approaching.",
        "Can't stop overthinking.",
    ],
    "neutral": [
        "Just an ordinary day.",
        "Nothing special happened.",
        "Going through the motions.",
        "Average day overall.",
        "Neither good nor bad.",
    ],
    "excited": [
        "Can't wait for the weekend!",
        "Got great news today!",
        "Looking forward to the upcoming event.",
        "Received an excellent grade on my project.",
        "Something wonderful is about to happen.",
    ],
    "tired": [
        "Didn't sleep well last night.",
        "Long day of studying.",
        "Need to rest more.",
        "Exhausted from work.",
        "Low energy all day.",
    ],
    "content": [
        "Feeling at peace today.",
        "Enjoyed the simple things.",
        "Had a relaxing day.",
        "Satisfied with my progress.",
        "Grateful for what I have.",
    ],
}


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values, unlike Python's banker's rounding."""
    return int(math.floor(value + 0.5))


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def random_activities(rng: random.Random) -> list[str]:
    """0-3 activities; repeated draws are dropped."""
    activities = []
    for _ in range(rng.randrange(4)):
        activity = rng.choice(ACTIVITY_OPTIONS)
        if activity not in activities:
            activities.append(activity)
    return activities


def _mood_for_intensity(intensity: int) -> str:
    if intensity >= 8:
        return "happy"
    if intensity >= 6:
        return "content"
    if intensity >= 5:
        return "neutral"
    if intensity >= 3:
        return "tired"
    return "sad"


def generate_sample_mood_data(user_id: str, today: date | None = None,
                              rng: random.Random | None = None) -> list[dict]:
    """Thirty days of wave-shaped moods, oldest first, with gaps every fourth day."""
    today = today or utc_today()
    rng = rng or random.Random()
    created_at = _now_iso()
    result = []

    for i in range(29, -1, -1):
        if i % 4 == 0:
            continue

        day = today - timedelta(days=i)
        wave = 5 + 4 * math.sin((i / 30) * math.pi * 2)
        intensity = max(1, min(10, round_half_up(wave)))

        mood = _mood_for_intensity(intensity)
        if i % 7 == 0:
            mood = "excited"
        if i % 11 == 0:
            mood = "anxious"
        if i % 13 == 0:
            mood = "angry"

        result.append({
            "id": f"sample-{i}",
            "user_id": user_id,
            "date": day.isoformat(),
            "mood": mood,
            "intensity": intensity,
            "activities": random_activities(rng),
            "note": f"Generated sample data for {day.strftime('%a %b %d %Y')}",
            "created_at": created_at,
        })

    return result


def generate_sample_emotion_data(user_id: str, today: date | None = None,
                                 rng: random.Random | None = None) -> list[dict]:
    """Fifteen days of random detections with confidence in [0.6, 1.0)."""
    today = today or utc_today()
    rng = rng or random.Random()
    created_at = _now_iso()
    emotions = list(EMOTIONS)
    result = []

    for i in range(14, -1, -1):
        if i % 3 == 0:
            continue

        day = today - timedelta(days=i)
        result.append({
            "id": f"sample-{i}",
            "user_id": user_id,
            "date": day.isoformat(),
            "emotion": rng.choice(emotions),
            "confidence": 0.6 + rng.random() * 0.4,
            "created_at": created_at,
        })

    return result


def generate_mood_data(days: int, today: date | None = None,
                       rng: random.Random | None = None) -> list[dict]:
    """One random mood per day for `days` distinct days within the last `days`+1, oldest first."""
    today = today or utc_today()
    rng = rng or random.Random()
    if days <= 0:
        return []

    offsets = rng.sample(range(days + 1), days)
    data = []
    for offset in sorted(offsets, reverse=True):
        mood = rng.choice(MOODS)
        data.append({
            "date": (today - timedelta(days=offset)).isoformat(),
            "mood": mood,
            "intensity": rng.randint(1, 10),
            "note": rng.choice(SAMPLE_NOTES[mood]),
            "activities": rng.sample(ACTIVITY_OPTIONS, rng.randint(1, 3)),
        })
    return data
