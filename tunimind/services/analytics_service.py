"""
analytics_service.py — Chart data for the mood dashboard
Pure aggregations over mood records: distribution, weekday pattern,
activity correlation, timeline and a headline summary.
"""

from collections import Counter
from datetime import date

from tunimind.vocabulary import MOODS, MOOD_COLORS, MOOD_EMOJIS, label_for

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def _weekday(iso_date: str) -> int | None:
    """0 = Sunday ... 6 = Saturday."""
    try:
        return (date.fromisoformat(iso_date[:10]).weekday() + 1) % 7
    except (TypeError, ValueError):
        return None


def _emoji(mood: str) -> str:
    return MOOD_EMOJIS.get(mood, MOOD_EMOJIS["neutral"])


class AnalyticsService:

    @staticmethod
    def mood_distribution(moods: list[dict]) -> list[dict]:
        """Entry count per mood; every mood in the vocabulary is listed, unused ones with 0."""
        counts = Counter(dict.fromkeys(MOODS, 0))
        counts.update(m["mood"] for m in moods if m.get("mood"))
        return [
            {
                "mood": mood,
                "name": label_for(mood),
                "value": count,
                "emoji": _emoji(mood),
                "color": MOOD_COLORS.get(mood, MOOD_COLORS["neutral"]),
            }
            for mood, count in counts.items()
        ]

    @staticmethod
    def weekly_pattern(moods: list[dict]) -> list[dict]:
        """Per weekday, Sunday first: entry count, average intensity and dominant mood."""
        stats = {day: {"count": 0, "total": 0, "moods": Counter()} for day in range(7)}
        for entry in moods:
            day = _weekday(entry.get("date"))
            if day is None:
                continue
            stats[day]["count"] += 1
            intensity = entry.get("intensity")
            stats[day]["total"] += intensity if isinstance(intensity, (int, float)) else 0
            stats[day]["moods"][entry.get("mood") or "neutral"] += 1

        pattern = []
        for day, s in stats.items():
            # Counter.most_common keeps first-seen order on ties
            dominant = s["moods"].most_common(1)[0][0] if s["moods"] else "neutral"
            pattern.append({
                "day": DAY_NAMES[day],
                "day_num": day,
                "count": s["count"],
                "avg_intensity": s["total"] / s["count"] if s["count"] else 0,
                "dominant_mood": dominant,
                "emoji": _emoji(dominant),
                "label": label_for(dominant),
            })
        return pattern

    @staticmethod
    def activity_correlation(moods: list[dict]) -> list[dict]:
        """Mood counts per activity, most logged activity first."""
        by_activity: dict[str, Counter] = {}
        for entry in moods:
            for activity in entry.get("activities") or []:
                by_activity.setdefault(activity, Counter())[entry.get("mood")] += 1

        result = [
            {
                "activity": activity,
                "mood_correlation": [{"mood": mood, "count": count} for mood, count in counts.most_common()],
                "total": sum(counts.values()),
            }
            for activity, counts in by_activity.items()
        ]
        result.sort(key=lambda r: r["total"], reverse=True)
        return result

    @staticmethod
    def mood_timeline(moods: list[dict]) -> list[dict]:
        ordered = sorted((m for m in moods if m.get("date")), key=lambda m: m["date"])
        return [
            {
                "date": m["date"],
                "mood": m.get("mood"),
                "value": m.get("intensity"),
                "activities": m.get("activities") or [],
            }
            for m in ordered
        ]

    @staticmethod
    def summary(moods: list[dict]) -> dict:
        intensities = [m["intensity"] for m in moods if isinstance(m.get("intensity"), (int, float))]
        counts = Counter(m["mood"] for m in moods if m.get("mood"))
        return {
            "total_entries": len(moods),
            "average_intensity": round(sum(intensities) / len(intensities), 1) if intensities else 0,
            "most_frequent_mood": counts.most_common(1)[0][0] if counts else None,
        }
