from datetime import timedelta

import pytest

from tunimind.exceptions import DataFormatError, MoodNotFoundError
from tunimind.services.data_service import DataService
from tunimind.services.sample_data import utc_today


def mood(day, mood="happy", intensity=7, **extra):
    return {"date": day, "mood": mood, "intensity": intensity, "note": None, "activities": [], **extra}


def test_anonymous_user(data):
    assert data.user_id == "anonymous"
    assert data.special_access is False

    record = data.save_mood(mood("2024-03-01"))
    assert record["user_id"] == "anonymous"
    assert record["id"].startswith("local-")


def test_save_mood_upserts_by_date(signed_in, data):
    first = data.save_mood(mood("2024-03-01", "sad", 3))
    second = data.save_mood(mood("2024-03-01", "happy", 8, id="ignored", user_id="someone-else"))

    moods = signed_in.get_json("moods")
    assert len(moods) == 1
    assert second["id"] == first["id"]
    assert moods[0]["mood"] == "happy"
    assert moods[0]["intensity"] == 8
    assert moods[0]["user_id"] == "user_1"
    assert "updated_at" in moods[0]
    assert moods[0]["created_at"] == first["created_at"]


def test_get_moods_is_scoped_and_newest_first(signed_in, data):
    signed_in.set_json("moods", [
        mood("2024-03-01", user_id="user_1", id="a"),
        mood("2024-03-03", user_id="user_1", id="b"),
        mood("2024-03-02", user_id="other", id="c"),
        mood("2024-03-02", user_id="user_1", id="d"),
    ])

    assert [m["id"] for m in data.get_moods()] == ["b", "d", "a"]
    assert [m["id"] for m in data.get_moods(2)] == ["b", "d"]
    assert data.get_moods(0) == []


def test_reads_degrade_on_malformed_storage(signed_in, data):
    signed_in.set_item("moods", "{broken")
    signed_in.set_item("emotions", '{"not": "a list"}')

    assert data.get_moods() == []
    assert data.get_emotions() == []
    assert data.get_recent_emotions() == []
    with pytest.raises(ValueError):
        data.save_mood(mood("2024-03-01"))


def test_special_account_sees_sample_overlay(special, data):
    yesterday = (utc_today() - timedelta(days=1)).isoformat()
    real = data.save_mood(mood(yesterday, "angry", 2))

    moods = data.get_moods(30)
    dates = [m["date"] for m in moods]

    # 22 generated days, one of them shadowed by the real entry
    assert len(moods) == 22
    assert len(set(dates)) == len(dates)
    assert dates == sorted(dates, reverse=True)
    assert moods[0]["id"] == real["id"]
    assert all(m["user_id"] == special.get_item("userId") for m in moods)


def test_special_account_emotion_overlay(special, data):
    emotions = data.get_emotions(5)
    assert len(emotions) == 5
    assert all(e["id"].startswith("sample-") for e in emotions)


def test_add_mood_prepends_without_date_check(signed_in, data):
    data.save_mood(mood("2024-03-01"))
    added = data.add_mood(mood("2024-03-01", "sad"))

    moods = signed_in.get_json("moods")
    assert len(moods) == 2
    assert moods[0]["id"] == added["id"]


def test_update_mood(signed_in, data):
    record = data.save_mood(mood("2024-03-01"))
    updated = data.update_mood(record["id"], {"note": "Better now", "user_id": "hijack"})

    assert updated["note"] == "Better now"
    assert updated["user_id"] == "user_1"
    with pytest.raises(MoodNotFoundError):
        data.update_mood("missing", {"note": "x"})


def test_delete_mood_only_touches_own_records(signed_in, data):
    signed_in.set_json("moods", [mood("2024-03-01", user_id="other", id="x")])
    record = data.save_mood(mood("2024-03-01"))

    assert data.delete_mood("x") is False
    assert data.delete_mood(record["id"]) is True
    assert [m["id"] for m in signed_in.get_json("moods")] == ["x"]


def test_save_emotion_defaults_and_recent(signed_in, data):
    first = data.save_emotion({"emotion": "happy", "confidence": 0.9, "user_id": "spoofed"})
    second = data.add_emotion({"date": "2024-03-01", "emotion": "sad", "confidence": 0.7})

    assert first["user_id"] == "user_1"
    assert first["date"] == utc_today().isoformat()
    assert second["user_id"] == "user_1"
    assert [e["id"] for e in data.get_recent_emotions()][0] == second["id"]
    assert len(data.get_recent_emotions(1)) == 1


def test_upload_emotion_image_placeholder():
    image = DataService.upload_emotion_image("1700000000000")
    assert image["path"] == "emotions/emotion-1700000000000.png"
    assert image["name"] == "emotion-1700000000000.png"
    assert "Emotion+1700000000000" in image["url"]


def test_preferences_per_user(signed_in, data):
    assert data.get_preference("theme") is None
    data.save_preference("theme", "dark")
    data.save_preference("reminders", True)

    assert data.get_preference("theme") == "dark"
    assert data.get_all_preferences() == {"theme": "dark", "reminders": True}

    signed_in.set_item("userId", "user_2")
    assert data.get_all_preferences() == {}


def test_setup_storage_keeps_existing(signed_in, data):
    signed_in.set_json("moods", [mood("2024-03-01", user_id="user_1")])
    data.setup_storage()

    assert len(signed_in.get_json("moods")) == 1
    assert signed_in.get_json("emotions") == []
    assert signed_in.get_json("preferences") == {}


def test_export_data(signed_in, data):
    data.save_mood(mood("2024-03-01"))
    doc = data.export_data()

    assert set(doc) == {"moods", "emotions", "exportDate"}
    assert len(doc["moods"]) == 1
    assert doc["emotions"] == []


def test_export_for_special_account_fills_empty_collections(special, data):
    doc = data.export_data()
    assert len(doc["moods"]) == 22
    assert len(doc["emotions"]) == 10


def test_import_replaces_current_users_records(signed_in, data):
    signed_in.set_json("moods", [
        mood("2024-03-01", user_id="other", id="keep"),
        mood("2024-03-02", user_id="user_1", id="drop"),
    ])
    data.import_data({"moods": [mood("2024-02-01", id="new", user_id="whoever")]})

    moods = signed_in.get_json("moods")
    assert [m["id"] for m in moods] == ["keep", "new"]
    assert moods[1]["user_id"] == "user_1"


def test_import_rejects_bad_documents(signed_in, data):
    with pytest.raises(DataFormatError, match="moods array is missing"):
        data.import_data({"emotions": []})
    with pytest.raises(DataFormatError):
        data.import_data([1, 2, 3])
    with pytest.raises(DataFormatError):
        data.import_data({"moods": ["not an object"]})
    assert signed_in.get_item("moods") is None


def test_clear_all_data_keeps_other_users(signed_in, data):
    signed_in.set_json("moods", [mood("2024-03-01", user_id="other")])
    data.save_mood(mood("2024-03-02"))
    data.save_emotion({"emotion": "sad", "confidence": 0.8})

    data.clear_all_data()

    assert [m["user_id"] for m in signed_in.get_json("moods")] == ["other"]
    assert signed_in.get_json("emotions") == []


def test_load_sample_data(signed_in, data):
    counts = data.load_sample_data()

    assert counts == {"moods": 22, "emotions": 10}
    assert all(m["user_id"] == "user_1" for m in signed_in.get_json("moods"))


def test_export_clear_import_restores_moods(signed_in, data):
    for day, name, intensity in [("2024-03-01", "sad", 3), ("2024-03-02", "happy", 8)]:
        data.save_mood(mood(day, name, intensity))
    doc = data.export_data()

    data.clear_all_data()
    assert data.get_moods() == []

    data.import_data(doc)
    restored = [(m["date"], m["mood"], m["intensity"]) for m in data.get_moods()]
    assert restored == [("2024-03-02", "happy", 8), ("2024-03-01", "sad", 3)]


def test_special_account_dedupes_its_own_same_day_entries(special, data):
    yesterday = (utc_today() - timedelta(days=1)).isoformat()
    first = data.add_mood(mood(yesterday, "sad", 3))
    second = data.add_mood(mood(yesterday, "happy", 8))

    moods = data.get_moods(30)
    dates = [m["date"] for m in moods]

    assert len(dates) == len(set(dates))
    assert moods[0]["date"] == yesterday
    assert moods[0]["id"] in (first["id"], second["id"])


def test_import_validates_field_types(signed_in, data):
    data.save_mood(mood("2024-03-01"))

    with pytest.raises(DataFormatError, match=r"moods\[0\]\.date"):
        data.import_data({"moods": [mood(20240303)]})
    with pytest.raises(DataFormatError, match=r"moods\[0\]\.intensity"):
        data.import_data({"moods": [mood("2024-03-03", intensity=42)]})
    with pytest.raises(DataFormatError, match=r"emotions\[0\]\.confidence"):
        data.import_data({"moods": [], "emotions": [{"emotion": "sad", "confidence": 3.0}]})

    assert [m["date"] for m in data.get_moods()] == ["2024-03-01"]


def test_import_coerces_numeric_strings_and_keeps_extra_fields(signed_in, data):
    data.import_data({"moods": [mood("2024-03-03", intensity="7", id="exported-1", weather="sunny")]})

    stored = signed_in.get_json("moods")[0]
    assert stored["intensity"] == 7
    assert stored["id"] == "exported-1"
    assert stored["weather"] == "sunny"


def test_reads_tolerate_non_string_dates_already_stored(signed_in, data):
    signed_in.set_json("moods", [
        mood("2024-03-01", user_id="user_1", id="ok"),
        mood(20240303, user_id="user_1", id="legacy"),
    ])

    assert {m["id"] for m in data.get_moods()} == {"ok", "legacy"}


def test_reset_with_sample_data(signed_in, data):
    signed_in.set_json("moods", [mood("2024-03-01", user_id="other", id="keep")])
    data.save_mood(mood("2000-01-01"))

    moods = data.reset_with_sample_data(7)

    assert len(moods) == 7
    assert all(m["user_id"] == "user_1" and m["id"].startswith("local-") for m in moods)
    stored = signed_in.get_json("moods")
    assert stored[0]["id"] == "keep"
    assert "2000-01-01" not in [m["date"] for m in stored]
