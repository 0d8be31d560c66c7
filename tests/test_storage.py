import json

import httpx
import pytest

from tunimind import config, supabase_rest
from tunimind.storage import SqlStorage, SupabaseStorage


def test_set_and_get_item(storage):
    assert storage.get_item("moods") is None
    storage.set_item("moods", "[]")
    assert storage.get_item("moods") == "[]"

    storage.set_item("moods", "[1]")
    assert storage.get_item("moods") == "[1]"
    assert storage.keys() == ["moods"]


def test_namespaces_are_isolated(session_factory):
    a = SqlStorage(session_factory, "a")
    b = SqlStorage(session_factory, "b")
    a.set_item("userId", "user_a")

    assert b.get_item("userId") is None
    assert a.get_item("userId") == "user_a"


def test_remove_and_clear(storage):
    storage.set_item("one", "1")
    storage.set_item("two", "2")
    storage.remove_item("one")
    assert storage.keys() == ["two"]

    storage.clear()
    assert storage.keys() == []


def test_json_helpers(storage):
    assert storage.get_json("preferences", {}) == {}
    storage.set_json("preferences", {"user_1": {"theme": "dark"}})
    assert storage.get_json("preferences") == {"user_1": {"theme": "dark"}}


def test_malformed_json_raises(storage):
    storage.set_item("moods", "{not json")
    with pytest.raises(ValueError):
        storage.get_json("moods", [])


# ── Supabase backend over a fake PostgREST ────────────────────────
class FakePostgrest:
    def __init__(self):
        self.rows = {}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        filters = {k: v[3:] for k, v in request.url.params.items() if v.startswith("eq.")}

        if request.method == "GET":
            rows = [r for r in self.rows.values() if all(r[k] == v for k, v in filters.items())]
            return httpx.Response(200, json=rows)
        if request.method == "POST":
            row = json.loads(request.content)
            self.rows[(row["namespace"], row["key"])] = row
            return httpx.Response(201, json=[row])
        if request.method == "DELETE":
            self.rows.pop((filters["namespace"], filters["key"]), None)
            return httpx.Response(204)
        return httpx.Response(405)


@pytest.fixture
def postgrest(monkeypatch):
    fake = FakePostgrest()
    monkeypatch.setattr(config, "SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setattr(config, "SUPABASE_SERVICE_ROLE_KEY", "service-key")
    monkeypatch.setattr(supabase_rest, "_transport", httpx.MockTransport(fake))
    return fake


def test_supabase_storage_round_trip(postgrest):
    storage = SupabaseStorage("client-1")
    storage.set_item("userId", "user_1")

    assert storage.get_item("userId") == "user_1"
    assert storage.keys() == ["userId"]

    storage.remove_item("userId")
    assert storage.get_item("userId") is None


def test_supabase_upsert_merges_duplicates(postgrest):
    SupabaseStorage("client-1").set_item("moods", "[]")

    request = postgrest.requests[-1]
    assert request.url.params["on_conflict"] == "namespace,key"
    assert "resolution=merge-duplicates" in request.headers["Prefer"]
    assert request.headers["apikey"] == "service-key"


def test_supabase_delete_requires_filters(postgrest):
    with pytest.raises(ValueError):
        supabase_rest.sb_delete("storage_items", {})
