import json

from cityhealth.storage.local import (
    DISMISSED_KEY,
    DismissalSet,
    InteractionLog,
    LocalStorage,
    SearchHistory,
)


def test_missing_file_is_empty(tmp_path):
    storage = LocalStorage(tmp_path / "nested" / "state.json")

    assert storage.get("anything") is None
    assert storage.get("anything", []) == []


def test_values_persist_across_instances(tmp_path):
    path = tmp_path / "state.json"
    LocalStorage(path).set("key", {"value": "عيادة"})

    assert LocalStorage(path).get("key") == {"value": "عيادة"}
    assert "عيادة" in path.read_text(encoding="utf-8")


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")

    storage = LocalStorage(path)
    assert storage.get("searchHistory", []) == []

    storage.set("searchHistory", [])
    assert json.loads(path.read_text(encoding="utf-8")) == {"searchHistory": []}


def test_remove(storage):
    storage.set("a", 1)
    storage.remove("a")
    storage.remove("missing")

    assert storage.get("a") is None


def test_history_is_newest_first_and_trimmed(storage):
    history = SearchHistory(storage, max_entries=3)

    for i in range(5):
        history.add(query=f"q{i}", category="clinic")

    assert [entry["query"] for entry in history.all()] == ["q4", "q3", "q2"]
    assert history.latest()["category"] == "clinic"
    assert "timestamp" in history.latest()


def test_history_clear(storage):
    history = SearchHistory(storage)
    history.add(query="cardiology", location="Oran")

    history.clear()

    assert history.all() == []
    assert history.latest() is None


def test_interactions_are_kept_per_kind(storage):
    log = InteractionLog(storage, max_per_kind=2)

    log.track("p1", "viewed", "clinic")
    log.track("p2", "viewed", "clinic")
    log.track("p3", "viewed", "lab")
    log.track("p4", "favorited")

    assert [e["id"] for e in log.recent("viewed")] == ["p3", "p2"]
    assert log.recent("viewed")[0]["type"] == "lab"
    assert [e["id"] for e in log.recent("favorited")] == ["p4"]
    assert log.recent("shared") == []


def test_dismissal_is_idempotent(storage):
    dismissed = DismissalSet(storage)

    dismissed.dismiss("p1")
    dismissed.dismiss("p2")
    dismissed.dismiss("p1")

    assert dismissed.ids() == ["p1", "p2"]
    assert dismissed.is_dismissed("p2")
    assert not dismissed.is_dismissed("p3")

    dismissed.clear()
    assert storage.get(DISMISSED_KEY) == []
