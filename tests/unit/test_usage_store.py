"""
Tests for persisted usage counts
"""

import json

from zenwidget.managers.usage import UsageStore


class TestUsageStore:
    def test_missing_file_is_empty(self, home):
        assert UsageStore(home / "stats.json").load() == {}

    def test_increment_persists_each_time(self, home):
        store = UsageStore(home / "stats.json")
        assert store.increment("Maps") == 1
        assert store.increment("Maps") == 2
        assert store.increment("Phone") == 1

        # A fresh store sees every increment
        assert UsageStore(home / "stats.json").load() == {"Maps": 2, "Phone": 1}

    def test_repeated_increments_are_not_lost(self, home):
        store = UsageStore(home / "stats.json")
        for _ in range(25):
            store.increment("Maps")
        assert store.load()["Maps"] == 25

    def test_drops_invalid_counts(self, write_json, caplog):
        path = write_json("stats.json", {"Maps": 3, "Bad": -1, "Text": "7", "Flag": True, "Float": 1.5})
        assert UsageStore(path).load() == {"Maps": 3}
        assert "Dropping invalid usage count" in caplog.text

    def test_corrupt_file_is_empty(self, home, caplog):
        path = home / "stats.json"
        path.write_text("{{{")
        assert UsageStore(path).load() == {}
        assert "unreadable usage stats" in caplog.text

    def test_non_object_is_empty(self, write_json):
        path = write_json("stats.json", [1, 2, 3])
        assert UsageStore(path).load() == {}

    def test_increment_recovers_from_corrupt_file(self, home):
        path = home / "stats.json"
        path.write_text("not: [json")
        store = UsageStore(path)
        assert store.increment("Maps") == 1
        assert json.loads(path.read_text()) == {"Maps": 1}

    def test_reset_one(self, write_json):
        path = write_json("stats.json", {"Maps": 3, "Phone": 2})
        store = UsageStore(path)
        store.reset("Maps")
        assert store.load() == {"Phone": 2}

    def test_reset_all(self, write_json):
        path = write_json("stats.json", {"Maps": 3, "Phone": 2})
        store = UsageStore(path)
        store.reset()
        assert store.load() == {}
