"""Tests for ConfigStore."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

from melon_client.utils.config_store import ConfigStore


class TestConfigStore:
    def test_missing_file_is_not_an_error(self, config_store: ConfigStore) -> None:
        config_store.load()
        assert config_store.get("ram", "4") == "4"

    def test_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "melonclient.json"
        store = ConfigStore(path)
        store.set("offline_username", "Steve_01")
        store.set("ram", 6)
        assert store.flush() is True

        reloaded = ConfigStore(path)
        reloaded.load()
        assert reloaded.get("offline_username") == "Steve_01"
        assert reloaded.get("ram") == "6"

    def test_values_are_strings(self, config_store: ConfigStore) -> None:
        config_store.set("ram", 8)
        assert config_store.get("ram") == "8"

    def test_invalid_json_keeps_defaults(self, config_store: ConfigStore) -> None:
        config_store.path.write_text("{broken")
        config_store.load()
        assert config_store.as_dict() == {}

    def test_non_object_ignored(self, config_store: ConfigStore) -> None:
        config_store.path.write_text(json.dumps(["a", "b"]))
        config_store.load()
        assert config_store.as_dict() == {}

    def test_load_coerces_values(self, config_store: ConfigStore) -> None:
        config_store.path.write_text(json.dumps({"ram": 4, "login_type": "offline", "skip": None}))
        config_store.load()
        assert config_store.as_dict() == {"ram": "4", "login_type": "offline"}

    def test_flush_failure_is_logged_not_raised(self, config_store: ConfigStore, caplog) -> None:
        config_store.set("ram", 4)
        with patch("builtins.open", side_effect=PermissionError("read-only")):
            assert config_store.flush() is False
        assert "Config save failed" in caplog.text
