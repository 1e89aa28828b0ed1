"""
Tests for persisted settings.
"""

import json
import logging

from rbplay.settings import THEMES, Settings


class TestSettings:
    """Loading, saving and colour lookup."""

    def test_defaults_when_file_missing(self, tmp_path):
        s = Settings(path=str(tmp_path / "missing.json"))
        assert s.theme == "dark"
        assert s.anim_speed == 600
        assert s.autoplay is False
        assert s.custom_colors == {}

    def test_save_and_reload(self, tmp_path):
        path = str(tmp_path / "settings.json")
        s = Settings(path=path)
        s.theme = "light"
        s.set_speed(900)
        s.autoplay = True
        s.custom_colors = {"EDGE": "#123456"}
        assert s.save() is True

        again = Settings(path=path)
        assert again.theme == "light"
        assert again.anim_speed == 900
        assert again.autoplay is True
        assert again.get("EDGE") == "#123456"

    def test_corrupt_file_keeps_defaults(self, tmp_path, caplog):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with caplog.at_level(logging.WARNING, logger="rbplay.settings"):
            s = Settings(path=str(path))
        assert s.theme == "dark"
        assert "unreadable settings" in caplog.text

    def test_unknown_theme_and_bad_values_are_sanitised(self, tmp_path):
        path = tmp_path / "odd.json"
        path.write_text(json.dumps({"theme": "neon", "anim_speed": "fast",
                                    "custom_colors": [1, 2]}))
        s = Settings(path=str(path))
        assert s.theme == "dark"
        assert s.anim_speed == 600
        assert s.custom_colors == {}

    def test_non_object_file_is_ignored(self, tmp_path, caplog):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")
        with caplog.at_level(logging.WARNING, logger="rbplay.settings"):
            s = Settings(path=str(path))
        assert s.anim_speed == 600
        assert "not a JSON object" in caplog.text

    def test_speed_is_clamped(self):
        s = Settings(load=False)
        s.set_speed(1)
        assert s.anim_speed == 100
        s.set_speed(10_000)
        assert s.anim_speed == 2500

    def test_colour_lookup_priority(self):
        s = Settings(load=False)
        assert s.get("BG") == THEMES["dark"]["BG"]
        s.custom_colors["BG"] = "#000000"
        assert s.get("BG") == "#000000"
        assert s.get("NOT_A_KEY") == "#ffffff"

    def test_save_failure_returns_false(self, tmp_path, caplog):
        s = Settings(path=str(tmp_path / "no_such_dir" / "s.json"), load=False)
        with caplog.at_level(logging.WARNING, logger="rbplay.settings"):
            assert s.save() is False
        assert "Could not save settings" in caplog.text
