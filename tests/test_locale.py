# tests/test_locale.py
import json

import pytest

from cbc_portal.services.locale import STORAGE_KEY, LocalePreference, UnsupportedLocaleError


def test_defaults_when_nothing_stored(tmp_path) -> None:
    preference = LocalePreference(tmp_path / "prefs.json", default="en")

    assert preference.load() == "en"


def test_choice_persists_across_instances(tmp_path) -> None:
    path = tmp_path / "prefs.json"
    LocalePreference(path).set("rw")

    assert json.loads(path.read_text())[STORAGE_KEY] == "rw"
    assert LocalePreference(path, default="en").load() == "rw"


def test_unsupported_language_is_rejected(tmp_path) -> None:
    preference = LocalePreference(tmp_path / "prefs.json", default="en")

    with pytest.raises(UnsupportedLocaleError):
        preference.set("fr")

    assert preference.current == "en"


def test_other_preferences_are_kept(tmp_path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps({"theme": "dark"}))

    LocalePreference(path).set("rw")

    assert json.loads(path.read_text()) == {"theme": "dark", STORAGE_KEY: "rw"}


def test_malformed_file_falls_back_to_default(tmp_path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text("{not json")

    assert LocalePreference(path, default="rw").load() == "rw"


def test_stored_unknown_language_is_ignored(tmp_path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps({STORAGE_KEY: "fr"}))

    assert LocalePreference(path, default="en").load() == "en"
