import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
from config import load_config, load_user_prefs

def test_load_config_expands_env(tmp_path, monkeypatch):
    monkeypatch.setenv("OPENCLAW_TOKEN", "secret")
    monkeypatch.delenv("MISSING_VAR", raising=False)
    path = tmp_path / "conf.yaml"
    path.write_text(
        "locale: ko\n"
        "openclaw:\n"
        "  token: ${OPENCLAW_TOKEN}\n"
        "  extra: ['${MISSING_VAR}x']\n",
        encoding="utf-8",
    )

    config = load_config(str(path))

    assert config["locale"] == "ko"
    assert config["openclaw"]["token"] == "secret"
    assert config["openclaw"]["extra"] == ["x"]

def test_load_config_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yaml"))

def test_empty_config_is_empty_dict(tmp_path):
    path = tmp_path / "conf.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(str(path)) == {}

def test_user_prefs_absent_is_empty(tmp_path):
    assert load_user_prefs(tmp_path / "user_prefs.yaml") == {}

def test_user_prefs_loaded(tmp_path):
    path = tmp_path / "user_prefs.yaml"
    path.write_text("locale: ja\n", encoding="utf-8")

    assert load_user_prefs(path) == {"locale": "ja"}

def test_bundled_conf_parses():
    root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
    config = load_config(os.path.join(root, "conf.yaml"))

    assert config["locale"] == "en"
    assert "[emotion:happy]" in config["openclaw"]["system_prompt"]
