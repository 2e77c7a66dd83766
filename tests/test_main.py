import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import io
import json

from rich.console import Console

import main


def _run(argv, monkeypatch, tmp_path, stdin=""):
    monkeypatch.setattr(main, "load_user_prefs", lambda: {})
    monkeypatch.setattr(sys, "stdin", io.StringIO(stdin))
    monkeypatch.chdir(tmp_path)
    buffer = io.StringIO()
    console = Console(file=buffer, width=200, color_system=None)
    code = main.main(argv, console=console)
    return code, buffer.getvalue()

def _objects(output):
    decoder = json.JSONDecoder()
    objects, index = [], 0
    output = output.strip()
    while index < len(output):
        obj, end = decoder.raw_decode(output, index)
        objects.append(obj)
        index = end
        while index < len(output) and output[index].isspace():
            index += 1
    return objects

def test_annotates_arguments(monkeypatch, tmp_path):
    code, output = _run(["[emotion:angry] Stop that! [motion:shake]", "I had a great day"], monkeypatch, tmp_path)

    assert code == 0
    assert _objects(output) == [
        {"text": "Stop that!", "emotion": "angry", "motion": "shake"},
        {"text": "I had a great day", "emotion": "happy", "motion": None},
    ]

def test_annotates_stdin_lines(monkeypatch, tmp_path):
    code, output = _run([], monkeypatch, tmp_path, stdin="[motion:nod] ok\n\n대박!\n")

    assert code == 0
    assert [obj["text"] for obj in _objects(output)] == ["ok", "대박!"]

def test_locale_override(monkeypatch, tmp_path):
    code, output = _run(["--locale", "ko", "대박!"], monkeypatch, tmp_path)

    assert code == 0
    assert _objects(output)[0]["emotion"] == "surprised"

def test_config_locale_is_used(monkeypatch, tmp_path):
    (tmp_path / "conf.yaml").write_text("locale: ko\n", encoding="utf-8")

    code, output = _run(["하하"], monkeypatch, tmp_path)

    assert code == 0
    assert _objects(output)[0]["emotion"] == "happy"

def test_missing_explicit_config_fails(monkeypatch, tmp_path):
    code, output = _run(["--config", "nope.yaml", "hi"], monkeypatch, tmp_path)

    assert code == 1
    assert output == ""

def test_bad_locales_dir_table_fails(monkeypatch, tmp_path):
    (tmp_path / "conf.yaml").write_text("locale: en\nlocales_dir: custom\n", encoding="utf-8")
    (tmp_path / "custom").mkdir()
    (tmp_path / "custom" / "en.yaml").write_text("happy: 3\n", encoding="utf-8")

    code, _ = _run(["hi"], monkeypatch, tmp_path)

    assert code == 1

def test_unknown_log_level_falls_back(monkeypatch, tmp_path, caplog):
    (tmp_path / "conf.yaml").write_text("logging:\n  level: VERBOSE\n", encoding="utf-8")

    code, output = _run(["[emotion:happy] hi"], monkeypatch, tmp_path)

    assert code == 0
    assert _objects(output)[0]["emotion"] == "happy"
    assert "Unknown log level 'VERBOSE'" in caplog.text
