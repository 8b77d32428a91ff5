from __future__ import annotations

import json

import pytest

from speech_translator.profiles import ProfileStore


def test_load_yaml(tmp_path):
    p = tmp_path / "profiles.yaml"
    p.write_text("de:\n  from: en-US\n  to: de-DE\n  features: TextToSpeech\nfr:\n  from: en-US\n  to: fr-FR\n")
    store = ProfileStore(str(p))
    assert store.names == ["de", "fr"]
    assert store.get("de") == {"from": "en-US", "to": "de-DE", "features": "TextToSpeech"}


def test_load_json(tmp_path):
    p = tmp_path / "profiles.json"
    p.write_text(json.dumps({"es": {"from": "en-US", "to": "es-ES", "api-version": 1.0}}))
    assert ProfileStore(str(p)).get("es")["api-version"] == "1.0"


def test_get_returns_copy(tmp_path):
    p = tmp_path / "profiles.yml"
    p.write_text("de:\n  from: en-US\n  to: de-DE\n")
    store = ProfileStore(str(p))
    store.get("de")["to"] = "it-IT"
    assert store.get("de")["to"] == "de-DE"


def test_missing_file_is_empty(tmp_path):
    store = ProfileStore(str(tmp_path / "none.yaml"))
    assert store.names == []
    with pytest.raises(KeyError):
        store.get("de")


def test_malformed_profile(tmp_path):
    p = tmp_path / "profiles.yaml"
    p.write_text("de: just-a-string\n")
    with pytest.raises(ValueError):
        ProfileStore(str(p))
