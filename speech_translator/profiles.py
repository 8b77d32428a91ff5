"""Named request parameter presets loaded from YAML or JSON.

Example file::

    de:
      from: en-US
      to: de-DE
      features: TextToSpeech
      voice: de-DE-Katja
"""

from __future__ import annotations

import json
from pathlib import Path

import yaml


class ProfileStore:
    def __init__(self, path: str | None = None) -> None:
        self.path = path
        self._profiles: dict[str, dict[str, str]] = {}
        if path:
            self.load(path)

    def load(self, path: str) -> None:
        p = Path(path)
        if not p.exists():
            self._profiles = {}
            return
        text = p.read_text()
        if p.suffix.lower() in {".yaml", ".yml"}:
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"Profile file {path} must contain a mapping of profile names")
        profiles: dict[str, dict[str, str]] = {}
        for name, params in data.items():
            if not isinstance(params, dict):
                raise ValueError(f"Profile {name!r} must be a mapping of parameters")
            profiles[str(name)] = {str(k): str(v) for k, v in params.items() if v is not None}
        self._profiles = profiles

    @property
    def names(self) -> list[str]:
        return sorted(self._profiles)

    def get(self, name: str) -> dict[str, str]:
        """Return a copy of the named profile; KeyError if unknown."""
        return dict(self._profiles[name])
