from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.core.runtime_paths import settings_path_default


SETTINGS_FORMAT_VERSION = 1
DEFAULT_HOTKEY = "ctrl+shift+v"
DEFAULT_PATTERNS = [
    r"^https://github.com/[^/]+/([^/]+)/issues/(\d+)$",
    r"^https://github.com/[^/]+/([^/]+)/pull/(\d+)$",
    r"^https://github.com/[^/]+/([^/]+)$",
    r"^https://\w+.wikipedia.org/wiki/([^\s]+)$",
]
DEFAULT_REPLACERS = [
    "[🐈‍⬛🔨 $1#$2]($&)",
    "[🐈‍⬛🛠︎ $1#$2]($&)",
    "[🐈‍⬛ $1]($&)",
    "[📖 $1]($&)",
]

# Attribute name -> key in settings.json.
_PERSISTED_KEYS = {
    "patterns": "patterns",
    "replacers": "replacers",
    "settings_format_version": "settingsFormatVersion",
    "debug_mode": "debugMode",
    "hotkey": "hotkey",
    "restore_clipboard": "restoreClipboard",
}

logger = logging.getLogger("paste_transform.config")


@dataclass
class PasteTransformSettings:
    patterns: list[str] = field(default_factory=list)
    replacers: list[str] = field(default_factory=list)
    settings_format_version: int = SETTINGS_FORMAT_VERSION
    debug_mode: bool = False
    hotkey: str = DEFAULT_HOTKEY
    restore_clipboard: bool = True

    @classmethod
    def defaults(cls) -> "PasteTransformSettings":
        return cls(
            patterns=list(DEFAULT_PATTERNS),
            replacers=list(DEFAULT_REPLACERS),
        )

    def to_payload(self) -> dict[str, Any]:
        return {key: getattr(self, attr) for attr, key in _PERSISTED_KEYS.items()}

    @classmethod
    def from_payload(cls, raw: dict[str, Any]) -> "PasteTransformSettings":
        settings = cls.defaults()
        for attr, key in _PERSISTED_KEYS.items():
            if key not in raw:
                continue
            value = raw[key]
            if attr in ("patterns", "replacers"):
                if not isinstance(value, list):
                    logger.warning("Ignoring non-list '%s' in settings.", key)
                    continue
                value = [str(item) for item in value]
            elif attr == "settings_format_version":
                if isinstance(value, bool) or not isinstance(value, int):
                    continue
            elif attr in ("debug_mode", "restore_clipboard"):
                value = bool(value)
            elif attr == "hotkey":
                value = str(value).strip() or DEFAULT_HOTKEY
            setattr(settings, attr, value)
        return settings

    @property
    def effective_rule_count(self) -> int:
        return min(len(self.patterns), len(self.replacers))


class SettingsStore:
    def __init__(self, path: Path):
        self.path = path

    @classmethod
    def default(cls) -> "SettingsStore":
        return cls(settings_path_default())

    def load(self) -> PasteTransformSettings:
        if not self.path.exists():
            settings = PasteTransformSettings.defaults()
            self.save(settings)
            return settings

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.error("Could not read settings from %s: %s", self.path, exc)
            return PasteTransformSettings.defaults()
        if not isinstance(raw, dict):
            logger.error("Settings file %s does not hold an object.", self.path)
            return PasteTransformSettings.defaults()
        return PasteTransformSettings.from_payload(raw)

    def save(self, settings: PasteTransformSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(settings.to_payload(), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
