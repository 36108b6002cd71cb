"""Persisted user settings (provider, credentials, model, theme, toggles).

settings.json holds one blob under STORAGE_KEY. Reads merge the blob over
the defaults; a blob that cannot be parsed or validated is ignored (and
logged) so a broken file never locks the crew out of the terminal.
"""

import json
import logging
import os
from typing import Any

from pydantic import ValidationError

from mother.models import Settings

from .core import settings_path

logger = logging.getLogger(__name__)

STORAGE_KEY = "mother-ai-settings"


def default_settings() -> Settings:
    """Hardcoded defaults, with endpoint and keys overridable from the environment."""
    defaults = Settings()
    return defaults.model_copy(update={
        "ollama_url": os.getenv("OLLAMA_URL", defaults.ollama_url),
        "openai_api_key": os.getenv("OPENAI_API_KEY", ""),
        "google_api_key": os.getenv("GOOGLE_API_KEY", ""),
        "anthropic_api_key": os.getenv("ANTHROPIC_API_KEY", ""),
    })


def _read_file() -> dict[str, Any]:
    path = settings_path()
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        logger.error("Failed to parse saved settings %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _write_file(data: dict[str, Any]) -> None:
    settings_path().write_text(json.dumps(data, indent=2))


def get_settings() -> Settings:
    """Read settings, returning defaults merged with stored values."""
    defaults = default_settings()
    stored = _read_file().get(STORAGE_KEY)
    if not isinstance(stored, dict):
        return defaults
    try:
        return Settings.model_validate({**defaults.model_dump(), **stored})
    except ValidationError as e:
        logger.error("Ignoring invalid saved settings: %s", e)
        return defaults


def update_settings(fields: dict[str, Any]) -> Settings:
    """Merge fields into settings and persist. Returns the full settings.

    Raises pydantic.ValidationError if the merged settings are invalid.
    """
    merged = Settings.model_validate({**get_settings().model_dump(), **fields})
    data = _read_file()
    stored = data.get(STORAGE_KEY)
    if not isinstance(stored, dict):
        stored = {}
    # Only explicitly set values are stored; the rest keep tracking the defaults
    changed = {k: v for k, v in merged.model_dump().items() if k in fields}
    data[STORAGE_KEY] = {**stored, **changed}
    _write_file(data)
    return merged


def reset_settings() -> Settings:
    """Drop the stored blob. Returns the defaults."""
    data = _read_file()
    if STORAGE_KEY in data:
        del data[STORAGE_KEY]
        _write_file(data)
    return default_settings()


class StoredSettings:
    """SettingsSource backed by settings.json."""

    def get(self) -> Settings:
        return get_settings()

    def update(self, fields: dict[str, Any]) -> Settings:
        return update_settings(fields)
