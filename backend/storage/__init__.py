"""File-based JSON storage for user settings.

Data layout:
  data/
    settings.json        {"mother-ai-settings": {...}} — only values the crew
                         has changed; everything else comes from the defaults

Defaults: mother.models.Settings, with OLLAMA_URL / OPENAI_API_KEY /
GOOGLE_API_KEY / ANTHROPIC_API_KEY taken from the environment when set.

get_settings() merges stored values over the defaults. update_settings()
applies a partial update and persists it. reset_settings() removes the
stored blob so the defaults apply again.
"""

# Re-export all public symbols so `from backend import storage` keeps working.

from .core import (  # noqa: F401
    data_dir,
    init_storage,
    settings_path,
)

from .settings import (  # noqa: F401
    STORAGE_KEY,
    StoredSettings,
    default_settings,
    get_settings,
    reset_settings,
    update_settings,
)
