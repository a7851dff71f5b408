"""
Runtime configuration for the tracker.

Values come from the environment; a local `.env` file is read at import time
through `python-dotenv`.

Environment variables used:
- `SYNC_URL` — remote events endpoint. Empty disables syncing.
- `SYNC_TIMEOUT` — seconds before a sync request is abandoned.
- `SYNC_MAX_ATTEMPTS` — tries per request; 1 keeps pushes fire-and-forget.
- `CONFIG_PATH` — JSON file holding custom event types.
- `LOG_LEVEL` — level passed to `logging.basicConfig` by the scripts.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class Settings(BaseModel):
    """Typed settings container. Import `settings` rather than reading os.environ."""

    sync_url: str = os.getenv("SYNC_URL", "")
    sync_timeout: float = float(os.getenv("SYNC_TIMEOUT", "5"))
    sync_max_attempts: int = int(os.getenv("SYNC_MAX_ATTEMPTS", "1"))
    config_path: str = os.getenv("CONFIG_PATH", "tracker_settings.json")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
