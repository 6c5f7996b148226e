"""Global configuration storage for petnote.

Settings live in ``~/.petnote/config.json`` (or ``$PETNOTE_HOME/config.json``)
together with the id of the last user the CLI worked with.
"""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from petnote.domain.task import CategoryPoints, RewardPolicy

HOME_ENV = "PETNOTE_HOME"


class Settings(BaseModel):
    """User-tunable settings.

    The category -> points table is read from here and passed into the
    services; nothing else holds a copy of it.
    """

    category_points: CategoryPoints = Field(default_factory=CategoryPoints)
    rewards: RewardPolicy = Field(default_factory=RewardPolicy)
    data_dir: Optional[str] = Field(
        default=None,
        description="Where records are stored (default: <config dir>/data)",
    )
    log_level: str = "WARNING"

    def resolve_data_dir(self) -> Path:
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return get_config_dir() / "data"


def get_config_dir() -> Path:
    """Get the petnote config directory."""
    override = os.environ.get(HOME_ENV)
    config_dir = Path(override).expanduser() if override else Path.home() / ".petnote"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_settings() -> Settings:
    """Load settings, falling back to defaults for a missing or broken file."""
    config_file = get_config_dir() / "config.json"
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            return Settings(**data)
        except (json.JSONDecodeError, ValidationError, TypeError):
            pass
    return Settings()  # defaults


def save_settings(settings: Settings) -> None:
    """Save settings."""
    config_file = get_config_dir() / "config.json"
    config_file.write_text(
        json.dumps(settings.model_dump(), indent=2),
        encoding="utf-8",
    )


def get_last_user_id() -> Optional[str]:
    """Get the last used user ID."""
    user_file = get_config_dir() / "last_user.txt"
    if user_file.exists():
        return user_file.read_text(encoding="utf-8").strip() or None
    return None


def save_last_user_id(user_id: str) -> None:
    """Save the last used user ID."""
    user_file = get_config_dir() / "last_user.txt"
    user_file.write_text(user_id, encoding="utf-8")
