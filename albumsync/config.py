import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

# === PATH CONFIGURATION ===
DEFAULT_CONFIG_FILE = Path("/configs/config.yml")
DATA_DIR = Path("data")

# === SCOPES ===
SCOPES = [
    "https://www.googleapis.com/auth/photoslibrary.readonly",
]


class ConfigError(Exception):
    """Raised when the config file is missing, malformed or incomplete."""


@dataclass
class Config:
    """
    Settings loaded from config.yml.

    album_id and output_path are only needed by the SyncImage command,
    so they are checked by validate_for_sync() rather than at load time.
    """
    album_id: str = ""
    output_path: str = ""
    credentials_file: Path = DATA_DIR / "credentials.json"
    token_file: Path = DATA_DIR / "token.json"

    def validate_for_sync(self):
        missing = [key for key in ("album_id", "output_path") if not getattr(self, key)]
        if missing:
            raise ConfigError(f"Missing required setting(s): {', '.join(missing)}")


def _resolve(base_dir: Path, value) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path


def load_config(path) -> Config:
    """
    Load a YAML config file into a Config.
    Relative credential paths are resolved against the config file's folder.
    """
    config_path = Path(path)
    try:
        with open(config_path, "r") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file '{config_path}': {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file '{config_path}': {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file '{config_path}' must contain a mapping")

    base_dir = config_path.parent
    config = Config(
        album_id=str(raw.get("album_id") or ""),
        output_path=str(raw.get("output_path") or ""),
    )
    if raw.get("credentials_file"):
        config.credentials_file = _resolve(base_dir, raw["credentials_file"])
    if raw.get("token_file"):
        config.token_file = _resolve(base_dir, raw["token_file"])

    logger.debug("Loaded config from %s", config_path)
    return config
