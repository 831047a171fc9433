import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(key: str, default: bool = False) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "y", "on")


class Config:
    """Defaults for a dbeer invocation, overridable through the environment."""

    DEST_FOLDER = os.getenv("DBEER_DEST_FOLDER", "/tmp")
    HEADER_STYLE_LINK = os.getenv("DBEER_HEADER_STYLE_LINK", "Type")
    BORDER_STYLE = os.getenv("DBEER_BORDER_STYLE", "1")

    LOG_FILE = os.getenv("DBEER_LOG_FILE", "")
    LOG_DEBUG = _env_bool("DBEER_LOG_DEBUG", False)

    # Driver timeouts
    MONGO_TIMEOUT_MS = int(os.getenv("DBEER_MONGO_TIMEOUT_MS", "5000"))
    CONNECT_TIMEOUT = int(os.getenv("DBEER_CONNECT_TIMEOUT", "10"))
