import os
from pathlib import Path

# Load environment variables from .env file
from dotenv import load_dotenv
from loguru import logger

# Load .env from project root
_project_root = Path(__file__).parent.parent.parent
load_dotenv(_project_root / ".env")


def _positive_int_env(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return max(1, int(raw))
    except ValueError:
        logger.warning(f"Invalid {name}={raw!r}, using {default}")
        return default


# Logging
LOG_LEVEL = os.getenv("NETWORK_WATCHDOG_LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("NETWORK_WATCHDOG_LOG_FILE") or None

# Values buffered per watching session before the oldest is dropped
STREAM_BUFFER_SIZE = _positive_int_env("NETWORK_WATCHDOG_STREAM_BUFFER_SIZE", 64)

# Configuration directory (overridable for tests and containers)
CONFIG_DIR = os.getenv("NETWORK_WATCHDOG_CONFIG_DIR") or None
