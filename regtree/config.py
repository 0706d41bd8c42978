import os

from dotenv import load_dotenv

from regtree.utils.logging import get_logger

logger = get_logger(__name__)

# Pick up a local .env before reading anything
load_dotenv()


def int_env(name: str, default: int) -> int:
    """Read an integer setting, falling back to ``default`` when it is malformed."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring {name}={value!r}: not an integer, using {default}")
        return default


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE") or None

# Part emitted when the caller does not choose one
DEFAULT_PART = os.getenv("REGTREE_DEFAULT_PART", "433")

JSON_INDENT = int_env("REGTREE_JSON_INDENT", 4)

# Worker processes used by the batch converter
WORKERS = int_env("REGTREE_WORKERS", 4)
