"""
bmskeys - Configuration

Settings come from environment variables (optionally via a ``.env`` file in
the working directory). Command-line options override them per invocation.
"""

import os

from dotenv import load_dotenv

_ = load_dotenv()

# ---------------------------------------------------------------------------
# Logging (stderr only; stdout carries listings)
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv("BMSKEYS_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"

# ---------------------------------------------------------------------------
# Chart files
# ---------------------------------------------------------------------------
ENCODING = os.getenv("BMSKEYS_ENCODING", "utf-8")
BACKUP_SUFFIX = os.getenv("BMSKEYS_BACKUP_SUFFIX", "_backup")

# Extensions (without the dot) treated as keysound audio by the orphan scan
AUDIO_EXTENSIONS: frozenset[str] = frozenset(
    ext.strip().lower().lstrip(".")
    for ext in os.getenv("BMSKEYS_AUDIO_EXTENSIONS", "ogg,wav").split(",")
    if ext.strip()
)
