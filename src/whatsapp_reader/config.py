"""Central configuration for paths and constants."""

import os
from pathlib import Path

# Data directory — override with WHATSAPP_READER_DATA_DIR env var
DATA_DIR = Path(
    os.environ.get("WHATSAPP_READER_DATA_DIR", str(Path.home() / ".whatsapp-reader"))
)

# Database path
STORE_PATH = DATA_DIR / "store.db"

# Keys inside the key-value store
STORAGE_KEYS = {
    "chats": "whatsapp_chats",
    "my_name": "whatsapp_my_name",
}

# Name used to tell your own messages apart from everyone else's
DEFAULT_MY_NAME = os.environ.get("WHATSAPP_READER_MY_NAME", "Me")

# Sender label for notices without a "Name:" prefix
SYSTEM_SENDER = os.environ.get("WHATSAPP_READER_SYSTEM_LABEL", "System")

# File types picked up when importing a directory
TRANSCRIPT_SUFFIXES = {".txt"}

# Output budget for a single transcript returned by the MCP server
MAX_TRANSCRIPT_CHARS = 50_000
