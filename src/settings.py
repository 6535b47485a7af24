"""Static configuration for chatfilter.

All user-editable settings (filter switches, rules, logging) live in a
single JSON file for quick edits without touching Python.
"""

import json
import os

from dotenv import load_dotenv

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# CHATFILTER_CONFIG may point at another file, set in the shell or in .env.
load_dotenv()
CONFIG_PATH = os.getenv("CHATFILTER_CONFIG") or os.path.join(PROJECT_ROOT, "config.json")


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# The chat_filter value is passed to the core untouched; the core resolves
# defaults for anything missing or malformed. None means "absent".
FILTER_SETTINGS = _CONFIG.get("chat_filter")

# Rule rows: pattern, action, replacement, optional is_active and priority.
RULES_CONFIG = _CONFIG.get("rules", [])

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
