from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from utils import deep_merge


def load_json_config(path: Path) -> Dict[str, Any]:
    """Load a JSON config file or raise a helpful error.

    Args:
        path: Path to the JSON configuration file.

    Returns:
        Parsed JSON data as a dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        SystemExit: If JSON is invalid or not an object, with a friendly message.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        msg = (
            f"\nERROR: Your config is not valid JSON.\n"
            f"File: {path}\n"
            f"Line {e.lineno}, Col {e.colno}\n"
            f"{e.msg}\n"
        )
        raise SystemExit(msg)
    if not isinstance(data, dict):
        raise SystemExit(f"\nERROR: {path} must contain a JSON object at the top level.\n")
    return data


def load_config(path: Path, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Load the config file and lay command-line overrides over it."""
    data = load_json_config(path)
    if overrides:
        data = deep_merge(data, overrides)
    return data
