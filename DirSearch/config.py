import copy
import json
import os
import re
from typing import Any, Dict, Optional

from .errors import ConfigError

CONFIG_FILE_NAME = "config.json"

DEFAULT_CONFIG = {
    "index": {
        "default_path": "index.json"
    },
    "search": {
        "top_k": 5,
        # "truncate" ranks by the integer part of the score, "exact" by the full value
        "tie_break": "truncate"
    }
}

TIE_BREAK_MODES = ("truncate", "exact")

_STRING_OR_COMMENT = re.compile(r'"(?:\\.|[^"\\])*"|//.*')


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def _drop_comment(match) -> str:
    token = match.group(0)
    return token if token.startswith('"') else ""


def _strip_comments(content: str) -> str:
    # Remove line comments (everything after a // that is not inside a string)
    filtered_lines = []
    for line in content.splitlines():
        line_without_comment = _STRING_OR_COMMENT.sub(_drop_comment, line)
        if line_without_comment.strip():
            filtered_lines.append(line_without_comment)
    return "\n".join(filtered_lines)


def load_config(config_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a JSON file, handling // comments.

    When no file is given, config.json in the current directory is used if it
    exists, otherwise the defaults.

    Args:
        config_file: Path to configuration file

    Returns:
        Configuration dictionary merged over DEFAULT_CONFIG

    Raises:
        ConfigError: If the file cannot be read, is not a valid JSON object
            or holds an invalid setting
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_file is None:
        if not os.path.exists(CONFIG_FILE_NAME):
            return config
        config_file = CONFIG_FILE_NAME

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(f"could not read configuration file {config_file}: {e}") from e

    content = _strip_comments(content)
    try:
        overrides = json.loads(content) if content.strip() else {}
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid configuration file {config_file}: {e}") from e

    if not isinstance(overrides, dict):
        raise ConfigError(f"invalid configuration file {config_file}: expected a JSON object")

    _merge(config, overrides)

    for section in DEFAULT_CONFIG:
        if not isinstance(config[section], dict):
            raise ConfigError(f"invalid configuration file {config_file}: {section!r} must be an object")

    tie_break = config["search"].get("tie_break")
    if tie_break not in TIE_BREAK_MODES:
        raise ConfigError(f"invalid search.tie_break {tie_break!r}, expected one of {', '.join(TIE_BREAK_MODES)}")

    top_k = config["search"].get("top_k")
    # bool is a subclass of int, reject it explicitly
    if isinstance(top_k, bool) or not isinstance(top_k, int) or top_k < 0:
        raise ConfigError(f"invalid search.top_k {top_k!r}, expected a non-negative integer")

    default_path = config["index"].get("default_path")
    if not isinstance(default_path, str) or not default_path:
        raise ConfigError(f"invalid index.default_path {default_path!r}, expected a file path")

    return config
