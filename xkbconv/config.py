"""Configuration loader and validator for xkbconv.

Provides ``load_config(path)`` which reads a JSON config (with
comment and trailing-comma tolerant sanitizer) and merges user
overrides from ``~/.config/xkbconv/config.json``.

Also provides ``validate_config(conf)`` which normalizes and
validates config keys, raising ``ValueError`` on invalid values, and
``apply_environment(conf)`` for the ``LK_XKB_DEBUG`` toggle.
"""

from __future__ import annotations

import json
import logging
import os
import re

logger = logging.getLogger(__name__)

USER_CONFIG_PATH = '~/.config/xkbconv/config.json'

DEBUG_ENV = 'LK_XKB_DEBUG'

# Single source of truth for default configuration
DEFAULT_CONFIG: dict = {
    'model': 'pc105',
    'layout': 'us',
    'variant': '',
    'options': '',
    'print_table': False,
    'xkb_debug': False,
}

_STRING_KEYS = ('model', 'layout', 'variant', 'options')
_BOOL_KEYS = ('print_table', 'xkb_debug')


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _sanitize_json_text(s: str) -> str:
    """Remove ``#``/``//`` comments and trailing commas from JSON-like text."""
    # Hash-style line comments
    s = re.sub(r"^[ \t]*#.*$", "", s, flags=re.MULTILINE)
    # C++-style line comments
    s = re.sub(r"^[ \t]*//.*$", "", s, flags=re.MULTILINE)
    # Trailing commas before } or ]
    s = re.sub(r",[ \t\r\n]+(\}|\])", r"\1", s)
    return s


# ------------------------------------------------------------------
# Validation
# ------------------------------------------------------------------

def validate_config(conf: dict | None) -> dict:
    """Validate and normalize configuration dictionary.

    Returns a normalized dict with all expected keys.
    Raises ``ValueError`` on invalid values.
    """
    if conf is None:
        conf = {}

    out = dict(DEFAULT_CONFIG)

    # model, layout, variant, options: strings, comma lists kept verbatim
    for key in _STRING_KEYS:
        value = conf.get(key, DEFAULT_CONFIG[key])
        if value is None:
            value = ''
        if not isinstance(value, str):
            raise ValueError(f"Invalid '{key}': must be a string")
        out[key] = value.strip()

    if not out['layout']:
        raise ValueError("Invalid 'layout': must be a non-empty string")

    # print_table, xkb_debug: booleans
    for key in _BOOL_KEYS:
        value = conf.get(key, DEFAULT_CONFIG[key])
        if not isinstance(value, bool):
            raise ValueError(f"Invalid '{key}': must be boolean")
        out[key] = value

    return out


def _read_and_merge(path: str, target_config: dict) -> bool:
    """Read a JSON file, validate, and merge into *target_config*.

    Returns True on success, False on any error.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = f.read()
    except OSError as exc:
        logger.warning("Cannot read config %s: %s", path, exc)
        return False

    try:
        cfg = json.loads(raw)
    except json.JSONDecodeError:
        try:
            cfg = json.loads(_sanitize_json_text(raw))
        except json.JSONDecodeError as exc:
            logger.warning("JSON parse error in %s: %s", path, exc)
            return False

    if not isinstance(cfg, dict):
        logger.warning("Invalid config %s: top level must be an object", path)
        return False

    try:
        validated = validate_config({**target_config, **cfg})
    except ValueError as verr:
        logger.warning("Invalid config %s: %s", path, verr)
        return False

    # Only override keys explicitly present in source
    for k in cfg:
        if k in validated:
            target_config[k] = validated[k]
    return True


# ------------------------------------------------------------------
# Top-level loader
# ------------------------------------------------------------------

def load_config(config_path: str | None = None) -> dict:
    """Load and merge configuration.

    If *config_path* is given, uses only that file (returns defaults if
    the file does not exist).  Otherwise falls back to
    ``~/.config/xkbconv/config.json``.

    Returns the effective configuration dict (always has all default keys).
    """
    config = dict(DEFAULT_CONFIG)

    if config_path is not None:
        # Explicit path: use only it, no fallback
        if os.path.exists(config_path):
            _read_and_merge(config_path, config)
        else:
            logger.debug("Config %s does not exist, using defaults", config_path)
        return config

    user_cfg = os.path.expanduser(USER_CONFIG_PATH)
    if os.path.exists(user_cfg):
        _read_and_merge(user_cfg, config)

    return config


def apply_environment(conf: dict, environ: dict | None = None) -> dict:
    """Return *conf* with ``LK_XKB_DEBUG`` applied (any non-empty value enables it)."""
    environ = os.environ if environ is None else environ
    out = dict(conf)
    if environ.get(DEBUG_ENV):
        out['xkb_debug'] = True
    return out
