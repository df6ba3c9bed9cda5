"""
Centralized Configuration - Single source of truth for all settings.

All environment variables are read here, validated, and exposed as module-level
constants. Other modules import from here instead of reading os.environ directly.

Usage:
    from template_qa.config import MAX_SCAN_CHARS, LOG_LEVEL
"""

import os
import sys

from template_qa.errors import ConfigurationError

# ─── PATHS ───────────────────────────────────────────────────

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, str(default))
    try:
        return int(raw)
    except ValueError:
        _errors.append(f"{name} must be an integer, got '{raw}'")
        return default


_errors = []

# ─── POLICY SCANNING ─────────────────────────────────────────

MAX_SCAN_CHARS = _int_env("TQA_MAX_SCAN_CHARS", 4096)
POLICY_RULES_PATH = os.environ.get("TQA_POLICY_RULES_PATH", "")

# ─── VALIDATION CACHE ────────────────────────────────────────

ENABLE_VALIDATION_CACHE = os.environ.get("TQA_ENABLE_VALIDATION_CACHE", "true").lower() == "true"
VALIDATION_CACHE_TTL_SECONDS = _int_env("TQA_VALIDATION_CACHE_TTL_SECONDS", 3600)
VALIDATION_CACHE_MAX_ENTRIES = _int_env("TQA_VALIDATION_CACHE_MAX_ENTRIES", 1024)

# ─── API ─────────────────────────────────────────────────────

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = _int_env("API_PORT", 8000)
CORS_ORIGINS = os.environ.get("TQA_CORS_ORIGINS", "http://localhost:3000").split(",")

# ─── LOGGING ─────────────────────────────────────────────────

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.environ.get("LOG_FORMAT", "text")  # "text" or "json"
LOG_FILE = os.environ.get("LOG_FILE", "")  # empty = stdout only

# ─── VALIDATION ──────────────────────────────────────────────

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_VALID_LOG_FORMATS = {"text", "json"}

if LOG_LEVEL not in _VALID_LOG_LEVELS:
    _errors.append(f"LOG_LEVEL must be one of {_VALID_LOG_LEVELS}, got '{LOG_LEVEL}'")

if LOG_FORMAT not in _VALID_LOG_FORMATS:
    _errors.append(f"LOG_FORMAT must be one of {_VALID_LOG_FORMATS}, got '{LOG_FORMAT}'")

if MAX_SCAN_CHARS < 1:
    _errors.append(f"TQA_MAX_SCAN_CHARS must be positive, got {MAX_SCAN_CHARS}")

if VALIDATION_CACHE_TTL_SECONDS < 1:
    _errors.append(f"TQA_VALIDATION_CACHE_TTL_SECONDS must be positive, got {VALIDATION_CACHE_TTL_SECONDS}")

if VALIDATION_CACHE_MAX_ENTRIES < 1:
    _errors.append(f"TQA_VALIDATION_CACHE_MAX_ENTRIES must be positive, got {VALIDATION_CACHE_MAX_ENTRIES}")

if POLICY_RULES_PATH and not os.path.isfile(POLICY_RULES_PATH):
    _errors.append(f"TQA_POLICY_RULES_PATH does not point to a file: '{POLICY_RULES_PATH}'")

if _errors:
    for e in _errors:
        print(f"[config] ERROR: {e}", file=sys.stderr)
    # Don't crash during import - the engine runs on defaults


def validate(strict: bool = False) -> list:
    """Validate all configuration settings.

    Args:
        strict: If True, raise ConfigurationError on any errors.

    Returns:
        List of error messages (empty if all valid).
    """
    if strict and _errors:
        raise ConfigurationError(f"Configuration errors: {'; '.join(_errors)}")
    return list(_errors)


def print_config():
    """Print current configuration (safe - no secrets)."""
    print("=" * 50)
    print("Template QA Configuration")
    print("=" * 50)
    print(f"  MAX_SCAN_CHARS:          {MAX_SCAN_CHARS}")
    print(f"  POLICY_RULES_PATH:       {POLICY_RULES_PATH or '(defaults)'}")
    print(f"  ENABLE_VALIDATION_CACHE: {ENABLE_VALIDATION_CACHE}")
    print(f"  VALIDATION_CACHE_TTL:    {VALIDATION_CACHE_TTL_SECONDS}s")
    print(f"  VALIDATION_CACHE_MAX:    {VALIDATION_CACHE_MAX_ENTRIES}")
    print(f"  API_HOST:                {API_HOST}")
    print(f"  API_PORT:                {API_PORT}")
    print(f"  LOG_LEVEL:               {LOG_LEVEL}")
    print(f"  LOG_FORMAT:              {LOG_FORMAT}")
    print(f"  PROJECT_ROOT:            {PROJECT_ROOT}")
    print("=" * 50)
