"""
Settings loader module for the Bond Yield Calculator.
Provides centralized access to configuration settings from settings.yaml.
"""

import os
import yaml
from pathlib import Path
import logging

logger = logging.getLogger(__name__)

# Always resolve relative to the project root (parent of core/)
_CORE_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _CORE_DIR.parent
SETTINGS_FILE = Path(os.environ.get('BOND_CALC_SETTINGS', _PROJECT_ROOT / 'settings.yaml'))

# Cache for loaded settings to avoid repeated file reads
_settings_cache = None
_cache_mtime = None


def load_settings():
    """
    Load settings from the YAML file with caching.
    Returns the full settings dictionary, or {} when the file is missing or unreadable.
    """
    global _settings_cache, _cache_mtime

    try:
        settings_path = Path(SETTINGS_FILE)

        # Reload when the file changed or nothing is cached yet
        if settings_path.exists():
            current_mtime = settings_path.stat().st_mtime
            if _settings_cache is None or _cache_mtime != current_mtime:
                with open(settings_path, 'r') as f:
                    _settings_cache = yaml.safe_load(f) or {}
                _cache_mtime = current_mtime
                logger.info(f"Loaded settings from {settings_path}")
            return _settings_cache
        else:
            logger.warning(f"Settings file {settings_path} not found, using defaults")
            return {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Error loading settings: {e}")
        return {}


def get_app_config():
    """Get application configuration settings."""
    settings = load_settings()
    return settings.get('app_config', {}) or {}


def get_solver_settings():
    """Get YTM solver overrides (tolerance, max_iterations, bracket, fallback flag)."""
    settings = load_settings()
    return settings.get('solver', {}) or {}


def get_cors_origins():
    """Get the list of front-end origins allowed to call the API."""
    settings = load_settings()
    cors = settings.get('cors', {}) or {}
    return list(cors.get('allowed_origins', []) or [])


def reload_settings():
    """Force reload of settings from disk."""
    global _settings_cache, _cache_mtime
    _settings_cache = None
    _cache_mtime = None
    logger.info("Settings cache cleared, will reload on next access")
