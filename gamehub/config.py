"""Runtime configuration: defaults, an optional JSON file, then environment."""
import json
import logging
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger('gamehub.config')

DEFAULT_SECRET = 'change-me'

DEFAULT_CONFIG: Dict[str, Any] = {
    'data_dir': 'data',
    'upload_dir': 'uploads',
    'secret_key': DEFAULT_SECRET,
    'token_ttl_hours': 24,
    'max_upload_bytes': 5 * 1024 * 1024,
    'host': '0.0.0.0',
    'port': 5000,
    'log_level': 'INFO',
    'log_file': None,
    'cors_origins': '*',
    'admin_username': None,
    'admin_password': None,
}

# config key -> (environment variables in priority order, converter)
_ENV_OVERRIDES = {
    'data_dir': (('GAMEHUB_DATA_DIR',), str),
    'upload_dir': (('GAMEHUB_UPLOAD_DIR',), str),
    'secret_key': (('GAMEHUB_SECRET_KEY', 'JWT_SECRET'), str),
    'token_ttl_hours': (('GAMEHUB_TOKEN_TTL_HOURS',), float),
    'max_upload_bytes': (('GAMEHUB_MAX_UPLOAD_BYTES',), int),
    'host': (('GAMEHUB_HOST',), str),
    'port': (('GAMEHUB_PORT',), int),
    'log_level': (('GAMEHUB_LOG_LEVEL',), str),
    'log_file': (('GAMEHUB_LOG_FILE',), str),
    'cors_origins': (('GAMEHUB_CORS_ORIGINS',), str),
    'admin_username': (('GAMEHUB_ADMIN_USERNAME',), str),
    'admin_password': (('GAMEHUB_ADMIN_PASSWORD',), str),
}


def load_config(config_path: Optional[str] = None,
                environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """Load configuration with environment variable support.

    Precedence (highest first): environment variables, the JSON file at
    *config_path*, :data:`DEFAULT_CONFIG`.  Unknown keys in the file are kept
    so callers can pass extra Flask settings through.

    Raises:
        ValueError: if *config_path* is not valid JSON or an environment
            value cannot be converted.
    """
    environ = os.environ if environ is None else environ
    config = dict(DEFAULT_CONFIG)

    if config_path and os.path.exists(config_path):
        with open(config_path, 'r', encoding='utf-8') as f:
            try:
                config.update(json.load(f))
            except json.JSONDecodeError as e:
                raise ValueError(f"Config file '{config_path}' is not valid JSON: {e}")
    elif config_path:
        logger.warning("Config file '%s' not found, using defaults", config_path)

    for key, (names, convert) in _ENV_OVERRIDES.items():
        for name in names:
            value = environ.get(name)
            if value:
                try:
                    config[key] = convert(value)
                except ValueError:
                    raise ValueError(f"Invalid value for {name}: {value!r}")
                break

    if config['secret_key'] == DEFAULT_SECRET:
        logger.warning('Using the default secret key; set GAMEHUB_SECRET_KEY in production')
    return config
