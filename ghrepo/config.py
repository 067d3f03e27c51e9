#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path

import logging
import sys

import yaml

from .exit_codes import ConfigError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("ghrepo")

# OAuth app registered for the device flow
DEFAULT_CLIENT_ID = "Ov23lihrjpuE0czcBGvD"


def get_config_path():
    """Get the path to the configuration file.

    Checks in order:
    1. GHREPO_CONFIG environment variable
    2. ~/.ghrepo/ directory
    """
    if os.environ.get('GHREPO_CONFIG'):
        path = Path(os.environ['GHREPO_CONFIG'])
        if path.exists():
            return path

    config_dir = Path.home() / '.ghrepo'
    for filename in ['config.json', 'config.toml', 'config.yaml', 'config.yml']:
        path = config_dir / filename
        if path.exists():
            return path

    # If no file exists, return default path for saving
    return config_dir / 'config.yaml'


def get_default_config():
    """Get default configuration."""
    return {
        "github": {
            "api_url": "https://api.github.com",
            "oauth_url": "https://github.com",
            "client_id": DEFAULT_CLIENT_ID,
            "scopes": ["repo"],
            "per_page": 100,
            "timeout_seconds": 30
        },
        "credentials": {
            "path": "~/.ghreporc.yml"
        },
        "logging": {
            "level": "INFO",
            "format": "%(levelname)s: %(message)s"
        },
        "display": {
            "progress_bar": True
        }
    }


def load_config():
    """
    Load configuration from file.

    A broken file in the default location is logged and ignored; a file
    named by GHREPO_CONFIG must exist and parse.

    Raises:
        ConfigError: If the GHREPO_CONFIG file is missing or malformed
    """
    config_path = get_config_path()
    explicit = os.environ.get('GHREPO_CONFIG')
    if explicit and config_path != Path(explicit):
        raise ConfigError(f"Config file {explicit} does not exist")

    # Start with default config
    config = get_default_config()

    # Load from file if it exists
    if config_path.exists():
        try:
            if config_path.suffix.lower() in ['.toml']:
                with open(config_path, 'rb') as f:
                    file_config = tomllib.load(f)
            elif config_path.suffix.lower() in ['.yaml', '.yml']:
                with open(config_path, 'r') as f:
                    file_config = yaml.safe_load(f) or {}
            else:
                with open(config_path, 'r') as f:
                    file_config = json.load(f)

            if not isinstance(file_config, dict):
                raise ValueError("top level is not a mapping")
            config = merge_configs(config, file_config)
        except (OSError, ValueError, yaml.YAMLError) as e:
            if explicit:
                raise ConfigError(f"Error loading config from {config_path}: {e}") from e
            logger.error(f"Ignoring config at {config_path}: {e}")

    # Apply environment variable overrides
    config = apply_env_overrides(config)

    return config


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value

    return merged


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: GHREPO_SECTION_KEY
    For example: GHREPO_GITHUB_PER_PAGE=50
    """
    env_prefix = "GHREPO_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix):
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')

        # Convert value
        if value.lower() in ('true', 'yes', 'on'):
            typed_value = True
        elif value.lower() in ('false', 'no', 'off'):
            typed_value = False
        elif value.isdigit():
            typed_value = int(value)
        else:
            typed_value = value

        current_level = config
        i = 0
        while i < len(key_parts):
            # Find the longest key in current_level that is a prefix of the remaining key_parts
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts = config_key.split('_')
                if key_parts[i : i + len(config_key_parts)] == config_key_parts:
                    if len(config_key_parts) > best_match_len:
                        best_match_len = len(config_key_parts)
                        matched_key = config_key

            if matched_key:
                if i + best_match_len == len(key_parts):
                    current_level[matched_key] = typed_value
                    break

                if isinstance(current_level[matched_key], dict):
                    current_level = current_level[matched_key]
                    i += best_match_len
                else:
                    break
            else:
                break

    return config


def configure_logging(config=None, verbose=False):
    """Apply the configured log level to the ghrepo logger."""
    config = config or get_default_config()
    log_config = config.get("logging", {})

    if verbose:
        level = logging.DEBUG
    else:
        level_name = str(log_config.get("level", "INFO")).upper()
        level = getattr(logging, level_name, logging.INFO)

    logger.setLevel(level)

    log_format = log_config.get("format")
    if log_format:
        for handler in logging.getLogger().handlers:
            handler.setFormatter(logging.Formatter(log_format))

    return level
