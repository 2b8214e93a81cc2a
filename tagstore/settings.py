import copy
import logging
import os

import yaml

from tagstore.constants import CONFIG_FILE, DEFAULT_SETTINGS, LOGGER_NAME
from tagstore.exceptions import ValidationException

# Retrieve main logger
logger = logging.getLogger(LOGGER_NAME)


# Cache variable
_cached_settings = None


def merge_settings(overrides):
    """Deep merge a settings mapping over the defaults, one section at a time"""
    merged_settings = copy.deepcopy(DEFAULT_SETTINGS)
    for section, values in (overrides or {}).items():
        if isinstance(values, dict) and section in merged_settings and isinstance(merged_settings[section], dict):
            merged_settings[section].update(values)
        else:
            merged_settings[section] = values
    return merged_settings


def load_settings(config_file=None, force=False):
    global _cached_settings

    if _cached_settings and not force and config_file is None:
        return _cached_settings

    config_file = config_file or CONFIG_FILE
    if os.path.exists(config_file):
        logger.debug(f"Reading configuration file: {config_file}")
        with open(config_file, "r") as yaml_file:
            try:
                settings = yaml.safe_load(yaml_file) or {}
            except yaml.YAMLError as e:
                raise ValidationException(f"Invalid configuration file {config_file}: {e}") from e
        if not isinstance(settings, dict):
            raise ValidationException(f"Configuration file {config_file} must contain a mapping")
        settings = merge_settings(settings)
    else:
        logger.debug(f"Configuration file {config_file} not found, using defaults.")
        settings = merge_settings({})

    _cached_settings = settings
    return settings


def reload_settings():
    """Reload settings cache"""
    global _cached_settings
    _cached_settings = None
    return load_settings(force=True)
