"""Provides functions for loading and accessing configuration settings.

Supports loading from .env files, environment variables, and a YAML
configuration file (~/.lambstock/config.yaml). Keys are dotted paths
(e.g. 'retry.max_retries') that address nested YAML mappings.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv

from lambstock.domain.models.inventory import RetryPolicy

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".lambstock"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"
ENV_PREFIX = "LAMBSTOCK_"

DEFAULTS: Dict[str, Any] = {
    "aws.credential_timeout_ms": 200,
    "retry.base_delay_ms": 100,
    "retry.max_retries": 15,
    "retry.jitter": True,
    "lambda.page_size": 100,
    "tagging.page_size": 50,
    "tagging.retryable_errors": ["InvalidParameterException"],
    "logging.level": "WARNING",
}

# Values passed verbatim to boto3; never coerced to numbers.
STRING_KEYS = frozenset({"aws.profile", "aws.region"})

# --- Global Configuration Store (Simple Approach) ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}
_loaded = False


def load_configuration(config_file: Path = DEFAULT_CONFIG_FILE, env_file: Optional[Path] = None, reload: bool = False) -> None:
    """Loads configuration from a YAML file and a .env file.

    Priority order (highest to lowest):
    1. Test overrides
    2. Environment Variables (LAMBSTOCK_*)
    3. .env file (only fills variables not already set)
    4. YAML configuration file
    5. Built-in defaults

    Args:
        config_file: Path to the YAML configuration file.
        env_file: Path to the .env file (searches upwards from cwd if None).
        reload: Load again even if configuration was already loaded.
    """
    global _config, _loaded
    if _loaded and not reload:
        logger.debug("Configuration already loaded.")
        return

    _config = {}

    # 1. Load from YAML file (Lowest priority)
    if config_file.exists():
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)
            if isinstance(yaml_config, dict):
                _config.update(yaml_config)
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a mapping.")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load or parse YAML config {config_file}: {e}")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. Load from .env file (override=False: real environment wins)
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug("Skipping .env file loading (no file found).")

    _loaded = True
    logger.debug("Configuration loading process completed.")


def env_var_name(key: str) -> str:
    """'retry.max_retries' -> 'LAMBSTOCK_RETRY_MAX_RETRIES'"""
    return ENV_PREFIX + key.upper().replace(".", "_")


def _coerce(value: str) -> Any:
    if value.lower() == "true":
        return True
    if value.lower() == "false":
        return False
    try:
        return float(value) if "." in value else int(value)
    except ValueError:
        return value


def _lookup(mapping: Dict[str, Any], key: str) -> Any:
    if key in mapping:
        return mapping[key]
    current: Any = mapping
    for part in key.split("."):
        if not isinstance(current, dict) or part not in current:
            raise KeyError(key)
        current = current[part]
    return current


def get_config(key: str, default: Any = None) -> Any:
    """Get a configuration value by dotted key.

    Args:
        key: The configuration key (e.g. 'aws.region').
        default: Returned when the key is not set anywhere. If None, the
            built-in default for the key is used.

    Returns:
        The configuration value.
    """
    if key in _test_config:
        return _test_config[key]

    env_key = env_var_name(key)
    if env_key in os.environ:
        raw = os.environ[env_key]
        return raw if key in STRING_KEYS else _coerce(raw)

    try:
        value = _lookup(_config, key)
    except KeyError:
        pass
    else:
        return str(value) if key in STRING_KEYS and value is not None else value

    if default is None:
        default = DEFAULTS.get(key)
    logger.debug(f"Config key '{key}' not set. Returning default: {default}")
    return default


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None


# --- Convenience Functions ---

def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def get_retry_policy() -> RetryPolicy:
    """Builds the backoff policy from the 'retry.*' keys."""
    return RetryPolicy(
        base_delay=float(get_config("retry.base_delay_ms")) / 1000.0,
        jitter=_as_bool(get_config("retry.jitter")),
        max_retries=int(get_config("retry.max_retries")),
    )


def get_credential_timeout() -> float:
    """Credential resolution timeout in seconds."""
    return float(get_config("aws.credential_timeout_ms")) / 1000.0


def get_tagging_retryable_errors() -> List[str]:
    """Error codes the tag listing retries on; accepts a list or a comma separated string."""
    value = get_config("tagging.retryable_errors")
    if isinstance(value, str):
        return [code.strip() for code in value.split(",") if code.strip()]
    return [str(code) for code in value or []]


def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """
    Set configuration values for testing purposes.
    These values will override any existing configuration.

    Args:
        config_dict: Dictionary of configuration values to set
    """
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {config_dict}")


def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    logger.debug("Cleared testing configuration")
