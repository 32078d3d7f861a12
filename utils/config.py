import os

import yaml

# Environment variables take precedence over the YAML values for secrets.
ENV_OVERRIDES = {
    ("discord", "token"): "EMBEDBOT_DISCORD_TOKEN",
    ("deepl", "auth_key"): "EMBEDBOT_DEEPL_KEY",
}

DEFAULT_REQUEST_TIMEOUT = 15.0
DEFAULT_MAX_UPLOAD_BYTES = 8_000_000
DEFAULT_SCRAPE_API_BASE = "https://api.vxtwitter.com/Twitter/status"
DEFAULT_BLUESKY_API_BASE = "https://public.api.bsky.app"


class ConfigError(Exception):
    """Raised when the configuration file is missing or cannot be parsed."""


def load_config(config_file: str) -> dict:
    """
    Load configuration settings from a YAML file.

    The file is parsed with `yaml.safe_load`, then the secrets listed in
    `ENV_OVERRIDES` are replaced by their environment variable when it is set.

    Args:
        config_file (str): The file path to the YAML configuration file.

    Returns:
        dict: A dictionary containing the parsed configuration data.

    Raises:
        ConfigError: If the file is not found or is not valid YAML.

    Example Usage:
        config = load_config("config/config.yaml")
        token = config["discord"]["token"]
    """
    try:
        with open(config_file, encoding="utf-8") as file:
            config = yaml.safe_load(file) or {}
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file {config_file} not found.") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML file: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"Configuration file {config_file} must contain a mapping.")

    apply_env_overrides(config)
    return config


def apply_env_overrides(config: dict) -> dict:
    for (section, key), env_name in ENV_OVERRIDES.items():
        value = os.getenv(env_name, "").strip()
        if value:
            config.setdefault(section, {})
            if config[section] is None:
                config[section] = {}
            config[section][key] = value
    return config


def request_timeout(config: dict) -> float:
    script_cfg = config.get("script", {}) or {}
    return float(script_cfg.get("request_timeout", DEFAULT_REQUEST_TIMEOUT))


def max_upload_bytes(config: dict) -> int:
    media_cfg = config.get("media", {}) or {}
    return int(media_cfg.get("max_upload_bytes", DEFAULT_MAX_UPLOAD_BYTES))


def provider_setting(config: dict, provider: str, key: str, default: str) -> str:
    providers_cfg = config.get("providers", {}) or {}
    return (providers_cfg.get(provider, {}) or {}).get(key, default)


def require(config: dict, section: str, key: str) -> str:
    """Return a mandatory setting or raise ConfigError naming the missing path."""
    value = (config.get(section, {}) or {}).get(key)
    if not value:
        raise ConfigError(f"Missing required setting '{section}.{key}'.")
    return value
