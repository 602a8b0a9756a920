import os
from pathlib import Path
from typing import Optional

import yaml

from diffreview_core.errors import ConfigError
from diffreview_core.filters import parse_exclude_patterns

DEFAULT_CONFIG: dict = {
    "model": "gpt-4o",
    "exclude": [],  # glob patterns matched against the new file path (e.g. "**/*.lock", "dist/**")
    "max_concurrency": 8,  # hunks reviewed at the same time
    "langfuse_host": None,  # None = Langfuse cloud
}

# Action input name -> config key. Each input is read from INPUT_<NAME> first
# (how GitHub Actions exposes `with:` values), then from the bare env var.
ACTION_INPUTS: dict[str, str] = {
    "GITHUB_TOKEN": "github_token",
    "OPENAI_API_KEY": "openai_api_key",
    "OPENAI_API_MODEL": "model",
    "exclude": "exclude",
    "LANGFUSE_SECRET_KEY": "langfuse_secret_key",
    "LANGFUSE_PUBLIC_KEY": "langfuse_public_key",
    "LANGFUSE_HOST": "langfuse_host",
}

REQUIRED_INPUTS = ("GITHUB_TOKEN", "OPENAI_API_KEY", "OPENAI_API_MODEL")


def get_input(name: str) -> str:
    """Return an action input, mirroring ``core.getInput`` from the Actions toolkit.

    Returns an empty string when the input is not set.
    """
    env_name = "INPUT_" + name.replace(" ", "_").upper()
    value = os.environ.get(env_name)
    if value is None or not value.strip():
        value = os.environ.get(name, "")
    return value.strip()


def load_config(config_path: str = ".diffreview.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .diffreview.yml in the current directory
      3. Action inputs / environment variables
      4. CLI argument overrides
    """
    config = {**DEFAULT_CONFIG, "exclude": list(DEFAULT_CONFIG["exclude"])}
    config.update({key: None for key in ACTION_INPUTS.values() if key not in config})

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    for name, key in ACTION_INPUTS.items():
        value = get_input(name)
        if value:
            config[key] = value

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    config["exclude"] = parse_exclude_patterns(config.get("exclude"))
    return config


def validate_config(config: dict) -> None:
    """Raise ConfigError for the first required value that is missing."""
    for name in REQUIRED_INPUTS:
        if not config.get(ACTION_INPUTS[name]):
            raise ConfigError(f"Input required and not supplied: {name}")

    try:
        max_concurrency = int(config.get("max_concurrency", DEFAULT_CONFIG["max_concurrency"]))
    except (TypeError, ValueError):
        raise ConfigError(f"max_concurrency must be an integer, got {config.get('max_concurrency')!r}")
    if max_concurrency < 1:
        raise ConfigError("max_concurrency must be at least 1.")
    config["max_concurrency"] = max_concurrency


def tracing_enabled(config: dict) -> bool:
    return bool(config.get("langfuse_secret_key")) and bool(config.get("langfuse_public_key"))
