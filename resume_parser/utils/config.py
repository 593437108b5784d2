"""
Configuration management for Resume Parser.
"""

from pathlib import Path
from typing import Optional
import copy
import json
import os


class Config:
    """Manages application configuration and API keys."""

    DEFAULT_CONFIG = {
        "api_keys": {
            "anthropic": "",
            "jobs_api": "",
        },
        "parsing": {
            "max_file_size_bytes": 5 * 1024 * 1024,
            "min_text_length": 50,
            "use_ai": False,
            "ai_model": "claude-3-haiku-20240307",
            "batch_workers": 4,
        },
        "search": {
            "api_base_url": "http://localhost:3001/api",
            "page_limit": 50,
            "fuzzy_threshold": 0.7,
        },
        "storage": {
            "backend": "json",
            "data_dir": "./resume_data",
        },
    }

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to config file (default: ~/.resume_parser/config.json)
        """
        if config_path:
            self.config_path = Path(config_path)
        else:
            self.config_path = Path.home() / ".resume_parser" / "config.json"

        self.config = self._load_config()

    def _load_config(self) -> dict:
        """Load configuration from file or create default."""
        defaults = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path.exists():
            with open(self.config_path, 'r') as f:
                user_config = json.load(f)

            # Merge with defaults
            return self._deep_merge(defaults, user_config)

        return defaults

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def save(self) -> None:
        """Save current configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get(self, key: str, default=None):
        """
        Get a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "parsing.use_ai")
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value) -> None:
        """
        Set a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "search.api_base_url")
            value: Value to set
        """
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if k not in config or not isinstance(config[k], dict):
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def get_api_key(self, provider: str) -> str:
        """
        Get API key for a provider.

        Environment variables (e.g. ANTHROPIC_API_KEY) take precedence
        over the config file.

        Args:
            provider: Provider name (anthropic, jobs_api)

        Returns:
            API key string
        """
        env_var = f"{provider.upper()}_API_KEY"
        env_value = os.environ.get(env_var)

        if env_value:
            return env_value

        return self.get(f"api_keys.{provider}", "")

    def set_api_key(self, provider: str, key: str) -> None:
        """Set API key for a provider."""
        self.set(f"api_keys.{provider}", key)
        self.save()

    def get_data_dir(self) -> str:
        """Get the directory used by the JSON storage backend."""
        return self.get("storage.data_dir", "./resume_data")

    def print_config(self) -> None:
        """Print current configuration (with API keys masked)."""
        masked_config = self.masked()
        print(json.dumps(masked_config, indent=2))

    def masked(self) -> dict:
        return self._mask_sensitive(self.config)

    def _mask_sensitive(self, data: dict, sensitive_keys: set = None) -> dict:
        """Mask sensitive values in configuration."""
        if sensitive_keys is None:
            sensitive_keys = {"api_key", "api_keys", "key", "secret", "password", "token"}

        result = {}
        for key, value in data.items():
            if isinstance(value, dict):
                # Everything under api_keys is a secret regardless of its name
                nested = sensitive_keys | {k.lower() for k in value} if key == "api_keys" else sensitive_keys
                result[key] = self._mask_sensitive(value, nested)
            elif any(s in key.lower() for s in sensitive_keys):
                if value:
                    value = str(value)
                    result[key] = f"{value[:4]}...{value[-4:]}" if len(value) > 8 else "****"
                else:
                    result[key] = "(not set)"
            else:
                result[key] = value
        return result
