"""Configuration management for the LinkedIn Ads pipeline.

Configuration precedence (highest to lowest):
Environment variables (including a .env file) > YAML file > Defaults

The configuration is type-safe using dataclasses and is validated on load.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from loguru import logger

from linkedin_ads.core.constants import (
    DEFAULT_USER_AGENT,
    ENV_ACCESS_TOKEN,
    ENV_ACCOUNT_ID,
    ENV_API_VERSION,
    ENV_BASE_URL,
    ENV_CONFIG_FILE,
    ENV_HTTP_MAX_RETRIES,
    ENV_HTTP_MAX_RETRY_DELAY,
    ENV_HTTP_RETRY_DELAY,
    ENV_HTTP_TIMEOUT,
    ENV_HTTP_USER_AGENT,
    LINKEDIN_API_BASE_URL,
    LINKEDIN_API_VERSION,
    MAX_RETRIES,
    MAX_RETRY_DELAY_SECONDS,
    REQUEST_TIMEOUT_SECONDS,
    RETRY_DELAY_SECONDS,
)
from linkedin_ads.core.exceptions import ConfigurationError
from linkedin_ads.utils.env import get_env, get_env_float, get_env_int


@dataclass
class HTTPConfig:
    """Transport configuration.

    Attributes:
        timeout: Per-attempt request timeout in seconds
        max_retries: Retries after the first attempt (N => N+1 attempts)
        retry_delay: Base backoff delay in seconds
        max_retry_delay: Upper bound for a single backoff delay
        user_agent: User-Agent header sent with every request
        default_headers: Headers merged under the caller's headers
    """

    timeout: float = REQUEST_TIMEOUT_SECONDS
    max_retries: int = MAX_RETRIES
    retry_delay: float = RETRY_DELAY_SECONDS
    max_retry_delay: float = MAX_RETRY_DELAY_SECONDS
    user_agent: str = DEFAULT_USER_AGENT
    default_headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Validate configuration after initialization."""
        for name in ("timeout", "retry_delay", "max_retry_delay"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"{name} must be a number, got {value!r}")
        if isinstance(self.max_retries, bool) or not isinstance(self.max_retries, int):
            raise ConfigurationError(f"max_retries must be an integer, got {self.max_retries!r}")
        if not isinstance(self.user_agent, str):
            raise ConfigurationError(f"user_agent must be a string, got {self.user_agent!r}")
        if not isinstance(self.default_headers, dict) or not all(
            isinstance(key, str) and isinstance(value, str)
            for key, value in self.default_headers.items()
        ):
            raise ConfigurationError("default_headers must map header names to string values")

        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if self.max_retries < 0:
            raise ConfigurationError(f"max_retries cannot be negative, got {self.max_retries}")
        if self.retry_delay < 0 or self.max_retry_delay < 0:
            raise ConfigurationError("retry delays cannot be negative")

    @classmethod
    def from_env(cls, base: Optional["HTTPConfig"] = None) -> "HTTPConfig":
        """Create configuration from environment variables.

        Args:
            base: Values to fall back to for unset variables (defaults if None)

        Returns:
            HTTPConfig instance

        Raises:
            ConfigurationError: If a variable holds a non-numeric value
        """
        base = base or cls()
        try:
            return cls(
                timeout=get_env_float(ENV_HTTP_TIMEOUT, base.timeout),
                max_retries=get_env_int(ENV_HTTP_MAX_RETRIES, base.max_retries),
                retry_delay=get_env_float(ENV_HTTP_RETRY_DELAY, base.retry_delay),
                max_retry_delay=get_env_float(ENV_HTTP_MAX_RETRY_DELAY, base.max_retry_delay),
                user_agent=get_env(ENV_HTTP_USER_AGENT, base.user_agent),
                default_headers=dict(base.default_headers),
            )
        except ValueError as e:
            raise ConfigurationError(str(e))


@dataclass
class LinkedInConfig:
    """LinkedIn Marketing API credentials and endpoint settings."""

    access_token: str
    account_id: str = ""
    base_url: str = LINKEDIN_API_BASE_URL
    version: str = LINKEDIN_API_VERSION

    def __post_init__(self):
        """Validate configuration after initialization."""
        for name in ("access_token", "account_id", "base_url", "version"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigurationError(f"LinkedIn {name} must be a string, got {value!r}")
        if not self.access_token:
            raise ConfigurationError(
                f"LinkedIn access token is required (set {ENV_ACCESS_TOKEN})"
            )
        if not self.base_url:
            raise ConfigurationError("LinkedIn base URL cannot be empty")

    @classmethod
    def from_env(cls, defaults: Optional[Dict[str, Any]] = None) -> "LinkedInConfig":
        """Create configuration from environment variables.

        Args:
            defaults: Values (e.g. from YAML) used when a variable is unset

        Returns:
            LinkedInConfig instance

        Raises:
            ConfigurationError: If the access token is missing or a value is
                not a string
        """
        defaults = defaults or {}
        return cls(
            access_token=get_env(ENV_ACCESS_TOKEN, defaults.get("access_token") or ""),
            account_id=str(get_env(ENV_ACCOUNT_ID, defaults.get("account_id") or "")),
            base_url=get_env(ENV_BASE_URL, defaults.get("base_url", LINKEDIN_API_BASE_URL)),
            version=str(get_env(ENV_API_VERSION, defaults.get("version", LINKEDIN_API_VERSION))),
        )


@dataclass
class AppConfig:
    """Application-wide configuration."""

    linkedin: LinkedInConfig
    http: HTTPConfig = field(default_factory=HTTPConfig)


class ConfigurationManager:
    """Loads configuration from a YAML file and the environment.

    The YAML file is optional and may contain two sections:

        linkedin:
          account_id: "512345678"
          version: "202505"
        http:
          timeout: 30
          max_retries: 3
          default_headers:
            X-Custom: value

    Environment variables always win over the file.
    """

    def __init__(self, config_path: Optional[Path] = None, load_env_file: bool = True):
        """Initialize the configuration manager.

        Args:
            config_path: YAML file to read (falls back to $LINKEDIN_ADS_CONFIG)
            load_env_file: Whether to load a .env file before reading variables
        """
        self.config_path = config_path
        self.load_env_file = load_env_file
        self._app_config: Optional[AppConfig] = None

    def load_config(self) -> AppConfig:
        """Load application configuration.

        Returns:
            AppConfig instance with loaded configuration

        Raises:
            ConfigurationError: If configuration loading fails
        """
        if self.load_env_file:
            load_dotenv()

        yaml_config = self._load_yaml()

        http_section = yaml_config.get("http") or {}
        try:
            http_base = HTTPConfig(**http_section)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                "Invalid 'http' section in configuration file",
                details={"error": str(e)},
            )

        linkedin_section = yaml_config.get("linkedin") or {}
        if not isinstance(linkedin_section, dict):
            raise ConfigurationError("'linkedin' section in configuration file must be a mapping")

        app_config = AppConfig(
            linkedin=LinkedInConfig.from_env(linkedin_section),
            http=HTTPConfig.from_env(http_base),
        )

        logger.debug(
            f"Loaded configuration: base_url={app_config.linkedin.base_url}, "
            f"version={app_config.linkedin.version}, "
            f"max_retries={app_config.http.max_retries}"
        )

        self._app_config = app_config
        return app_config

    def _load_yaml(self) -> Dict[str, Any]:
        """Read the YAML configuration file, if one is configured.

        Returns:
            Parsed YAML mapping (empty when no file is configured)

        Raises:
            ConfigurationError: If the file is missing or cannot be parsed
        """
        config_path = self.config_path
        if config_path is None:
            env_path = get_env(ENV_CONFIG_FILE)
            if env_path is None:
                return {}
            config_path = Path(env_path)

        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Failed to parse YAML configuration: {config_path}",
                details={"error": str(e)},
            )

        if not isinstance(yaml_config, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping: {config_path}"
            )
        return yaml_config

    def get_config(self) -> AppConfig:
        """Get the current application configuration.

        Returns:
            AppConfig instance

        Raises:
            ConfigurationError: If configuration not loaded yet
        """
        if self._app_config is None:
            raise ConfigurationError(
                "Configuration not loaded. Call load_config() first."
            )
        return self._app_config
