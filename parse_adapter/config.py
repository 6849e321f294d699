import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource
from typing_extensions import Self

from parse_adapter.cli.util.paths import ParsePaths
from parse_adapter.domain.shared.error import ConfigurationError


# =============================================================================
# Parse API Configuration
# =============================================================================


class ParseConfig(BaseModel):
    """Parse REST API endpoint and application keys."""

    application_id: str = ""
    rest_api_key: str = ""
    host: str = "https://api.parse.com"
    namespace: str = "1"  # API version segment
    classes_path: str = "classes"  # Root of generic object collections

    def require_credentials(self) -> None:
        """Raise ConfigurationError unless both application keys are set."""
        missing = [
            name
            for name, value in (
                ("application_id", self.application_id),
                ("rest_api_key", self.rest_api_key),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing Parse credentials: {', '.join(missing)} "
                "(set PARSE_PARSE__APPLICATION_ID / PARSE_PARSE__REST_API_KEY)",
                code="missing_credentials",
            )


class HttpConfig(BaseModel):
    """HTTP client timeouts in seconds."""

    connect_timeout: float = 5.0
    read_timeout: float = 10.0
    write_timeout: float = 5.0
    pool_timeout: float = 5.0


class SessionConfig(BaseModel):
    """Where the current session is persisted.

    The directory uses empty string as sentinel to indicate "derive from ParsePaths".
    """

    storage_key: str = "parse_user"
    directory: str = ""  # Empty string = derive from paths; explicit value = use as-is


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    logfire: bool = False  # Instrument the httpx client with logfire

    @property
    def file(self) -> str | None:
        """Get log file path from PARSE_LOG_FILE env var."""
        return os.environ.get("PARSE_LOG_FILE")


# =============================================================================
# Application Configuration
# =============================================================================


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from PARSE_CONFIG_FILE, or config.yaml in the config directory."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        yaml_data = self._load_yaml_config()
        return yaml_data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        config_file = os.environ.get("PARSE_CONFIG_FILE")
        path = Path(config_file) if config_file else ParsePaths().config_file
        if path.exists():
            return yaml.safe_load(path.read_text()) or {}
        return {}


class Config(BaseSettings):
    parse: ParseConfig = ParseConfig()
    http: HttpConfig = HttpConfig()
    session: SessionConfig = SessionConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = {
        "env_prefix": "PARSE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows PARSE_PARSE__APPLICATION_ID override
    }

    @model_validator(mode="after")
    def derive_session_directory(self) -> Self:
        """Derive the session directory from ParsePaths if not explicitly set."""
        if not self.session.directory:
            self.session = SessionConfig(
                storage_key=self.session.storage_key,
                directory=str(ParsePaths().session_dir),
            )
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config.

        Priority (highest to lowest):
        1. init_settings - values passed to Config()
        2. env_settings - environment variables
        3. dotenv_settings - .env file
        4. yaml_settings - PARSE_CONFIG_FILE or ~/.config/parse-adapter/config.yaml
        5. file_secret_settings - secrets from files
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Configure the root logger from config.

    Call once at startup (CLI entry point) before any requests are made.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    handler: logging.Handler
    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(config.level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Request lines are logged by the adapter itself
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
