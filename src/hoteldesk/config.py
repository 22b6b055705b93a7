"""Configuration file loading and validation."""

import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from .consts import (
    COMPONENT_CODE_PREFIX,
    DATABASE_PATH,
    DATE_FORMAT_DEFAULT,
    DECIMAL_SEPARATOR_DEFAULT,
    DEMO_ROW_COUNT,
    FALSE_GLYPH,
    LOG_FILE_DEFAULT,
    THOUSANDS_SEPARATOR_DEFAULT,
    TRUE_GLYPH,
)
from .errors import ConfigException

logger = logging.getLogger(__name__)


class WebConfig(BaseModel):
    """Web service configuration."""

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    debug: bool = Field(default=False)


class DisplayConfig(BaseModel):
    """Cell formatting settings for table and list surfaces."""

    date_format: str = Field(default=DATE_FORMAT_DEFAULT)
    thousands_separator: str = Field(default=THOUSANDS_SEPARATOR_DEFAULT)
    decimal_separator: str = Field(default=DECIMAL_SEPARATOR_DEFAULT, min_length=1)
    true_glyph: str = Field(default=TRUE_GLYPH)
    false_glyph: str = Field(default=FALSE_GLYPH)

    @field_validator("date_format")
    @classmethod
    def validate_date_format(cls, v: str) -> str:
        if "%" not in v:
            raise ValueError(f"Invalid date format: '{v}'. Use strftime directives such as %d/%m/%Y")
        return v


class EngineConfig(BaseModel):
    """Component engine settings."""

    code_prefix: str = Field(default=COMPONENT_CODE_PREFIX, min_length=1)
    demo_rows: int = Field(default=DEMO_ROW_COUNT, ge=0)

    @field_validator("code_prefix")
    @classmethod
    def normalize_code_prefix(cls, v: str) -> str:
        return v.strip().upper()


class Config(BaseSettings):
    """Application configuration."""

    database_path: str = Field(default=DATABASE_PATH)
    log_file: str = Field(default=LOG_FILE_DEFAULT)

    web: WebConfig = Field(default_factory=WebConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)

    model_config = SettingsConfigDict(
        env_prefix="HOTELDESK_",
        env_nested_delimiter="__",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )

    @classmethod
    def load_from_file(cls, config_path: str) -> "Config":
        """Load configuration from specified path."""
        path = Path(config_path)
        if not path.exists():
            raise ConfigException(f"Configuration file not found: {config_path}")

        class _Config(cls):
            model_config = SettingsConfigDict(
                toml_file=str(path),
                env_prefix="HOTELDESK_",
                env_nested_delimiter="__",
            )

        try:
            return _Config()
        except ValidationError as e:
            raise ConfigException(format_validation_error(e)) from e
        except ValueError as e:
            # tomllib.TOMLDecodeError is a ValueError
            raise ConfigException(f"Invalid TOML syntax: {e}") from e


def format_validation_error(e: ValidationError) -> str:
    lines = ["Configuration validation failed:"]
    for error in e.errors():
        loc = " -> ".join(str(item) for item in error.get("loc", []))
        msg = error.get("msg", "")
        lines.append(f"  - {loc}: {msg}" if loc else f"  - {msg}")
    return "\n".join(lines)
