import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from deltaindex.domain.index.model.descriptor import (
    AttributeRef,
    DeltaKind,
    FieldRef,
    IndexDescriptor,
)


# =============================================================================
# Index Configuration
# =============================================================================


class AttributeConfig(BaseModel):
    """An index attribute as declared in config."""

    name: str
    public: bool = True
    updatable: bool = False


class IndexConfig(BaseModel):
    """Declarative index over one record type."""

    name: str  # Unique per record type (passed to the rebuild executor)
    model: str  # Record class as "package.module:ClassName"
    fields: list[str] = []
    attributes: list[AttributeConfig] = []
    delta: DeltaKind | None = DeltaKind.FLAG

    def to_descriptor(self) -> IndexDescriptor:
        return IndexDescriptor(
            name=self.name,
            fields=tuple(FieldRef(name=f) for f in self.fields),
            attributes=tuple(
                AttributeRef(name=a.name, public=a.public, updatable=a.updatable)
                for a in self.attributes
            ),
            delta=self.delta,
        )


# =============================================================================
# Application Configuration
# =============================================================================


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by DELTAINDEX_CONFIG_FILE env var."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        yaml_data = self._load_yaml_config()
        return yaml_data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        config_file = os.environ.get("DELTAINDEX_CONFIG_FILE")
        if config_file:
            path = Path(config_file)
            if path.exists():
                return yaml.safe_load(path.read_text()) or {}
        return {}


class DeltaConfig(BaseModel):
    """Delta behaviour (nested in Config, uses env_nested_delimiter)."""

    enabled: bool = True  # False: flags still toggle, rebuilds are never issued
    column: str = "delta"  # Record attribute holding the pending flag


class RebuildConfig(BaseModel):
    """HTTP rebuild executor settings."""

    url: str = "http://localhost:9312"
    timeout: float = 10.0
    id_attribute: str = "id"


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from DELTAINDEX_LOG_FILE env var."""
        return os.environ.get("DELTAINDEX_LOG_FILE")


class Config(BaseSettings):
    delta: DeltaConfig = DeltaConfig()
    rebuild: RebuildConfig = RebuildConfig()
    logging: LoggingConfig = LoggingConfig()
    indexes: list[IndexConfig] = Field(default_factory=list)

    model_config = {
        "env_prefix": "DELTAINDEX_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows DELTAINDEX_DELTA__ENABLED override
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Priority: init kwargs, env vars, .env, YAML file, secrets."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Configure the root logger from config.

    Call early at startup so every module logger picks it up.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(config.level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
