"""
functions/utils/settings.py

WHAT THIS FILE IS FOR
---------------------
This module defines the *single source of truth* for runtime configuration
of the InvokeHTTP error-details service.

It is responsible for:
- Defining all supported configuration fields (via Pydantic BaseSettings)
- Loading default values from parameters/parameters.yaml
- Overriding defaults with environment variables (INVOKEHTTP_ERRORS_*)
- Exposing a cached, fully-validated Settings object to the application

LOAD & PRECEDENCE MODEL
-----------------------
Configuration is loaded in the following order (last wins):

1) YAML defaults from:
       parameters/parameters.yaml
2) Environment variables:
       INVOKEHTTP_ERRORS_*

Both are pydantic-settings sources (see settings_customise_sources).

FALLBACKS
---------
get_settings() never fails:
- env overrides that do not validate are logged and dropped; the YAML
  values alone are used
- a YAML file that cannot be read or does not validate is logged and
  dropped; the field defaults are used

WHAT THIS FILE IS NOT FOR
-------------------------
This module is NOT responsible for:
- Classification rules (titles, details, error codes are fixed in code)
- Flowfile handling
- Request handling

It should only define *configuration structure and loading rules*.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Tuple, Type

import structlog
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

logger = structlog.get_logger(__name__)

PARAMETERS_PATH = Path(__file__).resolve().parents[2] / "parameters" / "parameters.yaml"


def _parameters_source(settings_cls: Type[BaseSettings]) -> YamlConfigSettingsSource:
    # PARAMETERS_PATH is read at call time so tests can point it elsewhere.
    return YamlConfigSettingsSource(
        settings_cls,
        yaml_file=PARAMETERS_PATH,
        yaml_file_encoding="utf-8",
    )


class Settings(BaseSettings):
    """
    Runtime settings for the InvokeHTTP error-details service.

    Load order / precedence:
        1) YAML defaults (parameters/parameters.yaml)
        2) Environment variables (INVOKEHTTP_ERRORS_*), overriding YAML
    """

    model_config = SettingsConfigDict(
        env_prefix="INVOKEHTTP_ERRORS_",
        extra="ignore",
    )

    # Service metadata
    service_name: str = "invokehttp_error_details"
    environment: str = "local"

    # Logging
    log_level: str = "INFO"
    log_json: bool = Field(
        default=False,
        description="Render log events as JSON lines instead of console output.",
    )

    # Flowfile routing
    success_relationship: str = Field(
        default="success",
        min_length=1,
        description="Relationship enriched flowfiles are transferred to.",
    )

    # Feature flags
    enable_debug_metadata: bool = Field(
        default=False,
        description="If true, API responses carry a metadata block describing the lookup.",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # First wins: init kwargs, then env, then YAML
        return (init_settings, env_settings, _parameters_source(settings_cls))


class _ParametersOnlySettings(Settings):
    """Settings read from parameters.yaml alone, environment ignored."""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, _parameters_source(settings_cls))


def _parameters_only_settings() -> Settings:
    try:
        return _ParametersOnlySettings()
    except Exception as exc:  # noqa: BLE001
        logger.error("parameters_yaml_load_error", path=str(PARAMETERS_PATH), error=str(exc))
        # model_construct skips the sources entirely; defaults are already valid
        return Settings.model_construct()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Construct and return the final validated Settings object.

    This function is cached (singleton per process) and is the ONLY
    supported way to access runtime settings.
    """
    if not PARAMETERS_PATH.exists():
        logger.warning("parameters_yaml_missing", expected=str(PARAMETERS_PATH))

    try:
        settings = Settings()
    except Exception as exc:  # noqa: BLE001
        logger.warning("settings_env_validation_error", error=str(exc))
        settings = _parameters_only_settings()

    logger.info(
        "settings_loaded",
        environment=settings.environment,
        service_name=settings.service_name,
        log_level=settings.log_level,
        log_json=settings.log_json,
        success_relationship=settings.success_relationship,
        enable_debug_metadata=settings.enable_debug_metadata,
    )

    return settings
