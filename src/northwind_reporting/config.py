"""Configuration loading and management for Northwind Reporting.

Configuration sources are merged in priority order:
    1. Defaults (defined in ReportingConfig)
    2. Global config (~/.northwind-reports.toml)
    3. Project config (./northwind-reports.toml)
    4. Explicit config file
    5. Environment variables (NORTHWIND_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(timeout_seconds=5)
    >>> config.timeout_seconds
    5
    >>> config.entity_set
    'Products'
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

DEFAULT_SERVICE_URL = "https://services.odata.org/V3/Northwind/Northwind.svc"
OUTPUT_FORMATS = ("text", "table", "json", "csv")

GLOBAL_CONFIG_NAME = ".northwind-reports.toml"
PROJECT_CONFIG_NAME = "northwind-reports.toml"
ENV_PREFIX = "NORTHWIND_"


@dataclass(frozen=True)
class ReportingConfig:
    """Settings for one fetch-then-report run.

    Attributes:
        Remote service:
            service_url: Root URI of the OData service
            entity_set: Entity set holding the products
            timeout_seconds: Per-request timeout
            max_pages: Upper bound on continuation requests in one fetch

        Output control:
            output_format: text, table, json or csv
            verbosity: Logging verbosity level
    """

    # Remote service
    service_url: str = DEFAULT_SERVICE_URL
    entity_set: str = "Products"
    timeout_seconds: float = 30.0
    max_pages: int = 1000

    # Output control
    output_format: str = "text"
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.service_url or not self.service_url.strip():
            raise InvalidConfigError("service_url", self.service_url, "must not be empty")
        if not self.service_url.startswith(("http://", "https://")):
            raise InvalidConfigError("service_url", self.service_url, "must be an http(s) URL")
        if not self.entity_set or not self.entity_set.strip():
            raise InvalidConfigError("entity_set", self.entity_set, "must not be empty")

        if self.timeout_seconds <= 0:
            raise InvalidConfigError("timeout_seconds", self.timeout_seconds, "must be positive")
        if self.max_pages < 1:
            raise InvalidConfigError("max_pages", self.max_pages, "must be at least 1")

        if self.output_format not in OUTPUT_FORMATS:
            raise InvalidConfigError(
                "output_format",
                self.output_format,
                f"choose from: {', '.join(OUTPUT_FORMATS)}",
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "choose from: quiet, normal, verbose")


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> ReportingConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options do not mask lower layers.

    Returns:
        Validated ReportingConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / GLOBAL_CONFIG_NAME
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ReportingConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from NORTHWIND_* environment variables.

    Supported environment variables:
        NORTHWIND_SERVICE_URL: str
        NORTHWIND_ENTITY_SET: str
        NORTHWIND_TIMEOUT_SECONDS: float
        NORTHWIND_MAX_PAGES: int
        NORTHWIND_OUTPUT_FORMAT: text/table/json/csv
        NORTHWIND_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any NORTHWIND_* vars found.
    """
    type_hints = get_type_hints(ReportingConfig)

    result: dict[str, Any] = {}

    for field_name in ReportingConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(field_name, env_value, f"{env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
