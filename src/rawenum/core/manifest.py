import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import make_config_error

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "rawenum.toml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ExpansionConfig:
    """Expansion pipeline settings."""

    default_case_name: str = "unknown"  # name used when a fix appends a catch-all
    placeholder_label: str = "value"  # rendered as <#value#> in raw value fixes
    max_fix_passes: int = 10  # upper bound for `rawenum fix`


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class RawEnumConfig:
    """
    Contents of rawenum.toml.

    Example:

        [expansion]
        default_case_name = "other"

        [logging]
        level = "DEBUG"
    """

    expansion: ExpansionConfig = field(default_factory=ExpansionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    path: Path | None = None


def _require_str(table: dict[str, Any], key: str, default: str, path: Path) -> str:
    value = table.get(key, default)
    if not isinstance(value, str) or not value:
        raise make_config_error(f"'{key}' must be a non-empty string, got {value!r}", path)
    return value


def _require_int(table: dict[str, Any], key: str, default: int, path: Path) -> int:
    value = table.get(key, default)
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise make_config_error(f"'{key}' must be a positive integer, got {value!r}", path)
    return value


def _require_table(data: dict[str, Any], key: str, path: Path) -> dict[str, Any]:
    table = data.get(key, {})
    if not isinstance(table, dict):
        raise make_config_error(f"[{key}] must be a table, got {table!r}", path)
    return table


def load_config(path: Path) -> RawEnumConfig:
    """
    Load rawenum.toml.

    Args:
        path: Path to the config file

    Returns:
        Parsed configuration

    Raises:
        ConfigError: If the file is not valid TOML or a value has the wrong type
    """
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise make_config_error(f"Invalid TOML: {e}", path) from e

    defaults = ExpansionConfig()
    exp = _require_table(data, "expansion", path)
    expansion = ExpansionConfig(
        default_case_name=_require_str(
            exp, "default_case_name", defaults.default_case_name, path
        ),
        placeholder_label=_require_str(
            exp, "placeholder_label", defaults.placeholder_label, path
        ),
        max_fix_passes=_require_int(exp, "max_fix_passes", defaults.max_fix_passes, path),
    )

    log = _require_table(data, "logging", path)
    level = _require_str(log, "level", LoggingConfig.level, path).upper()
    if level not in LOG_LEVELS:
        raise make_config_error(
            f"Unknown logging level '{level}' (expected one of {', '.join(LOG_LEVELS)})", path
        )

    logger.debug("Loaded config from %s", path)
    return RawEnumConfig(expansion=expansion, logging=LoggingConfig(level=level), path=path)


def find_config(start: Path, explicit: Path | None = None) -> RawEnumConfig:
    """
    Resolve the configuration to use.

    An explicit path must exist. Otherwise ``start/rawenum.toml`` is used
    when present, and defaults apply when it is not.
    """
    if explicit is not None:
        if not explicit.exists():
            raise make_config_error(f"Config file not found: {explicit}")
        return load_config(explicit)

    candidate = start / CONFIG_FILENAME
    if candidate.exists():
        return load_config(candidate)
    return RawEnumConfig()
