"""
System configuration for TradeLens.

One configuration for the whole system, loaded from YAML:

    analytics:
      starting_capital: 100
      default_time_range: 7days
      dimensions: [strategy, session, direction]

    import:
      delimiter: ","
      encoding: utf-8-sig
      date_format: null

    logging:
      level: INFO
      format: console

Search order for the file:
1. Explicit path passed to SystemConfig.load()
2. $TRADELENS_CONFIG
3. config/system.yaml (relative to the working directory)

Missing file means built-in defaults. Partial files are deep-merged over the
defaults. String values support ${VAR} and ${VAR:-default} substitution.
"""

import os
import re
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Literal

import yaml

from tradelens.system.log_system import LoggingConfig as LoggerConfig

DEFAULT_CONFIG_PATH = Path("config/system.yaml")
CONFIG_ENV_VAR = "TRADELENS_CONFIG"

_ENV_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")


@dataclass
class AnalyticsSettings:
    """Defaults for report generation."""

    starting_capital: str = "100"
    default_time_range: str = "7days"
    dimensions: list[str] = field(default_factory=lambda: ["strategy", "session", "direction"])


@dataclass
class ImportSettings:
    """CSV import settings."""

    delimiter: str = ","
    encoding: str = "utf-8-sig"
    date_format: str | None = None


@dataclass
class LoggingConfig:
    """Logging section of system.yaml."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json"] = "console"
    timestamp_format: Literal["iso", "compact", "time", "short"] = "compact"
    enable_file: bool = False
    file_path: str = "logs/tradelens.log"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    file_rotation: bool = True
    max_file_size_mb: int = 10
    backup_count: int = 3

    def to_logger_config(self) -> LoggerConfig:
        """Convert to the log system's pydantic LoggingConfig."""
        return LoggerConfig(
            level=self.level,
            format=self.format,
            timestamp_format=self.timestamp_format,
            enable_file=self.enable_file,
            file_path=Path(self.file_path),
            file_level=self.file_level,
            file_rotation=self.file_rotation,
            max_file_size_mb=self.max_file_size_mb,
            backup_count=self.backup_count,
        )


@dataclass
class SystemConfig:
    """Container for all system configuration sections."""

    analytics: AnalyticsSettings = field(default_factory=AnalyticsSettings)
    import_: ImportSettings = field(default_factory=ImportSettings)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, path: Path | str | None = None) -> "SystemConfig":
        """
        Load system configuration from YAML.

        Args:
            path: Explicit config path. Falls back to $TRADELENS_CONFIG, then
                  config/system.yaml.

        Returns:
            SystemConfig with file values merged over defaults

        Raises:
            yaml.YAMLError: If the file exists but is not valid YAML
        """
        if path is None:
            env_path = os.environ.get(CONFIG_ENV_VAR)
            path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

        config_path = Path(path)
        defaults = asdict(cls())
        defaults["import"] = defaults.pop("import_")

        if not config_path.exists():
            return cls._from_dict(defaults)

        with config_path.open("r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}

        merged = _deep_merge(defaults, _substitute_env_vars(loaded))
        return cls._from_dict(merged)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "SystemConfig":
        """Build SystemConfig from a (possibly partial) dictionary."""
        return cls(
            analytics=_build_section(AnalyticsSettings, data.get("analytics", {})),
            import_=_build_section(ImportSettings, data.get("import", {})),
            logging=_build_section(LoggingConfig, data.get("logging", {})),
        )


def _build_section(section_cls: Any, values: dict[str, Any] | None) -> Any:
    """Instantiate a section dataclass, ignoring keys it does not define."""
    known = {f.name for f in fields(section_cls)}
    return section_cls(**{k: v for k, v in (values or {}).items() if k in known})


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into a copy of base."""
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _replace_env_var(match: re.Match[str]) -> str:
    value = os.environ.get(match.group(1))
    if value is not None:
        return value
    if match.group(2) is not None:
        return match.group(2)
    return match.group(0)


def _substitute_env_vars(value: Any) -> Any:
    """Replace ${VAR} and ${VAR:-default} in string values, recursively.

    Undefined variables without a default keep their placeholder.
    """
    if isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env_vars(v) for v in value]
    if isinstance(value, str):
        return _ENV_PATTERN.sub(_replace_env_var, value)
    return value


_system_config: SystemConfig | None = None


def get_system_config(path: Path | str | None = None) -> SystemConfig:
    """
    Get the system config singleton (loaded on first use).

    Args:
        path: Explicit config path; forces a reload from that file
    """
    global _system_config
    if _system_config is None or path is not None:
        _system_config = SystemConfig.load(path)
    return _system_config


def reload_system_config(path: Path | str | None = None) -> SystemConfig:
    """Force reload of the system config singleton."""
    global _system_config
    _system_config = SystemConfig.load(path)
    return _system_config
