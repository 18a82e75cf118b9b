"""
Structured logging for TradeLens.

structlog drives the stdlib logging module: every record, whether it comes from
a structlog logger or a plain ``logging`` call, is rendered by a
``ProcessorFormatter`` attached to the handler. The console gets either a
compact coloured line or JSON; the optional log file always gets JSON lines.

    LoggerFactory.configure(LoggingConfig(level="DEBUG"))
    logger = LoggerFactory.get_logger()
    logger.info("csv_import.trades_loaded", count=42)

Console line layout:

    250310-143000.12 [info] csv_import.trades_loaded | count=42 (csv_import:321)
"""

import inspect
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Literal

import structlog
from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
TimestampFormat = Literal["iso", "compact", "time", "short"]

DEFAULT_LOG_FILE = Path("logs/tradelens.log")
ROOT_LOGGER_NAME = "tradelens"

_LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"
_GRAY = "\033[90m"

# Keys the console renderer places itself; everything else is context
_LAYOUT_KEYS = ("log_timestamp", "level", "event", "filename", "lineno", "logger")


class LoggingConfig(BaseModel):
    """Logging settings.

    What each level shows:

    - INFO: one line per report and per imported file
    - DEBUG: resolved ranges, filters, name lookups, breakdown sizes
    - WARNING: winner flags contradicting P&L, unmapped CSV columns
    - ERROR: import and report failures

    Timestamp formats: ``iso`` (2025-03-10T14:30:00.120000+00:00),
    ``compact`` (250310-143000.12), ``time`` (14:30:00.12), ``short``
    (0310T143000).
    """

    level: LogLevel = Field(default="INFO", description="Console log level")
    format: Literal["console", "json"] = Field(default="console", description="Console output format")
    timestamp_format: TimestampFormat = Field(default="compact", description="Console timestamp style")
    enable_file: bool = Field(default=False, description="Also write JSON lines to a log file")
    file_path: Path | None = Field(default=None, description="Log file (logs/tradelens.log when unset)")
    file_level: LogLevel = Field(default="WARNING", description="File log level")
    file_rotation: bool = Field(default=True, description="Rotate the file by size")
    max_file_size_mb: int = Field(default=10, description="Rotation threshold in MB")
    backup_count: int = Field(default=3, description="Rotated files kept")


def _timestamper(fmt: TimestampFormat) -> Any:
    """Processor stamping UTC time under 'log_timestamp'.

    A dedicated key keeps it apart from trade timestamps bound as context.
    """
    patterns = {
        "compact": "%y%m%d-%H%M%S.{cs:02d}",
        "time": "%H:%M:%S.{cs:02d}",
        "short": "%m%dT%H%M%S",
    }

    def stamp(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        now = datetime.now(timezone.utc)
        pattern = patterns.get(fmt)
        if pattern is None:
            event_dict["log_timestamp"] = now.isoformat()
        else:
            event_dict["log_timestamp"] = now.strftime(pattern.format(cs=now.microsecond // 10000))
        return event_dict

    return stamp


def _pre_chain(fmt: TimestampFormat) -> list[Any]:
    """Processors applied before rendering, for structlog and stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _timestamper(fmt),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.CallsiteParameterAdder(
            [structlog.processors.CallsiteParameter.FILENAME, structlog.processors.CallsiteParameter.LINENO]
        ),
    ]


def render_console_line(logger: Any, method_name: str, event_dict: dict[str, Any]) -> str:
    """Render 'timestamp [level] event | key=value (module:line)'."""
    layout = {key: event_dict.pop(key, "") for key in _LAYOUT_KEYS}
    level = (layout["level"] or "info").upper()

    colored_level = f"[{_LEVEL_COLORS.get(level, '')}{level.lower()}{_RESET}]"
    line = [str(layout["log_timestamp"]), colored_level, str(layout["event"])]

    context = " ".join(f"{key}={value}" for key, value in sorted(event_dict.items()) if not key.startswith("_"))
    if context:
        line.append(f"{_GRAY}|{_RESET} {context}")

    if layout["filename"] and layout["lineno"]:
        line.append(f"{_GRAY}({Path(layout['filename']).stem}:{layout['lineno']}){_RESET}")

    return " ".join(line)


def _console_handler(config: LoggingConfig, pre_chain: list[Any]) -> logging.Handler:
    renderer: Any = render_console_line if config.format == "console" else structlog.processors.JSONRenderer()
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setLevel(config.level)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain))
    return handler


def _file_handler(config: LoggingConfig, path: Path, pre_chain: list[Any]) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler: logging.Handler
    if config.file_rotation:
        handler = RotatingFileHandler(
            path,
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    else:
        handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(config.file_level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=structlog.processors.JSONRenderer(), foreign_pre_chain=pre_chain)
    )
    return handler


class LoggerFactory:
    """
    Process-wide logging setup and logger access.

    configure() is called once by the CLI; library modules only call
    get_logger(), which falls back to default settings when nothing was
    configured yet.
    """

    _config: LoggingConfig | None = None
    _configured: bool = False

    @classmethod
    def configure(cls, config: LoggingConfig | None = None) -> None:
        """
        Install handlers on the root logger and configure structlog.

        Args:
            config: Logging settings (defaults when None)
        """
        config = config or LoggingConfig()
        if config.enable_file and config.file_path is None:
            config = config.model_copy(update={"file_path": DEFAULT_LOG_FILE})
        cls._config = config

        pre_chain = _pre_chain(config.timestamp_format)
        handlers = [_console_handler(config, pre_chain)]
        levels = [getattr(logging, config.level)]
        if config.enable_file and config.file_path is not None:
            handlers.append(_file_handler(config, config.file_path, pre_chain))
            levels.append(getattr(logging, config.file_level))

        logging.basicConfig(level=min(levels), handlers=handlers, force=True)

        if config.format == "console":
            exception_processors: list[Any] = [
                structlog.dev.set_exc_info,
                structlog.processors.ExceptionRenderer(structlog.dev.plain_traceback),  # type: ignore[arg-type]
            ]
        else:
            exception_processors = [structlog.processors.format_exc_info]

        structlog.configure(
            processors=[*pre_chain, *exception_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        cls._configured = True

    @classmethod
    def get_logger(cls, name: str | None = None):
        """
        Get a structlog logger, configuring defaults on first use.

        Args:
            name: Logger name; the calling module's __name__ when omitted
        """
        if not cls._configured:
            cls.configure()
        if name is None:
            caller = inspect.currentframe()
            caller = caller.f_back if caller else None
            name = caller.f_globals.get("__name__", ROOT_LOGGER_NAME) if caller else ROOT_LOGGER_NAME
        return structlog.get_logger(name)

    @classmethod
    def get_config(cls) -> LoggingConfig:
        """Active settings, or defaults before configure()."""
        return cls._config if cls._config is not None else LoggingConfig()

    @classmethod
    def is_configured(cls) -> bool:
        return cls._configured

    @classmethod
    def reset(cls) -> None:
        """Drop handlers and structlog configuration (used by tests)."""
        root = logging.getLogger()
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        root.setLevel(logging.NOTSET)
        structlog.reset_defaults()
        cls._config = None
        cls._configured = False
