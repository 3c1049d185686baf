"""Service configuration, stored as a TOML file."""

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path

import tomli_w

from filesweep.errors import IoError, ProcessingError
from filesweep.logsetup import log_error, log_info

DEFAULT_CONFIG_PATH = Path("config.toml")

# Integer fields that may legitimately be negative; all others are unsigned.
_SIGNED_FIELDS = frozenset({"file_locked_error_code"})


@dataclass
class ProcessingConfig:
    """How files are retried, processed and named on output."""

    max_retries: int = 10
    initial_retry_delay_ms: int = 100
    max_retry_delay_sec: int = 2
    output_extension: str = ".processed.txt"
    file_locked_error_code: int = 32


@dataclass
class DirectoryConfig:
    """Where files are picked up and where results are written."""

    input_dir: str = "./input_files"
    output_dir: str = "./output_files"


@dataclass
class LoggingConfig:
    """Log level and destination."""

    level: str = "info"
    log_dir: str = "logs"
    log_basename: str = "app_log"
    duplicate_to_stdout: bool = True


@dataclass
class WatcherConfig:
    """Behaviour of the directory watcher."""

    channel_buffer_size: int = 32
    processing_delay_ms: int = 50
    recursive: bool = True


def _check_value(name, expected, value):
    if expected is bool:
        ok = isinstance(value, bool)
    elif expected is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
        if ok and value < 0 and name not in _SIGNED_FIELDS:
            raise ValueError(f"field `{name}` must not be negative, got {value}")
    else:
        ok = isinstance(value, expected)
    if not ok:
        raise ValueError(
            f"field `{name}` must be of type {expected.__name__}, got {type(value).__name__}"
        )


def _section(cls, table, name):
    raw = table.get(name)
    if not isinstance(raw, dict):
        raise ValueError(f"missing section `{name}`")
    values = {}
    for f in fields(cls):
        if f.name not in raw:
            raise ValueError(f"missing field `{f.name}` in section `{name}`")
        _check_value(f.name, f.type, raw[f.name])
        values[f.name] = raw[f.name]
    return cls(**values)


@dataclass
class AppConfig:
    """Full application configuration."""

    processing: ProcessingConfig = field(default_factory=ProcessingConfig)
    directories: DirectoryConfig = field(default_factory=DirectoryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    watcher: WatcherConfig = field(default_factory=WatcherConfig)

    @classmethod
    def from_file(cls, path):
        """Load the configuration from a TOML file."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            log_error("Failed to read config file", f"{path}: {exc}")
            raise IoError(exc) from exc

        try:
            table = tomllib.loads(text)
            config = cls(
                processing=_section(ProcessingConfig, table, "processing"),
                directories=_section(DirectoryConfig, table, "directories"),
                logging=_section(LoggingConfig, table, "logging"),
                watcher=_section(WatcherConfig, table, "watcher"),
            )
        except ValueError as exc:
            log_error("Failed to parse config file", f"{path}: {exc}")
            raise ProcessingError(f"Invalid TOML configuration: {exc}") from exc

        log_info("Configuration loaded successfully", f"from {path}")
        return config

    @classmethod
    def load_or_default(cls, path=DEFAULT_CONFIG_PATH):
        """Load ``path`` if it exists, otherwise write and return the defaults."""
        path = Path(path)
        if path.exists():
            return cls.from_file(path)
        log_info("No config file found", "Creating default configuration")
        config = cls()
        config.save_to_file(path)
        return config

    def save_to_file(self, path):
        """Write the configuration to ``path`` as TOML."""
        path = Path(path)
        try:
            text = tomli_w.dumps(asdict(self))
        except (TypeError, ValueError) as exc:
            log_error("Failed to serialize config", exc)
            raise ProcessingError(f"Failed to serialize configuration: {exc}") from exc

        try:
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            log_error("Failed to write config file", f"{path}: {exc}")
            raise IoError(exc) from exc

        log_info("Configuration saved", f"to {path}")

    def input_dir(self):
        """The input directory as a Path."""
        return Path(self.directories.input_dir)

    def output_dir(self):
        """The output directory as a Path."""
        return Path(self.directories.output_dir)

    def log_dir(self):
        """The log directory as a Path."""
        return Path(self.logging.log_dir)