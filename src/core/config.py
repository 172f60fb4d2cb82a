from __future__ import annotations

import codecs
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

from .enums import ErrorPolicy

MAX_WORKERS_ENV = "COOKIESIFTER_MAX_WORKERS"


@dataclass(slots=True)
class LoggingConfig:
    """Logging configuration from config.yml."""

    level: str = "INFO"
    log_max_mb: int = 10
    log_backup_count: int = 5


@dataclass(slots=True)
class DecoderConfig:
    """
    Options threaded explicitly into the binary cookie decoder.

    Nothing in the decoder reads process-wide state; callers build one of
    these (or load it from config.yml) and pass it in.
    """

    error_policy: ErrorPolicy = ErrorPolicy.ABORT
    debug: bool = False  # Log page/record structure at DEBUG level
    max_workers: int = 1  # >1 decodes pages on a thread pool
    text_encoding: str = "utf-8"

    def __post_init__(self) -> None:
        self.error_policy = ErrorPolicy.parse(self.error_policy)
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        try:
            codecs.lookup(self.text_encoding)
        except LookupError as exc:
            raise ValueError(f"Unknown text encoding: {self.text_encoding!r}") from exc

    @property
    def skip_malformed(self) -> bool:
        return self.error_policy is ErrorPolicy.SKIP


@dataclass(slots=True)
class AppConfig:
    """Top-level configuration resolved from disk."""

    base_dir: Path
    logs_dir: Path
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    decoder: DecoderConfig = field(default_factory=DecoderConfig)


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        content = yaml.safe_load(handle) or {}
        if not isinstance(content, dict):
            raise ValueError(f"Config file {path} must contain a mapping at the top level.")
        return content


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{name}' must be a mapping.")
    return section


def _env_max_workers(default: int) -> int:
    # Respect environment variable override
    if MAX_WORKERS_ENV in os.environ:
        try:
            return int(os.environ[MAX_WORKERS_ENV])
        except ValueError:
            pass
    return default


def load_decoder_config(base_dir: Path) -> DecoderConfig:
    """
    Load the ``decoder:`` section of ``config/config.yml``.

    This loader is the only place ``COOKIESIFTER_MAX_WORKERS`` is read; a
    ``DecoderConfig`` built directly keeps exactly the values it was given.
    """
    overrides = _section(_load_yaml(base_dir / "config" / "config.yml"), "decoder")
    return DecoderConfig(
        error_policy=overrides.get("error_policy", ErrorPolicy.ABORT),
        debug=bool(overrides.get("debug", False)),
        max_workers=_env_max_workers(int(overrides.get("max_workers", 1))),
        text_encoding=overrides.get("text_encoding", "utf-8"),
    )


def load_app_config(base_dir: Path) -> AppConfig:
    """Load application configuration from disk, providing sensible defaults."""

    config_overrides = _load_yaml(base_dir / "config" / "config.yml")

    logs_dir = base_dir / "logs"

    logging_cfg = _section(config_overrides, "logging")
    logging_config = LoggingConfig(
        level=logging_cfg.get("level", "INFO"),
        log_max_mb=logging_cfg.get("log_max_mb", 10),
        log_backup_count=logging_cfg.get("log_backup_count", 5),
    )

    return AppConfig(
        base_dir=base_dir,
        logs_dir=logs_dir,
        logging=logging_config,
        decoder=load_decoder_config(base_dir),
    )
