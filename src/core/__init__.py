"""Core infrastructure: configuration, logging and shared enumerations."""

from .config import AppConfig, DecoderConfig, LoggingConfig, load_app_config, load_decoder_config  # noqa: F401
from .enums import ErrorPolicy, ExtractionStatus  # noqa: F401
from .logging import configure_logging, get_logger  # noqa: F401
