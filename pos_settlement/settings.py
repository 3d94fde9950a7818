"""Engine configuration and logging setup.

Environment variables:
    POS_INVOICE_PREFIX: prefix for standard checkout ids (default: INV)
    POS_QUICK_INVOICE_PREFIX: prefix for quick-entry ids (default: QCK)
    POS_QR_BOX_SIZE: QR module size in pixels (default: 10)
    POS_QR_BORDER: QR quiet-zone width in modules (default: 1)
    POS_LOG_LEVEL: minimum log level name (default: INFO)
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

import structlog

from .errors import InvalidSettingError, errmsg
from .identifiers import QUICK_PREFIX, STANDARD_PREFIX, is_valid_prefix

logger = structlog.get_logger()


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog with JSON rendering and ISO timestamps."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("invalid_setting", name=name, value=raw, default=default)
        return default


@dataclass(frozen=True)
class Settings:
    invoice_prefix: str = STANDARD_PREFIX
    quick_invoice_prefix: str = QUICK_PREFIX
    qr_box_size: int = 10
    qr_border: int = 1
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        for name, prefix in (
            ("POS_INVOICE_PREFIX", self.invoice_prefix),
            ("POS_QUICK_INVOICE_PREFIX", self.quick_invoice_prefix),
        ):
            if not is_valid_prefix(prefix):
                raise InvalidSettingError(name, prefix, errmsg.PREFIX_INVALID)
        if self.invoice_prefix == self.quick_invoice_prefix:
            raise InvalidSettingError(
                "POS_QUICK_INVOICE_PREFIX", self.quick_invoice_prefix, errmsg.PREFIXES_EQUAL
            )

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            invoice_prefix=env.get("POS_INVOICE_PREFIX", STANDARD_PREFIX),
            quick_invoice_prefix=env.get("POS_QUICK_INVOICE_PREFIX", QUICK_PREFIX),
            qr_box_size=_int_env(env, "POS_QR_BOX_SIZE", 10),
            qr_border=_int_env(env, "POS_QR_BORDER", 1),
            log_level=env.get("POS_LOG_LEVEL", "INFO").upper(),
        )

    def configure_logging(self) -> None:
        """Install the structlog setup at this level."""
        configure_logging(self.log_level)
