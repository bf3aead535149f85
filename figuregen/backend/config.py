"""Configuration helpers for backend runtime."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class AppSettings:
    host: str
    port: int
    columns: int
    log_level: str


def load_settings() -> AppSettings:
    port_raw = os.getenv("FIGUREGEN_PORT", "8000")
    columns_raw = os.getenv("FIGUREGEN_COLUMNS", "6")
    return AppSettings(
        host=os.getenv("FIGUREGEN_HOST", "127.0.0.1"),
        port=int(port_raw),
        columns=int(columns_raw),
        log_level=os.getenv("FIGUREGEN_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
