from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from ..core.constants import DEFAULT_BATCH_WORKERS, DEFAULT_RESOLVER_CACHE_SIZE
from . import get_settings_module


@dataclass(frozen=True)
class EngineSettings:
    db_config: dict = field(default_factory=dict)
    debug: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None
    batch_workers: int = DEFAULT_BATCH_WORKERS
    resolver_cache_size: int = DEFAULT_RESOLVER_CACHE_SIZE
    count_off_day_punches: bool = False
    report_dir: str = "reports"
    settings_module: str = ""


def load_settings(module_name: Optional[str] = None) -> EngineSettings:
    """Load ``.env`` (without overriding the real environment) and the settings module."""
    load_dotenv(override=False)
    module_name = module_name or get_settings_module()
    settings = importlib.import_module(module_name)

    return EngineSettings(
        db_config=dict(getattr(settings, "DB_CONFIG", {})),
        debug=bool(getattr(settings, "DEBUG", False)),
        log_level=str(getattr(settings, "LOG_LEVEL", "INFO")),
        log_file=getattr(settings, "LOG_FILE", None),
        batch_workers=int(getattr(settings, "BATCH_WORKERS", DEFAULT_BATCH_WORKERS)),
        resolver_cache_size=int(getattr(settings, "RESOLVER_CACHE_SIZE", DEFAULT_RESOLVER_CACHE_SIZE)),
        count_off_day_punches=bool(getattr(settings, "COUNT_OFF_DAY_PUNCHES", False)),
        report_dir=str(getattr(settings, "REPORT_DIR", "reports")),
        settings_module=module_name,
    )
