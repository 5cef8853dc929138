"""Wiring komponen berdasarkan konfigurasi (configs/app.yaml)."""

import logging
from typing import Any, Dict, Optional

from .config import load_config
from .core.analyzer import WaterSafetyAnalyzer
from .database.database_manager import ReferenceDataManager
from .services.logging_service import LoggingService
from .services.reporting import ReportingService
from .services.storage import AreaSafetyHistory


def create_analyzer(config: Optional[Dict[str, Any]] = None) -> WaterSafetyAnalyzer:
    """Buat WaterSafetyAnalyzer lengkap dengan repository dan logging service."""
    config = config or load_config()
    log_cfg = config["logging"]

    logging_service = LoggingService('airbersih', log_cfg["file"])
    logging_service.logger.setLevel(getattr(logging, str(log_cfg.get("level", "INFO")).upper(), logging.INFO))

    return WaterSafetyAnalyzer(
        repository=ReferenceDataManager(config["database"].get("path")),
        logging_service=logging_service,
        logger=logging.getLogger('airbersih.analyzer'),
    )


def create_reporting(config: Optional[Dict[str, Any]] = None) -> ReportingService:
    config = config or load_config()
    return ReportingService(output_dir=config["reports"]["output_dir"])


def create_history(config: Optional[Dict[str, Any]] = None) -> AreaSafetyHistory:
    config = config or load_config()
    return AreaSafetyHistory(history_file=config["history"]["file"])
