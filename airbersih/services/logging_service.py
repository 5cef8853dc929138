# services/logging_service.py

"""
Menyediakan layanan logging terpusat untuk engine keamanan air.

Modul ini mengkonfigurasi logger standar menggunakan library logging
bawaan Python dan menyediakan LoggingService untuk:
- Log setiap analisis (sensory / lab)
- Track distribusi tingkat keamanan dan kontaminan
- Generate statistik sistem

Penggunaan RotatingFileHandler memastikan file log tidak membengkak
tanpa batas.
"""

import logging
import os
from collections import Counter
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List, Optional

from ..core.models import SafetyLevel, SafetyVerdict

LOG_FILE = os.path.join("logs", "water_safety.log")


def setup_logger(
    name: str = 'airbersih',
    log_file: str = LOG_FILE,
    level: int = logging.INFO
) -> logging.Logger:
    """
    Mengkonfigurasi dan mengembalikan instance logger.

    Mencegah penambahan handler duplikat jika fungsi ini dipanggil
    beberapa kali.

    Args:
        name (str): Nama logger.
        log_file (str): Path ke file log.
        level (int): Level logging (misalnya, logging.INFO, logging.DEBUG).

    Returns:
        logging.Logger: Instance logger yang sudah dikonfigurasi.
    """
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # 5MB per file, dengan backup 5 file lama
    handler = RotatingFileHandler(log_file, maxBytes=5*1024*1024, backupCount=5, encoding='utf-8')
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


class LoggingService:
    """Service untuk logging dan statistik analisis keamanan air.

    Statistik disimpan in-memory per instance.
    """

    def __init__(self, logger_name: str = 'airbersih', log_file: str = LOG_FILE):
        self.log_file = log_file
        self.logger = setup_logger(logger_name, log_file)
        self._level_counts: Counter = Counter()
        self._contaminant_counts: Counter = Counter()
        self._kind_counts: Counter = Counter()

    def log_analysis(
        self,
        kind: str,
        verdict: SafetyVerdict,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log satu analisis dan update statistik.

        Args:
            kind: 'sensory' atau 'lab'
            verdict: Hasil klasifikasi
            context: Info tambahan (kecamatan, report id, ...)
        """
        self.logger.info(
            f"Analysis [{kind}]: {verdict.safety_level.value} "
            f"(score: {verdict.score}, contaminants: {len(verdict.contaminants)})"
        )
        if verdict.immediate_actions:
            self.logger.warning(f"Immediate actions: {'; '.join(verdict.immediate_actions)}")
        if context:
            self.logger.info(f"Context: {context}")

        self._kind_counts[kind] += 1
        self._level_counts[verdict.safety_level.value] += 1
        self._contaminant_counts.update(verdict.contaminants)

    def log_error(self, error_msg: str, exception: Optional[Exception] = None) -> None:
        if exception:
            self.logger.error(f"{error_msg}: {str(exception)}", exc_info=True)
        else:
            self.logger.error(error_msg)

    def log_info(self, message: str) -> None:
        self.logger.info(message)

    def log_warning(self, message: str) -> None:
        self.logger.warning(message)

    def get_most_common_contaminants(self, top_n: int = 5) -> List[Dict[str, Any]]:
        return [
            {"contaminant": name, "count": count}
            for name, count in self._contaminant_counts.most_common(top_n)
        ]

    def get_statistics(self) -> Dict[str, Any]:
        """Dapatkan statistik penggunaan sistem.

        Returns:
            Dictionary berisi berbagai statistik
        """
        return {
            "total_analyses": sum(self._kind_counts.values()),
            "by_kind": dict(self._kind_counts),
            "by_level": {level.value: self._level_counts.get(level.value, 0) for level in SafetyLevel},
            "top_contaminants": self.get_most_common_contaminants(),
            "log_file": self.log_file,
            "log_file_exists": os.path.exists(self.log_file),
            "log_file_size": os.path.getsize(self.log_file) if os.path.exists(self.log_file) else 0,
            "timestamp": datetime.now().isoformat()
        }

    def clear_statistics(self) -> None:
        """Reset statistik analisis."""
        self._level_counts.clear()
        self._contaminant_counts.clear()
        self._kind_counts.clear()
        self.logger.warning("Analysis statistics cleared!")
