"""Water Safety Analyzer.

Modul ini mengkoordinasikan komponen-komponen:
- sensory: klasifikasi dari bau, rasa, warna
- lab: klasifikasi dari hasil laboratorium
- disease_predictor: prediksi penyakit bawaan air
- report_formatter: laporan teks
- explanation & search_filter: penjelasan skor dan pencarian katalog penyakit
- Integrasi dengan ReferenceDataManager untuk standar, pengolahan, penyakit
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, List, Mapping, Optional, Union

from ..database.database_manager import ReferenceDataManager
from ..exceptions import ConfigurationError, ReferenceDataError
from .disease_predictor import predict_diseases
from .explanation import explain_how
from .lab import classify_lab
from .models import DiseaseRecord, LabInput, SafetyVerdict
from .report_formatter import format_report
from .search_filter import search_diseases
from .sensory import classify_sensory

LabData = Union[LabInput, Mapping[str, Any]]


class WaterSafetyAnalyzer:
    """Orchestrator untuk analisis keamanan air.

    Fungsi klasifikasi tetap murni; analyzer hanya mengambil data referensi
    (segar setiap panggilan) dan mencatat hasilnya.
    """

    def __init__(
        self,
        repository: Optional[ReferenceDataManager] = None,
        logging_service: Any = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.repository = repository or ReferenceDataManager()
        self.logging_service = logging_service
        self.logger = logger or logging.getLogger(__name__)

    def _record(self, kind: str, verdict: SafetyVerdict) -> None:
        self.logger.debug(
            "%s analysis: %s (score %d, %d contaminants)",
            kind, verdict.safety_level.value, verdict.score, len(verdict.contaminants),
        )
        if self.logging_service is not None:
            self.logging_service.log_analysis(kind, verdict)

    def analyze_simple_input(self, odor: Any, taste: Any, color: Any) -> SafetyVerdict:
        """Analisis dari input sederhana warga (bau, rasa, warna)."""
        verdict = classify_sensory(odor, taste, color)
        self._record("sensory", verdict)
        return verdict

    def analyze_lab_results(self, lab_input: LabData) -> SafetyVerdict:
        """Analisis detail dengan parameter lab.

        Raises:
            ConfigurationError: Jika standar kualitas air tidak bisa diambil atau kosong.
        """
        try:
            standards = self.repository.load_standards()
        except ReferenceDataError as e:
            self.logger.error("Error fetching standards: %s", e)
            raise ConfigurationError("Cannot fetch water quality standards") from e

        verdict = classify_lab(lab_input, standards, treatments=self.repository.load_treatments)
        self._record("lab", verdict)
        return verdict

    def predict_diseases(self, lab_input: LabData) -> List[str]:
        """Prediksi penyakit; katalog yang gagal diambil menghasilkan list kosong."""
        diseases = predict_diseases(lab_input, self.repository.load_diseases)
        if diseases:
            self.logger.info("Predicted diseases: %s", ", ".join(diseases))
        return diseases

    def generate_safety_report(self, verdict: SafetyVerdict, today: Optional[date] = None) -> str:
        return format_report(verdict, today)

    def explain(self, verdict: SafetyVerdict) -> str:
        """Penjelasan HOW: aturan apa saja yang mengubah skor."""
        return explain_how(verdict)

    def search_diseases(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        severity: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[DiseaseRecord]:
        """Cari penyakit di katalog.

        Raises:
            ReferenceDataError: Jika katalog penyakit tidak bisa dibaca.
        """
        return search_diseases(
            self.repository.load_diseases(), query=query,
            category=category, severity=severity, limit=limit,
        )
