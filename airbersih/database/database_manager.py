import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from ..core.lab import find_standard
from ..core.models import DiseaseRecord, ParameterStandard, TreatmentRecommendation
from ..exceptions import ReferenceDataError

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path(__file__).resolve().parent

STANDARDS_FILE = "standards.json"
TREATMENTS_FILE = "treatments.json"
DISEASES_FILE = "diseases.json"


class ReferenceDataManager:
    """Manager untuk mengakses data referensi: standar, metode pengolahan, penyakit.

    Setiap pemanggilan membaca ulang file (tidak ada cache), sehingga perubahan
    data referensi langsung terpakai pada klasifikasi berikutnya.
    """

    def __init__(self, db_path: Optional[Union[str, Path]] = None):
        """Initialize ReferenceDataManager dengan path ke folder database.

        Args:
            db_path: Folder berisi standards.json, treatments.json, diseases.json.
                Default: folder database bawaan paket.
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_DB_PATH

    def _read(self, filename: str) -> List[Any]:
        path = self.db_path / filename
        if not path.exists():
            raise ReferenceDataError(f"Reference file not found: {path}", str(path))
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ReferenceDataError(f"Invalid JSON in {path}: {e}", str(path)) from e

        if not isinstance(data, list):
            raise ReferenceDataError(f"Reference file must contain a list: {path}", str(path))
        return data

    def _write(self, filename: str, items: List[Any]) -> None:
        path = self.db_path / filename
        with open(path, "w", encoding="utf-8") as f:
            json.dump(items, f, indent=4, ensure_ascii=False)

    def load_standards(self) -> List[ParameterStandard]:
        """Load standar kualitas air dari standards.json."""
        try:
            return [ParameterStandard.from_dict(item) for item in self._read(STANDARDS_FILE)]
        except (KeyError, TypeError) as e:
            raise ReferenceDataError(f"Malformed standard entry: {e}") from e

    def load_treatments(self) -> List[TreatmentRecommendation]:
        """Load metode pengolahan air dari treatments.json."""
        try:
            return [TreatmentRecommendation.from_dict(item) for item in self._read(TREATMENTS_FILE)]
        except (KeyError, TypeError) as e:
            raise ReferenceDataError(f"Malformed treatment entry: {e}") from e

    def load_diseases(self) -> List[DiseaseRecord]:
        """Load katalog penyakit dari diseases.json."""
        try:
            return [DiseaseRecord.from_dict(item) for item in self._read(DISEASES_FILE)]
        except (KeyError, TypeError) as e:
            raise ReferenceDataError(f"Malformed disease entry: {e}") from e

    def get_standard(self, parameter: str) -> Optional[ParameterStandard]:
        """Get standar berdasarkan nama parameter.

        Case-insensitive; spasi/underscore dan titik/strip diabaikan.
        """
        return find_standard(parameter, self.load_standards())

    def add_disease(self, record: DiseaseRecord) -> None:
        """Menambahkan penyakit baru ke katalog."""
        diseases = self._read(DISEASES_FILE)
        names = {str(item.get("name", "")).lower() for item in diseases}
        if record.name.lower() in names:
            raise ValueError(f"Disease '{record.name}' sudah ada.")
        diseases.append(record.to_dict())
        self._write(DISEASES_FILE, diseases)
        logger.info("Disease added to catalog: %s", record.name)
