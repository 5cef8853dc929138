# services/storage.py

"""
Menyediakan kelas abstraksi untuk penyimpanan file dan riwayat keamanan wilayah.

Modul ini berisi:
- JsonStorage: Kelas untuk baca/tulis file JSON umum
- AreaSafetyHistory: Riwayat tingkat keamanan air per kecamatan

Memisahkan logika I/O dari logika klasifikasi.
"""

import json
import logging
import os
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

import pandas as pd

from ..core.models import SafetyLevel, SafetyVerdict

logger = logging.getLogger(__name__)

HISTORY_COLUMNS = [
    "id", "kecamatan", "kelurahan", "safety_level", "score",
    "total_contaminants", "main_contaminant", "test_date", "puskesmas_id",
]


class JsonStorage:
    """Kelas untuk membaca dan menulis data ke file JSON."""

    def read(self, file_path: str) -> Optional[Any]:
        """
        Membaca dan mem-parsing data dari sebuah file JSON.

        Returns:
            Optional[Any]: Data yang di-parsing, atau None jika file tidak
                           ditemukan atau JSON tidak valid.
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except FileNotFoundError:
            return None
        except json.JSONDecodeError as e:
            logger.error(f"Gagal mem-parsing JSON dari '{file_path}': {e}")
            return None

    def write(self, file_path: str, data: Any) -> bool:
        """
        Menulis data ke sebuah file JSON. Direktori dibuat jika belum ada.

        Returns:
            bool: True jika berhasil, False jika data tidak bisa diserialisasi.
        """
        dir_name = os.path.dirname(file_path)
        if dir_name:
            os.makedirs(dir_name, exist_ok=True)
        try:
            payload = json.dumps(data, indent=4, ensure_ascii=False)
        except TypeError as e:
            logger.error(f"Data tidak dapat diserialisasi ke JSON: {e}")
            return False
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(payload)
        return True


class AreaSafetyHistory:
    """Riwayat keamanan air per wilayah (kecamatan/kelurahan).

    Menyediakan fungsi untuk:
    - Simpan hasil analisis untuk sebuah wilayah
    - Ambil status terbaru dan riwayat N hari terakhir
    - Statistik distribusi tingkat keamanan (pandas)
    - Export ke CSV
    """

    def __init__(self, history_file: str = "data/history/area_safety.json"):
        self.history_file = history_file
        self.json_storage = JsonStorage()

    def load(self) -> List[Dict[str, Any]]:
        history = self.json_storage.read(self.history_file)
        if not isinstance(history, list):
            return []
        return history

    def record(
        self,
        kecamatan: str,
        verdict: SafetyVerdict,
        kelurahan: str = "",
        puskesmas_id: str = "",
        test_date: Optional[date] = None
    ) -> Dict[str, Any]:
        """Menyimpan satu hasil analisis wilayah ke file history."""
        entry = {
            "id": f"A_{datetime.now().strftime('%Y%m%d%H%M%S')}_{os.urandom(4).hex()}",
            "kecamatan": kecamatan,
            "kelurahan": kelurahan,
            "safety_level": verdict.safety_level.value,
            "score": verdict.score,
            "total_contaminants": len(verdict.contaminants),
            "main_contaminant": verdict.contaminants[0] if verdict.contaminants else "",
            "test_date": (test_date or date.today()).isoformat(),
            "puskesmas_id": puskesmas_id,
        }

        history = self.load()
        history.insert(0, entry)
        if not self.json_storage.write(self.history_file, history):
            raise IOError(f"Gagal menulis ke file history '{self.history_file}'.")
        return entry

    def _for_area(self, kecamatan: str) -> List[Dict[str, Any]]:
        wanted = kecamatan.strip().lower()
        records = [r for r in self.load() if str(r.get("kecamatan", "")).strip().lower() == wanted]
        records.sort(key=lambda r: r.get("test_date", ""), reverse=True)
        return records

    def latest_for(self, kecamatan: str) -> Optional[Dict[str, Any]]:
        """Status keamanan terbaru sebuah kecamatan, atau None jika belum ada data."""
        records = self._for_area(kecamatan)
        return records[0] if records else None

    def history_for(
        self,
        kecamatan: str,
        days: int = 30,
        today: Optional[date] = None
    ) -> List[Dict[str, Any]]:
        """Riwayat kecamatan dalam N hari terakhir, terbaru dulu."""
        start = ((today or date.today()) - timedelta(days=days)).isoformat()
        return [r for r in self._for_area(kecamatan) if r.get("test_date", "") >= start]

    def to_dataframe(self, records: Optional[List[Dict[str, Any]]] = None) -> pd.DataFrame:
        if records is None:
            records = self.load()
        df = pd.DataFrame(records, columns=HISTORY_COLUMNS)
        df["test_date"] = pd.to_datetime(df["test_date"])
        return df

    def level_distribution(self, records: Optional[List[Dict[str, Any]]] = None) -> Dict[str, int]:
        """Jumlah record per tingkat keamanan (semua tingkat selalu ada)."""
        df = self.to_dataframe(records)
        counts = df["safety_level"].value_counts()
        levels = [level.value for level in SafetyLevel]
        return {level: int(counts.get(level, 0)) for level in levels}

    def export_to_csv(
        self,
        output_path: Optional[str] = None,
        records: Optional[List[Dict[str, Any]]] = None
    ) -> str:
        """Export riwayat ke CSV.

        Returns:
            Path ke file CSV yang dibuat
        """
        if output_path is None:
            output_path = os.path.join(
                os.path.dirname(self.history_file) or ".",
                f"export_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"
            )
        df = self.to_dataframe(records)
        df["test_date"] = df["test_date"].dt.strftime("%Y-%m-%d")
        df.to_csv(output_path, index=False, encoding="utf-8")
        return output_path
