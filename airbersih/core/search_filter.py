"""Modul Search & Filter untuk katalog penyakit dan standar kualitas air.

Fitur utama:
- Pencarian teks pada nama, gejala, penyebab
- Filter berdasarkan kategori dan tingkat keparahan
- Sorting berdasarkan nama atau keparahan
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from .models import DiseaseRecord, ParameterStandard

SEVERITY_ORDER = {"low": 0, "medium": 1, "high": 2}


def _normalize_text(text: str) -> str:
    """Normalisasi teks untuk pencarian: lowercase, hapus karakter khusus."""
    if not text:
        return ""
    text = text.lower().replace("_", " ").replace("-", " ")
    text = re.sub(r"[^a-z0-9\s]", "", text)
    return " ".join(text.split())


def _matches_text_obj(item: object, query: str, fields: List[str]) -> bool:
    """Cek apakah object cocok dengan query pada field-field tertentu."""
    if not query:
        return True
    normalized_query = _normalize_text(query)
    for field in fields:
        if normalized_query in _normalize_text(str(getattr(item, field, ""))):
            return True
    return False


def search_diseases(
    diseases: Iterable[DiseaseRecord],
    query: Optional[str] = None,
    category: Optional[str] = None,
    severity: Optional[str] = None,
    sort_by: str = "name",
    ascending: bool = True,
    limit: Optional[int] = None,
) -> List[DiseaseRecord]:
    """Cari dan filter penyakit di katalog."""
    results = []
    for disease in diseases:
        if query and not _matches_text_obj(disease, query, ["name", "symptoms", "cause"]):
            continue
        if category and disease.category.lower() != category.lower():
            continue
        if severity and disease.severity.lower() != severity.lower():
            continue
        results.append(disease)

    if sort_by == "severity":
        key_fn = lambda d: SEVERITY_ORDER.get(d.severity.lower(), -1)
    else:
        key_fn = lambda d: _normalize_text(d.name)

    results.sort(key=key_fn, reverse=not ascending)
    if limit:
        results = results[:limit]
    return results


def search_standards(
    standards: Iterable[ParameterStandard],
    query: Optional[str] = None,
) -> List[ParameterStandard]:
    """Cari standar berdasarkan nama parameter atau dampak kesehatan."""
    return [
        s for s in standards
        if _matches_text_obj(s, query or "", ["parameter", "health_impact"])
    ]
