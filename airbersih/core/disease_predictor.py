"""Prediksi penyakit bawaan air dari hasil lab.

Aturan disimpan sebagai tabel bertag. Sebagian aturan mencari nama di
katalog penyakit (keyword substring), sebagian lain langsung memberi label
literal yang tidak ada di katalog.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .models import DiseaseRecord, LabInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiseaseRule:
    """Satu aturan prediksi: kondisi -> keyword katalog ATAU label literal."""
    id: str
    condition: Callable[[LabInput], bool]
    catalog_keywords: Tuple[str, ...] = ()
    literal_labels: Tuple[str, ...] = ()

    @property
    def source(self) -> str:
        return "catalog" if self.catalog_keywords else "literal"

    def matches(self, lab: LabInput) -> bool:
        return self.condition(lab)


def _gt(field: str, limit: float) -> Callable[[LabInput], bool]:
    def check(lab: LabInput) -> bool:
        value = getattr(lab, field)
        return value is not None and value > limit
    return check


def _ph_extreme(lab: LabInput) -> bool:
    return lab.ph is not None and (lab.ph < 5 or lab.ph > 9)


DISEASE_RULES: Tuple[DiseaseRule, ...] = (
    # Nama penyakit di katalog bisa Inggris atau Indonesia
    DiseaseRule(
        "coliform", _gt("coliform", 0),
        catalog_keywords=("diarrhea", "typhoid", "cholera", "diare", "tifus", "kolera"),
    ),
    DiseaseRule("ecoli", _gt("ecoli", 0), catalog_keywords=("e. coli", "escherichia")),
    DiseaseRule("nitrate", _gt("nitrate", 50), literal_labels=("Blue Baby Syndrome (in infants)",)),
    DiseaseRule("ph", _ph_extreme, literal_labels=("digestive disturbance", "gastrointestinal irritation")),
    DiseaseRule("iron", _gt("iron", 0.3), literal_labels=("iron metabolism disorder",)),
    DiseaseRule("manganese", _gt("manganese", 0.1), literal_labels=("neurological disorder (long-term)",)),
)

CatalogSource = Union[
    Sequence[Union[DiseaseRecord, Mapping[str, Any]]],
    Callable[[], Iterable[Union[DiseaseRecord, Mapping[str, Any]]]],
]


def _load_catalog(catalog: Optional[CatalogSource]) -> List[DiseaseRecord]:
    if catalog is None:
        return []
    items = catalog() if callable(catalog) else catalog
    return [
        d if isinstance(d, DiseaseRecord) else DiseaseRecord.from_dict(d)
        for d in (items or [])
    ]


def predict_diseases(
    lab_input: Union[LabInput, Mapping[str, Any]],
    catalog: Optional[CatalogSource],
    rules: Sequence[DiseaseRule] = DISEASE_RULES,
) -> List[str]:
    """Prediksi daftar penyakit dari hasil lab.

    Katalog dibaca penuh setiap panggilan. Jika katalog gagal diambil atau
    kosong, hasilnya list kosong (tidak melempar exception).
    """
    if not isinstance(lab_input, LabInput):
        lab_input = LabInput.from_mapping(lab_input)

    try:
        records = _load_catalog(catalog)
    except Exception as e:
        logger.error("Error fetching diseases: %s", e)
        return []

    if not records:
        logger.warning("Disease catalog is empty, no prediction made")
        return []

    diseases: List[str] = []
    for rule in rules:
        if not rule.matches(lab_input):
            continue
        if rule.catalog_keywords:
            diseases.extend(
                record.name for record in records
                if any(keyword in record.name.lower() for keyword in rule.catalog_keywords)
            )
        diseases.extend(rule.literal_labels)

    return list(dict.fromkeys(diseases))
