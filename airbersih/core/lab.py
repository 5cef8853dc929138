"""Klasifikasi keamanan air dari hasil pemeriksaan laboratorium.

Setiap parameter yang terisi dicocokkan dengan standar kualitas air
(band waspada & bahaya). Setelah itu aturan khusus untuk coliform dan
nitrat dievaluasi tanpa melihat band.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Union

from ..exceptions import ConfigurationError
from .models import LabInput, ParameterStandard, SafetyVerdict, TreatmentRecommendation
from .working_memory import ScoreCard

logger = logging.getLogger(__name__)

DANGER_PENALTY = 40
WARNING_PENALTY = 20

# Lebih ketat dari input sederhana: data lab dianggap lebih andal
LAB_THRESHOLDS = (85, 70, 50)

# Diambil N pertama tanpa ranking terhadap kontaminan yang ditemukan
MAX_TREATMENT_SUGGESTIONS = 3

COLIFORM_LIMIT = 0
NITRATE_LIMIT = 50

GENERIC_HEALTH_RISK = "serious health risk"

TreatmentSource = Union[
    Sequence[TreatmentRecommendation],
    Callable[[], Iterable[TreatmentRecommendation]],
]


def _normalize_name(name: str) -> str:
    """'Total Coliform' -> 'total_coliform'."""
    return re.sub(r"[\s_]+", "_", str(name).strip().lower())


def _compact(name: str) -> str:
    return re.sub(r"[\s_.\-]+", "", str(name).strip().lower())


def find_standard(
    parameter: str,
    standards: Iterable[ParameterStandard],
) -> Optional[ParameterStandard]:
    """Cari standar untuk sebuah parameter, case-insensitive.

    Variasi spasi/underscore dianggap sama ('Total Coliform' == 'total_coliform'),
    begitu juga titik dan strip ('E. coli' == 'ecoli').
    """
    wanted = _normalize_name(parameter)
    wanted_compact = _compact(parameter)
    fallback = None
    for standard in standards:
        if _normalize_name(standard.parameter) == wanted:
            return standard
        if fallback is None and _compact(standard.parameter) == wanted_compact:
            fallback = standard
    return fallback


def _standard_for(
    param: str,
    lab_input: LabInput,
    standards: List[ParameterStandard],
) -> Optional[ParameterStandard]:
    for name in lab_input.lookup_names(param):
        standard = find_standard(name, standards)
        if standard is not None:
            return standard
    return None


def _coerce_standards(standards: Optional[Iterable[Any]]) -> List[ParameterStandard]:
    if not standards:
        return []
    return [
        s if isinstance(s, ParameterStandard) else ParameterStandard.from_dict(s)
        for s in standards
    ]


def _load_treatments(treatments: Optional[TreatmentSource]) -> List[TreatmentRecommendation]:
    """Ambil data pengolahan; kegagalan hanya di-log."""
    if treatments is None:
        return []
    try:
        items = treatments() if callable(treatments) else treatments
        return [
            t if isinstance(t, TreatmentRecommendation) else TreatmentRecommendation.from_dict(t)
            for t in (items or [])
        ]
    except Exception as e:
        logger.error("Error fetching treatment methods: %s", e)
        return []


def classify_lab(
    lab_input: Union[LabInput, Mapping[str, Any]],
    standards: Optional[Iterable[Union[ParameterStandard, Mapping[str, Any]]]],
    treatments: Optional[TreatmentSource] = None,
) -> SafetyVerdict:
    """Klasifikasi keamanan air dari hasil lab.

    Args:
        lab_input: LabInput atau dict parameter -> nilai (nilai kosong dilewati).
        standards: Tabel standar kualitas air. Wajib tidak kosong.
        treatments: List TreatmentRecommendation, atau callable yang mengembalikannya.
            Callable hanya dipanggil jika ada kontaminan.

    Returns:
        SafetyVerdict dengan ambang 85/70/50. Skor tidak di-clamp ke 0.

    Raises:
        ConfigurationError: Jika tabel standar kosong.
    """
    table = _coerce_standards(standards)
    if not table:
        raise ConfigurationError("Water quality standards are not available")

    if not isinstance(lab_input, LabInput):
        lab_input = LabInput.from_mapping(lab_input)

    card = ScoreCard()

    for param, value in lab_input.measurements():
        standard = _standard_for(param, lab_input, table)
        if standard is None:
            logger.debug("No standard for parameter %r, skipped", param)
            continue

        if standard.in_danger_band(value):
            card.penalize(f"danger:{standard.parameter}", DANGER_PENALTY, note=str(value))
            card.add_contaminant(standard.parameter)
            card.add_health_risk(standard.health_impact or GENERIC_HEALTH_RISK)
            card.require_action(f"parameter {standard.parameter} at hazardous level")
        elif standard.in_warning_band(value):
            card.penalize(f"warning:{standard.parameter}", WARNING_PENALTY, note=str(value))
            card.add_contaminant(standard.parameter)
            card.recommend(f"improvement needed for {standard.parameter}")

    if card.contaminants:
        for treatment in _load_treatments(treatments)[:MAX_TREATMENT_SUGGESTIONS]:
            card.recommend(str(treatment))

    if lab_input.coliform is not None and lab_input.coliform > COLIFORM_LIMIT:
        card.recommend("chlorination or boiling mandatory")
        card.require_action("water unsafe to drink without treatment")
        card.fire("targeted:coliform", note=str(lab_input.coliform))

    if lab_input.nitrate is not None and lab_input.nitrate > NITRATE_LIMIT:
        card.add_health_risk("Blue Baby Syndrome risk in infants")
        card.recommend("use reverse-osmosis system")
        card.fire("targeted:nitrate", note=str(lab_input.nitrate))

    return card.to_verdict(LAB_THRESHOLDS)
