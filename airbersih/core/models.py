# File: core/models.py

from __future__ import annotations

import math
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple


class SafetyLevel(str, Enum):
    """Empat tingkat keamanan air, terurut dari paling aman ke paling berbahaya."""
    SAFE = "safe"
    CAUTION = "caution"
    UNSAFE = "unsafe"
    HAZARDOUS = "hazardous"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self)

    @property
    def label(self) -> str:
        """Istilah asli yang dipakai di laporan warga."""
        return _LEVEL_LABELS[self]

    @property
    def color(self) -> str:
        return _LEVEL_COLORS[self]

    @property
    def description(self) -> str:
        return _LEVEL_DESCRIPTIONS[self]

    @classmethod
    def parse(cls, value: Any) -> "SafetyLevel":
        """Terima nilai enum, nilai Inggris ('caution') atau istilah asli ('waspada')."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for level in _LEVEL_ORDER:
            if text in (level.value, _LEVEL_LABELS[level]):
                return level
        raise ValueError(f"Safety level tidak dikenal: {value!r}")

    def __lt__(self, other):
        if not isinstance(other, SafetyLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, SafetyLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, SafetyLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, SafetyLevel):
            return NotImplemented
        return self.rank >= other.rank

    def __str__(self) -> str:
        return self.value


_LEVEL_ORDER = [SafetyLevel.SAFE, SafetyLevel.CAUTION, SafetyLevel.UNSAFE, SafetyLevel.HAZARDOUS]

_LEVEL_LABELS = {
    SafetyLevel.SAFE: "aman",
    SafetyLevel.CAUTION: "waspada",
    SafetyLevel.UNSAFE: "rawan",
    SafetyLevel.HAZARDOUS: "bahaya",
}

_LEVEL_COLORS = {
    SafetyLevel.SAFE: "green",
    SafetyLevel.CAUTION: "yellow",
    SafetyLevel.UNSAFE: "orange",
    SafetyLevel.HAZARDOUS: "red",
}

_LEVEL_DESCRIPTIONS = {
    SafetyLevel.SAFE: "Water is safe to consume with normal handling",
    SafetyLevel.CAUTION: "Water needs special treatment before consumption",
    SafetyLevel.UNSAFE: "Water may cause health problems",
    SafetyLevel.HAZARDOUS: "Water is not safe to consume, immediate action required",
}


def level_from_score(score: float, thresholds: Tuple[int, int, int]) -> SafetyLevel:
    """Petakan skor ke tingkat keamanan.

    Args:
        score: Skor hasil klasifikasi (boleh negatif, tidak di-clamp).
        thresholds: (min_safe, min_caution, min_unsafe).

    Returns:
        SafetyLevel. Skor di bawah min_unsafe selalu HAZARDOUS.
    """
    safe_min, caution_min, unsafe_min = thresholds
    if score >= safe_min:
        return SafetyLevel.SAFE
    elif score >= caution_min:
        return SafetyLevel.CAUTION
    elif score >= unsafe_min:
        return SafetyLevel.UNSAFE
    else:
        return SafetyLevel.HAZARDOUS


@dataclass(frozen=True)
class ReasoningStep:
    """Satu aturan yang ditembakkan selama klasifikasi."""
    step: int
    rule: str
    delta: int
    score_after: int
    note: str = ""

    def to_row(self) -> Dict[str, Any]:
        """Convert ke format dict untuk UI/log."""
        return {
            "step": self.step,
            "rule": self.rule,
            "delta": self.delta,
            "score_after": self.score_after,
            "note": self.note,
        }


@dataclass(frozen=True)
class SafetyVerdict:
    """Hasil akhir klasifikasi keamanan air (immutable)."""
    safety_level: SafetyLevel
    score: int
    contaminants: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()
    health_risks: Tuple[str, ...] = ()
    immediate_actions: Tuple[str, ...] = ()
    reasoning: Tuple[ReasoningStep, ...] = ()

    @property
    def is_safe(self) -> bool:
        return self.safety_level is SafetyLevel.SAFE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "safety_level": self.safety_level.value,
            "score": self.score,
            "contaminants": list(self.contaminants),
            "recommendations": list(self.recommendations),
            "health_risks": list(self.health_risks),
            "immediate_actions": list(self.immediate_actions),
            "reasoning": [step.to_row() for step in self.reasoning],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SafetyVerdict":
        return cls(
            safety_level=SafetyLevel.parse(data["safety_level"]),
            score=int(data["score"]),
            contaminants=tuple(data.get("contaminants", [])),
            recommendations=tuple(data.get("recommendations", [])),
            health_risks=tuple(data.get("health_risks", [])),
            immediate_actions=tuple(data.get("immediate_actions", [])),
            reasoning=tuple(ReasoningStep(**row) for row in data.get("reasoning", [])),
        )


@dataclass(frozen=True)
class SensoryInput:
    """Tiga pengamatan indera dari laporan warga: bau, rasa, warna."""
    odor: str = "normal"
    taste: str = "normal"
    color: str = "clear"


def coerce_number(value: Any) -> Optional[float]:
    """Konversi nilai lab ke float; nilai yang tidak numerik dianggap tidak ada."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", ".")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number


LAB_FIELDS = ("turbidity", "ph", "iron", "manganese", "nitrate", "coliform", "ecoli")

# Nama kolom dari form lab (Indonesia) dan variasi penulisan
LAB_FIELD_ALIASES = {
    "kekeruhan": "turbidity",
    "besi": "iron",
    "mangan": "manganese",
    "nitrat": "nitrate",
    "total_coliform": "coliform",
    "e_coli": "ecoli",
    "e._coli": "ecoli",
    "e.coli": "ecoli",
}


def _canonical_key(key: str) -> str:
    text = "_".join(str(key).strip().lower().replace("-", " ").split())
    return LAB_FIELD_ALIASES.get(text, text)


@dataclass
class LabInput:
    """Hasil pengukuran laboratorium. Semua parameter opsional."""
    turbidity: Optional[float] = None
    ph: Optional[float] = None
    iron: Optional[float] = None
    manganese: Optional[float] = None
    nitrate: Optional[float] = None
    coliform: Optional[float] = None
    ecoli: Optional[float] = None
    extra: Dict[str, Optional[float]] = field(default_factory=dict)
    # field -> key asli dari form/API, mis. coliform -> "Total Coliform"
    source_keys: Dict[str, str] = field(default_factory=dict, compare=False, repr=False)

    def __post_init__(self):
        for name in LAB_FIELDS:
            setattr(self, name, coerce_number(getattr(self, name)))
        self.extra = {key: coerce_number(value) for key, value in self.extra.items()}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LabInput":
        """Buat LabInput dari dict form/API. Key tidak dikenal masuk ke `extra`."""
        known: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        source_keys: Dict[str, str] = {}
        for key, value in data.items():
            canonical = _canonical_key(key)
            if canonical in LAB_FIELDS:
                known[canonical] = value
                source_keys[canonical] = str(key).strip()
            else:
                extra[str(key).strip()] = value
        return cls(extra=extra, source_keys=source_keys, **known)

    def lookup_names(self, name: str) -> List[str]:
        """Nama kandidat untuk mencari standar sebuah parameter.

        Urutan: key asli dari input, nama field, lalu alias form
        ('coliform' -> 'total_coliform', 'iron' -> 'besi').
        """
        names = [self.source_keys.get(name, name), name]
        names.extend(alias for alias, canonical in LAB_FIELD_ALIASES.items() if canonical == name)
        return list(dict.fromkeys(names))

    def measurements(self) -> Iterator[Tuple[str, float]]:
        """Iterasi (nama, nilai) untuk parameter yang terisi saja."""
        for name in LAB_FIELDS:
            value = getattr(self, name)
            if value is not None:
                yield name, value
        for name, value in self.extra.items():
            if value is not None:
                yield name, value

    def to_dict(self) -> Dict[str, float]:
        return dict(self.measurements())


@dataclass(frozen=True)
class ParameterStandard:
    """Standar kualitas air untuk satu parameter (band waspada & bahaya)."""
    parameter: str
    warning_min: Optional[float] = None
    warning_max: Optional[float] = None
    danger_min: Optional[float] = None
    danger_max: Optional[float] = None
    health_impact: str = ""
    unit: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParameterStandard":
        return cls(
            parameter=data["parameter"],
            warning_min=coerce_number(data.get("warning_min")),
            warning_max=coerce_number(data.get("warning_max")),
            danger_min=coerce_number(data.get("danger_min")),
            danger_max=coerce_number(data.get("danger_max")),
            health_impact=data.get("health_impact") or "",
            unit=data.get("unit") or "",
        )

    def in_danger_band(self, value: float) -> bool:
        if self.danger_min is None or self.danger_max is None:
            return False
        return self.danger_min <= value <= self.danger_max

    def in_warning_band(self, value: float) -> bool:
        if self.warning_min is None or self.warning_max is None:
            return False
        return self.warning_min <= value <= self.warning_max


@dataclass(frozen=True)
class TreatmentRecommendation:
    """Metode pengolahan air dari tabel referensi."""
    method: str
    description: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TreatmentRecommendation":
        return cls(method=data["method"], description=data.get("description", ""))

    def __str__(self) -> str:
        return f"{self.method}: {self.description}"


@dataclass(frozen=True)
class DiseaseRecord:
    """Mewakili satu penyakit dalam katalog penyakit bawaan air."""
    name: str
    category: str = ""
    severity: str = ""
    symptoms: str = ""
    cause: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DiseaseRecord":
        return cls(
            name=data.get("name") or data["nama"],
            category=data.get("category", ""),
            severity=data.get("severity", ""),
            symptoms=data.get("symptoms", ""),
            cause=data.get("cause", ""),
        )

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


__all__ = [
    "SafetyLevel",
    "SafetyVerdict",
    "ReasoningStep",
    "SensoryInput",
    "LabInput",
    "ParameterStandard",
    "TreatmentRecommendation",
    "DiseaseRecord",
    "level_from_score",
    "coerce_number",
    "LAB_FIELDS",
]
