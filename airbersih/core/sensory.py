"""Klasifikasi keamanan air dari input sederhana (bau, rasa, warna).

Setiap pengamatan yang tidak normal mengurangi skor dengan penalti tetap,
lalu aturan spesifik per nilai menambahkan kontaminan, rekomendasi,
risiko kesehatan dan tindakan segera. Tidak ada I/O di modul ini.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .models import SafetyLevel, SafetyVerdict, SensoryInput
from .working_memory import ScoreCard

ODOR_PENALTY = 30
TASTE_PENALTY = 25
COLOR_PENALTY = 20

# (min_safe, min_caution, min_unsafe)
SIMPLE_THRESHOLDS = (80, 60, 40)

# Nilai form laporan warga & istilah lama -> kategori kanonik
ODOR_ALIASES = {
    "normal": "normal",
    "tidak_berbau": "normal",
    "fishy": "fishy",
    "earthy": "fishy",
    "anyir": "fishy",
    "berbau_besi": "fishy",
    "putrid": "putrid",
    "busuk": "putrid",
    "berbau_busuk": "putrid",
    "ammonia": "ammonia",
    "amis": "ammonia",
}

TASTE_ALIASES = {
    "normal": "normal",
    "tawar": "normal",
    "bitter": "bitter",
    "pahit": "bitter",
    "salty": "salty",
    "asin": "salty",
    "metallic": "metallic",
    "anyir": "metallic",
    "heavy_metal": "heavy_metal",
    "logam": "heavy_metal",
}

COLOR_ALIASES = {
    "clear": "clear",
    "jernih": "clear",
    "turbid": "turbid",
    "keruh": "turbid",
    "yellow": "yellow",
    "kuning": "yellow",
    "kekuningan": "yellow",
    "brown": "brown",
    "coklat": "brown",
    "kecoklatan": "brown",
    "green": "green",
    "hijau": "green",
    "kehijauan": "green",
}

ODOR_RULES: Dict[str, Dict[str, str]] = {
    "fishy": {
        "contaminant": "high iron/manganese",
        "recommendation": "aeration and sand filtration",
    },
    "putrid": {
        "contaminant": "anaerobic bacteria",
        "immediate_action": "DO NOT DRINK",
        "recommendation": "chlorination and boiling",
    },
    "ammonia": {
        "contaminant": "ammonia",
        "recommendation": "aeration and chlorination",
    },
    "other": {
        "contaminant": "chemical contaminant",
        "recommendation": "further lab analysis required",
    },
}

TASTE_RULES: Dict[str, Dict[str, str]] = {
    "bitter": {
        "contaminant": "high mineral content",
        "recommendation": "reverse osmosis",
    },
    "salty": {
        "contaminant": "high salt/chloride",
        "health_risk": "hypertension with long-term consumption",
        "recommendation": "distillation or alternate water source",
    },
    "metallic": {
        "contaminant": "high iron/manganese",
        "recommendation": "aeration and filtration",
    },
    "heavy_metal": {
        "contaminant": "heavy metals",
        "health_risk": "heavy-metal poisoning",
        "immediate_action": "stop consumption immediately",
        "recommendation": "lab consultation to identify the metal",
    },
    "other": {
        "contaminant": "chemical contaminant",
        "recommendation": "lab analysis required",
    },
}

COLOR_RULES: Dict[str, Dict[str, str]] = {
    "turbid": {
        "contaminant": "suspended particles",
        "recommendation": "sedimentation and filtration",
    },
    "yellow": {
        "contaminant": "tannin/humus or iron",
        "recommendation": "activated carbon and filtration",
    },
    "brown": {
        "contaminant": "high iron or organics",
        "immediate_action": "do not use for drinking",
        "recommendation": "sedimentation, aeration, filtration",
    },
    "green": {
        "contaminant": "algae or copper",
        "health_risk": "digestive disturbance",
        "recommendation": "chlorination and filtration",
    },
    "other": {
        "contaminant": "unknown contaminant",
        "recommendation": "laboratory analysis required",
    },
}

GENERAL_RECOMMENDATIONS = ("boil before drinking", "use alternate source temporarily")
HAZARD_ACTIONS = ("report to health center immediately", "find nearest safe water source")


def _normalize(value: Optional[Any], aliases: Dict[str, str], default: str) -> str:
    """Petakan nilai mentah ke kategori kanonik; nilai asing menjadi 'other'."""
    if value is None:
        return default
    text = "_".join(str(value).strip().lower().replace("-", " ").split())
    if not text:
        return default
    return aliases.get(text, "other")


def normalize_odor(value: Optional[Any]) -> str:
    return _normalize(value, ODOR_ALIASES, "normal")


def normalize_taste(value: Optional[Any]) -> str:
    return _normalize(value, TASTE_ALIASES, "normal")


def normalize_color(value: Optional[Any]) -> str:
    return _normalize(value, COLOR_ALIASES, "clear")


def _apply_rule(card: ScoreCard, rule: Dict[str, str]) -> None:
    if "contaminant" in rule:
        card.add_contaminant(rule["contaminant"])
    if "health_risk" in rule:
        card.add_health_risk(rule["health_risk"])
    if "immediate_action" in rule:
        card.require_action(rule["immediate_action"])
    if "recommendation" in rule:
        card.recommend(rule["recommendation"])


def classify_sensory(odor: Any, taste: Any, color: Any) -> SafetyVerdict:
    """Klasifikasi keamanan air dari tiga pengamatan indera.

    Args:
        odor: Bau air ('normal', 'fishy', 'putrid', 'ammonia', 'other', atau istilah form).
        taste: Rasa air ('normal', 'bitter', 'salty', 'metallic', 'heavy_metal', 'other').
        color: Warna air ('clear', 'turbid', 'yellow', 'brown', 'green', 'other').

    Returns:
        SafetyVerdict dengan ambang 80/60/40.
    """
    card = ScoreCard()

    odor_key = normalize_odor(odor)
    if odor_key != "normal":
        card.penalize(f"odor:{odor_key}", ODOR_PENALTY)
        card.add_contaminant("organic contaminant")
        card.add_health_risk("digestive disturbance")
        _apply_rule(card, ODOR_RULES[odor_key])

    taste_key = normalize_taste(taste)
    if taste_key != "normal":
        card.penalize(f"taste:{taste_key}", TASTE_PENALTY)
        _apply_rule(card, TASTE_RULES[taste_key])

    color_key = normalize_color(color)
    if color_key != "clear":
        card.penalize(f"color:{color_key}", COLOR_PENALTY)
        _apply_rule(card, COLOR_RULES[color_key])

    level = card.level(SIMPLE_THRESHOLDS)
    if level is not SafetyLevel.SAFE:
        card.recommend(*GENERAL_RECOMMENDATIONS)
        card.fire("general:not_safe", note=level.value)
    if level is SafetyLevel.HAZARDOUS:
        card.require_action(*HAZARD_ACTIONS)
        card.fire("general:hazardous")

    return card.to_verdict(SIMPLE_THRESHOLDS)


def classify_sensory_input(observation: SensoryInput) -> SafetyVerdict:
    return classify_sensory(observation.odor, observation.taste, observation.color)
