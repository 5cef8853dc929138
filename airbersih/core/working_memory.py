"""
Working Memory Module
Menyimpan skor, temuan, dan jejak aturan selama satu proses klasifikasi
"""

from typing import List, Tuple

from .models import ReasoningStep, SafetyLevel, SafetyVerdict, level_from_score

INITIAL_SCORE = 100


def _dedupe(items: List[str]) -> Tuple[str, ...]:
    """Hapus duplikat dengan mempertahankan urutan kemunculan pertama."""
    return tuple(dict.fromkeys(items))


class ScoreCard:
    """
    Working memory untuk satu klasifikasi.
    Skor sengaja tidak di-clamp ke 0: banyak parameter di band bahaya
    bisa membuat skor negatif, dan tetap dipetakan ke HAZARDOUS.
    """

    def __init__(self, initial_score: int = INITIAL_SCORE):
        self.score: int = initial_score
        self.contaminants: List[str] = []
        self.recommendations: List[str] = []
        self.health_risks: List[str] = []
        self.immediate_actions: List[str] = []
        self.trace: List[ReasoningStep] = []

    def penalize(self, rule: str, points: int, note: str = "") -> None:
        """Kurangi skor dan catat aturan yang ditembakkan."""
        self.score -= points
        self.fire(rule, -points, note)

    def fire(self, rule: str, delta: int = 0, note: str = "") -> None:
        self.trace.append(ReasoningStep(
            step=len(self.trace) + 1,
            rule=rule,
            delta=delta,
            score_after=self.score,
            note=note,
        ))

    def add_contaminant(self, *labels: str) -> None:
        self.contaminants.extend(labels)

    def recommend(self, *texts: str) -> None:
        self.recommendations.extend(texts)

    def add_health_risk(self, *texts: str) -> None:
        self.health_risks.extend(texts)

    def require_action(self, *texts: str) -> None:
        self.immediate_actions.extend(texts)

    def level(self, thresholds: Tuple[int, int, int]) -> SafetyLevel:
        return level_from_score(self.score, thresholds)

    def to_verdict(self, thresholds: Tuple[int, int, int]) -> SafetyVerdict:
        """Bangun SafetyVerdict; keempat list selalu dideduplikasi."""
        return SafetyVerdict(
            safety_level=self.level(thresholds),
            score=self.score,
            contaminants=_dedupe(self.contaminants),
            recommendations=_dedupe(self.recommendations),
            health_risks=_dedupe(self.health_risks),
            immediate_actions=_dedupe(self.immediate_actions),
            reasoning=tuple(self.trace),
        )

    def __repr__(self) -> str:
        return f"ScoreCard(score={self.score}, contaminants={len(self.contaminants)}, rules={len(self.trace)})"
