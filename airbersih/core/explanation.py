from typing import Any, Dict, List

from .models import SafetyVerdict


def explain_how(verdict: SafetyVerdict) -> str:
    """Jelaskan bagaimana skor dan tingkat keamanan diperoleh.

    Contoh output:
    "Score 70/100 -> CAUTION (waspada)
     1. odor:putrid (-30) -> 70"
    """
    header = (
        f"Score {verdict.score}/100 -> {verdict.safety_level.value.upper()} "
        f"({verdict.safety_level.label})"
    )
    if not verdict.reasoning:
        return header + "\nNo rule fired; all observations are within normal limits."

    lines = [header]
    for step in verdict.reasoning:
        delta = f" ({step.delta:+d})" if step.delta else ""
        note = f" [{step.note}]" if step.note else ""
        lines.append(f"{step.step}. {step.rule}{delta}{note} -> {step.score_after}")
    return "\n".join(lines)


def get_trace_formatted(verdict: SafetyVerdict) -> List[Dict[str, Any]]:
    """Trace dalam bentuk baris dict untuk tabel/log."""
    return [step.to_row() for step in verdict.reasoning]
