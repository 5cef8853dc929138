"""Render SafetyVerdict menjadi laporan teks terstruktur."""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

from .models import SafetyVerdict

WARNING_MARK = "⚠️"
URGENT_MARK = "\U0001f534"
CHECK_MARK = "✅"

FOOTER = (
    "---\n"
    "*This report was generated automatically by the Air Bersih system*\n"
    "*Consultation with a health worker is still required for a definitive diagnosis*"
)


def _section(title: str, items: Iterable[str], marker: str = "") -> List[str]:
    prefix = f"{marker} " if marker else ""
    lines = [f"## {title}:"]
    lines.extend(f"- {prefix}{item}" for item in items)
    lines.append("")
    return lines


def format_report(verdict: SafetyVerdict, today: Optional[date] = None) -> str:
    """Buat laporan keamanan air.

    Section hanya ditulis jika list sumbernya tidak kosong.
    """
    today = today or date.today()
    lines = [
        "# WATER SAFETY REPORT",
        "",
        f"## Status: {verdict.safety_level.value.upper()}",
        f"## Safety Score: {verdict.score}/100",
        "",
        f"### Analysis Date: {today.strftime('%d/%m/%Y')}",
        "",
    ]

    if verdict.contaminants:
        lines += _section("Detected Contaminants", verdict.contaminants)
    if verdict.health_risks:
        lines += _section("Health Risks", verdict.health_risks, WARNING_MARK)
    if verdict.immediate_actions:
        lines += _section("IMMEDIATE ACTIONS", verdict.immediate_actions, URGENT_MARK)
    if verdict.recommendations:
        lines += _section("Treatment Recommendations", verdict.recommendations, CHECK_MARK)

    return "\n".join(lines) + "\n" + FOOTER
