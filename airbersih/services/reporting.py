# services/reporting.py

"""
Service untuk generate file laporan dari hasil analisis keamanan air.

Menyediakan fungsi untuk:
- Generate TXT reports (isi dari report_formatter)
- Generate PDF reports (fpdf2)
"""

import os
from datetime import date, datetime
from typing import List, Optional

from fpdf import FPDF

from ..core.models import SafetyVerdict
from ..core.report_formatter import format_report


def _latin1(text: str) -> str:
    # Font inti PDF hanya mendukung latin-1
    return text.encode('latin-1', 'replace').decode('latin-1')


class ReportingService:
    """Kelas untuk menghasilkan file laporan dari SafetyVerdict."""

    def __init__(self, output_dir: str = "reports"):
        """Initialize ReportingService.

        Args:
            output_dir: Direktori untuk menyimpan reports
        """
        os.makedirs(output_dir, exist_ok=True)
        self.output_dir = output_dir

    def _generate_filename(self, extension: str, prefix: str = "laporan_air") -> str:
        """Membuat nama file unik berdasarkan timestamp."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        return os.path.join(self.output_dir, f"{prefix}_{timestamp}.{extension}")

    def generate_txt_report(self, verdict: SafetyVerdict, today: Optional[date] = None) -> str:
        """
        Membuat laporan TXT dari hasil analisis.

        Returns:
            str: Path ke file laporan yang telah dibuat.
        """
        filepath = self._generate_filename("txt")
        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(format_report(verdict, today))
        return filepath

    def generate_pdf_report(
        self,
        verdict: SafetyVerdict,
        location: Optional[str] = None,
        diseases: Optional[List[str]] = None,
        today: Optional[date] = None
    ) -> str:
        """
        Membuat laporan PDF dari hasil analisis.

        Args:
            verdict: Hasil klasifikasi.
            location: Lokasi sumber air (opsional).
            diseases: Hasil prediksi penyakit (opsional).

        Returns:
            str: Path ke file laporan yang telah dibuat.
        """
        today = today or date.today()
        filepath = self._generate_filename("pdf")

        pdf = FPDF()
        pdf.add_page()

        pdf.set_font("Helvetica", 'B', 16)
        pdf.cell(0, 10, "Water Safety Report", new_x="LMARGIN", new_y="NEXT", align='C')
        pdf.set_font("Helvetica", '', 10)
        pdf.cell(0, 5, f"Analysis Date: {today.strftime('%d/%m/%Y')}", new_x="LMARGIN", new_y="NEXT", align='C')
        if location:
            pdf.cell(0, 5, _latin1(f"Location: {location}"), new_x="LMARGIN", new_y="NEXT", align='C')
        pdf.ln(5)

        level = verdict.safety_level
        pdf.set_font("Helvetica", 'B', 14)
        pdf.cell(0, 10, f"Status: {level.value.upper()} ({level.label})", new_x="LMARGIN", new_y="NEXT")
        pdf.set_font("Helvetica", 'B', 11)
        pdf.cell(0, 8, f"Safety Score: {verdict.score}/100", new_x="LMARGIN", new_y="NEXT")
        pdf.set_font("Helvetica", 'I', 10)
        pdf.multi_cell(0, 5, _latin1(level.description), new_x="LMARGIN", new_y="NEXT")
        pdf.ln(4)

        # Helper untuk menulis section
        def write_section(title, items, marker="-"):
            if not items:
                return
            pdf.set_font("Helvetica", 'B', 11)
            pdf.cell(0, 8, title, new_x="LMARGIN", new_y="NEXT")
            pdf.set_font("Helvetica", '', 11)
            for item in items:
                pdf.multi_cell(0, 5, _latin1(f"{marker} {item}"), new_x="LMARGIN", new_y="NEXT")
            pdf.ln(4)

        write_section("Detected Contaminants", verdict.contaminants)
        write_section("Health Risks", verdict.health_risks, "!")
        write_section("IMMEDIATE ACTIONS", verdict.immediate_actions, "!!")
        write_section("Treatment Recommendations", verdict.recommendations)
        write_section("Possible Diseases", diseases or [])

        pdf.set_font("Helvetica", 'I', 9)
        pdf.multi_cell(
            0, 5,
            "This report was generated automatically. Consultation with a health worker "
            "is still required for a definitive diagnosis.",
            new_x="LMARGIN", new_y="NEXT"
        )

        pdf.output(filepath)
        return filepath
