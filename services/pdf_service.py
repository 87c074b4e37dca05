import logging
from datetime import date
from pathlib import Path
from typing import Dict, Any, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from config.settings import settings
from services.grading import (
    GRADE_DESCRIPTIONS,
    GRADE_MARK_RANGES,
    GRADE_POINTS,
    DegreeSummary,
    Grade,
    Scale,
    format_ordinal,
    subject_points,
    summarize_semester,
    weight_rationale,
)

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def _fmt_gpa(value) -> str:
    return f"{float(value or 0):.2f}"


def grade_legend():
    """Legend rows printed under each report"""
    return [
        {
            "grade": g.value,
            "description": GRADE_DESCRIPTIONS[g],
            "marks": GRADE_MARK_RANGES[g],
            "points_10": GRADE_POINTS[Scale.TEN][g],
            "points_4": GRADE_POINTS[Scale.FOUR][g],
        }
        for g in Grade
    ]


class PDFService:
    def __init__(self, template_dir: Optional[Path] = None):
        # template environment
        self.env = Environment(
            loader=FileSystemLoader(template_dir or TEMPLATE_DIR),
            autoescape=select_autoescape(["html"]),
        )
        self.env.filters["ordinal"] = format_ordinal
        self.env.filters["gpa"] = _fmt_gpa

    def _render_template(self, template_name: str, data: Dict[str, Any]) -> str:
        """Render a template to HTML"""
        template = self.env.get_template(template_name)
        return template.render(**data)

    def _html_to_pdf(self, html_content: str) -> bytes:
        """HTML -> PDF"""
        # imported here: WeasyPrint loads Pango/Cairo at import time
        import weasyprint

        base_url = settings.WEASYPRINT_FONT_DIR or str(TEMPLATE_DIR)
        return weasyprint.HTML(string=html_content, base_url=base_url).write_pdf()

    # ==========================================================
    # Conversion report (one semester)
    # ==========================================================
    def render_conversion_html(self, student, semester) -> str:
        summary = summarize_semester(semester)
        rows = [(s, subject_points(s)) for s in semester.subjects]
        return self._render_template("conversion_report.html", {
            "student": student,
            "semester": semester,
            "rows": rows,
            "summary": summary,
            "legend": grade_legend(),
            "generated_date": date.today().isoformat(),
        })

    def generate_conversion_pdf(self, student, semester) -> bytes:
        """Grade conversion report PDF"""
        logger.info("Rendering conversion report for transcript %s", semester.id)
        return self._html_to_pdf(self.render_conversion_html(student, semester))

    # ==========================================================
    # DGPA report (all saved semesters)
    # ==========================================================
    def render_dgpa_html(self, student, summary: DegreeSummary) -> str:
        weights = [(y.year, y.weight, weight_rationale(y.weight)) for y in summary.years]
        return self._render_template("dgpa_report.html", {
            "student": student,
            "summary": summary,
            "weights": weights,
            "legend": grade_legend(),
            "generated_date": date.today().isoformat(),
        })

    def generate_dgpa_pdf(self, student, summary: DegreeSummary) -> bytes:
        """DGPA report PDF"""
        logger.info("Rendering DGPA report for student %s", student.id)
        return self._html_to_pdf(self.render_dgpa_html(student, summary))
