"""Report renderers for checklist records."""

from .common import bool_to_text, report_filename
from .document_report import render_document
from .export import FORMATS, export_report
from .pdf_report import PdfReportLayout, render_pdf
from .text_report import render_text

__all__ = [
    "bool_to_text",
    "report_filename",
    "render_text",
    "render_document",
    "render_pdf",
    "PdfReportLayout",
    "export_report",
    "FORMATS",
]
