"""
Reports Module — Printable Assessment Output

Public API:
- generate_pdf_report: Render a ResultsView as PDF bytes
- generate_filename: Smart filename pattern
"""

from .generator import generate_filename, generate_pdf_report

__all__ = [
    "generate_pdf_report",
    "generate_filename",
]
