"""Output generation for weekly layouts (PDF, text, CSV)."""

from rosterview.output.debug_generator import DebugGenerator
from rosterview.output.exporter import RosterExporter
from rosterview.output.pdf_generator import PDFGenerator

__all__ = [
    "DebugGenerator",
    "PDFGenerator",
    "RosterExporter",
]
