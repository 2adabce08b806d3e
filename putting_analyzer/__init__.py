"""Putting analytics for recorded golf rounds, with scorecard OCR import."""

__version__ = "0.1.0"
