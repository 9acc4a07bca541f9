"""Workbook reading for the lead import pipeline."""

from .reader import ParseError, SheetData, parse_workbook

__all__ = ["ParseError", "SheetData", "parse_workbook"]
