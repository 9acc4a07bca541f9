"""Spreadsheet -> CRM lead import pipeline.

Parses a workbook export, maps its columns onto the lead schema, normalizes
and validates each row, and deduplicates the result on the phone number.
"""

__version__ = "0.1.0"
