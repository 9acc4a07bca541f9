"""Logging setup and structured error log for the lead importer."""
