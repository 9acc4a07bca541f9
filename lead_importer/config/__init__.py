"""Configuration loading for the lead importer CLI."""
