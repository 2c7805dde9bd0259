"""Extraction, normalization and placement of translation files."""
