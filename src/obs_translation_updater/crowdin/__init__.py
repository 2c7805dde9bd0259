"""Crowdin API access and job polling."""
