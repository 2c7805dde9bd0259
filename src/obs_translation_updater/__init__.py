"""
OBS Translation Updater - syncs Crowdin translations into the OBS Studio repository.
"""

from .main import main

__all__ = ["main"]
