"""Allow running the updater with ``python -m obs_translation_updater``."""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
