"""
Lanechart Launcher.
Entry point for PyInstaller to ensure correct package resolution.
"""

import os
import sys

sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from lanechart.app.entry import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
