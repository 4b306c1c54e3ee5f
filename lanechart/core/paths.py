"""
Path Utility Module.
Handles resource path resolution for both development and bundled environments.
"""

import os
import sys

# Directory containing the lanechart package (repository root in development)
_PROJECT_ROOT = os.path.dirname(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
)


def get_resource_path(relative_path: str) -> str:
    """
    Resolves the absolute path to a resource file.
    Works for both development (venv) and PyInstaller bundled application.

    Args:
        relative_path: The relative path to the resource from project root.

    Returns:
        str: The absolute path to the resource.
    """
    # PyInstaller creates a temp folder and stores path in _MEIPASS
    base_path = getattr(sys, "_MEIPASS", _PROJECT_ROOT)
    return os.path.join(base_path, relative_path)

