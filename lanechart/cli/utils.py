"""
CLI Utilities Module.

Common utility functions for CLI tools.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def validate_items_path(items_path: str) -> bool:
    """
    Validate that an item file exists.

    Args:
        items_path: Path to the JSON item file.

    Returns:
        True if valid, False otherwise.
    """
    path = Path(items_path)

    if not path.is_file():
        logger.error(f"Item file not found: {items_path}")
        return False

    return True
