"""
Launch the platform's default browser for a URL without waiting on it.
"""

import logging
import subprocess
import sys
from typing import List

logger = logging.getLogger(__name__)


def open_command(url: str, platform: str = sys.platform) -> List[str]:
    if platform == "darwin":
        return ["open", url]
    if platform.startswith("win"):
        return ["cmd", "/C", "start", "", url]
    return ["xdg-open", url]


def open_url(url: str) -> bool:
    """Fire and forget; launch failures are logged, never raised"""
    if not url.strip():
        return False
    try:
        subprocess.Popen(
            open_command(url),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except (OSError, ValueError) as e:
        logger.warning("Failed to open %s: %s", url, e)
        return False
    return True
