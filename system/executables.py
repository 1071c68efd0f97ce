"""
Executable Lookup

System tools are looked for in a fixed list of directories only; $PATH is
never consulted.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from config.settings import EXECUTABLE_SEARCH_PATH
from core.errors import HostError

logger = logging.getLogger(__name__)


def find_executable(
    name: str,
    search_path: Optional[Iterable[str]] = None,
) -> Path:
    """
    Return the first existing <dir>/<name> along the search path.

    Args:
        name: Program name, e.g. "modprobe"
        search_path: Directories to try, defaults to EXECUTABLE_SEARCH_PATH

    Raises:
        HostError: If no directory holds the program
    """
    directories = EXECUTABLE_SEARCH_PATH if search_path is None else tuple(search_path)
    for directory in directories:
        candidate = Path(directory) / name
        if candidate.exists():
            logger.debug(f"Found {name} at {candidate}")
            return candidate

    raise HostError(f"Unable to find {name} command in {', '.join(directories)}")
