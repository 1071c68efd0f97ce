"""
Board Identification

Works out which Raspberry Pi we are running on from the revision code the
firmware publishes in /proc/cpuinfo.

Two encodings exist:
- old style (up to 0x0015): a plain index into a table of early boards
- new style (bit 23 set): packed bit fields

    NOQuuuWuFMMMCCCCPPPPTTTTTTTTRRRR
    R revision, T type, P processor, C maker, M memory,
    F new-style flag, W warranty void
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from config import settings
from core.errors import DomainError, HostError

logger = logging.getLogger(__name__)

MODEL_NAMES = (
    "Model A", "Model B", "Model A+", "Model B+", "Pi 2", "Alpha", "CM",
    "Unknown07", "Pi 3", "Pi Zero", "CM3", "Unknown11", "Pi Zero-W",
    "Pi 3B+", "Pi 3A+", "Unknown15", "CM3+", "Pi 4B", "Pi Zero2-W",
    "Pi 400", "CM4", "CM4S", "Unknown22", "Pi 5", "CM5", "Pi 500",
    "CM5 Lite",
)

PI_MODEL_A = 0
PI_MODEL_B = 1
PI_MODEL_AP = 2
PI_MODEL_BP = 3
PI_MODEL_2 = 4
PI_MODEL_CM = 6

PROCESSOR_NAMES = ("BCM2835", "BCM2836", "BCM2837", "BCM2711", "BCM2712")

MEMORY_SIZES = ("256M", "512M", "1G", "2G", "4G", "8G", "16G")

MAKER_NAMES = ("Sony", "Egoman", "Embest", "Sony Japan", "Embest", "Stadium")

# Old-style revision -> (model, revision name, memory, maker)
OLD_STYLE_REVISIONS = {
    0x0002: (PI_MODEL_B, "1", "256M", "Egoman"),
    0x0003: (PI_MODEL_B, "1.1", "256M", "Egoman"),
    0x0004: (PI_MODEL_B, "2", "256M", "Sony"),
    0x0005: (PI_MODEL_B, "2", "256M", "Qisda"),
    0x0006: (PI_MODEL_B, "2", "256M", "Egoman"),
    0x0007: (PI_MODEL_A, "2", "256M", "Egoman"),
    0x0008: (PI_MODEL_A, "2", "256M", "Sony"),
    0x0009: (PI_MODEL_A, "2", "256M", "Qisda"),
    0x000D: (PI_MODEL_B, "2", "512M", "Egoman"),
    0x000E: (PI_MODEL_B, "2", "512M", "Sony"),
    0x000F: (PI_MODEL_B, "2", "512M", "Egoman"),
    0x0010: (PI_MODEL_BP, "1.2", "512M", "Sony"),
    0x0011: (PI_MODEL_CM, "1.2", "512M", "Sony"),
    0x0012: (PI_MODEL_AP, "1.2", "256M", "Sony"),
    0x0013: (PI_MODEL_BP, "1.2", "512M", "Embest"),
    0x0014: (PI_MODEL_CM, "1.2", "512M", "Embest"),
    0x0015: (PI_MODEL_AP, "1.1", "256M", "Embest"),
}

# The two original Model B revisions have the layout-1 header
LAYOUT_1_REVISIONS = (0x0002, 0x0003)

NEW_STYLE_FLAG = 1 << 23
NEW_STYLE_WARRANTY_BIT = 1 << 25

_REVISION_RE = re.compile(r"^Revision\s*:\s*([0-9a-fA-F]+)\s*$", re.MULTILINE)


class BoardError(DomainError):
    """The board could not be identified."""


@dataclass(frozen=True)
class BoardInfo:
    """What the revision code says about this board"""

    revision_code: int
    model: int
    model_name: str
    processor: str
    revision: str
    memory: str
    maker: str
    warranty_void: bool
    layout: int

    @property
    def supports_usb_power_control(self) -> bool:
        """Only the B+ and Pi 2 have a software-switchable USB current limit"""
        return self.model in (PI_MODEL_BP, PI_MODEL_2)


def _lookup(table: tuple, index: int, what: str) -> str:
    if 0 <= index < len(table):
        return table[index]
    return f"Unknown {what} {index}"


def decode_revision(code: int) -> BoardInfo:
    """
    Decode a revision code into a BoardInfo.

    Args:
        code: Revision code as read from /proc/cpuinfo

    Returns:
        Decoded board information

    Raises:
        BoardError: For an old-style code not in the table
    """
    if code & NEW_STYLE_FLAG:
        model = (code >> 4) & 0xFF
        return BoardInfo(
            revision_code=code,
            model=model,
            model_name=_lookup(MODEL_NAMES, model, "model"),
            processor=_lookup(PROCESSOR_NAMES, (code >> 12) & 0xF, "processor"),
            revision=f"1.{code & 0xF}",
            memory=_lookup(MEMORY_SIZES, (code >> 20) & 0x7, "memory"),
            maker=_lookup(MAKER_NAMES, (code >> 16) & 0xF, "maker"),
            warranty_void=bool(code & NEW_STYLE_WARRANTY_BIT),
            layout=2,
        )

    # Old style: any of the top byte set means the board was over-volted
    warranty_void = bool(code & 0xFF000000)
    short_code = code & 0xFFFF
    if short_code not in OLD_STYLE_REVISIONS:
        raise BoardError(f"Unknown board revision code 0x{code:08X}")

    model, revision, memory, maker = OLD_STYLE_REVISIONS[short_code]
    return BoardInfo(
        revision_code=code,
        model=model,
        model_name=MODEL_NAMES[model],
        processor=PROCESSOR_NAMES[0],
        revision=revision,
        memory=memory,
        maker=maker,
        warranty_void=warranty_void,
        layout=1 if short_code in LAYOUT_1_REVISIONS else 2,
    )


def identify_board(cpuinfo_path: Optional[Path] = None) -> BoardInfo:
    """
    Read and decode the board revision.

    Args:
        cpuinfo_path: Alternative to /proc/cpuinfo (tests, fake roots)

    Raises:
        HostError: If the file can't be read
        BoardError: If it has no usable Revision line
    """
    path = cpuinfo_path or settings.CPUINFO_PATH
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise HostError.from_os_error(f"Unable to open {path}", e) from e

    match = _REVISION_RE.search(text)
    if match is None:
        raise BoardError(f"Unable to determine board revision from {path}")

    board = decode_revision(int(match.group(1), 16))
    logger.debug(
        f"Board revision 0x{board.revision_code:08X}: {board.model_name} "
        f"(layout {board.layout})"
    )
    return board


def detect_board(cpuinfo_path: Optional[Path] = None) -> Optional[BoardInfo]:
    """
    Like identify_board, but None when the board can't be identified.

    Non-Pi hosts (a remote pigpiod, development machines) end up here and
    are treated as having the 40-pin layout.
    """
    try:
        return identify_board(cpuinfo_path)
    except (HostError, BoardError) as e:
        logger.debug(f"Board not identified, assuming layout 2: {e}")
        return None
