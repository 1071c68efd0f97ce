"""
Command Context

Everything a hardware command handler needs, decided once at startup and
passed explicitly to the handler.
"""

from dataclasses import dataclass
from typing import Optional

from hardware.board import BoardInfo
from hardware.constants import NumberingScheme
from hardware.controllers.pin_controller import PinController


@dataclass(frozen=True)
class CommandContext:
    """
    Attributes:
        scheme: Numbering scheme chosen by -b/-p/-w/-z
        pins: Pin controller bound to the backend and loaded extensions
        board: Identified board, None on hosts that aren't a known Pi
    """

    scheme: NumberingScheme
    pins: PinController
    board: Optional[BoardInfo] = None

    @property
    def layout(self) -> int:
        return self.board.layout if self.board is not None else 2
