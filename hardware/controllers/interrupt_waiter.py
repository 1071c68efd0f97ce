"""
Interrupt Waiter

Blocks until a number of edges have been seen on one or more pins.
Used by `gpio wfi` (one pin, one edge) and `gpio mwfi` (one edge per pin
in a comma separated list).

The backend delivers edges on its own thread; each one bumps a counter
under a condition variable and wakes the waiting command. Edges are
counted, not matched to pins, so two edges on one pin of an mwfi list
count twice.
"""

import logging
import threading
from typing import Callable, Optional

from hardware.interfaces.gpio_interface import EdgeDetection, GPIOInterface

EDGE_NAMES = {
    "rising": EdgeDetection.RISING,
    "falling": EdgeDetection.FALLING,
    "both": EdgeDetection.BOTH,
}


def parse_edge(text: str) -> Optional[EdgeDetection]:
    """Edge for a `wfi` mode token (case-insensitive), None if unknown"""
    return EDGE_NAMES.get(text.lower())


class InterruptWaiter:
    """
    Count edges on a set of BCM pins.

    Usage:
        waiter = InterruptWaiter(gpio)
        waiter.arm([4, 17, 27], EdgeDetection.BOTH)
        waiter.wait(3)
        waiter.disarm()
    """

    def __init__(
        self,
        gpio: GPIOInterface,
        report: Callable[[str], None] = print,
    ):
        """
        Initialize interrupt waiter.

        Args:
            gpio: Backend delivering edge callbacks
            report: Where the per-interrupt line goes (stdout by default)
        """
        self.logger = logging.getLogger(__name__)
        self.gpio = gpio
        self._report = report
        self._condition = threading.Condition()
        self._count = 0
        self._pins: list[int] = []

    @property
    def count(self) -> int:
        with self._condition:
            return self._count

    def arm(self, pins: list[int], edge: EdgeDetection) -> None:
        """Register the edge callback on every pin"""
        for pin in pins:
            self.gpio.add_event_callback(pin, edge, self._on_interrupt)
            self._pins.append(pin)
            self.logger.debug(f"Waiting for {edge.value} edge on GPIO {pin}")

    def _on_interrupt(self, pin: int) -> None:
        with self._condition:
            self._count += 1
            count = self._count
            self._condition.notify_all()
        self._report(f"wfi: Interrupt on pin {pin}; nInts={count}")

    def wait(self, count: int, timeout: Optional[float] = None) -> bool:
        """
        Block until at least count edges have arrived.

        Args:
            count: Number of edges to wait for
            timeout: Seconds to give up after; None waits forever

        Returns:
            True if the count was reached, False on timeout
        """
        with self._condition:
            return self._condition.wait_for(lambda: self._count >= count, timeout)

    def disarm(self) -> None:
        for pin in self._pins:
            self.gpio.remove_event_callback(pin)
        self._pins.clear()
