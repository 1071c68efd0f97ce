"""
Interrupt Waiter Tests

Edges are delivered by MockGPIO on their own threads, like the real
backends do.
"""

import pytest

from hardware.controllers.interrupt_waiter import InterruptWaiter, parse_edge
from hardware.interfaces.gpio_interface import EdgeDetection, PinState

pytestmark = pytest.mark.unit


class TestParseEdge:

    @pytest.mark.parametrize("token,edge", [
        ("rising", EdgeDetection.RISING),
        ("FALLING", EdgeDetection.FALLING),
        ("Both", EdgeDetection.BOTH),
    ])
    def test_known_tokens(self, token, edge):
        assert parse_edge(token) == edge

    def test_unknown_token(self):
        assert parse_edge("none") is None


class TestInterruptWaiter:

    def test_single_edge(self, mock_gpio, callback_tracker):
        waiter = InterruptWaiter(mock_gpio, report=callback_tracker.track)
        waiter.arm([17], EdgeDetection.RISING)

        mock_gpio.simulate_edge(17, PinState.HIGH)

        assert waiter.wait(1, timeout=2.0)
        assert callback_tracker.get_last_call()['args'] == ("wfi: Interrupt on pin 17; nInts=1",)

    def test_wrong_edge_is_not_counted(self, mock_gpio, callback_tracker):
        waiter = InterruptWaiter(mock_gpio, report=callback_tracker.track)
        waiter.arm([17], EdgeDetection.FALLING)

        mock_gpio.simulate_edge(17, PinState.HIGH)

        assert not waiter.wait(1, timeout=0.2)
        assert waiter.count == 0

    def test_waits_for_every_pin(self, mock_gpio, callback_tracker):
        waiter = InterruptWaiter(mock_gpio, report=callback_tracker.track)
        waiter.arm([4, 17, 27], EdgeDetection.BOTH)

        mock_gpio.simulate_edge(27, PinState.HIGH)
        mock_gpio.simulate_edge(4, PinState.HIGH)
        assert not waiter.wait(3, timeout=0.3)

        mock_gpio.simulate_edge(17, PinState.HIGH)
        assert waiter.wait(3, timeout=2.0)
        assert waiter.count == 3

    def test_disarm_removes_callbacks(self, mock_gpio):
        waiter = InterruptWaiter(mock_gpio, report=lambda line: None)
        waiter.arm([4, 17], EdgeDetection.BOTH)

        waiter.disarm()

        assert not mock_gpio.get_pin_info(4)['has_callback']
        assert not mock_gpio.get_pin_info(17)['has_callback']
