"""
Test Configuration and Shared Fixtures

Fixtures used across the test packages. Package specific fixtures live in
each package's own conftest.py.

To use pytest:
    pip install -e ".[test]"
    pytest
"""

import pytest

from extensions.interfaces.extension_interface import ExtensionNode
from hardware.implementations.mock_gpio import MockGPIO
from hardware.interfaces.gpio_interface import PinMode, PinState, PullMode


# =============================================================================
# GPIO FIXTURES
# =============================================================================

@pytest.fixture
def mock_gpio():
    """
    Provide a fresh MockGPIO instance for each test.

    Usage in test:
        def test_something(mock_gpio):
            mock_gpio.write(17, PinState.HIGH)
    """
    gpio = MockGPIO()
    yield gpio
    gpio.cleanup()


# =============================================================================
# EXTENSION FIXTURES
# =============================================================================

class RecordingNode(ExtensionNode):
    """Extension node that keeps its pins in memory"""

    name = "recorder"
    pin_count = 8

    def __init__(self, pin_base: int):
        super().__init__(pin_base)
        self.levels = {}
        self.modes = {}
        self.pulls = {}
        self.analog = {}

    @classmethod
    def from_params(cls, pin_base, params):
        return cls(pin_base)

    def pin_mode(self, offset: int, mode: PinMode) -> None:
        self.modes[offset] = mode

    def set_pull(self, offset: int, pull_mode: PullMode) -> None:
        self.pulls[offset] = pull_mode

    def digital_read(self, offset: int) -> PinState:
        return self.levels.get(offset, PinState.LOW)

    def digital_write(self, offset: int, state: PinState) -> None:
        self.levels[offset] = state

    def analog_read(self, offset: int) -> int:
        return 100 + offset

    def analog_write(self, offset: int, value: int) -> None:
        self.analog[offset] = value


@pytest.fixture
def recording_node_class():
    """The RecordingNode class, for registries and direct construction"""
    return RecordingNode


# =============================================================================
# HELPER FIXTURES
# =============================================================================

@pytest.fixture
def callback_tracker():
    """
    Provide a helper for tracking callback calls.

    Usage:
        def test_callback(callback_tracker):
            waiter = InterruptWaiter(gpio, report=callback_tracker.track)
            # ... trigger callback ...
            assert callback_tracker.get_call_count() == 1
    """
    class CallbackTracker:
        def __init__(self):
            self.calls = []

        def track(self, *args, **kwargs):
            """Record a callback invocation"""
            self.calls.append({'args': args, 'kwargs': kwargs})

        def was_called(self) -> bool:
            return len(self.calls) > 0

        def get_call_count(self) -> int:
            return len(self.calls)

        def get_last_call(self):
            return self.calls[-1] if self.calls else None

    return CallbackTracker()


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """
    Configure pytest with custom markers.

        pytest -m unit          # Only unit tests
        pytest -m integration   # Only integration tests
    """
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (may be slower)")
