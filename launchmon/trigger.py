"""State machine that turns an IR break-beam sensor into debounced trigger events."""

from __future__ import annotations

import enum
import time
from typing import Callable, Protocol

from launchmon import logger
from launchmon.hardware import GpioInput, HardwareError

IR_DIGITAL_PIN = 17
COOLDOWN_PERIOD = 0.5


class DigitalInput(Protocol):
    def open(self) -> None: ...

    def close(self) -> None: ...

    def read(self) -> bool: ...


class TriggerState(enum.Enum):
    """Phase of the trigger state machine."""

    IDLE = 0
    TRIGGERED = 1
    COOLDOWN = 2


class TriggerManager:
    """Polls a digital sensor and fires a callback once per detection.

    Times are seconds from ``clock`` (``time.monotonic`` by default).
    """

    def __init__(
        self,
        input_factory: Callable[[int], DigitalInput] = GpioInput,
        cooldown: float = COOLDOWN_PERIOD,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._input_factory = input_factory
        self.cooldown = cooldown
        self._clock = clock
        self.digital_pin = IR_DIGITAL_PIN
        self._line: DigitalInput | None = None
        self._state = TriggerState.IDLE
        self.last_trigger_time = clock()
        self._callback: Callable[[float], None] | None = None

    @property
    def state(self) -> TriggerState:
        return self._state

    def init(self, digital_pin: int = IR_DIGITAL_PIN) -> None:
        """Open the sensor input; failures are logged and leave it closed."""
        self.digital_pin = digital_pin
        logger.debug(f"Initializing IR Trigger on GPIO pin {digital_pin}")
        try:
            line = self._input_factory(digital_pin)
            line.open()
        except (HardwareError, ValueError) as exc:
            logger.error(f"Failed to initialize IR Trigger: {exc}")
            self.cleanup()
            return
        self._line = line
        logger.info(f"IR Trigger initialized on GPIO pin {digital_pin}")

    def cleanup(self) -> None:
        """Release the sensor input."""
        if self._line is not None:
            self._line.close()
            self._line = None
        logger.info("IR Trigger resources cleaned up")

    def set_trigger_callback(self, callback: Callable[[float], None] | None) -> None:
        self._callback = callback

    def update(self) -> None:
        """Advance the state machine; call this regularly from the main loop."""
        now = self._clock()
        if self._state is TriggerState.IDLE:
            if self.read_digital_pin():
                self._fire(now)
                logger.debug("IR Trigger activated")
                self._notify()
        elif self._state is TriggerState.TRIGGERED:
            self._state = TriggerState.COOLDOWN
        elif now - self.last_trigger_time >= self.cooldown:
            self._state = TriggerState.IDLE
            logger.debug("IR Trigger cooldown complete")

    def simulate_trigger(self) -> None:
        """Fire a trigger event without reading the sensor."""
        self._fire(self._clock())
        logger.debug("IR Trigger manually simulated")
        self._notify()

    def read_digital_pin(self) -> bool:
        """Return True when the sensor reports a detection; errors read as False."""
        if self._line is None:
            logger.error("Cannot read GPIO: line not initialized")
            return False
        try:
            return bool(self._line.read())
        except HardwareError as exc:
            logger.error(f"Failed to read GPIO: {exc}")
            return False

    def _fire(self, now: float) -> None:
        self._state = TriggerState.TRIGGERED
        self.last_trigger_time = now

    def _notify(self) -> None:
        if self._callback is not None:
            self._callback(self.last_trigger_time)