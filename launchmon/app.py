"""Command-line launch monitor: trigger, measure, display and summarise shots."""

from __future__ import annotations

import signal
import sys
import threading
import time
from dataclasses import dataclass
from typing import Sequence

from launchmon import logger
from launchmon.camera import init_camera
from launchmon.radar import RadarManager, RadarMeasurement
from launchmon.trigger import TriggerManager

DIVIDER = "-" * 40
POLL_INTERVAL = 0.01
DEBUG_RUNS = 3


@dataclass(frozen=True)
class ShotData:
    """A recorded shot; ``timestamp`` is a ``time.monotonic()`` value."""

    timestamp: float
    ball_speed_mph: float
    time_string: str


def timestamp_to_string(timestamp: float) -> str:
    """Render a monotonic timestamp as local wall-clock time HH:MM:SS."""
    wall = time.time() + (timestamp - time.monotonic())
    return time.strftime("%H:%M:%S", time.localtime(wall))


def format_shot(shot: ShotData, shot_number: int) -> str:
    """Return the display block for one shot."""
    return (
        f"\n{DIVIDER}\n"
        f"SHOT #{shot_number}\n"
        f"{DIVIDER}\n"
        f"Ball Speed: {shot.ball_speed_mph:.1f} mph\n"
        f"Time:       {shot.time_string}\n"
        f"{DIVIDER}\n\n"
    )


def _stats(shots: Sequence[ShotData]) -> tuple[int, float, float]:
    speeds = [shot.ball_speed_mph for shot in shots]
    return len(speeds), sum(speeds) / len(speeds), max(0.0, *speeds)


class Session:
    """History of the shots measured during one run."""

    def __init__(self) -> None:
        self._shots: list[ShotData] = []
        self._lock = threading.Lock()

    @property
    def shots(self) -> tuple[ShotData, ...]:
        with self._lock:
            return tuple(self._shots)

    def record(self, measurement: RadarMeasurement) -> tuple[int, ShotData]:
        """Store a measurement as a shot; return its 1-based number and the shot."""
        shot = ShotData(
            timestamp=measurement.timestamp,
            ball_speed_mph=measurement.speed_mph,
            time_string=timestamp_to_string(measurement.timestamp),
        )
        with self._lock:
            self._shots.append(shot)
            return len(self._shots), shot

    def summary(self) -> str | None:
        """Return the session summary text, or None when no shot was recorded."""
        shots = self.shots
        if not shots:
            return None
        count, average, maximum = _stats(shots)
        return (
            "\nSession Summary:\n"
            f"Total Shots: {count}\n"
            f"Average Speed: {average:.1f} mph\n"
            f"Max Speed:     {maximum:.1f} mph\n"
        )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the launch monitor; ``--debug`` uses synthetic radar data."""
    args = list(sys.argv[1:] if argv is None else argv)
    stop = threading.Event()

    def handle_signal(signum: int, _frame: object) -> None:
        logger.info(f"Received signal {signum}, shutting down gracefully...")
        stop.set()

    previous = {
        sig: signal.signal(sig, handle_signal) for sig in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        return _run(args, stop)
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def _run(args: list[str], stop: threading.Event) -> int:
    logger.init()
    logger.set_log_level(logger.LogLevel.DEBUG)
    logger.info("Starting DIY Launch Monitor...")

    debug_mode = bool(args) and args[0] == "--debug"
    if debug_mode:
        logger.info("Running in DEBUG mode without hardware")

    logger.info("Initializing components...")
    init_camera()
    radar = RadarManager()
    radar.init()

    trigger = None
    if not debug_mode:
        trigger = TriggerManager()
        trigger.init()

    session = Session()

    def on_measurement(measurement: RadarMeasurement) -> None:
        number, shot = session.record(measurement)
        print(format_shot(shot, number), end="", flush=True)
        logger.info(f"Shot #{number} - Ball speed: {shot.ball_speed_mph:.6f} mph")

    radar.set_measurement_callback(on_measurement)

    if trigger is not None:
        program_start: list[float] = []

        def on_trigger(timestamp: float) -> None:
            if not program_start:
                program_start.append(time.monotonic())
            millis = int((timestamp - program_start[0]) * 1000)
            logger.info(f"Ball detected at {millis} ms")
            radar.start_measurement()

        trigger.set_trigger_callback(on_trigger)
        logger.info("Components initialized.")
        while not stop.is_set():
            trigger.update()
            stop.wait(POLL_INTERVAL)
    else:
        logger.info("Running debug measurements...")
        for run in range(1, DEBUG_RUNS + 1):
            stop.wait(0.5)
            logger.info(f"Debug measurement {run}")
            radar.start_debug_measurement()
            stop.wait(1.0)
        stop.set()

    summary = session.summary()
    if summary is not None:
        print(summary, end="", flush=True)
        count, average, maximum = _stats(session.shots)
        logger.info(
            f"Session complete - {count} shots, avg: {average:.6f} mph, "
            f"max: {maximum:.6f} mph"
        )
    else:
        logger.debug("No shots recorded")

    logger.info("Cleaning up resources...")
    if trigger is not None:
        trigger.cleanup()
    radar.cleanup()
    logger.info("Shutdown complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())