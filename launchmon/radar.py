"""Doppler radar speed measurement from HB100 samples read through an ADC."""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

import numpy as np

from launchmon import logger
from launchmon.hardware import HardwareError, Mcp3008

RADAR_ADC_CHANNEL = 0
DEFAULT_SAMPLE_COUNT = 1024
DEFAULT_SAMPLE_FREQ = 10000

RADAR_FREQ = 10.525e9
SPEED_OF_LIGHT = 299792458.0
MPS_TO_MPH = 2.23694

DEBUG_SPEED_MPH = 85.0
_PEAK_COUNT = 5


class Adc(Protocol):
    def open(self) -> None: ...

    def close(self) -> None: ...

    def read(self, channel: int) -> int: ...


@dataclass(frozen=True)
class RadarMeasurement:
    """One speed reading; ``timestamp`` is a ``time.monotonic()`` value."""

    speed_mps: float
    speed_mph: float
    signal_strength: float
    timestamp: float


def frequency_to_speed(frequency: float) -> float:
    """Convert a Doppler shift in Hz to a speed in m/s."""
    return (SPEED_OF_LIGHT * frequency) / (2.0 * RADAR_FREQ)


def speed_to_frequency(speed_mps: float) -> float:
    """Convert a speed in m/s to the Doppler shift it produces in Hz."""
    return (2.0 * speed_mps * RADAR_FREQ) / SPEED_OF_LIGHT


def synthetic_samples(
    speed_mph: float,
    num_samples: int = DEFAULT_SAMPLE_COUNT,
    sample_freq: int = DEFAULT_SAMPLE_FREQ,
    rng: np.random.Generator | None = None,
) -> list[int]:
    """Return noisy ADC samples of the Doppler tone an object at ``speed_mph`` produces."""
    if rng is None:
        rng = np.random.default_rng()
    doppler = speed_to_frequency(speed_mph / MPS_TO_MPH)
    t = np.arange(num_samples) / sample_freq
    values = 512 + 400 * np.sin(2 * math.pi * doppler * t)
    values = values + rng.integers(-20, 20, size=num_samples)
    return np.clip(values, 0, 1023).astype(int).tolist()


class RadarManager:
    """Reads radar samples and turns the dominant Doppler tone into a speed."""

    def __init__(self, adc: Adc | None = None) -> None:
        self._adc: Adc = adc if adc is not None else Mcp3008()
        self.adc_channel = RADAR_ADC_CHANNEL
        self._callback: Callable[[RadarMeasurement], None] | None = None
        self._lock = threading.Lock()
        self._ready = False
        self._busy = threading.Event()

    def init(self, adc_channel: int = RADAR_ADC_CHANNEL) -> None:
        """Open the ADC and prepare for spectral analysis."""
        self.adc_channel = adc_channel
        logger.debug(f"Initializing Radar on ADC channel {adc_channel}")
        try:
            self._adc.open()
        except HardwareError as exc:
            logger.error(f"Failed to initialize SPI: {exc}")
            return
        with self._lock:
            self._ready = True
        logger.info(f"Radar initialized on ADC channel {adc_channel}")

    def cleanup(self) -> None:
        """Wait for a running measurement, then release the ADC."""
        while self._busy.is_set():
            time.sleep(0.01)
        with self._lock:
            self._ready = False
        self._adc.close()
        logger.info("Radar resources cleaned up")

    def set_measurement_callback(
        self, callback: Callable[[RadarMeasurement], None] | None
    ) -> None:
        self._callback = callback

    def start_measurement(self) -> threading.Thread:
        """Measure in a background thread; the callback receives the result."""
        logger.debug("Starting radar measurement")
        self._busy.set()
        thread = threading.Thread(target=self._measure, daemon=True)
        thread.start()
        return thread

    def _measure(self) -> None:
        try:
            measurement = self.process_samples(self.read_samples())
            if self._callback is not None:
                self._callback(measurement)
        except Exception as exc:
            logger.error(f"Error in radar measurement: {exc}")
        finally:
            self._busy.clear()

    def start_debug_measurement(self) -> RadarMeasurement | None:
        """Measure a synthetic tone for a known speed and pass it to the callback."""
        logger.debug("Starting DEBUG radar measurement with synthetic data")
        try:
            doppler = speed_to_frequency(DEBUG_SPEED_MPH / MPS_TO_MPH)
            logger.debug(
                f"Debug setup: Speed={DEBUG_SPEED_MPH:.6f} mph, "
                f"Expected Doppler frequency={doppler:.6f} Hz"
            )
            samples = synthetic_samples(DEBUG_SPEED_MPH)
            logger.debug(
                f"Created synthetic samples with {len(samples)} points "
                f"at {DEFAULT_SAMPLE_FREQ} Hz"
            )
            measurement = self.process_samples(samples, DEFAULT_SAMPLE_FREQ)
            logger.debug(
                f"Measurement processed: {measurement.speed_mph:.6f} mph "
                f"(expected: {DEBUG_SPEED_MPH:.6f} mph)"
            )
            if self._callback is not None:
                self._callback(measurement)
                logger.debug("Callback executed")
            else:
                logger.debug("No callback registered")
            return measurement
        except Exception as exc:
            logger.error(f"Error in debug radar measurement: {exc}")
            return None

    def read_samples(
        self,
        num_samples: int = DEFAULT_SAMPLE_COUNT,
        sample_freq: int = DEFAULT_SAMPLE_FREQ,
    ) -> list[int]:
        """Read ``num_samples`` ADC values paced at ``sample_freq`` Hz."""
        logger.debug(f"Reading {num_samples} samples at {sample_freq} Hz")
        delay = (1_000_000 // sample_freq) / 1_000_000
        samples = []
        for _ in range(num_samples):
            samples.append(self._adc.read(self.adc_channel))
            time.sleep(delay)
        return samples

    def process_samples(
        self, samples: Sequence[int], sample_freq: int = DEFAULT_SAMPLE_FREQ
    ) -> RadarMeasurement:
        """Find the dominant Doppler frequency in ``samples`` and convert it to speed."""
        count = len(samples)
        logger.debug(f"Processing {count} samples with diagnostics")
        timestamp = time.monotonic()
        silent = RadarMeasurement(0.0, 0.0, 0.0, timestamp)

        if count != DEFAULT_SAMPLE_COUNT:
            logger.debug(
                f"Sample count mismatch, expected {DEFAULT_SAMPLE_COUNT} but got {count}"
            )
            return silent

        with self._lock:
            if not self._ready:
                logger.error("FFT resources not available")
                return silent

            data = np.asarray(samples, dtype=float)
            mean = float(data.mean())
            logger.debug(f"DC offset (mean): {mean:.6f}")
            windowed = (data - mean) * np.hamming(count)
            magnitudes = np.abs(np.fft.rfft(windowed))

        logger.debug("Significant frequency components:")
        resolution = sample_freq / count
        logger.debug(f"Frequency resolution: {resolution:.6f} Hz per bin")

        band = magnitudes[1 : count // 2]
        max_magnitude = float(band.max()) if band.size else 0.0
        max_index = int(np.argmax(band)) + 1 if max_magnitude > 0.0 else 0

        for offset in np.argsort(-band, kind="stable")[:_PEAK_COUNT]:
            index = int(offset) + 1
            freq = index * resolution
            speed = frequency_to_speed(freq) * MPS_TO_MPH
            logger.debug(
                f"Peak at bin {index}: {freq:.6f} Hz, magnitude {band[offset]:.6f}, "
                f"equals {speed:.6f} mph"
            )

        dominant = max_index * resolution
        logger.debug(f"Dominant frequency: {dominant:.6f} Hz at bin {max_index}")
        speed_mps = frequency_to_speed(dominant)
        speed_mph = speed_mps * MPS_TO_MPH
        logger.debug(
            f"Speed calculation: {dominant:.6f} Hz \u2192 {speed_mps:.6f} m/s "
            f"\u2192 {speed_mph:.6f} mph"
        )
        return RadarMeasurement(speed_mps, speed_mph, max_magnitude, timestamp)