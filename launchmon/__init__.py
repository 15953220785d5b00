"""Golf launch monitor: IR-triggered Doppler radar ball-speed measurement."""

__version__ = "0.1.0"
__all__ = ["app", "camera", "hardware", "logger", "radar", "trigger"]