"""Access to the MCP3008 ADC over Linux spidev and to a GPIO input line."""

from __future__ import annotations

import array
import fcntl
import os
import struct

_IOC_WRITE = 1
_IOC_READ = 2


def _ioc(direction: int, kind: int, number: int, size: int) -> int:
    return (direction << 30) | (size << 16) | (kind << 8) | number


_SPI_MAGIC = ord("k")
_SPI_TRANSFER_FORMAT = "=QQIIHBBBBBB"
_SPI_IOC_MESSAGE_1 = _ioc(_IOC_WRITE, _SPI_MAGIC, 0, struct.calcsize(_SPI_TRANSFER_FORMAT))
_SPI_IOC_WR_MODE = _ioc(_IOC_WRITE, _SPI_MAGIC, 1, 1)
_SPI_IOC_WR_BITS_PER_WORD = _ioc(_IOC_WRITE, _SPI_MAGIC, 3, 1)
_SPI_IOC_WR_MAX_SPEED_HZ = _ioc(_IOC_WRITE, _SPI_MAGIC, 4, 4)

_GPIO_MAGIC = 0xB4
_GPIOHANDLE_REQUEST_FORMAT = "=64I I 64s 32s I i"
_GPIOHANDLE_DATA_SIZE = 64
_GPIO_GET_LINEHANDLE = _ioc(
    _IOC_READ | _IOC_WRITE, _GPIO_MAGIC, 0x03, struct.calcsize(_GPIOHANDLE_REQUEST_FORMAT)
)
_GPIOHANDLE_GET_LINE_VALUES = _ioc(
    _IOC_READ | _IOC_WRITE, _GPIO_MAGIC, 0x08, _GPIOHANDLE_DATA_SIZE
)
_GPIOHANDLE_REQUEST_INPUT = 1

ADC_CHANNELS = 8


class HardwareError(OSError):
    """A device could not be opened, configured or read."""


def build_request(channel: int) -> bytes:
    """Return the three bytes that request a single-ended reading of ``channel``."""
    if not 0 <= channel < ADC_CHANNELS:
        raise ValueError(f"ADC channel must be 0-{ADC_CHANNELS - 1}, got {channel}")
    return bytes([0x01, 0x80 | (channel << 4), 0x00])


def decode_response(response: bytes) -> int:
    """Extract the 10-bit conversion result from a three-byte reply."""
    if len(response) != 3:
        raise ValueError(f"expected a 3-byte response, got {len(response)} bytes")
    return ((response[1] & 0x03) << 8) | response[2]


class Mcp3008:
    """MCP3008 analogue-to-digital converter on a spidev device."""

    def __init__(self, device: str = "/dev/spidev0.0", speed_hz: int = 3_906_250) -> None:
        self.device = device
        self.speed_hz = speed_hz
        self._fd: int | None = None

    def open(self) -> None:
        """Open the SPI device in mode 0, 8 bits per word, MSB first."""
        if self._fd is not None:
            return
        try:
            fd = os.open(self.device, os.O_RDWR)
        except OSError as exc:
            raise HardwareError(f"cannot open SPI device {self.device}: {exc}") from exc
        try:
            fcntl.ioctl(fd, _SPI_IOC_WR_MODE, struct.pack("=B", 0))
            fcntl.ioctl(fd, _SPI_IOC_WR_BITS_PER_WORD, struct.pack("=B", 8))
            fcntl.ioctl(fd, _SPI_IOC_WR_MAX_SPEED_HZ, struct.pack("=I", self.speed_hz))
        except OSError as exc:
            os.close(fd)
            raise HardwareError(f"cannot configure SPI device {self.device}: {exc}") from exc
        self._fd = fd

    def close(self) -> None:
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    def read(self, channel: int) -> int:
        """Perform one conversion on ``channel`` and return the 10-bit value."""
        request = build_request(channel)
        if self._fd is None:
            raise HardwareError("SPI device is not open")
        tx = array.array("B", request)
        rx = array.array("B", bytes(len(request)))
        transfer = struct.pack(
            _SPI_TRANSFER_FORMAT,
            tx.buffer_info()[0],
            rx.buffer_info()[0],
            len(request),
            self.speed_hz,
            0, 8, 0, 0, 0, 0, 0,
        )
        try:
            fcntl.ioctl(self._fd, _SPI_IOC_MESSAGE_1, transfer)
        except OSError as exc:
            raise HardwareError(f"SPI transfer failed: {exc}") from exc
        return decode_response(rx.tobytes())

    def __enter__(self) -> Mcp3008:
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class GpioInput:
    """A single GPIO line requested as an input through the GPIO character device."""

    def __init__(
        self,
        pin: int,
        chip: str = "/dev/gpiochip0",
        consumer: str = "launch_monitor",
    ) -> None:
        if pin < 0:
            raise ValueError(f"GPIO pin must be non-negative, got {pin}")
        self.pin = pin
        self.chip = chip
        self.consumer = consumer
        self._chip_fd: int | None = None
        self._line_fd: int | None = None

    def open(self) -> None:
        """Open the chip and request the line as an input."""
        if self._line_fd is not None:
            return
        try:
            chip_fd = os.open(self.chip, os.O_RDWR)
        except OSError as exc:
            raise HardwareError(f"Failed to open GPIO chip {self.chip}: {exc}") from exc
        offsets = [self.pin] + [0] * 63
        request = bytearray(
            struct.pack(
                _GPIOHANDLE_REQUEST_FORMAT,
                *offsets,
                _GPIOHANDLE_REQUEST_INPUT,
                bytes(64),
                self.consumer.encode()[:31],
                1,
                0,
            )
        )
        try:
            fcntl.ioctl(chip_fd, _GPIO_GET_LINEHANDLE, request, True)
        except OSError as exc:
            os.close(chip_fd)
            raise HardwareError(f"Failed to request GPIO line {self.pin} as input: {exc}") from exc
        self._line_fd = struct.unpack(_GPIOHANDLE_REQUEST_FORMAT, request)[-1]
        self._chip_fd = chip_fd

    def close(self) -> None:
        if self._line_fd is not None:
            os.close(self._line_fd)
            self._line_fd = None
        if self._chip_fd is not None:
            os.close(self._chip_fd)
            self._chip_fd = None

    def read(self) -> bool:
        """Return True when the line is high."""
        if self._line_fd is None:
            raise HardwareError("GPIO line not initialized")
        data = bytearray(_GPIOHANDLE_DATA_SIZE)
        try:
            fcntl.ioctl(self._line_fd, _GPIOHANDLE_GET_LINE_VALUES, data, True)
        except OSError as exc:
            raise HardwareError(f"Failed to get GPIO line value: {exc}") from exc
        return data[0] == 1

    def __enter__(self) -> GpioInput:
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()