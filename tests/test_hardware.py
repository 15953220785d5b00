import pytest

from launchmon.hardware import (
    GpioInput,
    HardwareError,
    Mcp3008,
    build_request,
    decode_response,
)


def test_build_request_channel_zero():
    assert build_request(0) == b"\x01\x80\x00"


@pytest.mark.parametrize("channel", range(8))
def test_build_request_encodes_channel(channel):
    request = build_request(channel)
    assert len(request) == 3
    assert request[0] == 0x01
    assert request[2] == 0x00
    assert request[1] & 0x80
    assert (request[1] >> 4) & 0x07 == channel


@pytest.mark.parametrize("channel", [-1, 8, 100])
def test_build_request_rejects_bad_channel(channel):
    with pytest.raises(ValueError):
        build_request(channel)


def test_decode_response_full_scale():
    assert decode_response(bytes([0x00, 0x03, 0xFF])) == 1023


def test_decode_response_ignores_unused_bits():
    assert decode_response(bytes([0xFF, 0xFC, 0x00])) == 0


def test_decode_response_round_trip_all_values():
    for value in range(1024):
        response = bytes([0xAA, 0xFC | (value >> 8), value & 0xFF])
        assert decode_response(response) == value


@pytest.mark.parametrize("response", [b"", b"\x00\x00", b"\x00\x00\x00\x00"])
def test_decode_response_rejects_wrong_length(response):
    with pytest.raises(ValueError):
        decode_response(response)


def test_mcp3008_read_when_closed():
    adc = Mcp3008("/nonexistent/spidev")
    with pytest.raises(HardwareError):
        adc.read(0)


def test_mcp3008_read_bad_channel_is_value_error():
    adc = Mcp3008("/nonexistent/spidev")
    with pytest.raises(ValueError):
        adc.read(9)


def test_mcp3008_open_missing_device(tmp_path):
    adc = Mcp3008(str(tmp_path / "missing"))
    with pytest.raises(HardwareError):
        adc.open()


def test_mcp3008_open_non_spi_file(tmp_path):
    path = tmp_path / "plain"
    path.write_bytes(b"")
    adc = Mcp3008(str(path))
    with pytest.raises(HardwareError):
        adc.open()
    with pytest.raises(HardwareError):
        adc.read(0)


def test_mcp3008_context_manager_propagates_failure(tmp_path):
    with pytest.raises(HardwareError):
        with Mcp3008(str(tmp_path / "missing")):
            pass


def test_gpio_rejects_negative_pin():
    with pytest.raises(ValueError):
        GpioInput(-1)


def test_gpio_read_when_closed():
    line = GpioInput(17, chip="/nonexistent/gpiochip")
    with pytest.raises(HardwareError):
        line.read()


def test_gpio_open_missing_chip(tmp_path):
    line = GpioInput(17, chip=str(tmp_path / "missing"))
    with pytest.raises(HardwareError):
        line.open()


def test_gpio_open_non_gpio_file(tmp_path):
    path = tmp_path / "plain"
    path.write_bytes(b"")
    line = GpioInput(17, chip=str(path))
    with pytest.raises(HardwareError):
        line.open()
    with pytest.raises(HardwareError):
        line.read()