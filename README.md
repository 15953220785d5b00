# launchmon

A small launch monitor for golf. An infrared break-beam sensor on a GPIO line
notices the ball leaving the tee. That starts a reading from an HB100 Doppler
radar (10.525 GHz), sampled through an MCP3008 ADC. The samples have their mean
removed and a Hamming window applied. The ball speed then comes from the
strongest bin of their FFT.

The hardware access goes through Linux `spidev` (`/dev/spidev0.0`) and the GPIO
character device (`/dev/gpiochip0`). It therefore needs Linux. The `--debug`
mode and the library functions below need no hardware.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running

On a Raspberry Pi with the sensor on GPIO 17 and the radar on ADC channel 0:

```
launchmon
```

The program polls the sensor every 10 ms. Once the sensor fires, it ignores it
for a 500 ms cooldown. Each detection reads 1024 samples at 10 kHz in a
background thread. Each measured shot prints a block like this:

```
----------------------------------------
SHOT #1
----------------------------------------
Ball Speed: 84.3 mph
Time:       14:02:33
----------------------------------------
```

Stop with Ctrl+C (SIGINT) or SIGTERM. If any shots were recorded, the program
then prints a session summary with the total number of shots, the average speed
and the maximum speed.

If a device cannot be opened, the program logs an error and keeps running. A
sensor that failed to open never fires. A radar that failed to open reports
0.0 mph.

Without hardware, pass `--debug` as the first argument:

```
launchmon --debug
```

This skips the sensor. It runs three measurements of a synthetic, noisy tone
for an 85 mph shot, prints them and exits.

Log lines go to standard output at DEBUG level. Each is coloured and has a
timestamp.

## Using the library

`RadarManager` takes any ADC object with `open()`, `close()` and `read(channel)`.
Without one, it uses `Mcp3008`. Spectral analysis works only after `init()` has
opened the ADC:

```python
from launchmon import logger
from launchmon.logger import LogLevel
from launchmon.radar import RadarManager, synthetic_samples


class IdleAdc:
    def open(self):
        pass

    def close(self):
        pass

    def read(self, channel):
        return 512


logger.set_log_level(LogLevel.INFO)

radar = RadarManager(adc=IdleAdc())
radar.init()
measurement = radar.process_samples(synthetic_samples(75.0))
print(measurement.speed_mph, measurement.signal_strength)
radar.cleanup()
```

- `launchmon.radar`
  - `RadarManager` has `init`, `cleanup`, `set_measurement_callback`,
    `start_measurement`, `start_debug_measurement`, `read_samples` and
    `process_samples`.
  - `start_measurement` runs in a background thread and returns it.
  - `process_samples` returns a zero measurement when it is not given exactly
    1024 samples.
  - `RadarMeasurement` holds `speed_mps`, `speed_mph`, `signal_strength` and a
    `time.monotonic()` timestamp.
  - `frequency_to_speed` and `speed_to_frequency` are the Doppler conversions.
  - `synthetic_samples` produces test tones.
- `launchmon.trigger`
  - `TriggerManager` is a state machine that runs IDLE → TRIGGERED → COOLDOWN
    (`TriggerState`).
  - Call `update()` to poll it, or `simulate_trigger()` to fire it by hand.
  - Its callback receives the trigger time.
  - The input, the cooldown and the clock can be passed to its constructor.
- `launchmon.hardware`
  - The MCP3008 SPI reader is `Mcp3008`, with `build_request` and
    `decode_response` for its three-byte protocol.
  - `GpioInput` reads a single input line.
  - Both work as context managers and raise `HardwareError` when a device
    cannot be opened or read.
- `launchmon.logger` writes coloured, timestamped lines (`debug`, `info`,
  `error`) to any text stream set with `init`. `set_log_level` filters out
  lower levels.
- `launchmon.camera.init_camera` marks the camera as initialized and logs it.
- `launchmon.app`
  - `Session` records measurements as `ShotData` and produces the summary text.
  - `format_shot` renders a shot block.
  - `timestamp_to_string` turns a monotonic time into local `HH:MM:SS`.
  - `main` is the `launchmon` command.

## What it does not do

- The camera does not capture images. `init_camera` only records and logs that
  the camera came up.
- Only ball speed is measured: no launch angle, spin or club data.
- Shots are kept only in memory for the run and are not saved anywhere.