"""Start-up sequences for LED driver chips that need configuring over the data lines."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

log = logging.getLogger(__name__)

LOW = 0
HIGH = 1

# FM6124: global brightness in REG1, a single output-enable bit in REG2.
_FM6124_REG1 = (0, 0, 0, 0, 0, 1, 1, 1, 1, 1, 1, 0, 0, 0, 0, 0)
_FM6124_REG2 = (0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0)

# DP3246, MSB first.
# REG1: 15:13 reserved, 12:9 OE widening, 8 reserved, 7:0 current gain.
_DP3246_REG1 = (0, 0, 0, 0, 0, 0, 0, 0, 1, 1, 1, 1, 1, 1, 1, 1)
# REG2: 15:11 blanking potential, 10:8 current source inflection point,
# 7:3 feature switches (all off), 2:0 single edge transfer.
_DP3246_REG2 = (1, 1, 1, 1, 1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 0, 0)


class DriverChip(Enum):
    """LED driver chips found on HUB75 panels."""

    SHIFTREG = 0
    FM6124 = 1
    FM6126A = 2
    ICN2038S = 3
    MBI5124 = 4
    DP3246_SM5368 = 5


@dataclass(frozen=True)
class Hub75Pins:
    """GPIO numbers of the HUB75 lines used during driver set-up."""

    r1: int
    g1: int
    b1: int
    r2: int
    g2: int
    b2: int
    clk: int
    lat: int
    oe: int

    @property
    def data_pins(self) -> tuple[int, ...]:
        """Colour data lines in the order they are written."""
        return (self.r1, self.r2, self.g1, self.g2, self.b1, self.b2)

    @property
    def control_pins(self) -> tuple[int, ...]:
        """Every line touched while configuring a driver."""
        return self.data_pins + (self.clk, self.lat, self.oe)


class GpioBus(Protocol):
    """Direct access to GPIO lines."""

    def set_level(self, pin: int, level: int) -> None: ...

    def reset_pin(self, pin: int) -> None: ...

    def set_output(self, pin: int) -> None: ...


@dataclass
class RecordingBus:
    """A GPIO bus that keeps every operation and the current level of each pin."""

    events: list[tuple] = field(default_factory=list)
    levels: dict[int, int] = field(default_factory=dict)

    def set_level(self, pin: int, level: int) -> None:
        level = HIGH if level else LOW
        self.levels[pin] = level
        self.events.append(("level", pin, level))

    def reset_pin(self, pin: int) -> None:
        self.events.append(("reset", pin))

    def set_output(self, pin: int) -> None:
        self.events.append(("output", pin))


def _prepare_pins(bus: GpioBus, pins: Hub75Pins) -> None:
    for pin in pins.control_pins:
        bus.reset_pin(pin)
        bus.set_output(pin)
        bus.set_level(pin, LOW)


def _clock_pulse(bus: GpioBus, pins: Hub75Pins) -> None:
    bus.set_level(pins.clk, HIGH)
    bus.set_level(pins.clk, LOW)


def _set_data(bus: GpioBus, pins: Hub75Pins, level: int) -> None:
    for pin in pins.data_pins:
        bus.set_level(pin, level)


def _shift_register(
    bus: GpioBus,
    pins: Hub75Pins,
    register: tuple[int, ...],
    pixels_per_row: int,
    latch_from: int,
    latch_every_clock: bool,
) -> None:
    """Shift a 16-bit register value along the whole row, raising the latch near the end."""
    for column in range(pixels_per_row):
        _set_data(bus, pins, register[column % 16])
        if column == latch_from or (latch_every_clock and column > latch_from):
            bus.set_level(pins.lat, HIGH)
        _clock_pulse(bus, pins)


def _blank_row(bus: GpioBus, pins: Hub75Pins, pixels_per_row: int, latch_from: int | None) -> None:
    for column in range(pixels_per_row):
        if column == latch_from:
            bus.set_level(pins.lat, HIGH)
        _clock_pulse(bus, pins)


def fm6124_init(bus: GpioBus, pins: Hub75Pins, pixels_per_row: int) -> None:
    """Program brightness and enable output on FM6124-family drivers."""
    log.info("initializing FM6124 driver")
    _prepare_pins(bus, pins)
    bus.set_level(pins.oe, HIGH)

    # Latch held for the last 11 clocks stores REG1.
    _shift_register(bus, pins, _FM6124_REG1, pixels_per_row, pixels_per_row - 11, True)
    bus.set_level(pins.lat, LOW)

    # Latch held for the last 12 clocks stores REG2.
    _shift_register(bus, pins, _FM6124_REG2, pixels_per_row, pixels_per_row - 12, True)
    bus.set_level(pins.lat, LOW)

    _set_data(bus, pins, LOW)
    _blank_row(bus, pins, pixels_per_row, None)

    bus.set_level(pins.lat, HIGH)
    _clock_pulse(bus, pins)
    bus.set_level(pins.lat, LOW)
    bus.set_level(pins.oe, LOW)
    _clock_pulse(bus, pins)


def dp3246_init(bus: GpioBus, pins: Hub75Pins, pixels_per_row: int) -> None:
    """Program the configuration registers of DP3246 / SM5368 drivers."""
    log.info("initializing DP3246 driver")
    _prepare_pins(bus, pins)
    bus.set_level(pins.oe, HIGH)

    # Clearing first helps reliability; the latch is held for 3 clocks.
    _blank_row(bus, pins, pixels_per_row, pixels_per_row - 3)
    bus.set_level(pins.lat, LOW)

    _shift_register(bus, pins, _DP3246_REG1, pixels_per_row, pixels_per_row - 11, False)
    bus.set_level(pins.lat, LOW)

    _shift_register(bus, pins, _DP3246_REG2, pixels_per_row, pixels_per_row - 12, False)
    bus.set_level(pins.lat, LOW)
    _clock_pulse(bus, pins)

    _set_data(bus, pins, LOW)
    _blank_row(bus, pins, pixels_per_row, pixels_per_row - 3)

    bus.set_level(pins.lat, LOW)
    bus.set_level(pins.oe, LOW)
    _clock_pulse(bus, pins)


def shift_driver(bus: GpioBus, pins: Hub75Pins, driver: DriverChip, pixels_per_row: int) -> bool:
    """Run the set-up a driver chip needs before normal output starts.

    Returns True when the chip must be clocked on the positive edge.
    """
    driver = DriverChip(driver)
    if driver in (DriverChip.ICN2038S, DriverChip.FM6124, DriverChip.FM6126A):
        fm6124_init(bus, pins, pixels_per_row)
        return False
    if driver is DriverChip.DP3246_SM5368:
        dp3246_init(bus, pins, pixels_per_row)
        return True
    if driver is DriverChip.MBI5124:
        # The latch resets on the rising clock edge while high.
        return True
    return False