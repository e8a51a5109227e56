import pytest

from hub75map.leddrivers import (
    HIGH,
    LOW,
    DriverChip,
    Hub75Pins,
    RecordingBus,
    dp3246_init,
    fm6124_init,
    shift_driver,
)

PPR = 64

FM_REG1 = [0, 0, 0, 0, 0, 1, 1, 1, 1, 1, 1, 0, 0, 0, 0, 0]
FM_REG2 = [0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0]
DP_REG1 = [0, 0, 0, 0, 0, 0, 0, 0, 1, 1, 1, 1, 1, 1, 1, 1]
DP_REG2 = [1, 1, 1, 1, 1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 0, 0]


@pytest.fixture
def pins():
    return Hub75Pins(r1=25, g1=26, b1=27, r2=14, g2=12, b2=13, clk=16, lat=4, oe=15)


def rising_edges(bus, pins):
    """Snapshot all pin levels each time the clock goes high."""
    levels = {}
    snapshots = []
    for event in bus.events:
        if event[0] != "level":
            continue
        _, pin, level = event
        was = levels.get(pin, LOW)
        levels[pin] = level
        if pin == pins.clk and level == HIGH and was == LOW:
            snapshots.append(dict(levels))
    return snapshots


def test_recording_bus_tracks_levels():
    bus = RecordingBus()
    bus.reset_pin(3)
    bus.set_output(3)
    bus.set_level(3, True)
    assert bus.levels[3] == HIGH
    assert bus.events == [("reset", 3), ("output", 3), ("level", 3, HIGH)]


def test_data_pin_order(pins):
    assert pins.data_pins == (pins.r1, pins.r2, pins.g1, pins.g2, pins.b1, pins.b2)
    assert pins.control_pins[-3:] == (pins.clk, pins.lat, pins.oe)


@pytest.mark.parametrize("init", [fm6124_init, dp3246_init])
def test_pins_prepared_first(init, pins):
    bus = RecordingBus()
    init(bus, pins, PPR)
    prep = bus.events[: 3 * len(pins.control_pins)]
    expected = []
    for pin in pins.control_pins:
        expected += [("reset", pin), ("output", pin), ("level", pin, LOW)]
    assert prep == expected


@pytest.mark.parametrize("init", [fm6124_init, dp3246_init])
def test_final_state_enables_display(init, pins):
    bus = RecordingBus()
    init(bus, pins, PPR)
    assert bus.levels[pins.oe] == LOW
    assert bus.levels[pins.lat] == LOW
    assert bus.levels[pins.clk] == LOW
    assert all(bus.levels[p] == LOW for p in pins.data_pins)


def test_fm6124_register_bits(pins):
    bus = RecordingBus()
    fm6124_init(bus, pins, PPR)
    edges = rising_edges(bus, pins)
    reg1 = edges[:PPR]
    reg2 = edges[PPR : 2 * PPR]
    for column, snap in enumerate(reg1):
        assert all(snap[p] == FM_REG1[column % 16] for p in pins.data_pins)
        assert snap[pins.oe] == HIGH
    for column, snap in enumerate(reg2):
        assert all(snap[p] == FM_REG2[column % 16] for p in pins.data_pins)


def test_fm6124_latch_windows(pins):
    bus = RecordingBus()
    fm6124_init(bus, pins, PPR)
    edges = rising_edges(bus, pins)
    reg1_latch = [s[pins.lat] for s in edges[:PPR]]
    reg2_latch = [s[pins.lat] for s in edges[PPR : 2 * PPR]]
    assert sum(reg1_latch) == 11
    assert reg1_latch[-11:] == [HIGH] * 11
    assert sum(reg2_latch) == 12
    assert reg2_latch[-12:] == [HIGH] * 12
    blank = edges[2 * PPR : 3 * PPR]
    assert all(s[pins.lat] == LOW for s in blank)
    assert all(s[p] == LOW for s in blank for p in pins.data_pins)
    tail = edges[3 * PPR :]
    assert [s[pins.lat] for s in tail] == [HIGH, LOW]
    assert [s[pins.oe] for s in tail] == [HIGH, LOW]


def test_dp3246_phases(pins):
    bus = RecordingBus()
    dp3246_init(bus, pins, PPR)
    edges = rising_edges(bus, pins)
    assert len(edges) == 4 * PPR + 2

    clear = edges[:PPR]
    assert [s[pins.lat] for s in clear][-3:] == [HIGH] * 3
    assert sum(s[pins.lat] for s in clear) == 3
    assert all(s[p] == LOW for s in clear for p in pins.data_pins)

    reg1 = edges[PPR : 2 * PPR]
    reg2 = edges[2 * PPR : 3 * PPR]
    for column, snap in enumerate(reg1):
        assert snap[pins.r1] == DP_REG1[column % 16]
    for column, snap in enumerate(reg2):
        assert snap[pins.b2] == DP_REG2[column % 16]
    assert sum(s[pins.lat] for s in reg1) == 11
    assert sum(s[pins.lat] for s in reg2) == 12

    assert edges[3 * PPR][pins.lat] == LOW
    blank = edges[3 * PPR + 1 : 4 * PPR + 1]
    assert sum(s[pins.lat] for s in blank) == 3
    assert all(s[p] == LOW for s in blank for p in pins.data_pins)
    assert edges[-1][pins.oe] == LOW


@pytest.mark.parametrize("chip", [DriverChip.FM6124, DriverChip.FM6126A, DriverChip.ICN2038S])
def test_shift_driver_fm_family(chip, pins):
    expected = RecordingBus()
    fm6124_init(expected, pins, PPR)
    bus = RecordingBus()
    assert shift_driver(bus, pins, chip, PPR) is False
    assert bus.events == expected.events


def test_shift_driver_dp3246(pins):
    expected = RecordingBus()
    dp3246_init(expected, pins, PPR)
    bus = RecordingBus()
    assert shift_driver(bus, pins, DriverChip.DP3246_SM5368, PPR) is True
    assert bus.events == expected.events


def test_shift_driver_mbi5124_needs_positive_edge(pins):
    bus = RecordingBus()
    assert shift_driver(bus, pins, DriverChip.MBI5124, PPR) is True
    assert bus.events == []


def test_shift_driver_plain_shift_register(pins):
    bus = RecordingBus()
    assert shift_driver(bus, pins, DriverChip.SHIFTREG, PPR) is False
    assert bus.events == []


def test_shift_driver_rejects_unknown(pins):
    with pytest.raises(ValueError):
        shift_driver(RecordingBus(), pins, 99, PPR)