# hub75map

`hub75map` works out where pixels go on HUB75 RGB LED matrix panels. It lets a
grid of chained panels act as one large virtual canvas, and it handles panels
whose electrical layout differs from what you see, such as four-scan outdoor
panels. It also produces the GPIO bit sequences that configure FM6124-family
and DP3246 driver chips.

The package uses only the Python standard library and runs on Python 3.10 and
later.

## Installation

```
pip install hub75map
```

To run the test suite:

```
pip install "hub75map[test]"
pytest
```

## Coordinate mapping

`hub75map.coords` holds the pure mapping functions and the types they use:

- `PanelLayout(rows, cols, panel_res_x, panel_res_y)` describes a grid of
  identical panels. All four values must be positive, otherwise `ValueError`
  is raised. It provides `virtual_res_x`, `virtual_res_y` and `dma_width`, the
  length of the single chain as the DMA engine sees it.
- `ChainType` says how the cable runs through the panels: `NONE`,
  `TOP_LEFT_DOWN`, `TOP_RIGHT_DOWN`, `BOTTOM_LEFT_UP`, `BOTTOM_RIGHT_UP` and the
  zig-zag variants `TOP_LEFT_DOWN_ZZ`, `TOP_RIGHT_DOWN_ZZ`,
  `BOTTOM_RIGHT_UP_ZZ`, `BOTTOM_LEFT_UP_ZZ`.
- `ScanType` says how a panel multiplexes its rows: `STANDARD_TWO_SCAN`,
  `FOUR_SCAN_16PX_HIGH`, `FOUR_SCAN_32PX_HIGH`, `FOUR_SCAN_40PX_HIGH`,
  `FOUR_SCAN_40_80PX_HFARCAN` and `FOUR_SCAN_64PX_HIGH`.
- `VirtualCoords` is a frozen dataclass with `x`, `y`, `virt_row` and `virt_col`.

```python
from hub75map.coords import ChainType, PanelLayout, ScanType, map_chain, map_scan_type

layout = PanelLayout(rows=3, cols=1, panel_res_x=64, panel_res_y=64)
c = map_chain(ChainType.TOP_RIGHT_DOWN_ZZ, layout, 0, 0)   # VirtualCoords(x=128, y=0, ...)
c = map_scan_type(c, ScanType.FOUR_SCAN_32PX_HIGH, 0, 64)
```

`map_chain` places a virtual pixel on the single physical chain.
`map_scan_type` then remaps that position for four-scan panels. It takes the
virtual y coordinate and the pixel base, which is the block width used to
interleave columns. For `STANDARD_TWO_SCAN` the coordinates come back
unchanged.

## Virtual panel

`hub75map.virtual_panel.VirtualMatrixPanel` wraps the mapping in a drawing
surface that passes every call on to a display:

```python
from hub75map.coords import ChainType, ScanType
from hub75map.virtual_panel import VirtualMatrixPanel

panel = VirtualMatrixPanel(
    rows=2,
    cols=2,
    panel_res_x=64,
    panel_res_y=32,
    chain_type=ChainType.TOP_RIGHT_DOWN,
    scan_type=ScanType.STANDARD_TWO_SCAN,
    scale_factor=1,
    display=my_display,
)

coords = panel.calc_coords(10, 40)
panel.draw_pixel(10, 40, panel.color565(255, 0, 0))
```

- `calc_coords(x, y)` returns the chain position as a `VirtualCoords` and also
  stores it in `panel.coords`. A point outside the canvas maps to `(-1, -1)`.
- `draw_pixel` and `draw_pixel_rgb888` map the coordinates and then call the
  display. When `scale_factor` is above 1, `draw_pixel` draws each virtual
  pixel as a square block of that size. A `scale_factor` below 1 raises
  `ValueError`.
- `fill_screen`, `fill_screen_rgb888`, `clear_screen`, `color444`, `color565`
  and `flip_dma_buffer` are passed straight to the display.
- `set_rotation(n)` rotates the canvas by quarter turns and swaps `width` and
  `height` for odd values. A value of 4 or more keeps the previous rotation.
- `set_pixel_base(n)` changes the block width used by the four-scan mappings.
  By default it is `panel_res_x`.
- `draw_display_test_dma()` draws an outline and a number for each panel,
  directly on the chain.
- `set_display(display)` attaches or replaces the display. Any call that needs
  a display raises `RuntimeError` if none has been attached.

The display is any object that follows the `Display` protocol:
`draw_pixel`, `draw_pixel_rgb888`, `fill_screen`, `fill_screen_rgb888`,
`clear_screen`, `color444`, `color565`, `flip_dma_buffer`, `set_text_color`,
`set_text_size`, `draw_rect`, `set_cursor` and `print`.

## Legacy panel

`hub75map.legacy_panel.LegacyVirtualMatrixPanel` follows the older interface.
It takes the display first, and you choose the scan behaviour at run time:

```python
from hub75map.coords import ChainType
from hub75map.legacy_panel import LegacyVirtualMatrixPanel, ScanRate

panel = LegacyVirtualMatrixPanel(my_display, 2, 1, 64, 32, ChainType.TOP_RIGHT_DOWN)
panel.set_physical_panel_scan_rate(ScanRate.FOUR_SCAN_32PX_HIGH, 32)
panel.set_zoom_factor(2)
coords = panel.get_coords(5, 5)
```

- `ScanRate` has `NORMAL_TWO_SCAN`, `NORMAL_ONE_SIXTEEN`,
  `FOUR_SCAN_32PX_HIGH`, `FOUR_SCAN_16PX_HIGH`, `FOUR_SCAN_64PX_HIGH` and
  `FOUR_SCAN_40PX_HIGH`.
- The `pixel_base` argument of `set_physical_panel_scan_rate` is optional.
- `set_zoom_factor` accepts values from 1 to 4 and ignores any other value.
- `draw_display_test()` selects the font with `set_font`, so its display must
  also provide that method (`LegacyDisplay`).

## LED driver initialisation

Some driver chips need their control registers written before they show
anything. `hub75map.leddrivers` produces those sequences through a `GpioBus`,
which is any object with `set_level`, `reset_pin` and `set_output`.

```python
from hub75map.leddrivers import DriverChip, Hub75Pins, RecordingBus, shift_driver

pins = Hub75Pins(r1=25, g1=26, b1=27, r2=14, g2=12, b2=13, clk=16, lat=4, oe=15)
bus = RecordingBus()
clock_on_rising_edge = shift_driver(bus, pins, DriverChip.FM6124, pixels_per_row=128)
```

- `shift_driver` runs `fm6124_init` for `FM6124`, `FM6126A` and `ICN2038S`,
  and `dp3246_init` for `DP3246_SM5368`. It does nothing for `SHIFTREG` and
  `MBI5124`. It returns `True` when the chip must be clocked on the positive
  edge, which is the case for `MBI5124` and `DP3246_SM5368`.
- `RecordingBus` records every operation in `events` and keeps the current
  level of each pin in `levels`.

## What this package does not do

`hub75map` does not talk to hardware. It has no GPIO or DMA backend and no
frame buffer. The panels pass pixels on to a `Display` that you supply, and the
driver sequences are written to a `GpioBus` that you supply.