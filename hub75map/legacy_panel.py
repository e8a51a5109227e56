"""The older virtual panel with run-time chain and scan-rate settings."""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol

from hub75map.coords import (
    ChainType,
    PanelLayout,
    ScanType,
    VirtualCoords,
    map_chain,
    map_scan_type,
)
from hub75map.virtual_panel import Display


class ScanRate(Enum):
    """Row multiplexing of the physical panels, as the older panel names it."""

    NORMAL_TWO_SCAN = 0
    NORMAL_ONE_SIXTEEN = 1
    FOUR_SCAN_32PX_HIGH = 2
    FOUR_SCAN_16PX_HIGH = 3
    FOUR_SCAN_64PX_HIGH = 4
    FOUR_SCAN_40PX_HIGH = 5


class LegacyDisplay(Display, Protocol):
    """A display that can also select a font for its text output."""

    def set_font(self, font: Any) -> None: ...


TEST_FONT = "FreeSansBold12pt7b"
_INVALID = VirtualCoords(-1, -1)
_SHARED_SCAN_TYPES = {
    ScanRate.FOUR_SCAN_16PX_HIGH: ScanType.FOUR_SCAN_16PX_HIGH,
    ScanRate.FOUR_SCAN_40PX_HIGH: ScanType.FOUR_SCAN_40PX_HIGH,
}


def _tdiv(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


class LegacyVirtualMatrixPanel:
    """Maps drawing on a virtual canvas onto a chained display."""

    def __init__(
        self,
        display: LegacyDisplay,
        rows: int,
        cols: int,
        panel_res_x: int,
        panel_res_y: int,
        chain_type: ChainType = ChainType.NONE,
    ) -> None:
        self.display = display
        self.layout = PanelLayout(rows, cols, panel_res_x, panel_res_y)
        self.chain_type = ChainType(chain_type)
        self.scan_rate = ScanRate.NORMAL_TWO_SCAN
        self.panel_pixel_base = panel_res_x
        self.coords = _INVALID
        self._rotate = 0
        self._scale_factor = 0
        self._width = self.layout.virtual_res_x
        self._height = self.layout.virtual_res_y

    @property
    def panel_res_x(self) -> int:
        return self.layout.panel_res_x

    @property
    def panel_res_y(self) -> int:
        return self.layout.panel_res_y

    @property
    def width(self) -> int:
        """Canvas width under the current rotation."""
        return self._width

    @property
    def height(self) -> int:
        """Canvas height under the current rotation."""
        return self._height

    @property
    def rotation(self) -> int:
        return self._rotate

    @property
    def zoom_factor(self) -> int:
        return self._scale_factor

    def get_coords(self, virt_x: int, virt_y: int) -> VirtualCoords:
        """Map a canvas pixel to the chain; out-of-range pixels map to (-1, -1)."""
        if not (0 <= virt_x < self._width and 0 <= virt_y < self._height):
            self.coords = _INVALID
            return self.coords

        res_x = self.layout.virtual_res_x
        res_y = self.layout.virtual_res_y
        if self._rotate == 1:
            virt_x, virt_y = virt_y, res_y - 1 - virt_x
        elif self._rotate == 2:
            virt_x, virt_y = res_x - 1 - virt_x, res_y - 1 - virt_y
        elif self._rotate == 3:
            virt_x, virt_y = res_x - 1 - virt_y, virt_x

        chained = map_chain(self.chain_type, self.layout, virt_x, virt_y)
        self.coords = self._apply_scan_rate(chained, virt_y)
        return self.coords

    def _apply_scan_rate(self, coords: VirtualCoords, virt_y: int) -> VirtualCoords:
        rate = self.scan_rate
        if rate in _SHARED_SCAN_TYPES:
            return map_scan_type(coords, _SHARED_SCAN_TYPES[rate], virt_y, self.panel_pixel_base)
        if rate not in (ScanRate.FOUR_SCAN_32PX_HIGH, ScanRate.FOUR_SCAN_64PX_HIGH):
            return coords

        if rate is ScanRate.FOUR_SCAN_64PX_HIGH and (virt_y & 8) != ((virt_y & 16) >> 1):
            virt_y = (virt_y & 0b11000) ^ (0b11000 + (virt_y & 0b11100111))

        base = self.panel_pixel_base
        block = _tdiv(coords.x, base)
        if (coords.y & 8) == 0:
            x = coords.x + (block + 1) * base
        else:
            x = coords.x + block * base
        y = (virt_y >> 4) * 8 + (virt_y & 0b111)
        return VirtualCoords(x, y, coords.virt_row, coords.virt_col)

    def draw_pixel(self, x: int, y: int, color: Any) -> None:
        scale = self._scale_factor
        if scale > 1:
            for dx in range(scale):
                for dy in range(scale):
                    c = self.get_coords(x * scale + dx, y * scale + dy)
                    self.display.draw_pixel(c.x, c.y, color)
        else:
            c = self.get_coords(x, y)
            self.display.draw_pixel(c.x, c.y, color)

    def draw_pixel_rgb888(self, x: int, y: int, r: int, g: int, b: int) -> None:
        c = self.get_coords(x, y)
        self.display.draw_pixel_rgb888(c.x, c.y, r, g, b)

    def fill_screen(self, color: Any) -> None:
        self.display.fill_screen(color)

    def fill_screen_rgb888(self, r: int, g: int, b: int) -> None:
        self.display.fill_screen_rgb888(r, g, b)

    def clear_screen(self) -> None:
        self.display.clear_screen()

    def set_rotation(self, rotate: int) -> None:
        """Rotate by quarter turns; values of 4 and above keep the old rotation."""
        if 0 <= rotate < 4:
            self._rotate = rotate
        if rotate & 1:
            self._width = self.layout.virtual_res_y
            self._height = self.layout.virtual_res_x
        else:
            self._width = self.layout.virtual_res_x
            self._height = self.layout.virtual_res_y

    def set_physical_panel_scan_rate(self, rate: ScanRate, pixel_base: int | None = None) -> None:
        self.scan_rate = ScanRate(rate)
        if pixel_base is not None:
            self.panel_pixel_base = pixel_base

    def set_zoom_factor(self, scale: int) -> None:
        """Set the block size of each drawn pixel; only 1 to 4 are accepted."""
        if 0 < scale < 5:
            self._scale_factor = scale

    def color444(self, r: int, g: int, b: int) -> int:
        return self.display.color444(r, g, b)

    def color565(self, r: int, g: int, b: int) -> int:
        return self.display.color565(r, g, b)

    def flip_dma_buffer(self) -> None:
        self.display.flip_dma_buffer()

    def draw_display_test(self) -> None:
        """Outline and number each panel directly on the chain."""
        display = self.display
        prx, pry = self.panel_res_x, self.panel_res_y
        count = self.layout.rows * self.layout.cols
        display.set_font(TEST_FONT)
        display.set_text_color(display.color565(255, 255, 0))
        display.set_text_size(1)
        for panel in range(count):
            display.draw_rect(panel * prx, 0, prx, pry, display.color565(0, 255, 0))
            display.set_cursor(panel * prx + 2, pry - 4)
            display.print(count - panel)