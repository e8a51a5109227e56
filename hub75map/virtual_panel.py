"""A virtual canvas spread over a chain of HUB75 panels."""

from __future__ import annotations

from typing import Any, Protocol

from hub75map.coords import (
    ChainType,
    PanelLayout,
    ScanType,
    VirtualCoords,
    map_chain,
    map_scan_type,
)


class Display(Protocol):
    """The physical chain of panels that pixels are finally written to."""

    def draw_pixel(self, x: int, y: int, color: Any) -> None: ...

    def draw_pixel_rgb888(self, x: int, y: int, r: int, g: int, b: int) -> None: ...

    def fill_screen(self, color: Any) -> None: ...

    def fill_screen_rgb888(self, r: int, g: int, b: int) -> None: ...

    def clear_screen(self) -> None: ...

    def color444(self, r: int, g: int, b: int) -> int: ...

    def color565(self, r: int, g: int, b: int) -> int: ...

    def flip_dma_buffer(self) -> None: ...

    def set_text_color(self, color: Any) -> None: ...

    def set_text_size(self, size: int) -> None: ...

    def draw_rect(self, x: int, y: int, w: int, h: int, color: Any) -> None: ...

    def set_cursor(self, x: int, y: int) -> None: ...

    def print(self, value: Any) -> None: ...


_INVALID = VirtualCoords(-1, -1)


class VirtualMatrixPanel:
    """Maps drawing on a virtual canvas onto a chained display."""

    def __init__(
        self,
        rows: int,
        cols: int,
        panel_res_x: int,
        panel_res_y: int,
        chain_type: ChainType = ChainType.NONE,
        scan_type: ScanType = ScanType.STANDARD_TWO_SCAN,
        scale_factor: int = 1,
        display: Display | None = None,
    ) -> None:
        if scale_factor < 1:
            raise ValueError("scale_factor must be at least 1")
        self.layout = PanelLayout(rows, cols, panel_res_x, panel_res_y)
        self.chain_type = ChainType(chain_type)
        self.scan_type = ScanType(scan_type)
        self.scale_factor = scale_factor
        self.panel_pixel_base = panel_res_x
        self.coords = _INVALID
        self._display = display
        self._rotate = 0
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
    def display(self) -> Display:
        if self._display is None:
            raise RuntimeError("no display attached")
        return self._display

    def set_display(self, display: Display) -> None:
        self._display = display

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

    def set_pixel_base(self, pixel_base: int) -> None:
        self.panel_pixel_base = pixel_base

    def calc_coords(self, virt_x: int, virt_y: int) -> VirtualCoords:
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
        self.coords = map_scan_type(chained, self.scan_type, virt_y, self.panel_pixel_base)
        return self.coords

    def draw_pixel(self, x: int, y: int, color: Any) -> None:
        display = self.display
        scale = self.scale_factor
        for dx in range(scale):
            for dy in range(scale):
                c = self.calc_coords(x * scale + dx, y * scale + dy)
                display.draw_pixel(c.x, c.y, color)

    def draw_pixel_rgb888(self, x: int, y: int, r: int, g: int, b: int) -> None:
        display = self.display
        c = self.calc_coords(x, y)
        display.draw_pixel_rgb888(c.x, c.y, r, g, b)

    def fill_screen(self, color: Any) -> None:
        self.display.fill_screen(color)

    def fill_screen_rgb888(self, r: int, g: int, b: int) -> None:
        self.display.fill_screen_rgb888(r, g, b)

    def clear_screen(self) -> None:
        self.display.clear_screen()

    def color444(self, r: int, g: int, b: int) -> int:
        return self.display.color444(r, g, b)

    def color565(self, r: int, g: int, b: int) -> int:
        return self.display.color565(r, g, b)

    def flip_dma_buffer(self) -> None:
        self.display.flip_dma_buffer()

    def draw_display_test_dma(self) -> None:
        """Outline and number each panel directly on the chain."""
        display = self.display
        prx, pry = self.panel_res_x, self.panel_res_y
        count = self.layout.rows * self.layout.cols
        display.set_text_color(display.color565(255, 255, 0))
        display.set_text_size(1)
        for panel in range(count):
            display.draw_rect(panel * prx, 0, prx, pry, display.color565(0, 255, 0))
            display.set_cursor(panel * prx + 6, pry - 12)
            display.print(count - panel)